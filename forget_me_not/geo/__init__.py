"""地理计算。"""
from forget_me_not.geo.distance import EARTH_RADIUS_M, distance

__all__ = ["EARTH_RADIUS_M", "distance"]
