"""两点间球面距离（Haversine 公式）。"""
from math import atan2, cos, radians, sin, sqrt

# 地球平均半径（米）
EARTH_RADIUS_M = 6_371_000.0


def distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """返回两组经纬度（十进制度）之间的大圆距离，单位米。"""
    phi1 = radians(lat1)
    phi2 = radians(lat2)
    d_phi = radians(lat2 - lat1)
    d_lambda = radians(lon2 - lon1)

    a = sin(d_phi / 2) ** 2 + cos(phi1) * cos(phi2) * sin(d_lambda / 2) ** 2
    # 浮点误差可能让 a 略超出 [0, 1]
    a = min(1.0, max(0.0, a))
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return EARTH_RADIUS_M * c
