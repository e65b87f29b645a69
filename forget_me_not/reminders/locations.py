"""按地点名称分组的提醒视图。"""
from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from forget_me_not.reminders.models import Location, Reminder


@dataclass
class LocationGroup:
    """同一地点名称下的提醒。"""
    name: str
    location: Location
    reminders: List[Reminder] = field(default_factory=list)
    active_count: int = 0
    completed_count: int = 0


def group_by_location(reminders: Iterable[Reminder]) -> List[LocationGroup]:
    """按地点名称分组；未完成多的在前，同数按名称排序。组内 location 取第一条提醒的。"""
    groups: Dict[str, LocationGroup] = {}
    for r in reminders:
        group = groups.get(r.location.name)
        if group is None:
            group = groups[r.location.name] = LocationGroup(name=r.location.name, location=r.location)
        group.reminders.append(r)
        if r.completed:
            group.completed_count += 1
        else:
            group.active_count += 1
    return sorted(groups.values(), key=lambda g: (-g.active_count, g.name.casefold()))
