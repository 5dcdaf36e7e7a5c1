from collections import namedtuple
from dataclasses import dataclass

from group_stats import GroupStats

TimeInterval = namedtuple("TimeInterval", ["label", "start", "end"])  # start/end are "HH:MM", inclusive

# Full-day 4-hour buckets, night sessions included.
DEFAULT_TIME_INTERVALS = (
    TimeInterval("00:00 - 03:59", "00:00", "03:59"),
    TimeInterval("04:00 - 07:59", "04:00", "07:59"),
    TimeInterval("08:00 - 11:59", "08:00", "11:59"),
    TimeInterval("12:00 - 15:59", "12:00", "15:59"),
    TimeInterval("16:00 - 19:59", "16:00", "19:59"),
    TimeInterval("20:00 - 23:59", "20:00", "23:59"),
)


@dataclass
class IntervalStats(GroupStats):
    """Represents the calculated statistics for a single time-of-day bucket."""
    start: str = "00:00"
    end: str = "23:59"
