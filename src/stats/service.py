import math
from datetime import datetime, timedelta
from typing import Iterable, Optional, Tuple, Union
from pymongo.database import Database

from src.attendances.models import AttendanceModel, AttendanceStatus
from src.config import ATTENDANCES_COLLECTION, settings
from src.courses.service import count_courses
from src.models import utcnow
from src.stats.schemas import SessionStats, SystemStats
from src.students.service import count_students

# attribute of SessionStats holding each status count
STATUS_FIELDS = {
    AttendanceStatus.HADIR: "hadir",
    AttendanceStatus.IZIN: "izin",
    AttendanceStatus.SAKIT: "sakit",
    AttendanceStatus.ALPHA: "alpha",
    AttendanceStatus.BELUM_ABSEN: "belum_absen",
}

def session_stats(records: Iterable[Union[AttendanceModel, dict]]) -> SessionStats:
    """
    Tallies a set of attendance records by status.

    Recomputed on every read; `total` always equals the sum of the five status counts.
    """
    stats = SessionStats()
    for record in records:
        raw_status = record["status"] if isinstance(record, dict) else record.status
        field = STATUS_FIELDS[AttendanceStatus(raw_status)]
        setattr(stats, field, getattr(stats, field) + 1)
        stats.total += 1
    return stats

def present_today_window(now: datetime, window: Optional[str] = None) -> Tuple[datetime, datetime]:
    """
    Returns the `[start, end)` check-in window counted as "today".

    `until_now` ends at the current time, `calendar_day` at the next midnight.
    """
    window = window or settings.present_today_window
    start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    if window == "calendar_day":
        return start, start + timedelta(days=1)
    return start, now

def attendance_rate(present: int, total: int) -> int:
    """Percentage of `total` present, rounded half up; 0 when there is no one to count"""
    if total <= 0:
        return 0
    return math.floor(present / total * 100 + 0.5)

def system_stats(*, db: Database, now: Optional[datetime] = None, window: Optional[str] = None) -> SystemStats:
    now = now or utcnow()
    start, end = present_today_window(now, window)

    total_students = count_students(db=db)
    present_npms = db.get_collection(ATTENDANCES_COLLECTION).distinct("npm", {
        "status": AttendanceStatus.HADIR.value,
        "checkInTime": {"$gte": start, "$lt": end},
    })
    total_courses = count_courses(db=db)

    return SystemStats(
        total_students=total_students,
        present_today=len(present_npms),
        total_courses=total_courses,
        attendance_rate=attendance_rate(len(present_npms), total_students),
    )
