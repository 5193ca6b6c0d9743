import calendar
import re
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Tuple

from attendance_seeder.errors import ValidationError

_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")


def parse_month(value: str) -> Tuple[int, int]:
    """
    Parse a SEED_MONTH value ("YYYY-MM") into (year, month).
    Raises ValidationError for anything else, e.g. "2025-13" or "25-08".
    """
    m = _MONTH_RE.match((value or "").strip())
    if not m:
        raise ValidationError(f"SEED_MONTH invalido: {value!r} (formato esperado YYYY-MM)")

    year, month = int(m.group(1)), int(m.group(2))
    if not 1 <= month <= 12:
        raise ValidationError(f"SEED_MONTH invalido: {value!r} (mes fuera de rango)")
    return year, month


def local_midnight(d: date) -> datetime:
    # naive -> hora local del proceso, con tzinfo
    return datetime.combine(d, time.min).astimezone()


def local_wall_time(d: date, hour: int, minutes: int = 0) -> datetime:
    """
    `hour`:00 plus `minutes` on the local wall clock of day `d`. The offset is
    resolved for that instant, so DST days still read 09:00 locally.
    """
    if isinstance(d, datetime):
        d = d.date()
    return (datetime.combine(d, time(hour)) + timedelta(minutes=minutes)).astimezone()


def day_key(d: date) -> str:
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def month_dates(year: int, month: int) -> List[datetime]:
    """Every calendar day of the month, ascending."""
    _, ndays = calendar.monthrange(year, month)
    return [local_midnight(date(year, month, day)) for day in range(1, ndays + 1)]


def last_n_days(n: int, now: datetime) -> List[datetime]:
    """Today, yesterday, ... n-1 days ago (descending), each at local midnight."""
    today = now.date()
    return [local_midnight(today - timedelta(days=i)) for i in range(n)]


def generate_dates(*, days: int, now: datetime, seed_month: Optional[str] = None) -> List[datetime]:
    if seed_month:
        year, month = parse_month(seed_month)
        return month_dates(year, month)
    return last_n_days(days, now)
