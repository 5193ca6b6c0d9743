import logging
import random
from datetime import datetime
from typing import Any, Dict, List, Sequence, Tuple

from attendance_seeder.config import SeedSettings
from attendance_seeder.context import SeedContext
from attendance_seeder.dates import day_key, local_wall_time
from attendance_seeder.generators import rand_int, random_clock
from attendance_seeder.models import SEED_LAT, SEED_LNG

log = logging.getLogger("seeder.attendance")

PRESENT = "present"
ABSENT = "absent"
PARTIAL_IN = "partial_in"
PARTIAL_OUT = "partial_out"

IN_HOUR, IN_VARIANCE_MIN = 9, 20
OUT_HOUR, OUT_VARIANCE_MIN = 17, 30

PARTIAL_PROB = 0.05
WEEKEND_PRESENCE_FACTOR = 0.5

Record = Tuple[str, Dict[str, Any]]


class SimplePresenceModel:
    """One draw per day: present (in + out) with probability p, else absent."""

    def __init__(self, present_prob: float) -> None:
        self.present_prob = present_prob

    def roll(self, rng: random.Random, day: datetime) -> str:
        return PRESENT if rng.random() < self.present_prob else ABSENT


class WeeklyPresenceModel:
    """
    Three-way roll (present / partial / absent). On weekend days the presence
    weight is scaled down so absences dominate. A partial day keeps only the
    "in" or only the "out" mark, 50/50.
    """

    def __init__(self, present_prob: float, weekend_days: Sequence[int] = (4, 5)) -> None:
        self.present_prob = present_prob
        self.weekend_days = frozenset(weekend_days)

    def weights(self, day: datetime) -> Tuple[float, float, float]:
        present = self.present_prob
        if day.weekday() in self.weekend_days:
            present *= WEEKEND_PRESENCE_FACTOR
        partial = min(PARTIAL_PROB, 1.0 - present)
        return present, partial, 1.0 - present - partial

    def roll(self, rng: random.Random, day: datetime) -> str:
        present, partial, _ = self.weights(day)
        sample = rng.random()
        if sample < present:
            return PRESENT
        if sample < present + partial:
            return PARTIAL_IN if rng.random() < 0.5 else PARTIAL_OUT
        return ABSENT


def build_model(settings: SeedSettings):
    if settings.attendance_model == "weekly":
        return WeeklyPresenceModel(settings.present_prob, settings.weekend_days)
    return SimplePresenceModel(settings.present_prob)


def attendance_doc_id(user_code: str, local_day: str, kind: str) -> str:
    return f"{user_code}_{local_day}_{kind}"


def _record(
    ctx: SeedContext,
    user: Dict[str, Any],
    local_day: str,
    kind: str,
    at: datetime,
    located: bool,
) -> Record:
    code = user.get("code") or user["id"]
    doc: Dict[str, Any] = {
        "userId": code,
        "userName": user.get("name") or user.get("fullName") or "",
        "branchId": user.get("branchId"),
        "branchName": user.get("branchName"),
        "shiftId": user.get("shiftId"),
        "localDay": local_day,
        "type": kind,
        "at": at,
    }
    if located:
        doc.update({"lat": SEED_LAT, "lng": SEED_LNG, "distance": rand_int(ctx.rng, 5, 80)})
    doc["createdAt"] = ctx.store.server_timestamp()
    return attendance_doc_id(code, local_day, kind), doc


def generate_attendance_for(
    ctx: SeedContext,
    user: Dict[str, Any],
    dates: Sequence[datetime],
    model=None,
) -> List[Record]:
    """
    Attendance documents for one user over `dates`: either a single "absent"
    record or an "in"/"out" pair per day (partial days under the weekly model
    yield just one of the two). Days after "now" are skipped.
    """
    model = model or build_model(ctx.settings)
    rng = ctx.rng
    now = ctx.clock()
    records: List[Record] = []

    for day in dates:
        if day > now:
            continue

        key = day_key(day)
        outcome = model.roll(rng, day)

        if outcome == ABSENT:
            at = local_wall_time(day, IN_HOUR)
            records.append(_record(ctx, user, key, "absent", at, located=False))
            continue

        if outcome in (PRESENT, PARTIAL_IN):
            at = random_clock(rng, day, IN_HOUR, IN_VARIANCE_MIN)
            records.append(_record(ctx, user, key, "in", at, located=True))
        if outcome in (PRESENT, PARTIAL_OUT):
            at = random_clock(rng, day, OUT_HOUR, OUT_VARIANCE_MIN)
            records.append(_record(ctx, user, key, "out", at, located=True))

    return records


def write_attendance(ctx: SeedContext, records: Sequence[Record]) -> int:
    """Commit one user's records as a single batch. Returns docs written."""
    if not records:
        return 0
    batch = ctx.store.batch()
    for doc_id, doc in records:
        batch.set("attendance", doc_id, doc, merge=True)
    return batch.commit()


def seed_attendance(ctx: SeedContext, users: Sequence[Dict[str, Any]], dates: Sequence[datetime], model=None) -> int:
    model = model or build_model(ctx.settings)
    total = 0
    for user in users:
        written = write_attendance(ctx, generate_attendance_for(ctx, user, dates, model))
        log.debug("Asistencia | user=%s | docs=%d", user.get("code"), written)
        total += written
    return total

