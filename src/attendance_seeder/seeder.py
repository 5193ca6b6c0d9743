import logging
from dataclasses import dataclass

from attendance_seeder.attendance import build_model, seed_attendance
from attendance_seeder.context import SeedContext
from attendance_seeder.dates import generate_dates
from attendance_seeder.reference import load_branches, load_shifts
from attendance_seeder.users import seed_users

log = logging.getLogger("seeder.run")


@dataclass(frozen=True)
class SeedSummary:
    branches: int
    shifts: int
    users: int
    days: int
    attendance_docs: int


def run_seed(ctx: SeedContext) -> SeedSummary:
    """
    Full seeding run: reference data -> users -> attendance.
    Store errors propagate; batches already committed stay written.
    """
    s = ctx.settings

    # fechas primero: un SEED_MONTH invalido debe fallar antes de escribir nada
    dates = []
    if s.seed_attendance:
        now = ctx.clock()
        # dias futuros (mes en curso) no se siembran ni se cuentan
        generated = generate_dates(days=s.attendance_days, now=now, seed_month=s.seed_month)
        dates = [d for d in generated if d <= now]

    branches = load_branches(ctx)
    shifts = load_shifts(ctx)
    log.info("Referencias | branches=%d | shifts=%d", len(branches), len(shifts))

    users = seed_users(ctx, branches, shifts)

    total = 0
    if s.seed_attendance:
        total = seed_attendance(ctx, users, dates, build_model(s))
        mode = f"mes={s.seed_month}" if s.seed_month else f"ultimos {s.attendance_days} dias"
        log.info("Asistencia OK | docs=%d | %s | modelo=%s", total, mode, s.attendance_model)
    else:
        log.info("Asistencia omitida (SEED_ATTENDANCE=false)")

    return SeedSummary(
        branches=len(branches),
        shifts=len(shifts),
        users=len(users),
        days=len(dates),
        attendance_docs=total,
    )
