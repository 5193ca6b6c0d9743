import logging

from attendance_seeder.config import get_firebase_settings, get_log_file, get_seed_settings
from attendance_seeder.context import build_context
from attendance_seeder.db import build_store
from attendance_seeder.logging import setup_logging
from attendance_seeder.seeder import run_seed

log = logging.getLogger("seeder.cli")


def main() -> int:
    setup_logging(get_log_file())
    try:
        settings = get_seed_settings()
        store = build_store(get_firebase_settings())
        log.info("Seed iniciado | users=%d | attendance=%s", settings.users_count, settings.seed_attendance)
        summary = run_seed(build_context(store, settings))
    except Exception as e:
        log.exception("Seed fallido: %s", e)
        return 1

    log.info(
        "Seed terminado | users=%d | dias=%d | attendance_docs=%d",
        summary.users, summary.days, summary.attendance_docs,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
