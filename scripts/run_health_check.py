import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import bootstrap

bootstrap.add_src_to_path()

from attendance_seeder.db import build_store, test_connection
from attendance_seeder.logging import setup_logging


def main():
    setup_logging(None)
    store = build_store()
    test_connection(store)

    counts = {name: len(store.all(name)) for name in ("branches", "shifts", "users")}

    print(f"OK: Firestore | project={store.client.project} | " + " | ".join(f"{k}={v}" for k, v in counts.items()))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
