from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parent
SRC = ROOT / "src"


def add_src_to_path() -> Path:
    """
    Put `src/` on sys.path so `attendance_seeder` imports from a plain
    checkout (python scripts/run_seed.py) without `pip install -e .`.
    """
    if str(SRC) not in sys.path:
        sys.path.insert(0, str(SRC))
    return SRC
