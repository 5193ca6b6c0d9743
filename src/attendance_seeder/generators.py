import random
import re
from datetime import datetime
from typing import Sequence, TypeVar

from attendance_seeder.dates import local_wall_time

T = TypeVar("T")

ROLES = ("employee", "supervisor", "branch_manager")

FIRST_NAMES = (
    "Ahmed", "Mohamed", "Ali", "Hassan", "Omar", "Youssef", "Khaled", "Mostafa", "Hany", "Karim",
    "Laila", "Nour", "Hagar", "Mariam", "Aya", "Nada", "Asmaa", "Sara", "Dina", "Reem",
)
LAST_NAMES = (
    "Hassan", "Fathy", "Said", "Nasser", "Mansour", "Farag", "Anwar", "Mahmoud", "Mostafa", "Salem",
    "Ali", "Yehia", "Kamel", "Zaki", "Ashraf", "Ibrahim", "Hamed", "Fouad", "Gaber", "Rashed",
)
PHONE_PREFIXES = ("010", "011", "012", "015")

EMAIL_DOMAIN = "gmail.com"

_NON_ALPHA = re.compile(r"[^a-z]")


def pick(rng: random.Random, items: Sequence[T]) -> T:
    return items[rng.randrange(len(items))]


def rand_int(rng: random.Random, low: int, high: int) -> int:
    """Uniform integer in [low, high], both inclusive."""
    return rng.randint(low, high)


def random_name(rng: random.Random) -> str:
    return f"{pick(rng, FIRST_NAMES)} {pick(rng, LAST_NAMES)}"


def make_email(name: str, index: int) -> str:
    # el indice garantiza unicidad dentro del lote
    base = _NON_ALPHA.sub("", name.lower()) or "user"
    return f"{base}{index}@{EMAIL_DOMAIN}"


def random_phone(rng: random.Random) -> str:
    return f"{pick(rng, PHONE_PREFIXES)}-{rand_int(rng, 100, 999)}-{rand_int(rng, 1000, 9999)}"


def random_clock(rng: random.Random, day: datetime, base_hour: int, variance_min: int) -> datetime:
    """base_hour:00 on `day` shifted by a uniform jitter of +-variance_min minutes."""
    return local_wall_time(day, base_hour, rand_int(rng, -variance_min, variance_min))
