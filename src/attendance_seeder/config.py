import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

from attendance_seeder.dates import parse_month
from attendance_seeder.errors import ConfigurationError, ValidationError

load_dotenv()

ATTENDANCE_MODELS = ("simple", "weekly")

# Firestore: max 500 escrituras por batch, 2 docs por dia
MAX_ATTENDANCE_DAYS = 250

_WEEKDAYS = {"mon": 0, "tue": 1, "wed": 2, "thu": 3, "fri": 4, "sat": 5, "sun": 6}


def _env_int(var: str, default: int) -> int:
    try:
        return int(os.environ.get(var, default))
    except (TypeError, ValueError):
        return default


def _env_float(var: str, default: float) -> float:
    try:
        return float(os.environ.get(var, default))
    except (TypeError, ValueError):
        return default


def _env_bool(var: str, default: bool) -> bool:
    raw = os.environ.get(var)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() not in ("false", "0", "no", "off")


def _env_str(var: str) -> Optional[str]:
    value = os.environ.get(var, "").strip()
    return value or None


def _parse_weekend(raw: str) -> Tuple[int, ...]:
    days = []
    for token in raw.split(","):
        token = token.strip().lower()[:3]
        if not token:
            continue
        if token not in _WEEKDAYS:
            raise ValidationError(f"SEED_WEEKEND_DAYS invalido: {raw!r}")
        days.append(_WEEKDAYS[token])
    return tuple(sorted(set(days)))


@dataclass(frozen=True)
class SeedSettings:
    users_count: int = 20
    seed_attendance: bool = True
    attendance_days: int = 7
    present_prob: float = 0.8
    seed_month: Optional[str] = None
    attendance_model: str = "simple"
    weekend_days: Tuple[int, ...] = (4, 5)
    random_seed: Optional[int] = None

    def validate(self) -> "SeedSettings":
        if self.users_count < 1:
            raise ConfigurationError(f"EMP_COUNT debe ser >= 1 (recibido {self.users_count})")
        if not 1 <= self.attendance_days <= MAX_ATTENDANCE_DAYS:
            raise ConfigurationError(
                f"SEED_ATTENDANCE_DAYS debe estar entre 1 y {MAX_ATTENDANCE_DAYS} (recibido {self.attendance_days})"
            )
        if not 0.0 <= self.present_prob <= 1.0:
            raise ConfigurationError(f"PRESENT_PROB debe estar entre 0 y 1 (recibido {self.present_prob})")
        if self.attendance_model not in ATTENDANCE_MODELS:
            raise ConfigurationError(
                f"ATTENDANCE_MODEL desconocido: {self.attendance_model!r} (opciones: {', '.join(ATTENDANCE_MODELS)})"
            )
        if self.seed_month:
            parse_month(self.seed_month)
        return self


@dataclass(frozen=True)
class FirebaseSettings:
    service_account_json: Optional[str] = None
    service_account_b64: Optional[str] = None
    project_id: Optional[str] = None
    client_email: Optional[str] = None
    private_key: Optional[str] = None
    service_account_file: str = "service-account.json"


def get_seed_settings() -> SeedSettings:
    users_count = _env_int("EMP_COUNT", _env_int("USERS_COUNT", 20))
    raw_seed = _env_str("SEED_RANDOM_SEED")

    return SeedSettings(
        users_count=users_count,
        seed_attendance=_env_bool("SEED_ATTENDANCE", True),
        attendance_days=_env_int("SEED_ATTENDANCE_DAYS", 7),
        present_prob=_env_float("PRESENT_PROB", 0.8),
        seed_month=_env_str("SEED_MONTH"),
        attendance_model=(_env_str("ATTENDANCE_MODEL") or "simple").lower(),
        weekend_days=_parse_weekend(os.environ.get("SEED_WEEKEND_DAYS", "fri,sat")),
        random_seed=int(raw_seed) if raw_seed and raw_seed.lstrip("-").isdigit() else None,
    ).validate()


def get_log_file() -> Optional[str]:
    # SEED_LOG_FILE vacio = solo consola
    return os.environ.get("SEED_LOG_FILE", "logs/seed.log") or None


def get_firebase_settings() -> FirebaseSettings:
    return FirebaseSettings(
        service_account_json=_env_str("FIREBASE_SERVICE_ACCOUNT"),
        service_account_b64=_env_str("FIREBASE_SERVICE_ACCOUNT_BASE64"),
        project_id=_env_str("FIREBASE_PROJECT_ID"),
        client_email=_env_str("FIREBASE_CLIENT_EMAIL"),
        private_key=_env_str("FIREBASE_PRIVATE_KEY"),
        service_account_file=os.environ.get("FIREBASE_SERVICE_ACCOUNT_FILE", "service-account.json"),
    )
