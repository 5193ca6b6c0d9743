from dataclasses import dataclass

# ubicacion fija de la sucursal sembrada
SEED_LAT = 31.25
SEED_LNG = 29.97


@dataclass(frozen=True)
class Branch:
    id: str
    name: str


@dataclass(frozen=True)
class Shift:
    id: str
    name: str


SHIFTS_FALLBACK = (
    Shift(id="A", name="Shift A"),
    Shift(id="B", name="Shift B"),
    Shift(id="C", name="Shift C"),
)
