import logging
from typing import List

from attendance_seeder.context import SeedContext
from attendance_seeder.models import SEED_LAT, SEED_LNG, SHIFTS_FALLBACK, Branch, Shift

log = logging.getLogger("seeder.reference")

DEFAULT_BRANCH_ID = "default-branch"
DEFAULT_BRANCH_NAME = "Main Branch"
DEFAULT_BRANCH_RADIUS_METERS = 150


def load_branches(ctx: SeedContext) -> List[Branch]:
    """
    All branches in the store. When the collection is empty a default branch
    is written first, so a run never proceeds with zero branches.
    """
    docs = ctx.store.all("branches")
    branches = [Branch(id=doc_id, name=str(data.get("name") or "") or doc_id) for doc_id, data in docs]
    if branches:
        return branches

    now = ctx.store.server_timestamp()
    ctx.store.set(
        "branches",
        DEFAULT_BRANCH_ID,
        {
            "name": DEFAULT_BRANCH_NAME,
            "code": "1",
            "address": "",
            "geo": {"lat": SEED_LAT, "lng": SEED_LNG},
            "radiusMeters": DEFAULT_BRANCH_RADIUS_METERS,
            "createdAt": now,
            "updatedAt": now,
        },
        merge=True,
    )
    log.info("Sin sucursales | creada sucursal por defecto id=%s", DEFAULT_BRANCH_ID)
    return [Branch(id=DEFAULT_BRANCH_ID, name=DEFAULT_BRANCH_NAME)]


def load_shifts(ctx: SeedContext) -> List[Shift]:
    # a diferencia de branches, el fallback de turnos no se persiste
    docs = ctx.store.all("shifts")
    shifts = [Shift(id=doc_id, name=str(data.get("name") or doc_id)) for doc_id, data in docs]
    if not shifts:
        log.info("Sin turnos en la base | usando fallback A/B/C")
        return list(SHIFTS_FALLBACK)
    return shifts
