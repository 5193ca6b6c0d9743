import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from attendance_seeder.context import SeedContext
from attendance_seeder.generators import ROLES, make_email, pick, rand_int, random_name, random_phone
from attendance_seeder.models import Branch, Shift

log = logging.getLogger("seeder.users")

STATUS = "approved"
STATUS_LABEL = "Approved"
OVERTIME_RATE = 60


def user_code(index: int) -> str:
    return f"EMP-{index:03d}"


def build_user(ctx: SeedContext, index: int, branch: Branch, shift: Shift) -> Dict[str, Any]:
    rng = ctx.rng
    name = random_name(rng)
    now = ctx.store.server_timestamp()

    return {
        "code": user_code(index),
        "name": name,
        "fullName": name,
        "email": make_email(name, index),
        "phone": random_phone(rng),
        "role": pick(rng, ROLES),
        "branchId": branch.id,
        "branchName": branch.name,
        "primaryBranchId": branch.id,
        "allowAnyBranch": False,
        "shiftId": shift.id,
        "shiftName": shift.name,
        "assignedShiftId": shift.id,
        "status": STATUS,
        "statusLabel": STATUS_LABEL,
        # nomina simple, editable despues desde la app
        "salaryBase": rand_int(rng, 600, 1200),
        "allowances": 0,
        "deductions": [{"name": "absense", "amount": 0}],
        "overtimeRate": OVERTIME_RATE,
        "createdAt": now,
        "updatedAt": now,
    }


def normalize_user(
    generated: Dict[str, Any],
    existing: Dict[str, Any],
    branch: Branch,
    shift: Shift,
    now: Any,
) -> Dict[str, Any]:
    """
    Merge a stored user over a freshly generated one.

    Stored values win for every field, so edits made in the app survive a
    re-seed. Branch/shift references and name fields fall back to the new
    assignment only when the stored value is empty. code, status,
    statusLabel and updatedAt are always reset.
    """
    ex = existing
    payload = {**generated, **ex}
    payload.update(
        {
            "code": generated["code"],
            "status": STATUS,
            "statusLabel": STATUS_LABEL,
            "branchId": ex.get("branchId") or branch.id,
            "branchName": ex.get("branchName") or branch.name,
            "shiftId": ex.get("shiftId") or shift.id,
            "shiftName": ex.get("shiftName") or shift.name,
            "fullName": ex.get("fullName") or ex.get("name") or generated["name"],
            "name": ex.get("name") or ex.get("fullName") or generated["name"],
            "primaryBranchId": ex.get("primaryBranchId") or ex.get("branchId") or branch.id,
            "assignedShiftId": ex.get("assignedShiftId") or ex.get("shiftId") or shift.id,
            "updatedAt": now,
        }
    )
    return payload


def upsert_user(
    ctx: SeedContext, index: int, branches: Sequence[Branch], shifts: Sequence[Shift]
) -> Tuple[Dict[str, Any], bool]:
    """Write one user (create or normalize). Returns (user, created)."""
    code = user_code(index)
    existing: Optional[Dict[str, Any]] = ctx.store.get("users", code)

    branch = pick(ctx.rng, branches)
    shift = pick(ctx.rng, shifts)
    generated = build_user(ctx, index, branch, shift)

    if existing is None:
        payload = generated
    else:
        payload = normalize_user(generated, existing, branch, shift, ctx.store.server_timestamp())

    ctx.store.set("users", code, payload, merge=True)
    return {"id": code, **payload}, existing is None


def seed_users(ctx: SeedContext, branches: Sequence[Branch], shifts: Sequence[Shift]) -> List[Dict[str, Any]]:
    """Create or normalize EMP-001..EMP-{users_count}."""
    users = []
    created = 0
    for i in range(1, ctx.settings.users_count + 1):
        user, is_new = upsert_user(ctx, i, branches, shifts)
        users.append(user)
        created += int(is_new)

    log.info("Usuarios OK | total=%d | creados=%d | normalizados=%d", len(users), created, len(users) - created)
    return users
