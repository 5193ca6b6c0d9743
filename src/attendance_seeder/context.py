import random
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Protocol, Tuple, runtime_checkable

from attendance_seeder.config import SeedSettings


@runtime_checkable
class WriteBatch(Protocol):
    def set(self, collection: str, doc_id: str, data: Dict[str, Any], *, merge: bool = True) -> None: ...

    def commit(self) -> int: ...


@runtime_checkable
class DocumentStore(Protocol):
    """What the seeder needs from the database (FirestoreStore in production)."""

    def all(self, collection: str) -> List[Tuple[str, Dict[str, Any]]]: ...

    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]: ...

    def set(self, collection: str, doc_id: str, data: Dict[str, Any], *, merge: bool = True) -> None: ...

    def batch(self) -> WriteBatch: ...

    def server_timestamp(self) -> Any: ...


def local_now() -> datetime:
    return datetime.now().astimezone()


@dataclass
class SeedContext:
    """Everything a seeding run shares: store, settings, random source and clock."""

    store: DocumentStore
    settings: SeedSettings
    rng: random.Random = field(default_factory=random.Random)
    clock: Callable[[], datetime] = local_now


def build_context(store: DocumentStore, settings: SeedSettings, seed: Optional[int] = None) -> SeedContext:
    if seed is None:
        seed = settings.random_seed
    return SeedContext(store=store, settings=settings, rng=random.Random(seed))
