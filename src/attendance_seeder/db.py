import logging
from typing import Any, Dict, List, Optional, Tuple

import firebase_admin
from firebase_admin import credentials, firestore
from google.api_core.exceptions import GoogleAPIError
from google.cloud.firestore import SERVER_TIMESTAMP

from attendance_seeder.config import FirebaseSettings, get_firebase_settings
from attendance_seeder.credentials import resolve_service_account
from attendance_seeder.errors import ConfigurationError, StoreError

log = logging.getLogger("seeder.db")

APP_NAME = "attendance-seeder"


class FirestoreBatch:
    """Write batch; every set() lands atomically on commit()."""

    def __init__(self, client) -> None:
        self._client = client
        self._batch = client.batch()
        self._count = 0

    def set(self, collection: str, doc_id: str, data: Dict[str, Any], *, merge: bool = True) -> None:
        ref = self._client.collection(collection).document(doc_id)
        self._batch.set(ref, data, merge=merge)
        self._count += 1

    def commit(self) -> int:
        try:
            self._batch.commit()
        except GoogleAPIError as e:
            raise StoreError(f"Fallo commit de batch ({self._count} docs): {e}") from e
        return self._count

    def __len__(self) -> int:
        return self._count


class FirestoreStore:
    """
    Thin document-store surface over a Firestore client:
    all / get / set(merge) / batch. Errors from the client surface as StoreError.
    """

    def __init__(self, client) -> None:
        self.client = client

    def all(self, collection: str) -> List[Tuple[str, Dict[str, Any]]]:
        try:
            return [(snap.id, snap.to_dict() or {}) for snap in self.client.collection(collection).stream()]
        except GoogleAPIError as e:
            raise StoreError(f"No se pudo leer la coleccion {collection}: {e}") from e

    def get(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        try:
            snap = self.client.collection(collection).document(doc_id).get()
        except GoogleAPIError as e:
            raise StoreError(f"No se pudo leer {collection}/{doc_id}: {e}") from e
        return (snap.to_dict() or {}) if snap.exists else None

    def set(self, collection: str, doc_id: str, data: Dict[str, Any], *, merge: bool = True) -> None:
        try:
            self.client.collection(collection).document(doc_id).set(data, merge=merge)
        except GoogleAPIError as e:
            raise StoreError(f"No se pudo escribir {collection}/{doc_id}: {e}") from e

    def batch(self) -> FirestoreBatch:
        return FirestoreBatch(self.client)

    def server_timestamp(self) -> Any:
        return SERVER_TIMESTAMP


def build_store(settings: Optional[FirebaseSettings] = None) -> FirestoreStore:
    s = settings or get_firebase_settings()
    source, info = resolve_service_account(s)

    try:
        app = firebase_admin.get_app(APP_NAME)
    except ValueError:
        try:
            cert = credentials.Certificate(info)
        except ValueError as e:
            raise ConfigurationError(f"Service account invalido ({source}): {e}") from e
        app = firebase_admin.initialize_app(cert, name=APP_NAME)

    log.info("Firestore listo | project=%s | credenciales=%s", info.get("project_id"), source)
    return FirestoreStore(firestore.client(app))


def test_connection(store: FirestoreStore) -> None:
    # lectura minima: falla rapido si las credenciales no sirven
    try:
        list(store.client.collection("branches").limit(1).stream())
    except GoogleAPIError as e:
        raise StoreError(f"Firestore no responde: {e}") from e
