import base64
import binascii
import json
import os
from typing import Any, Dict, Tuple

from attendance_seeder.config import FirebaseSettings
from attendance_seeder.errors import ConfigurationError


def _parse_json(raw: str, source: str) -> Dict[str, Any]:
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"{source} no contiene JSON valido: {e}") from e
    if not isinstance(data, dict):
        raise ConfigurationError(f"{source} debe ser un objeto JSON")
    return data


def _from_base64(raw: str) -> Dict[str, Any]:
    try:
        decoded = base64.b64decode(raw, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as e:
        raise ConfigurationError(f"FIREBASE_SERVICE_ACCOUNT_BASE64 no es base64 valido: {e}") from e
    return _parse_json(decoded, "FIREBASE_SERVICE_ACCOUNT_BASE64")


def _from_fields(s: FirebaseSettings) -> Dict[str, Any]:
    # las claves en .env / secrets suelen venir con "\n" literal
    return {
        "type": "service_account",
        "project_id": s.project_id,
        "client_email": s.client_email,
        "private_key": (s.private_key or "").replace("\\n", "\n"),
        "token_uri": "https://oauth2.googleapis.com/token",
    }


def resolve_service_account(settings: FirebaseSettings) -> Tuple[str, Dict[str, Any]]:
    """
    Returns (source, service_account_info). Strategies, first match wins:
      1. FIREBASE_SERVICE_ACCOUNT         raw JSON
      2. FIREBASE_SERVICE_ACCOUNT_BASE64  base64(JSON)
      3. FIREBASE_PROJECT_ID + FIREBASE_CLIENT_EMAIL + FIREBASE_PRIVATE_KEY
      4. local file (FIREBASE_SERVICE_ACCOUNT_FILE, default ./service-account.json)
    The source name is safe to log; the info dict is not.
    """
    if settings.service_account_json:
        return "env:json", _parse_json(settings.service_account_json, "FIREBASE_SERVICE_ACCOUNT")

    if settings.service_account_b64:
        return "env:base64", _from_base64(settings.service_account_b64)

    if settings.project_id and settings.client_email and settings.private_key:
        return "env:fields", _from_fields(settings)

    path = settings.service_account_file
    if path and os.path.isfile(path):
        with open(path, "r", encoding="utf-8") as f:
            return f"file:{path}", _parse_json(f.read(), path)

    raise ConfigurationError(
        "No se encontro service account. Define FIREBASE_SERVICE_ACCOUNT(_BASE64), "
        "FIREBASE_PROJECT_ID/FIREBASE_CLIENT_EMAIL/FIREBASE_PRIVATE_KEY o agrega service-account.json"
    )
