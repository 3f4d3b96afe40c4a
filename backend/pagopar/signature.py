"""
Signature et formats "fil" des requêtes PagoPar.
"""
import hashlib
import json
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any

# module backend.pagopar.signature
def format_date(value: Any) -> str:
    """
    Sérialise une date au format ISO 8601 UTC attendu par PagoPar
    (ex: "2026-10-19T12:00:00.000Z").
    - datetime naïf: considéré comme UTC
    - date: minuit UTC
    - str: ISO 8601 (suffixe "Z" accepté)
    - int/float: epoch en millisecondes
    """
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        dt = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    elif isinstance(value, str):
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            dt = datetime.fromisoformat(raw)
        except ValueError:
            raise ValueError(f"Fecha inválida: {value!r}") from None
    else:
        raise ValueError(f"Fecha inválida: {value!r}")

    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    dt = dt.astimezone(timezone.utc)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"

def _json_default(value: Any) -> Any:
    # Montants en Decimal: entier si possible (guaraníes), float sinon
    if isinstance(value, Decimal):
        return int(value) if value == value.to_integral_value() else float(value)
    if isinstance(value, (datetime, date)):
        return format_date(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")

def serialize_payload(data: Any) -> str:
    """
    JSON compact (ordre d'insertion conservé) pour les dicts/listes, str() sinon.
    Decimal et dates sont convertis; tout autre type non JSON lève TypeError.
    """
    if isinstance(data, (dict, list)):
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False, default=_json_default)
    return str(data)

def generate_signature(private_key: str, data: Any) -> str:
    """
    Calcule la firma: sha256(clé privée + payload sérialisé) en hexadécimal.
    La clé privée ne quitte jamais le processus, seul le digest est transmis.
    """
    message = f"{private_key}{serialize_payload(data)}"
    return hashlib.sha256(message.encode("utf-8")).hexdigest()
