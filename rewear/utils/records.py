"""
Validation des lignes Supabase à la frontière du service.

Les résultats PostgREST sont des dicts faiblement typés; on les convertit en
modèles pydantic. Une ligne invalide est journalisée puis ignorée.
"""
import logging
from datetime import date, datetime, timezone
from typing import Any, Iterable, List, Optional, Type, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

_DATETIME = TypeAdapter(datetime)
_DATE = TypeAdapter(date)

def parse_row(model: Type[M], row: Any) -> Optional[M]:
    if not isinstance(row, dict):
        return None
    try:
        return model.model_validate(row)
    except ValidationError as e:
        logger.warning("Ligne %s invalide ignorée: %s", model.__name__, e.errors())
        return None

def parse_rows(model: Type[M], rows: Optional[Iterable[Any]]) -> List[M]:
    parsed = (parse_row(model, r) for r in (rows or []))
    return [p for p in parsed if p is not None]

def first_row(res) -> Optional[dict]:
    """Première ligne d'un résultat execute() (liste ou dict selon la version de supabase-py)."""
    rows = getattr(res, "data", None)
    if isinstance(rows, list):
        return rows[0] if rows else None
    return rows or None

def non_negative_amount(v: Any) -> float:
    """Montant absent ou illisible => 0; jamais négatif."""
    try:
        amount = float(v or 0)
    except (TypeError, ValueError):
        return 0.0
    return max(amount, 0.0)

def parse_datetime(value: Any) -> Optional[datetime]:
    """Date ou horodatage ISO 8601 (précision fractionnaire libre) -> datetime aware, UTC par défaut.
    None si absent ou illisible.
    """
    if value is None or value == "":
        return None
    try:
        dt = _DATETIME.validate_python(value)
    except ValidationError:
        try:
            day = _DATE.validate_python(value)
        except ValidationError:
            return None
        dt = datetime(day.year, day.month, day.day)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt
