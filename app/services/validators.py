"""Validation des arguments avant d'atteindre le Store"""

import re
from typing import Optional, Type, TypeVar

from pydantic import AnyUrl, BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from app.core.errors import NegativeValue, OutOfRange, ValidationError

DEFAULT_TAKE = 30
MIN_TAKE = 1
MAX_TAKE = 50
DEFAULT_SKIP = 0

# borne de la colonne Integer (Postgres INTEGER signé 32 bits)
MAX_ENTITY_ID = 2**31 - 1

_ENTITY_ID = re.compile(r"[0-9]+")
_url_adapter = TypeAdapter(AnyUrl)

ArgsModel = TypeVar("ArgsModel", bound=BaseModel)


def validate_take(value: Optional[int] = None, min_value: int = MIN_TAKE, max_value: int = MAX_TAKE) -> int:
    if value is None:
        return DEFAULT_TAKE
    if value < min_value or value > max_value:
        raise OutOfRange(value, min_value, max_value)
    return value


def validate_skip(value: Optional[int] = None) -> int:
    if value is None:
        return DEFAULT_SKIP
    if value < 0:
        raise NegativeValue(value)
    return value


def validate_url(value: str) -> bool:
    # False plutôt qu'une exception : l'appelant choisit l'erreur à renvoyer
    try:
        _url_adapter.validate_python(value)
    except PydanticValidationError:
        return False
    return True


def parse_entity_id(raw: str) -> Optional[int]:
    """
    Convertit un id GraphQL en entier.

    Seules les chaînes composées uniquement de chiffres sont acceptées
    ("42" -> 42). Tout le reste ("12a", "", "-5") donne None, de même que
    les valeurs hors de la colonne Integer, pour que
    l'appelant renvoie une erreur "not found" et pas une erreur de parsing.
    """
    if raw is None or not _ENTITY_ID.fullmatch(raw):
        return None
    # au-delà de la colonne, aucun enregistrement ne peut correspondre
    digits = raw.lstrip("0") or "0"
    if len(digits) > len(str(MAX_ENTITY_ID)):
        return None
    value = int(digits)
    if value > MAX_ENTITY_ID:
        return None
    return value


def parse_args(model: Type[ArgsModel], **values) -> ArgsModel:
    """Construit le struct d'arguments et traduit les erreurs pydantic"""
    try:
        return model(**values)
    except PydanticValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or model.__name__
        raise ValidationError(f"Invalid {field}: {first['msg']}") from e
