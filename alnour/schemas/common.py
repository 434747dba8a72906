"""
Schémas communs: pagination de l'API REST et conversions des champs du fil.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Generic, List, Optional, TypeVar

from dateutil import parser as date_parser
from pydantic import BaseModel, Field


T = TypeVar("T")


def coerce_date(value: Any) -> Optional[date]:
    """
    Convertit une date reçue de l'API ("2024-01-15", "2024-01-15T00:00:00.000Z",
    datetime) en date. Les valeurs vides ou illisibles ("0000-00-00") deviennent None.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date_parser.isoparse(value.strip()).date()
        except (ValueError, OverflowError):
            return None
    return value


def coerce_amount(value: Any) -> Decimal:
    """Montant reçu de l'API: null, vide ou illisible vaut 0."""
    if value is None or value == "" or isinstance(value, bool):
        return Decimal("0")
    if isinstance(value, str):
        value = value.strip().replace(",", ".")
    elif not isinstance(value, Decimal):
        value = str(value)
    try:
        amount = Decimal(value)
    except (InvalidOperation, ValueError, TypeError):
        return Decimal("0")
    # NaN et Infinity fausseraient les totaux
    return amount if amount.is_finite() else Decimal("0")


def coerce_flag(value: Any) -> Any:
    """Indicateur 0/1 transmis parfois en booléen ou null."""
    if value is None:
        return 0
    if isinstance(value, bool):
        return int(value)
    return value


class Pagination(BaseModel):
    """Bloc de pagination renvoyé par les listes de l'API."""
    total: int = 0
    total_pages: int = Field(0, alias="totalPages")
    current_page: int = Field(1, alias="currentPage")
    page_size: int = Field(10, alias="pageSize")
    has_next: bool = Field(False, alias="hasNext")
    has_previous: bool = Field(False, alias="hasPrevious")

    class Config:
        populate_by_name = True


class PaginatedResponse(BaseModel, Generic[T]):
    """Réponse paginée: `{data: [...], pagination: {...}}`."""
    data: List[T] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)


class MessageResponse(BaseModel):
    message: str
