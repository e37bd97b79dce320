"""Portfolio record models.

Immutable snapshots supplied by the CRUD layer: a property (bien), its rentable
sub-units (lots), the tenants of each lot (locataires) and the monthly rent
ledger (loyers). The engine reads them and never writes back.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Annotated, Any, Optional

from dateutil import parser as date_parser
from pydantic import BaseModel, BeforeValidator, Field, NonNegativeFloat, field_validator

from locatif.core.logging import get_logger

log = get_logger(__name__)


class TypeFinancement(str, Enum):
    """How a property was financed."""
    CASH = "CASH"
    CREDIT = "CREDIT"


def _coerce_optional_number(value: Any) -> Any:
    """Turn text-stored numbers into floats; blank text means unset."""
    if isinstance(value, str):
        cleaned = value.strip().replace("\u00a0", "").replace("\u202f", "").replace(" ", "")
        cleaned = cleaned.replace(",", ".")
        if not cleaned:
            return None
        return float(cleaned)
    return value


def _coerce_optional_date(value: Any) -> Any:
    """Parse ISO or French (dd/mm/yyyy) dates; unparseable text means unset."""
    if value is None or isinstance(value, date):
        return value.date() if isinstance(value, datetime) else value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return date.fromisoformat(text[:10])
        except ValueError:
            pass
        try:
            return date_parser.parse(text, dayfirst=True).date()
        except (ValueError, OverflowError):
            log.warning("unparseable_date", value=text)
            return None
    return value


OptionalAmount = Annotated[Optional[NonNegativeFloat], BeforeValidator(_coerce_optional_number)]
OptionalDate = Annotated[Optional[date], BeforeValidator(_coerce_optional_date)]


def as_amount(value: float | None) -> float:
    """Unset amounts count as 0 in calculations."""
    return float(value) if value is not None else 0.0


class Bien(BaseModel):
    """Rental property snapshot.

    Charges are monthly except ``taxe_fonciere`` which is annual. Loan fields
    are only meaningful for ``CREDIT`` properties.
    """

    id: Optional[str] = Field(None, description="Record identifier")
    nom: str = Field(default="Bien", description="Display name")

    type_financement: TypeFinancement = Field(default=TypeFinancement.CASH)
    loyer_mensuel: float = Field(default=0.0, ge=0, description="Monthly rent in €")

    # Charges
    taxe_fonciere: OptionalAmount = Field(None, description="Annual property tax in €")
    charges_copro: OptionalAmount = Field(None, description="Monthly co-ownership fee in €")
    assurance: OptionalAmount = Field(None, description="Monthly insurance in €")
    frais_gestion: OptionalAmount = Field(None, description="Monthly management fee in €")
    autres_charges: OptionalAmount = Field(None, description="Other monthly charges in €")

    # Financing
    montant_credit: OptionalAmount = Field(None, description="Borrowed principal in €")
    taux_credit: OptionalAmount = Field(None, description="Annual interest rate %")
    duree_credit: Optional[int] = Field(None, description="Loan term in months")
    date_debut_credit: OptionalDate = None
    mensualite_credit: OptionalAmount = Field(None, description="Stored monthly payment in €")
    capital_restant_du: OptionalAmount = Field(None, description="Stored remaining principal in €")

    # Investment
    prix_achat: OptionalAmount = Field(None, description="Purchase price in €")
    frais_notaire: OptionalAmount = Field(None, description="Notary fees in €")
    travaux_initiaux: OptionalAmount = Field(None, description="Initial works in €")
    autres_frais: OptionalAmount = Field(None, description="Other acquisition costs in €")

    # History
    date_acquisition: OptionalDate = None
    date_mise_en_location: OptionalDate = None
    created_at: OptionalDate = None
    revenus_anterieurs_override: OptionalAmount = Field(None, description="Manual cumulative revenue")
    charges_anterieures_override: OptionalAmount = Field(None, description="Manual cumulative charges")

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }

    @field_validator("loyer_mensuel", mode="before")
    @classmethod
    def validate_loyer(cls, v: Any) -> Any:
        """Blank rent is 0."""
        v = _coerce_optional_number(v)
        return 0.0 if v is None else v

    @field_validator("type_financement", mode="before")
    @classmethod
    def validate_type_financement(cls, v: Any) -> Any:
        """Accept lowercase and French spellings."""
        if v is None:
            return TypeFinancement.CASH
        if isinstance(v, str):
            normalized = v.strip().upper()
            if normalized in {"COMPTANT", ""}:
                return TypeFinancement.CASH
            return normalized
        return v

    @field_validator("duree_credit", mode="before")
    @classmethod
    def validate_duree(cls, v: Any) -> Any:
        """Durations stored as text or floats become whole months."""
        v = _coerce_optional_number(v)
        if isinstance(v, float):
            return int(v)
        return v

    @property
    def is_credit(self) -> bool:
        return self.type_financement is TypeFinancement.CREDIT


class Lot(BaseModel):
    """Rentable sub-unit of a property."""

    id: str = Field(..., description="Record identifier")
    bien_id: Optional[str] = None
    numero_lot: str = Field(default="1")
    superficie: OptionalAmount = Field(None, description="Surface in m²")
    loyer_mensuel: float = Field(default=0.0, ge=0, description="Monthly rent of the lot in €")
    est_lot_defaut: bool = Field(default=False, description="Lot created with the property")

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }

    @field_validator("loyer_mensuel", mode="before")
    @classmethod
    def validate_loyer(cls, v: Any) -> Any:
        v = _coerce_optional_number(v)
        return 0.0 if v is None else v


class Locataire(BaseModel):
    """Tenant of one lot. ``montant_apl`` is paid by the housing aid office."""

    id: str = Field(..., description="Record identifier")
    lot_id: str = Field(..., description="Lot the tenant occupies")
    nom: str = Field(default="")
    prenom: str = Field(default="")
    montant_apl: float = Field(default=0.0, ge=0, description="Monthly housing aid in €")
    mode_paiement: str = Field(default="virement")
    date_entree: OptionalDate = None

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }

    @field_validator("montant_apl", mode="before")
    @classmethod
    def validate_apl(cls, v: Any) -> Any:
        v = _coerce_optional_number(v)
        return 0.0 if v is None else v


class Loyer(BaseModel):
    """One month of the rent ledger for a tenant (or a whole lot)."""

    annee: int = Field(..., ge=1900, le=2200)
    mois: int = Field(..., ge=1, le=12, description="Calendar month 1-12")
    locataire_id: Optional[str] = None
    lot_id: Optional[str] = None
    paye_locataire: bool = False
    paye_apl: bool = False
    date_paiement_locataire: OptionalDate = None
    date_paiement_apl: OptionalDate = None

    model_config = {
        "frozen": True,
        "extra": "ignore",
    }
