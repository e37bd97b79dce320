"""Calculation result models.

Results are plain pydantic models so the presentation layer can serialize
them directly. ``None`` always means "not computable" and must be rendered as
such, never as 0.
"""

from __future__ import annotations

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, computed_field


class Computed(BaseModel):
    """Metric estimated by the engine."""

    kind: Literal["computed"] = "computed"
    value: float

    model_config = {"frozen": True}


class Override(BaseModel):
    """Metric entered manually by the owner; always wins over the estimate."""

    kind: Literal["override"] = "override"
    value: float

    model_config = {"frozen": True}


Metric = Annotated[Union[Computed, Override], Field(discriminator="kind")]


def resolve_metric(override: float | None, estimate: float) -> Computed | Override:
    """Pick the manual value when one is set, otherwise the estimate."""
    if override is not None:
        return Override(value=float(override))
    return Computed(value=float(estimate))


class ChargesBreakdown(BaseModel):
    """Monthly charges of a property (or of a lot after proration)."""

    taxe_fonciere: float = 0.0
    charges_copro: float = 0.0
    assurance: float = 0.0
    frais_gestion: float = 0.0
    autres_charges: float = 0.0

    model_config = {"frozen": True}

    @computed_field
    @property
    def total(self) -> float:
        """Total monthly charges."""
        return (
            self.taxe_fonciere
            + self.charges_copro
            + self.assurance
            + self.frais_gestion
            + self.autres_charges
        )

    def scaled(self, ratio: float) -> ChargesBreakdown:
        """Every component multiplied by ``ratio``."""
        return ChargesBreakdown(
            taxe_fonciere=self.taxe_fonciere * ratio,
            charges_copro=self.charges_copro * ratio,
            assurance=self.assurance * ratio,
            frais_gestion=self.frais_gestion * ratio,
            autres_charges=self.autres_charges * ratio,
        )


class LotBreakdown(BaseModel):
    """Share of a property's charges and loan carried by one lot."""

    lot_id: str
    numero_lot: str
    loyer_mensuel: float
    ratio: float = Field(..., ge=0, description="Lot rent / property rent")
    charges: ChargesBreakdown
    mensualite_credit: float
    cash_flow: float

    model_config = {"frozen": True}


class TenantCollection(BaseModel):
    """Rent collected from one tenant over a year."""

    locataire_id: str
    lot_id: str
    loyer_part: float = Field(..., description="Tenant's share of the lot rent")
    loyer_net_locataire: float = Field(..., description="Share minus housing aid, may be negative")
    montant_apl: float
    mois_payes_locataire: int = 0
    mois_payes_apl: int = 0

    model_config = {"frozen": True}

    @computed_field
    @property
    def aide_excede_loyer(self) -> bool:
        """Housing aid larger than the rent share: a data problem to surface."""
        return self.loyer_net_locataire < 0

    @computed_field
    @property
    def encaisse_locataire(self) -> float:
        return self.loyer_net_locataire * self.mois_payes_locataire

    @computed_field
    @property
    def encaisse_apl(self) -> float:
        return self.montant_apl * self.mois_payes_apl

    @computed_field
    @property
    def encaisse_total(self) -> float:
        return self.encaisse_locataire + self.encaisse_apl


class CollectionSummary(BaseModel):
    """Realized versus expected rent for a property over one year."""

    annee: int
    locataires: list[TenantCollection] = Field(default_factory=list)
    prevu_total: float = 0.0
    paiements_ignores: int = Field(default=0, description="Ledger rows matching no tenant")

    model_config = {"frozen": True}

    @computed_field
    @property
    def encaisse_total(self) -> float:
        return sum(t.encaisse_total for t in self.locataires)

    @computed_field
    @property
    def reste_a_percevoir(self) -> float:
        return self.prevu_total - self.encaisse_total


class LoanProgress(BaseModel):
    """Where a loan stands at a given date."""

    mois_ecoules: int
    mois_restants: int
    duree_totale: int
    capital_rembourse: float
    capital_restant: float
    progression_pct: float = Field(..., ge=0, le=100)
    source: Literal["stored", "computed"] = "computed"

    model_config = {"frozen": True}


class RentabiliteMetrics(BaseModel):
    """Yield, cumulative balance and ROI of one property."""

    loyer_annuel: float
    charges_annuelles: float
    mensualites_annuelles: float
    investissement_total: float
    rentabilite_brute_pct: Optional[float] = None
    rentabilite_nette_pct: Optional[float] = None
    cash_flow_annuel: float
    mois_possession: int
    revenus_cumules: Metric
    charges_cumulees: Metric
    bilan_net: float
    roi_pct: Optional[float] = None

    model_config = {"frozen": True}


class CumulativePoint(BaseModel):
    """One month of the cumulative revenue / charges curve."""

    mois: int
    revenus: float
    charges: float
    cash_flow: float

    model_config = {"frozen": True}
