"""Cash flow calculations.

Net monthly cash flow of a property, its split across lots, and the rent
actually collected from tenants and the housing aid office.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Iterable, Sequence

from locatif.core.constants import MONTHS_PER_YEAR
from locatif.core.logging import get_logger
from locatif.domain.calculator.charges import calculate_charges_breakdown, calculate_monthly_charges
from locatif.domain.calculator.credit import loan_payment_for
from locatif.domain.models.bien import Bien, Locataire, Lot, Loyer
from locatif.domain.models.resultats import CollectionSummary, LotBreakdown, TenantCollection

log = get_logger(__name__)

# Rent totals closer than this are considered equal
RENT_TOLERANCE = 0.01


def calculate_net_cash_flow(loyer: float, charges_mensuelles: float, mensualite_credit: float) -> float:
    """Rent minus monthly charges minus loan payment. May be negative."""
    return loyer - charges_mensuelles - mensualite_credit


def calculate_property_cash_flow(bien: Bien) -> float:
    """Monthly cash flow of a property (loan payment is 0 for cash purchases)."""
    return calculate_net_cash_flow(
        bien.loyer_mensuel, calculate_monthly_charges(bien), loan_payment_for(bien)
    )


def calculate_net_rent(bien: Bien) -> float:
    """Rent left after charges, before the loan payment."""
    return bien.loyer_mensuel - calculate_monthly_charges(bien)


def calculate_lot_ratio(lot: Lot, bien: Bien) -> float:
    """Share of the property carried by a lot, by rent. 0 when the property has no rent."""
    if bien.loyer_mensuel <= 0:
        return 0.0
    return lot.loyer_mensuel / bien.loyer_mensuel


def calculate_lot_breakdown(lot: Lot, bien: Bien) -> LotBreakdown:
    """Charges and loan payment prorated to one lot, with the lot's cash flow."""
    ratio = calculate_lot_ratio(lot, bien)
    charges = calculate_charges_breakdown(bien).scaled(ratio)
    mensualite = loan_payment_for(bien) * ratio

    return LotBreakdown(
        lot_id=lot.id,
        numero_lot=lot.numero_lot,
        loyer_mensuel=lot.loyer_mensuel,
        ratio=ratio,
        charges=charges,
        mensualite_credit=mensualite,
        cash_flow=calculate_net_cash_flow(lot.loyer_mensuel, charges.total, mensualite),
    )


def calculate_lots_breakdown(bien: Bien, lots: Sequence[Lot]) -> list[LotBreakdown]:
    """Breakdown for every lot of a property."""
    return [calculate_lot_breakdown(lot, bien) for lot in lots]


def check_lots_coherence(bien: Bien, lots: Sequence[Lot]) -> str | None:
    """Warn when lot rents do not add up to the property rent.

    Returns:
        A human readable warning, or None when coherent (or without lots)
    """
    if not lots:
        return None

    total = sum(lot.loyer_mensuel for lot in lots)
    if abs(total - bien.loyer_mensuel) <= RENT_TOLERANCE:
        return None

    log.warning(
        "lots_rent_mismatch",
        bien=bien.nom,
        loyer_bien=bien.loyer_mensuel,
        loyer_lots=total,
    )
    return (
        f"La somme des loyers des lots ({total:.2f} €) ne correspond pas "
        f"au loyer du bien ({bien.loyer_mensuel:.2f} €)"
    )


def calculate_tenant_net_rent(locataire: Locataire, loyer_lot: float) -> float:
    """Part of the rent the tenant pays personally (rent minus housing aid).

    Not floored: a negative value means the aid exceeds the rent and must be
    surfaced to the owner.
    """
    return loyer_lot - locataire.montant_apl


def calculate_collection(
    lots: Sequence[Lot],
    locataires: Sequence[Locataire],
    loyers: Iterable[Loyer],
    annee: int,
) -> CollectionSummary:
    """Rent collected over one year, tenant share and housing aid tracked apart.

    Co-tenants of one lot split its rent equally. Ledger rows are matched on
    the tenant; rows carrying only a lot id are attributed to that lot's sole
    tenant and ignored when the lot is shared or vacant. Rows of a tenant who
    is no longer listed are ignored, whatever their lot.
    """
    lots_by_id = {lot.id: lot for lot in lots}
    tenants_by_lot: dict[str, list[Locataire]] = defaultdict(list)
    for locataire in locataires:
        tenants_by_lot[locataire.lot_id].append(locataire)

    mois_locataire: dict[str, set[int]] = defaultdict(set)
    mois_apl: dict[str, set[int]] = defaultdict(set)
    ignores = 0

    tenant_ids = {locataire.id for locataire in locataires}
    for loyer in loyers:
        if loyer.annee != annee:
            continue

        locataire_id = loyer.locataire_id
        if locataire_id is None:
            occupants = tenants_by_lot.get(loyer.lot_id or "", [])
            locataire_id = occupants[0].id if len(occupants) == 1 else None
        elif locataire_id not in tenant_ids:
            # Former tenant: never credited to the current occupant
            locataire_id = None

        if locataire_id is None:
            ignores += 1
            continue

        if loyer.paye_locataire:
            mois_locataire[locataire_id].add(loyer.mois)
        if loyer.paye_apl:
            mois_apl[locataire_id].add(loyer.mois)

    if ignores:
        log.debug("collection_rows_ignored", annee=annee, count=ignores)

    collections = []
    prevu_total = 0.0
    for locataire in locataires:
        lot = lots_by_id.get(locataire.lot_id)
        if lot is None:
            log.warning("tenant_without_lot", locataire_id=locataire.id, lot_id=locataire.lot_id)
            continue

        part = lot.loyer_mensuel / len(tenants_by_lot[lot.id])
        collections.append(
            TenantCollection(
                locataire_id=locataire.id,
                lot_id=lot.id,
                loyer_part=part,
                loyer_net_locataire=calculate_tenant_net_rent(locataire, part),
                montant_apl=locataire.montant_apl,
                mois_payes_locataire=len(mois_locataire[locataire.id]),
                mois_payes_apl=len(mois_apl[locataire.id]),
            )
        )
        prevu_total += part * MONTHS_PER_YEAR

    return CollectionSummary(
        annee=annee,
        locataires=collections,
        prevu_total=prevu_total,
        paiements_ignores=ignores,
    )
