"""Unit tests for locatif.domain.calculator.credit module."""

from datetime import date

import pytest

from locatif.core.financial import calculate_remaining_balance
from locatif.domain.calculator.credit import (
    loan_is_repaid,
    loan_payment_for,
    loan_progress,
    loan_start_date,
)
from locatif.domain.models import Bien, TypeFinancement


class TestLoanPaymentFor:
    def test_cash_is_zero(self, bien_cash):
        assert loan_payment_for(bien_cash) == 0.0

    def test_stored_payment_wins(self, bien_immeuble):
        assert loan_payment_for(bien_immeuble) == 500.0

    def test_computed_from_terms(self, bien_credit):
        assert loan_payment_for(bien_credit) == pytest.approx(1159.92, abs=0.1)

    def test_credit_without_terms(self):
        assert loan_payment_for(Bien(type_financement="CREDIT")) == 0.0


class TestLoanStartDate:
    def test_fallback_chain(self):
        bien = Bien(type_financement="CREDIT", date_acquisition="2020-03-01", created_at="2020-01-01")
        assert loan_start_date(bien) == date(2020, 3, 1)
        assert loan_start_date(Bien(created_at="2020-01-01")) == date(2020, 1, 1)
        assert loan_start_date(Bien()) is None


class TestLoanIsRepaid:
    def test_old_loan(self, as_of):
        bien = Bien(type_financement=TypeFinancement.CREDIT, date_debut_credit=date(2000, 1, 1), duree_credit=240)
        assert loan_is_repaid(bien, as_of) is True

    def test_running_loan(self, bien_credit, as_of):
        assert loan_is_repaid(bien_credit, as_of) is False

    def test_cash_never_repaid(self, bien_cash, as_of):
        assert loan_is_repaid(bien_cash, as_of) is False

    def test_missing_start(self, as_of):
        bien = Bien(type_financement=TypeFinancement.CREDIT, duree_credit=240)
        assert loan_is_repaid(bien, as_of) is False

    def test_acquisition_date_fallback(self, as_of):
        bien = Bien(
            type_financement=TypeFinancement.CREDIT,
            duree_credit=120,
            date_acquisition=date(2010, 6, 1),
        )
        assert loan_is_repaid(bien, as_of) is True


class TestLoanProgress:
    def test_computed(self, bien_credit, as_of):
        progress = loan_progress(bien_credit, as_of)
        expected = calculate_remaining_balance(200000, 3.5, 240, loan_payment_for(bien_credit), 24)

        assert progress.source == "computed"
        assert progress.mois_ecoules == 24
        assert progress.mois_restants == 216
        assert progress.capital_restant == pytest.approx(expected)
        assert progress.capital_rembourse == pytest.approx(200000 - expected)
        assert 0 < progress.progression_pct < 10

    def test_stored_balance(self, bien_credit, as_of):
        bien = bien_credit.model_copy(update={"capital_restant_du": 150000.0})
        progress = loan_progress(bien, as_of)
        assert progress.source == "stored"
        assert progress.capital_rembourse == pytest.approx(50000.0)
        assert progress.progression_pct == pytest.approx(25.0)

    def test_finished_loan(self, as_of):
        bien = Bien(
            type_financement=TypeFinancement.CREDIT,
            montant_credit=100000,
            taux_credit=2.0,
            duree_credit=120,
            date_debut_credit=date(2010, 1, 1),
        )
        progress = loan_progress(bien, as_of)
        assert progress.mois_ecoules == 120
        assert progress.mois_restants == 0
        assert progress.capital_restant == 0.0
        assert progress.progression_pct == pytest.approx(100.0)

    def test_acquisition_date_fallback(self, as_of):
        bien = Bien(
            type_financement=TypeFinancement.CREDIT,
            montant_credit=100000,
            taux_credit=2.0,
            duree_credit=120,
            date_acquisition=date(2020, 6, 15),
        )
        progress = loan_progress(bien, as_of)
        assert progress is not None
        assert progress.mois_ecoules == 60
        assert progress.mois_restants == 60

    def test_no_loan_data(self, bien_cash, as_of):
        assert loan_progress(bien_cash, as_of) is None
        assert loan_progress(Bien(type_financement="CREDIT", duree_credit=240), as_of) is None
