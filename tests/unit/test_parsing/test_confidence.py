#!/usr/bin/env python3
"""Tests for keyword-signal confidence scoring."""

import pytest

from smsledger.parsing.categorizer import Category, categorize
from smsledger.parsing.confidence import ConfidenceScorer
from tests.fixtures.sms_samples import ATM_SMS, NEFT_CREDIT_SMS, OTP_SMS, SALARY_SMS, UPI_DEBIT_SMS, YES_BILL_SMS


def score(text: str) -> float:
    return ConfidenceScorer.calculate_confidence(text, categorize(text))


class TestConfidenceScorer:
    """Test ConfidenceScorer.calculate_confidence()."""

    @pytest.mark.parsing
    def test_upi_with_vpa_and_ref_is_certain(self):
        """0.5 base + 0.3 (vpa, ref no) + 0.2 (upi)."""
        assert score(UPI_DEBIT_SMS) == 1.0

    @pytest.mark.parsing
    def test_bank_transfer_without_account_word(self):
        """NEFT bonus only."""
        assert score(NEFT_CREDIT_SMS) == 0.8

    @pytest.mark.parsing
    def test_bank_transfer_with_account_word(self):
        """NEFT and account bonuses."""
        assert score("Rs 1000 credited to your account via NEFT") == 1.0

    @pytest.mark.parsing
    def test_card_statement(self):
        """'credit card' with 'statement' earns 0.4."""
        assert score(YES_BILL_SMS) == 0.9
        assert score("Your credit card statement is ready. Payment due date 05-Jul-25") == 1.0

    @pytest.mark.parsing
    def test_atm_needs_withdrawal_word(self):
        """'withdrawn' is not 'withdrawal'."""
        assert score(ATM_SMS) == 0.5
        assert score("ATM withdrawal of Rs 2000 from A/c XX12") == 0.9

    @pytest.mark.parsing
    def test_salary_is_clamped(self):
        """0.5 + 0.4 + 0.3 is capped at 1.0."""
        assert score(SALARY_SMS) == 1.0

    @pytest.mark.parsing
    def test_categories_without_signals_keep_base(self):
        """Unknown and generic categories score the base 0.5."""
        assert score(OTP_SMS) == 0.5
        assert score("Rs 100 debited from A/c XX12") == 0.5

    @pytest.mark.parsing
    def test_score_uses_given_category(self):
        """Signals are looked up for the category passed in, not re-derived."""
        assert ConfidenceScorer.calculate_confidence("amazon order", Category.SHOPPING) == 0.9
        assert ConfidenceScorer.calculate_confidence("amazon order", Category.UNKNOWN) == 0.5

    @pytest.mark.parsing
    def test_transportation_bonus_needs_uber_or_ola(self):
        """Rapido is categorized but earns no bonus."""
        assert score("Rapido ride fare Rs 80") == 0.5
        assert score("Uber ride fare Rs 80") == 0.9
