#!/usr/bin/env python3
"""
Classification Confidence Scoring

Assigns an advisory confidence in [0, 1] to a categorized message from the
keyword signals that corroborate its category. Confidence is metadata only; it
never decides whether a record is stored.
"""

from .categorizer import Category

# Scores are kept in hundredths to avoid floating point accumulation
BASE_SCORE = 50
MAX_SCORE = 100

# category -> [(keyword groups, bonus)]; a signal fires when every group has a keyword present
CONFIDENCE_SIGNALS: dict[Category, list[tuple[tuple[tuple[str, ...], ...], int]]] = {
    Category.UPI_DEBIT: [((("vpa",), ("ref no",)), 30), ((("upi",),), 20)],
    Category.UPI_CREDIT: [((("vpa",), ("ref no",)), 30), ((("upi",),), 20)],
    Category.BANK_CREDIT: [((("neft", "imps"),), 30), ((("account", "acct"),), 20)],
    Category.BANK_DEBIT: [((("neft", "imps"),), 30), ((("account", "acct"),), 20)],
    Category.CREDIT_CARD_BILL: [((("credit card",), ("statement",)), 40), ((("due date",),), 20)],
    Category.ATM_WITHDRAWAL: [((("atm",), ("withdrawal",)), 40)],
    Category.SHOPPING: [((("amazon", "flipkart"),), 40)],
    Category.FOOD_DINING: [((("swiggy", "zomato"),), 40)],
    Category.TRANSPORTATION: [((("uber", "ola"),), 40)],
    Category.SALARY_INCOME: [((("salary",),), 40), ((("credited",), ("from",)), 30)],
}


class ConfidenceScorer:
    """Keyword-signal confidence scoring"""

    @staticmethod
    def calculate_confidence(text: str, category: Category) -> float:
        """
        Calculate classification confidence (0.0 to 1.0).

        Args:
            text: Message text (any case)
            category: Category assigned by the categorizer

        Returns:
            Base 0.5 plus category bonuses, capped at 1.0 and rounded to 2 places
        """
        lowered = text.lower()
        score = BASE_SCORE

        for keyword_groups, bonus in CONFIDENCE_SIGNALS.get(category, []):
            if ConfidenceScorer._signal_present(lowered, keyword_groups):
                score += bonus

        score = min(score, MAX_SCORE)
        return round(score / 100, 2)

    @staticmethod
    def _signal_present(text: str, keyword_groups: tuple[tuple[str, ...], ...]) -> bool:
        """All groups must match; a group matches when any of its keywords is present"""
        return all(any(keyword in text for keyword in group) for group in keyword_groups)
