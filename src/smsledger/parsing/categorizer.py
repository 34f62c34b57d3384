#!/usr/bin/env python3
"""
SMS Categorizer

Maps bank SMS text to a transaction category with an ordered list of keyword
rules. Rules are evaluated top to bottom on the lower-cased text and the first
rule that matches decides the category; there is no scoring across rules.
"""

from collections.abc import Callable
from enum import Enum


class Category(Enum):
    """Closed set of transaction categories."""

    UPI_DEBIT = "upi_debit"
    UPI_CREDIT = "upi_credit"
    BANK_CREDIT = "bank_credit"
    BANK_DEBIT = "bank_debit"
    CREDIT_CARD_BILL = "credit_card_bill"
    ATM_WITHDRAWAL = "atm_withdrawal"
    SHOPPING = "shopping"
    FOOD_DINING = "food_dining"
    TRANSPORTATION = "transportation"
    RECHARGE = "recharge"
    BILL_PAYMENT = "bill_payment"
    INVESTMENT = "investment"
    INSURANCE = "insurance"
    LOAN_EMI = "loan_emi"
    SALARY_INCOME = "salary_income"
    REFUND = "refund"
    DEBIT = "Debit"
    CREDIT = "Credit"
    UNKNOWN = "unknown"


def _any_of(*keywords: str) -> Callable[[str], bool]:
    return lambda text: any(keyword in text for keyword in keywords)


def _all_of(*keywords: str) -> Callable[[str], bool]:
    return lambda text: all(keyword in text for keyword in keywords)


def _always(category: Category) -> Callable[[str], Category]:
    return lambda text: category


def _upi_category(text: str) -> Category:
    return Category.UPI_DEBIT if "debited" in text else Category.UPI_CREDIT


def _bank_transfer_category(text: str) -> Category:
    return Category.BANK_CREDIT if "credited" in text else Category.BANK_DEBIT


# (name, predicate, resolver) in priority order; first matching predicate wins
CATEGORY_RULES: list[tuple[str, Callable[[str], bool], Callable[[str], Category]]] = [
    ("upi", _all_of("upi", "vpa"), _upi_category),
    ("bank_transfer", _any_of("neft", "imps", "rtgs"), _bank_transfer_category),
    ("credit_card_bill", _any_of("credit card", "statement", "bill"), _always(Category.CREDIT_CARD_BILL)),
    ("atm_withdrawal", _any_of("atm", "withdrawal"), _always(Category.ATM_WITHDRAWAL)),
    ("shopping", _any_of("amazon", "flipkart", "myntra"), _always(Category.SHOPPING)),
    ("food_dining", _any_of("swiggy", "zomato"), _always(Category.FOOD_DINING)),
    ("transportation", _any_of("uber", "ola", "rapido"), _always(Category.TRANSPORTATION)),
    ("recharge", _any_of("recharge"), _always(Category.RECHARGE)),
    ("bill_payment", _all_of("bill", "payment"), _always(Category.BILL_PAYMENT)),
    ("investment", _any_of("sip", "mutual fund"), _always(Category.INVESTMENT)),
    ("insurance", _any_of("insurance", "premium"), _always(Category.INSURANCE)),
    ("loan_emi", _any_of("emi", "loan"), _always(Category.LOAN_EMI)),
    (
        "salary_income",
        lambda text: "salary" in text or ("credited" in text and "from" in text),
        _always(Category.SALARY_INCOME),
    ),
    ("refund", _any_of("refund", "return"), _always(Category.REFUND)),
    ("debit", _any_of("debited"), _always(Category.DEBIT)),
    ("credit", _any_of("credited"), _always(Category.CREDIT)),
]


def categorize(text: str) -> Category:
    """
    Classify SMS text into a transaction category.

    Args:
        text: Message text (any case)

    Returns:
        Category of the first matching rule, or Category.UNKNOWN
    """
    lowered = text.lower()
    for _name, predicate, resolve in CATEGORY_RULES:
        if predicate(lowered):
            return resolve(lowered)
    return Category.UNKNOWN
