#!/usr/bin/env python3
"""
Synthetic Bank SMS Samples

Message texts in the layouts Indian banks and card issuers send, with
synthetic amounts, card numbers, VPAs and names. No real account data.
"""

import json
from pathlib import Path
from typing import Any

from smsledger.core.dates import FinancialTimestamp
from smsledger.core.models import RawMessage

# Transactions
UPI_DEBIT_SMS = "Rs 500.00 debited via UPI on 15-May-25 to VPA shop@upi. Ref No 123"
UPI_CREDIT_SMS = "Rs 1,250.50 credited to a/c XX4321 via UPI on 03-Jun-25 from VPA friend@okbank. Ref No 98765"
NEFT_CREDIT_SMS = (
    "INR 25,000.00 credited to HDFC Bank A/c XX1234 on 01-Jun-25 by NEFT from ACME TECHNOLOGIES LTD. "
    "Avl Bal INR 40,000.00"
)
ATM_SMS = "Rs.2,000 withdrawn at ATM on 10-Jun-25 from A/c XX1234. Avl bal Rs 8,000"
SWIGGY_SMS = "Rs 350.00 spent on HDFC Bank Debit Card XX9876 at SWIGGY on 12-Jun-25"
SALARY_SMS = (
    "Dear Customer, your A/c XX1234 is credited with INR 85,000.00 on 30-Jun-25 "
    "towards SALARY from EMPLOYER PVT LTD"
)
OTP_SMS = "Your OTP for login is 482913. Do not share it with anyone."
ZERO_AMOUNT_SMS = "Rs 0.00 debited from your account on 05-Jun-25"

# Credit-card bills
YES_BILL_SMS = (
    "YES BANK Credit Card XX1606 JUN-25 statement: Total due INR 5561.82 Min due INR 278.09 Due by 02-JUL-2025"
)
YES_BILL_4500_SMS = (
    "YES BANK Credit Card XX1606 JUN-25 statement: Total due INR 4500.00 Min due INR 225.00 Due by 02-JUL-2025"
)
ICICI_EMAIL_BILL_SMS = (
    "ICICI Bank Credit Card XX9003 statement is sent to user@example.com total of Rs 4,669.69 "
    "or minimum of Rs 240.00 is due by 05-JUL-25."
)
GENERIC_BILL_SMS = "HDFC Bank Credit Card XX5678: Total due Rs 12,000.00, Min due Rs 600.00. Due by 15-AUG-2025"

# Credit-card payments
BBPS_PAYMENT_SMS = (
    "Payment received of Rs 4500.00 has been received on your YES BANK Credit Card XX1606 through BBPS on 04-JUL-25"
)
UPI_CARD_PAYMENT_SMS = "UPI of Rs 2,000.00 has been credited to your ICICI Bank Credit Card XX9003"
GENERAL_PAYMENT_SMS = "Payment of Rs 600.00 has been received on your HDFC Bank Credit Card XX5678"


def epoch_millis(day: str) -> int:
    """Epoch milliseconds of midnight UTC on a YYYY-MM-DD day."""
    year, month, date_of_month = (int(part) for part in day.split("-"))
    return FinancialTimestamp.from_calendar_date(year, month, date_of_month).to_epoch_millis()


def make_message(text: str, received: str = "2025-06-20", address: str = "VM-HDFCBK") -> RawMessage:
    """Build a RawMessage received at midnight UTC on a YYYY-MM-DD day."""
    return RawMessage(text=text, timestamp_millis=epoch_millis(received), source_address=address)


def to_inbox_entry(message: RawMessage) -> dict[str, Any]:
    """Inbox export form of a message."""
    return {"body": message.text, "date": message.timestamp_millis, "address": message.source_address}


def write_inbox_json(path: Path, messages: list[RawMessage]) -> Path:
    """Write messages as an exported JSON inbox."""
    path.write_text(json.dumps([to_inbox_entry(message) for message in messages], indent=2), encoding="utf-8")
    return path


def sample_inbox() -> list[RawMessage]:
    """A small mixed inbox: transactions, a bill and its payment, and noise."""
    return [
        make_message(UPI_DEBIT_SMS, "2025-05-15", "VM-HDFCBK"),
        make_message(NEFT_CREDIT_SMS, "2025-06-01", "AD-HDFCBK"),
        make_message(SWIGGY_SMS, "2025-06-12", "VM-HDFCBK"),
        make_message(OTP_SMS, "2025-06-13", "VM-LOGINS"),
        make_message(YES_BILL_4500_SMS, "2025-06-20", "VM-YESBNK"),
        make_message(BBPS_PAYMENT_SMS, "2025-07-04", "VM-YESBNK"),
    ]
