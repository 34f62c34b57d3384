"""
Command Line Interface Package

CLI for running the SMS ledger against exported inbox files.

Command Structure:
- smsledger version / config: utility commands
- smsledger ingest: transactions, then credit-card bills and payments, then matching
- smsledger match: bill/payment matching on an existing store
- smsledger correct: re-derive transaction direction and counterparty
- smsledger classify: inspect how one message is categorized and extracted
"""

from .main import main

__all__ = ["main"]
