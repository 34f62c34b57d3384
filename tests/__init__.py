"""
Test Suite for the SMS Ledger

Test Structure:
- fixtures/: Synthetic SMS samples and helpers
- unit/: Unit tests mirroring the src/ package structure
- integration/: Store-backed end-to-end flows and the CLI

Test Data:
All SMS texts, card numbers and names are synthetic.
"""
