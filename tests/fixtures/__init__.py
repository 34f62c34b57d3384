"""
Test Fixtures and Utilities

Synthetic bank SMS texts and helpers for building messages and inbox files.
All test data is synthetic and does not contain real financial information.
"""
