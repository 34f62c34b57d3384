"""Domain-specific exceptions"""


class SmsLedgerError(Exception):
    """Base exception for the SMS ledger"""

    pass


class ExtractionError(SmsLedgerError):
    """A mandatory field (amount or date) could not be extracted from a message"""

    pass


class SourceUnavailableError(SmsLedgerError):
    """The message source could not be read"""

    pass


class StoreError(SmsLedgerError):
    """A record store insert, query or update failed"""

    pass


class DuplicateRecordError(StoreError):
    """A record with the same natural key is already stored"""

    def __init__(self, entity_type: str, key: tuple):
        super().__init__(f"Duplicate {entity_type} record for key {key!r}")
        self.entity_type = entity_type
        self.key = key


class RecordNotFoundError(StoreError):
    """No record with the requested id exists"""

    pass
