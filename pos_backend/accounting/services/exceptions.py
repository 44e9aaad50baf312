# accounting/services/exceptions.py

"""
ACCOUNTING SERVICE ERRORS

Centralized domain errors for accounting services and the derivation engine.
"""


class AccountingServiceError(Exception):
    """Base exception for all accounting service failures."""


class MalformedRecordError(AccountingServiceError):
    """Raised when a sale, expense, voucher or inventory row cannot be ingested."""

    def __init__(self, message: str, *, source: str = "", record_id=None):
        super().__init__(message)
        self.source = source
        self.record_id = record_id


class UnclassifiedAccountError(AccountingServiceError):
    """Raised when a transaction references an account missing from the chart."""

    def __init__(self, account: str, *, transaction_id=None):
        message = f"Account '{account}' is not in the chart of accounts"
        if transaction_id:
            message = f"{message} (referenced by {transaction_id})"
        super().__init__(message)
        self.account = account
        self.transaction_id = transaction_id


class InvalidVoucherError(AccountingServiceError):
    """Raised when a voucher fails validation and is not recorded."""


class AccountCreationError(AccountingServiceError):
    """Raised when a chart-of-accounts entry cannot be created."""


class AccountingPermissionError(AccountingServiceError):
    """Raised when the caller is not allowed to perform an accounting action."""
