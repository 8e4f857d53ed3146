"""
Ledger Error Taxonomy

Every rejection the engine can produce is a LedgerError with a stable
`code` and a human-readable `message`. A rejection is raised before any
state changes, so catching one always means "nothing happened".

Persistence problems are deliberately absent: they never reach the caller
of an engine operation (see bankcli.services.storage).
"""

from typing import Optional

from bankcli.models.validation import ValidationIssue


class LedgerError(Exception):
    """Base exception for ledger operations."""

    code = "ledger_error"

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class LedgerValidationError(LedgerError):
    """Input was rejected by a validation rule."""

    code = "validation_error"

    def __init__(self, issue: ValidationIssue):
        self.issue = issue
        super().__init__(issue.message)

    @property
    def field(self) -> str:
        return self.issue.field

    @property
    def issue_type(self) -> str:
        return self.issue.issue_type


class AccountNotFoundError(LedgerError):
    """An account id did not resolve."""

    code = "not_found"

    def __init__(self, account_id: str, role: Optional[str] = None):
        self.account_id = account_id
        self.role = role
        if role == "source":
            message = "Source account not found."
        else:
            message = "Account not found."
        super().__init__(message)
