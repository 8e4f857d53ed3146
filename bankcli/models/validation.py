"""
Validation Models

A validation rule never raises. It returns a ValidationOutcome that is
either accepted (carrying the normalized value) or rejected (carrying the
first issue found). Callers decide what a rejection means.
"""

from typing import Any, Optional

from pydantic import BaseModel, Field


class ValidationIssue(BaseModel):
    """A single validation issue found."""

    field: str = Field(
        ...,
        description="Input the issue is about, e.g. 'holder_name'"
    )
    issue_type: str = Field(
        ...,
        description=(
            "Type of issue (required, too_long, invalid_characters, invalid_number, "
            "too_many_decimals, too_low, too_high, duplicate)"
        )
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )


class ValidationOutcome(BaseModel):
    """Accepted-with-value or rejected-with-issue."""

    accepted: bool
    value: Optional[Any] = None
    issue: Optional[ValidationIssue] = None

    @classmethod
    def accept(cls, value: Any) -> "ValidationOutcome":
        return cls(accepted=True, value=value)

    @classmethod
    def reject(cls, field: str, issue_type: str, message: str) -> "ValidationOutcome":
        return cls(
            accepted=False,
            issue=ValidationIssue(field=field, issue_type=issue_type, message=message),
        )

    @property
    def message(self) -> Optional[str]:
        """Rejection message, None when accepted."""
        return self.issue.message if self.issue else None
