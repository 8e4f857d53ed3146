"""Validation package."""

from bankcli.validation.rules import (
    parse_amount,
    validate_duplicate_holder,
    validate_holder_name,
    validate_money_input,
)

__all__ = [
    "parse_amount",
    "validate_duplicate_holder",
    "validate_holder_name",
    "validate_money_input",
]
