"""
Input Validation Rules

DESIGN DECISION: Every rule is a pure function over the raw string the
operator typed. Rules never raise and never touch the ledger; they return
a ValidationOutcome.

Checks inside a rule run in a fixed order and the FIRST failing check is
the one reported:

    holder name:   required -> length -> characters
    money input:   required -> numeric -> decimal places -> min -> max

Amount parsing is prefix-based so existing data files keep their meaning:
the longest numeric prefix is used ("12abc" is 12) and input without one
is NaN.
"""

import math
import re
from typing import Iterable, Optional

from bankcli.models.validation import ValidationOutcome


HOLDER_NAME_PATTERN = re.compile(r"[A-Za-z \-]+")
MONEY_PATTERN = re.compile(r"-?[0-9]+(\.[0-9]{1,2})?")
_FLOAT_PREFIX = re.compile(
    r"[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
)


def parse_amount(raw: Optional[str]) -> float:
    """
    Parse the longest numeric prefix of an amount.

    Leading whitespace is skipped, then the longest prefix that reads as a
    decimal number (or Infinity) is converted. Anything else is NaN.
    """
    if raw is None:
        return math.nan
    match = _FLOAT_PREFIX.match(raw.lstrip())
    if match is None:
        return math.nan
    return float(match.group(0))


def _format_limit(value: float) -> str:
    """Render a limit the way it reads in messages (0, 1000000, 0.01)."""
    if math.isfinite(value) and float(value).is_integer():
        return str(int(value))
    return str(value)


def validate_holder_name(raw: Optional[str], max_length: int = 50) -> ValidationOutcome:
    """
    Validate an account holder name.

    Accepts 1..max_length characters made of ASCII letters, spaces and
    hyphens. The accepted value is the name exactly as typed.
    """
    if not raw or raw.strip() == "":
        return ValidationOutcome.reject(
            "holder_name", "required", "Account holder name is required."
        )

    if len(raw) > max_length:
        return ValidationOutcome.reject(
            "holder_name",
            "too_long",
            f"Account holder name must be at most {max_length} characters long.",
        )

    if not HOLDER_NAME_PATTERN.fullmatch(raw):
        return ValidationOutcome.reject(
            "holder_name",
            "invalid_characters",
            "Account holder name must only contain letters, spaces, and hyphens.",
        )

    return ValidationOutcome.accept(raw)


def validate_money_input(
    raw: Optional[str],
    minimum: float = 0.0,
    maximum: float = 1000000.0,
    field: str = "initial_deposit",
    label: str = "Initial deposit amount",
) -> ValidationOutcome:
    """
    Validate a money amount typed by the operator.

    Args:
        raw: The string as entered
        minimum: Smallest accepted value (inclusive)
        maximum: Largest accepted value (inclusive)
        field: Field name reported in the issue
        label: Subject used in messages

    Returns:
        Accepted outcome carrying the parsed float, or the first failing issue
    """
    if raw is None or raw.strip() == "":
        return ValidationOutcome.reject(field, "required", f"{label} is required.")

    amount = parse_amount(raw)
    if math.isnan(amount):
        return ValidationOutcome.reject(
            field, "invalid_number", f"{label} must be a valid number."
        )

    if not MONEY_PATTERN.fullmatch(raw.strip()):
        return ValidationOutcome.reject(
            field, "too_many_decimals", f"{label} must have up to 2 decimal places."
        )

    if amount < minimum:
        return ValidationOutcome.reject(
            field,
            "too_low",
            f"{label} must be greater than or equal to {_format_limit(minimum)}.",
        )

    if amount > maximum:
        return ValidationOutcome.reject(
            field,
            "too_high",
            f"{label} must be less than or equal to {_format_limit(maximum)}.",
        )

    return ValidationOutcome.accept(amount)


def validate_duplicate_holder(name: str, existing_names: Iterable[str]) -> ValidationOutcome:
    """Reject a holder name that is already used (case-sensitive exact match)."""
    if name in set(existing_names):
        return ValidationOutcome.reject(
            "holder_name", "duplicate", "Account holder name already exists."
        )
    return ValidationOutcome.accept(name)
