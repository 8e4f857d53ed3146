"""
Behavior Policies

DESIGN DECISION: Two behaviors that used to be implicit are named here
as explicit, configurable policies:

1. How amounts after account creation are validated (ValidationPolicy)
2. What happens when a save is requested while one is already running
   (SavePolicy)

Defaults reproduce the observed legacy behavior where it matters to
existing data, and the safer behavior where nothing depends on the old one.
"""

from enum import Enum


class ValidationPolicy(str, Enum):
    """
    Validation applied to deposit, withdrawal and transfer amounts.

    LEGACY: amounts are only parsed, never checked. Non-numeric input
            becomes NaN and is stored as-is.
    STRICT: amounts go through the same money rules as the initial deposit.
    """
    LEGACY = "legacy"
    STRICT = "strict"


class SavePolicy(str, Enum):
    """
    Behavior of the ledger writer when a save is already in flight.

    DROP:     the new request is discarded (single-flight flag behavior).
    COALESCE: only the newest pending snapshot is kept and written next.
    """
    DROP = "drop"
    COALESCE = "coalesce"
