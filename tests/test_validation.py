"""Tests for input validation rules and settings."""

import math

import pytest
from pydantic import ValidationError

from bankcli.config import LedgerSettings, LoggingSettings, PersistenceSettings
from bankcli.models import SavePolicy, ValidationPolicy
from bankcli.validation import (
    parse_amount,
    validate_duplicate_holder,
    validate_holder_name,
    validate_money_input,
)


class TestParseAmount:
    """Tests for float-prefix amount parsing."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("100", 100.0),
            ("12.345", 12.345),
            ("12abc", 12.0),
            ("   3.5", 3.5),
            ("-7", -7.0),
            (".5", 0.5),
            ("5.", 5.0),
            ("1e3", 1000.0),
            ("+2", 2.0),
        ],
    )
    def test_numeric_prefix(self, raw, expected):
        """Test that the longest numeric prefix is used."""
        assert parse_amount(raw) == expected

    @pytest.mark.parametrize("raw", ["", "abc", "   ", "$5", None])
    def test_no_numeric_prefix_is_nan(self, raw):
        """Test that input without a number parses to NaN."""
        assert math.isnan(parse_amount(raw))

    def test_infinity(self):
        """Test that Infinity is accepted as a number."""
        assert parse_amount("Infinity") == math.inf
        assert parse_amount("-Infinity") == -math.inf


class TestHolderNameRules:
    """Tests for holder name validation and its check order."""

    def test_valid_names(self):
        """Test letters, spaces and hyphens."""
        for name in ["Jane Doe", "Mary-Jane Smith", "A", "x" * 50]:
            outcome = validate_holder_name(name)
            assert outcome.accepted, name
            assert outcome.value == name

    @pytest.mark.parametrize("raw", ["", "   ", None])
    def test_required(self, raw):
        outcome = validate_holder_name(raw)
        assert outcome.issue.issue_type == "required"
        assert outcome.message == "Account holder name is required."

    def test_too_long(self):
        outcome = validate_holder_name("x" * 51)
        assert outcome.issue.issue_type == "too_long"
        assert outcome.message == "Account holder name must be at most 50 characters long."

    def test_length_checked_before_characters(self):
        """Test that a long name with bad characters reports the length."""
        outcome = validate_holder_name("Bob1" * 20)
        assert outcome.issue.issue_type == "too_long"

    @pytest.mark.parametrize("raw", ["Bob1", "O'Brien", "Ann\tLee", "Zoë"])
    def test_invalid_characters(self, raw):
        outcome = validate_holder_name(raw)
        assert outcome.issue.issue_type == "invalid_characters"
        assert outcome.message == (
            "Account holder name must only contain letters, spaces, and hyphens."
        )

    def test_length_counts_code_points(self):
        """Test that astral-plane letters count once toward the limit."""
        outcome = validate_holder_name("\U0001D400" * 26)
        assert outcome.issue.issue_type == "invalid_characters"

    def test_custom_max_length(self):
        """Test that the configured limit shows up in the message."""
        outcome = validate_holder_name("Jane Doe", max_length=4)
        assert outcome.message == "Account holder name must be at most 4 characters long."

    def test_duplicate_is_case_sensitive(self):
        """Test that duplicates are exact matches only."""
        existing = ["Jane Doe"]
        rejected = validate_duplicate_holder("Jane Doe", existing)
        assert rejected.issue.issue_type == "duplicate"
        assert rejected.message == "Account holder name already exists."
        assert validate_duplicate_holder("jane doe", existing).accepted


class TestMoneyRules:
    """Tests for money input validation and its check order."""

    @pytest.mark.parametrize("raw, expected", [("0", 0.0), ("100", 100.0), ("99.9", 99.9), ("1000000", 1000000.0)])
    def test_accepted(self, raw, expected):
        outcome = validate_money_input(raw)
        assert outcome.accepted
        assert outcome.value == expected

    @pytest.mark.parametrize(
        "raw, issue_type, message",
        [
            ("", "required", "Initial deposit amount is required."),
            ("  ", "required", "Initial deposit amount is required."),
            ("abc", "invalid_number", "Initial deposit amount must be a valid number."),
            ("10.123", "too_many_decimals", "Initial deposit amount must have up to 2 decimal places."),
            ("12abc", "too_many_decimals", "Initial deposit amount must have up to 2 decimal places."),
            ("1e3", "too_many_decimals", "Initial deposit amount must have up to 2 decimal places."),
            ("-5", "too_low", "Initial deposit amount must be greater than or equal to 0."),
            ("1000000.01", "too_high", "Initial deposit amount must be less than or equal to 1000000."),
        ],
    )
    def test_first_failure_reported(self, raw, issue_type, message):
        """Test each rejection with its exact message."""
        outcome = validate_money_input(raw)
        assert not outcome.accepted
        assert outcome.issue.field == "initial_deposit"
        assert outcome.issue.issue_type == issue_type
        assert outcome.message == message

    def test_custom_label_and_limits(self):
        """Test the rule reused for transaction amounts."""
        outcome = validate_money_input("0", minimum=0.01, field="amount", label="Amount")
        assert outcome.issue.field == "amount"
        assert outcome.message == "Amount must be greater than or equal to 0.01."


class TestSettings:
    """Tests for configuration models."""

    def test_ledger_defaults(self):
        settings = LedgerSettings()
        assert settings.validation_policy == ValidationPolicy.LEGACY
        assert settings.max_holder_name_length == 50
        assert settings.max_initial_deposit == 1000000.0

    def test_policy_from_environment(self, monkeypatch):
        monkeypatch.setenv("BANKCLI_VALIDATION_POLICY", "strict")
        monkeypatch.setenv("BANKCLI_SAVE_POLICY", "drop")
        assert LedgerSettings().validation_policy == ValidationPolicy.STRICT
        assert PersistenceSettings().policy == SavePolicy.DROP

    def test_unordered_range_rejected(self):
        with pytest.raises(ValidationError):
            LedgerSettings(min_initial_deposit=10, max_initial_deposit=5)

    def test_log_level_normalized(self):
        assert LoggingSettings(level="debug").level == "DEBUG"
        with pytest.raises(ValidationError):
            LoggingSettings(level="loud")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
