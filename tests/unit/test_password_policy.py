"""
Unit tests for PasswordPolicy.

Tests verify each of the five rules independently, the special
character set, and that any string (including empty) is a legal input.
"""

import pytest

from src.domain.password_policy import SPECIAL_CHARACTERS, PasswordPolicy

RULES = ["length", "uppercase", "lowercase", "number", "special"]


@pytest.fixture
def policy() -> PasswordPolicy:
    return PasswordPolicy()


class TestEvaluate:
    """Tests for per-rule evaluation."""

    def test_reports_all_five_rules(self, policy: PasswordPolicy) -> None:
        """evaluate() returns exactly the five named rules."""
        assert list(policy.evaluate("anything")) == RULES

    def test_strong_password_passes_every_rule(self, policy: PasswordPolicy) -> None:
        assert policy.evaluate("Abc123$5") == dict.fromkeys(RULES, True)

    def test_missing_special_character(self, policy: PasswordPolicy) -> None:
        """'Abc12345' fails only the special rule."""
        results = policy.evaluate("Abc12345")
        assert results["special"] is False
        assert [rule for rule, ok in results.items() if not ok] == ["special"]

    def test_empty_password_fails_every_rule(self, policy: PasswordPolicy) -> None:
        assert policy.evaluate("") == dict.fromkeys(RULES, False)

    def test_length_boundary(self, policy: PasswordPolicy) -> None:
        """Seven characters fail the length rule, eight pass."""
        assert policy.evaluate("Ab1$xyz")["length"] is False
        assert policy.evaluate("Ab1$wxyz")["length"] is True

    def test_non_ascii_letters_do_not_count(self, policy: PasswordPolicy) -> None:
        """Only A-Z and a-z count as letters."""
        results = policy.evaluate("ÄÖÜäöü12$")
        assert results["uppercase"] is False
        assert results["lowercase"] is False

    @pytest.mark.parametrize("char", list(SPECIAL_CHARACTERS))
    def test_every_listed_special_character_counts(
        self, policy: PasswordPolicy, char: str
    ) -> None:
        assert policy.evaluate(f"Abcdef1{char}")["special"] is True

    @pytest.mark.parametrize("char", [" ", ";", "€", "§"])
    def test_unlisted_characters_are_not_special(self, policy: PasswordPolicy, char: str) -> None:
        assert policy.evaluate(f"Abcdef1{char}")["special"] is False


class TestIsValid:
    """Tests for overall validity."""

    @pytest.mark.parametrize(
        ("password", "missing"),
        [
            ("Ab1$xyz", "length"),
            ("abcd123$", "uppercase"),
            ("ABCD123$", "lowercase"),
            ("Abcdefg$", "number"),
            ("Abc12345", "special"),
        ],
    )
    def test_missing_any_rule_is_invalid(
        self, policy: PasswordPolicy, password: str, missing: str
    ) -> None:
        assert policy.is_valid(password) is False
        assert policy.failed_rules(password) == [missing]

    @pytest.mark.parametrize("password", ["Abc123$5", "Abcd123$", "NewPass1$", "x" * 40 + "A1~"])
    def test_all_rules_is_valid(self, policy: PasswordPolicy, password: str) -> None:
        assert policy.is_valid(password) is True
        assert policy.failed_rules(password) == []

    def test_custom_min_length(self) -> None:
        policy = PasswordPolicy(min_length=12)
        assert policy.is_valid("Abc123$5") is False
        assert policy.failed_rules("Abc123$5") == ["length"]
