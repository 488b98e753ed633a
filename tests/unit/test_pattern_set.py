"""
Unit tests for PatternSet.
"""

import re
import threading

import pytest

from pii_detector.services.pattern_set import PatternSet, BUILTIN_PATTERNS
from pii_detector.services.observability import StructuredLogger
from pii_detector.models.observability import LogLevel
from pii_detector.models.rule import Rule
from pii_detector.exceptions import (
    InvalidPatternException,
    InvalidInputException,
    EmptyPatternException,
    PatternSyntaxException
)


class TestPatternSet:
    """Test cases for PatternSet."""

    def setup_method(self):
        """Set up test fixtures."""
        self.pattern_set = PatternSet()

    def test_initialization(self):
        """Test pattern set starts with every built-in rule."""
        assert len(self.pattern_set) == len(BUILTIN_PATTERNS)
        assert len(self.pattern_set) >= 25
        assert self.pattern_set.patterns == BUILTIN_PATTERNS
        assert self.pattern_set.custom_patterns == ()
        assert all(isinstance(rule, Rule) for rule in self.pattern_set)
        assert all(rule.builtin for rule in self.pattern_set)

    def test_passport_rule_is_not_duplicated(self):
        """Test the shared nine-digit passport rule is held once."""
        assert self.pattern_set.patterns.count(r'\b\d{9}\b') == 1
        assert self.pattern_set.matches("passport 123456789") is True

    @pytest.mark.parametrize("text", ["", None])
    def test_empty_text_has_no_pii(self, text):
        """Test empty or missing text is reported as containing no PII."""
        assert self.pattern_set.matches(text) is False

    def test_detect_email(self):
        """Test detection of a short email address."""
        assert self.pattern_set.matches("contact me at a@b.co") is True

    def test_plain_prose_has_no_pii(self):
        """Test generic prose lacking structured tokens does not match."""
        assert self.pattern_set.matches("no sensitive data here") is False
        assert self.pattern_set.matches("the quick brown fox jumps over the lazy dog") is False

    @pytest.mark.parametrize("text", [
        "Call me at 555-123-4567",
        "Server IP is 192.168.1.1",
        "host 2001:0db8:85a3:0000:0000:8a2e:0370:7334",
        "born on 12/31/1999",
        "born on 1999-12-31",
        "ssn 123-45-6789",
        "ni number AB123456C",
        "postcode SW1A 1AA",
        "insee 1 85 05 78 006 084",
        "passport 12AB34567",
        "canadian postal code K1A 0B1",
        "sin 046-454-286",
        "card 4111111111111111",
        "card 5500000000000004",
        "iban GB82WEST12345698765432",
        "signed by John Smith",
        "lives at 221 baker street",
    ])
    def test_detect_builtin_identifiers(self, text):
        """Test each family of built-in identifiers is detected."""
        assert self.pattern_set.matches(text) is True

    def test_matching_is_unanchored(self):
        """Test a match anywhere in the text is enough."""
        text = "lorem ipsum " * 50 + "a@b.co" + " dolor sit" * 50
        assert self.pattern_set.matches(text) is True

    def test_matches_is_repeatable(self):
        """Test repeated scans of the same text give identical results."""
        for text in ["contact me at a@b.co", "no sensitive data here"]:
            first = self.pattern_set.matches(text)
            second = self.pattern_set.matches(text)
            assert first == second

    def test_add_pattern(self):
        """Test adding a custom pattern extends detection."""
        text = "ref FOO-123"
        assert self.pattern_set.matches(text) is False

        self.pattern_set.add_pattern(r"FOO-\d{3}")

        assert self.pattern_set.matches(text) is True
        assert self.pattern_set.matches(text) is True
        assert len(self.pattern_set) == len(BUILTIN_PATTERNS) + 1
        assert self.pattern_set.patterns[-1] == r"FOO-\d{3}"
        assert self.pattern_set.custom_patterns == (r"FOO-\d{3}",)
        assert self.pattern_set.rules[-1].builtin is False

    def test_add_pattern_is_case_sensitive(self):
        """Test custom patterns are compiled without extra flags."""
        self.pattern_set.add_pattern(r"FOO-\d{3}")

        assert self.pattern_set.matches("ref foo-123") is False

    @pytest.mark.parametrize("pattern", ["", None])
    def test_add_empty_pattern(self, pattern):
        """Test adding an empty pattern fails and leaves rules intact."""
        before = self.pattern_set.patterns

        with pytest.raises(EmptyPatternException) as exc_info:
            self.pattern_set.add_pattern(pattern)

        assert isinstance(exc_info.value, InvalidPatternException)
        assert isinstance(exc_info.value, InvalidInputException)
        assert "cannot be null or empty" in str(exc_info.value)
        assert self.pattern_set.patterns == before

    def test_add_invalid_pattern(self):
        """Test adding a pattern that does not compile."""
        before = self.pattern_set.patterns

        with pytest.raises(PatternSyntaxException) as exc_info:
            self.pattern_set.add_pattern("[unterminated")

        assert isinstance(exc_info.value, InvalidPatternException)
        assert not isinstance(exc_info.value, EmptyPatternException)
        assert isinstance(exc_info.value.cause, re.error)
        assert exc_info.value.pattern == "[unterminated"
        assert "Invalid regex pattern" in str(exc_info.value)
        assert self.pattern_set.patterns == before

    def test_failed_add_does_not_change_results(self):
        """Test scans behave the same after a rejected pattern."""
        texts = ["contact me at a@b.co", "no sensitive data here", "ref FOO-123"]
        before = [self.pattern_set.matches(t) for t in texts]

        with pytest.raises(InvalidPatternException):
            self.pattern_set.add_pattern("[unterminated")
        with pytest.raises(InvalidPatternException):
            self.pattern_set.add_pattern("")

        assert [self.pattern_set.matches(t) for t in texts] == before

    def test_add_non_string_pattern(self):
        """Test adding a non-string pattern is rejected."""
        with pytest.raises(PatternSyntaxException) as exc_info:
            self.pattern_set.add_pattern(123)

        assert isinstance(exc_info.value.cause, TypeError)
        assert exc_info.value.__cause__ is exc_info.value.cause
        assert len(self.pattern_set) == len(BUILTIN_PATTERNS)

    def test_pattern_sets_do_not_share_rules(self):
        """Test custom rules belong to a single pattern set."""
        other = PatternSet()
        self.pattern_set.add_pattern(r"FOO-\d{3}")

        assert other.matches("ref FOO-123") is False
        assert len(other) == len(BUILTIN_PATTERNS)

    def test_concurrent_add_and_match(self):
        """Test adding patterns while other threads are scanning."""
        errors = []

        def scan():
            try:
                for _ in range(200):
                    assert self.pattern_set.matches("contact me at a@b.co")
            except Exception as e:
                errors.append(e)

        def add(index):
            try:
                self.pattern_set.add_pattern(rf"CUSTOM{index}-\d+")
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=scan) for _ in range(4)]
        threads += [threading.Thread(target=add, args=(i,)) for i in range(20)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert errors == []
        assert len(self.pattern_set) == len(BUILTIN_PATTERNS) + 20
        assert self.pattern_set.matches("ref CUSTOM7-1") is True

    def test_logs_pattern_events(self):
        """Test pattern additions and rejections are logged."""
        logger = StructuredLogger(name="test_pattern_set", level=LogLevel.DEBUG)
        pattern_set = PatternSet(logger=logger)

        pattern_set.add_pattern(r"FOO-\d{3}")
        with pytest.raises(InvalidPatternException):
            pattern_set.add_pattern("[unterminated")

        messages = [entry.message for entry in logger.get_recent_logs()]
        assert "Added custom pattern" in messages
        assert "Rejected invalid pattern" in messages

        rejected = logger.get_recent_logs()[-1]
        assert rejected.level == LogLevel.WARNING
        assert rejected.exception is not None

    def test_health_check(self):
        """Test pattern set health check."""
        assert self.pattern_set.health_check() is True

    def test_string_representation(self):
        """Test string representations."""
        self.pattern_set.add_pattern("x")

        assert str(self.pattern_set) == f"PatternSet(rules={len(BUILTIN_PATTERNS) + 1})"
        assert "custom=1" in repr(self.pattern_set)
