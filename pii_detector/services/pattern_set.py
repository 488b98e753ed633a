"""
Pattern set for detecting PII-like substrings in text.
"""

import re
import threading
from typing import Iterator, List, Optional, Tuple

from ..models.rule import Rule
from ..exceptions import EmptyPatternException, PatternSyntaxException
from .observability import StructuredLogger


# Built-in rules. Evaluation is a plain OR, so the grouping below is for
# readers only. These are deliberately permissive.
BUILTIN_PATTERNS: Tuple[str, ...] = (
    # Universal
    r'[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}',  # Email
    r'\b(\+?\d{1,3}[-.\s]?)?(\(?\d{3}\)?[-.\s]?)?\d{3}[-.\s]?\d{4}\b',  # Phone
    r'\b\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}\b',  # IPv4
    r'([0-9a-fA-F]{1,4}:){7}[0-9a-fA-F]{1,4}',  # IPv6
    r'\b\d{1,2}/\d{1,2}/\d{4}\b|\b\d{4}-\d{2}-\d{2}\b',  # Date

    # US
    r'\b\d{3}-\d{2}-\d{4}\b',  # SSN
    r'\b\d{9}\b',  # Passport (US and UK)
    r'\b[A-Z]?\d{8,12}\b',  # Driver's license
    r'\b\d{5}(-\d{4})?\b',  # ZIP code

    # UK
    r'\b[A-Z]{2}\d{6}[A-D]?\b',  # NINO
    r'\b[A-Z]{1,2}\d[A-Z\d]?\s\d[A-Z]{2}\b',  # Postcode
    r'\b[A-Z]{1,2}\d{6,7}[A-Z]?\b',  # Driver's license

    # France
    r'\b[12]\s?\d{2}\s?\d{2}\s?\d{2}\s?\d{3}\s?\d{3}\b',  # INSEE number
    r'\b\d{2}[A-Z]{2}\d{5}\b',  # Passport
    r'\b0\d{1}\s?\d{2}\s?\d{2}\s?\d{2}\s?\d{2}\b',  # Phone
    r'\b\d{5}\b',  # Postal code

    # Canada
    r'\b\d{3}-\d{3}-\d{3}\b',  # SIN
    r'\b[A-Z]{2}\d{6}\b',  # Passport
    r'\b[A-Z]\d[A-Z]\s?\d[A-Z]\d\b',  # Postal code
    r'\b[A-Z]\d{8,9}\b',  # Driver's license

    # Financial
    r'\b4[0-9]{12}(?:[0-9]{3})?\b',  # Visa
    r'\b5[1-5][0-9]{14}\b',  # MasterCard
    r'\b[A-Z]{2}\d{2}[A-Z0-9]{4}\d{7}([A-Z0-9]?){0,16}\b',  # IBAN

    # Heuristics
    r'\b[A-Z][a-z]+\s[A-Z][a-z]+\b',  # Names
    r'\b\d+\s[A-Za-z]+\s[A-Za-z]+\b',  # Addresses
)


class PatternSet:
    """
    Ordered collection of detection rules.

    Rules are only ever appended. ``matches`` iterates over a snapshot of the
    rule list, so ``add_pattern`` may be called from other threads while a
    scan is in progress.
    """

    def __init__(self, logger: Optional[StructuredLogger] = None):
        """
        Initialize the pattern set with the built-in rules.

        Args:
            logger: Optional structured logger for pattern events
        """
        self.logger = logger
        self._lock = threading.Lock()
        self._rules: List[Rule] = [
            Rule(pattern=re.compile(pattern), builtin=True)
            for pattern in BUILTIN_PATTERNS
        ]

    def _snapshot(self) -> Tuple[Rule, ...]:
        with self._lock:
            return tuple(self._rules)

    def matches(self, text: Optional[str]) -> bool:
        """
        Check whether any rule matches anywhere in the text.

        Args:
            text: Text to scan; None or empty is treated as containing no PII

        Returns:
            True on the first matching rule, False if none match
        """
        if not text:
            return False

        return any(rule.search(text) for rule in self._snapshot())

    def add_pattern(self, pattern: Optional[str]) -> None:
        """
        Compile a pattern and append it to the rule sequence.

        Args:
            pattern: Regular expression in Python ``re`` syntax

        Raises:
            EmptyPatternException: If the pattern is None or empty
            PatternSyntaxException: If the pattern is not a string or does not compile
        """
        if pattern is None or pattern == "":
            self._log_rejected("Rejected empty pattern")
            raise EmptyPatternException("Pattern cannot be null or empty.")

        if not isinstance(pattern, str):
            error = TypeError(f"expected str, got {type(pattern).__name__}")
            self._log_rejected("Rejected non-string pattern", exception=error)
            raise PatternSyntaxException(repr(pattern), error) from error

        try:
            compiled = re.compile(pattern)
        except re.error as e:
            self._log_rejected("Rejected invalid pattern", exception=e)
            raise PatternSyntaxException(pattern, e) from e

        with self._lock:
            self._rules.append(Rule(pattern=compiled, builtin=False))
            count = len(self._rules)

        if self.logger:
            self.logger.debug(
                "Added custom pattern", operation="add_pattern", rule_count=count
            )

    def _log_rejected(self, message: str, exception: Optional[BaseException] = None) -> None:
        if self.logger:
            self.logger.warning(message, exception=exception, operation="add_pattern")

    @property
    def rules(self) -> Tuple[Rule, ...]:
        """All rules in evaluation order."""
        return self._snapshot()

    @property
    def patterns(self) -> Tuple[str, ...]:
        """Source text of all rules in evaluation order."""
        return tuple(rule.source for rule in self._snapshot())

    @property
    def custom_patterns(self) -> Tuple[str, ...]:
        """Source text of the rules added at runtime."""
        return tuple(rule.source for rule in self._snapshot() if not rule.builtin)

    def health_check(self) -> bool:
        """
        Perform health check on the pattern set.

        Returns:
            True if a known email address is detected
        """
        try:
            return self.matches("Contact me at john.doe@example.com")
        except Exception:
            return False

    def __len__(self) -> int:
        with self._lock:
            return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._snapshot())

    def __str__(self) -> str:
        """String representation of the pattern set."""
        return f"PatternSet(rules={len(self)})"

    def __repr__(self) -> str:
        """Detailed string representation of the pattern set."""
        return (
            f"PatternSet(rules={len(self)}, "
            f"custom={len(self.custom_patterns)})"
        )
