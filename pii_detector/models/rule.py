"""
Detection rule model.
"""

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class Rule:
    """A compiled pattern used to test text for a PII-like substring."""

    pattern: re.Pattern
    builtin: bool = True

    @property
    def source(self) -> str:
        """The pattern text the rule was compiled from."""
        return self.pattern.pattern

    def search(self, text: str) -> bool:
        """Return True if the pattern matches anywhere in the text."""
        return self.pattern.search(text) is not None
