"""
Validation rules for identifiers and request parameters.

Rules are small predicates with a message; CompositeRule combines
them and can report which of them failed.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional, Pattern, Sequence, Union
import re


class ValidationRule(ABC):
    """
    Base class for validation rules.

    Subclasses implement validate(); failures() reports the message of
    every rule that rejected the value.
    """

    def __init__(self, message: str):
        self.message = message

    @abstractmethod
    def validate(self, value: Any) -> bool:
        """Whether value passes this rule."""

    def failures(self, value: Any) -> List[str]:
        return [] if self.validate(value) else [self.message]


class RequiredRule(ValidationRule):
    """Rejects None and the empty string."""

    def validate(self, value: Any) -> bool:
        return value is not None and value != ""


class LengthRule(ValidationRule):
    """Rejects values without a length, or outside [min_length, max_length]."""

    def __init__(
        self,
        message: str,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None
    ):
        super().__init__(message)
        self.min_length = min_length
        self.max_length = max_length

    def validate(self, value: Any) -> bool:
        if not hasattr(value, "__len__"):
            return False
        if self.min_length is not None and len(value) < self.min_length:
            return False
        return self.max_length is None or len(value) <= self.max_length


class PatternRule(ValidationRule):
    """Accepts strings the pattern matches in full."""

    def __init__(
        self,
        message: str,
        pattern: Union[str, Pattern]
    ):
        super().__init__(message)
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    def validate(self, value: Any) -> bool:
        return isinstance(value, str) and self.pattern.fullmatch(value) is not None


class CompositeRule(ValidationRule):
    """
    Passes when every member rule passes.

    failures() returns the messages of the first member rule that fails.
    """

    def __init__(self, message: str, rules: Sequence[ValidationRule]):
        super().__init__(message)
        self.rules = list(rules)

    def validate(self, value: Any) -> bool:
        return all(rule.validate(value) for rule in self.rules)

    def failures(self, value: Any) -> List[str]:
        for rule in self.rules:
            failed = rule.failures(value)
            if failed:
                return failed
        return []
