"""
Document id generation and validation.

Ids are 16 characters from the alphabet 0-9a-v: nine base-32 digits
of the millisecond timestamp followed by seven base-32 digits of a
process-wide sequence.
"""

import itertools
import threading
import time
from typing import Any

from ...core.interfaces import IdValidatorInterface
from ..exceptions.search_exceptions import InvalidDocumentIdError
from .validation_rules import CompositeRule, LengthRule, PatternRule, RequiredRule

BASE32_CHARS = "0123456789abcdefghijklmnopqrstuv"
ID_LENGTH = 16
TIMESTAMP_LENGTH = 9
SEQUENCE_LENGTH = 7
_SEQUENCE_MASK = 0x1fffffff

_sequence = itertools.count(int(time.time() * 1000) & _SEQUENCE_MASK)
_sequence_lock = threading.Lock()


def long_to_base32(n: int) -> str:
    """Encode a non-negative integer with the id alphabet."""
    if n == 0:
        return "0"
    digits = []
    while n:
        digits.append(BASE32_CHARS[n & 0x1f])
        n >>= 5
    return "".join(reversed(digits))


def _fit(value: str, length: int) -> str:
    # keep the low-order digits, left-pad with zeros
    return value[-length:].rjust(length, "0")


def next_id() -> str:
    """
    Generate a new 16-char document id.

    The `new-id` command prints these for callers creating documents.

    Returns:
        str: The id
    """
    with _sequence_lock:
        seq = next(_sequence) & _SEQUENCE_MASK
    timestamp = long_to_base32(int(time.time() * 1000))
    return _fit(timestamp, TIMESTAMP_LENGTH) + _fit(long_to_base32(seq), SEQUENCE_LENGTH)


class IdValidator(IdValidatorInterface):
    """Validates ids produced by next_id()."""

    def __init__(self):
        self.rule = CompositeRule(
            "Invalid document id",
            [
                RequiredRule("Document id is required"),
                LengthRule("Document id must have 16 chars", ID_LENGTH, ID_LENGTH),
                PatternRule("Document id must only contain 0-9a-v", r"[0-9a-v]+"),
            ]
        )

    def is_valid_id(self, document_id: Any) -> bool:
        return self.rule.validate(document_id)

    def check_id(self, document_id: Any) -> str:
        """
        Return the id unchanged, or raise if it is malformed.

        Raises:
            InvalidDocumentIdError: If the id is not valid, naming the first failed check
        """
        failures = self.rule.failures(document_id)
        if failures:
            raise InvalidDocumentIdError(document_id, failures[0])
        return document_id
