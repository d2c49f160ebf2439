"""
Domain service for search operations.

This module contains pure business logic applied around a search
round-trip, separated from infrastructure concerns.
"""

from typing import List, Sequence, TypeVar

from ...core.entities import Hit, HitEnvelope

T = TypeVar('T')


class SearchDomainService:
    """
    Domain service for search operations.

    This service contains pure business logic for search, with no
    dependencies on external systems or infrastructure.
    """

    DEFAULT_MIN_SCORE = 0.0

    @staticmethod
    def normalize_tokens(tokens: Sequence[str]) -> List[str]:
        """
        Drop empty and whitespace-only tokens.

        Kept tokens are passed on unchanged, since their length picks the
        sub-query kind.

        Args:
            tokens: Raw tokens

        Returns:
            List[str]: Non-blank tokens in input order
        """
        return [t for t in tokens if t and t.strip()]

    @staticmethod
    def split_text(text: str) -> List[str]:
        """Split free text on whitespace."""
        return text.split() if text else []

    @staticmethod
    def filter_hits(
        envelope: HitEnvelope[T],
        min_score: float = DEFAULT_MIN_SCORE,
        max_results: int = 0
    ) -> List[T]:
        """
        Keep the documents scoring strictly above min_score.

        Args:
            envelope: Decoded hit envelope
            min_score: Exclusive score threshold
            max_results: Cap on the result size; 0 means no cap

        Returns:
            List[T]: Documents in engine order
        """
        if envelope.total == 0:
            return []
        kept: List[Hit[T]] = [h for h in envelope.hits if h.score > min_score]
        if max_results > 0:
            kept = kept[:max_results]
        return [h.document for h in kept]
