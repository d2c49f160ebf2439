"""
Data models for search requests and engine responses.

The hit and document envelopes are generic over the document type;
concrete decoders for them are built per type by the envelope decoder
registry.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Optional, TypeVar

T = TypeVar('T')


@dataclass
class RawResponse:
    """Status and body of an HTTP response from the engine."""
    status: int
    body: Optional[str] = None

    @property
    def is_ok(self) -> bool:
        """Whether the status is 2xx."""
        return 200 <= self.status < 300


@dataclass
class Hit(Generic[T]):
    """A single scored document from a search response."""
    score: float
    document: T


@dataclass
class HitEnvelope(Generic[T]):
    """
    The hits part of a search response.

    A total of 0 always comes with an empty hit list.
    """
    total: int
    hits: List[Hit[T]] = field(default_factory=list)
    max_score: Optional[float] = None


@dataclass
class DocumentEnvelope(Generic[T]):
    """Response to a single document GET."""
    index: str
    type: str
    id: str
    found: bool = True
    version: Optional[int] = None
    document: Optional[T] = None


@dataclass
class SearchRequest:
    """
    Parameters of one search call.

    Tokens are already segmented by the caller.
    """
    index: str
    type_name: str
    tokens: List[str]
    max_results: int = 20

    def to_dict(self) -> Dict[str, Any]:
        """Convert request to dictionary representation."""
        return {
            'index': self.index,
            'type': self.type_name,
            'tokens': list(self.tokens),
            'max_results': self.max_results
        }
