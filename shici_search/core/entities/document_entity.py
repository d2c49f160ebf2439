"""
Data models for searchable documents.

A document type is a dataclass subclassing SearchableDocument. Its
searchable fields are declared with searchable_field(), which records
the engine type and whether the field is analyzed (full-text) or not.
"""

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Type, get_type_hints


ANALYZED = "analyzed"
KIND = "kind"


class FieldKind(Enum):
    """Engine types a document field can be mapped to."""
    TEXT = "text"
    INTEGER = "integer"
    LONG = "long"
    FLOAT = "float"
    DOUBLE = "double"


_INFERRED_KINDS = {
    str: FieldKind.TEXT,
    int: FieldKind.INTEGER,
    float: FieldKind.FLOAT,
}


@dataclass(frozen=True)
class FieldSpec:
    """Declared description of one document field."""
    name: str
    kind: Optional[FieldKind]
    analyzed: bool = False
    python_type: Any = None


def searchable_field(
    analyzed: bool = False,
    kind: Optional[FieldKind] = None,
    **kwargs: Any
) -> Any:
    """
    Declare a dataclass field with search metadata.

    Args:
        analyzed: Whether the field is indexed for full-text search
        kind: Explicit engine type; inferred from the annotation if omitted
        **kwargs: Passed through to dataclasses.field()

    Returns:
        dataclasses.Field: The field declaration
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[ANALYZED] = analyzed
    if kind is not None:
        metadata[KIND] = kind
    return field(metadata=metadata, **kwargs)


def _unwrap_optional(annotation: Any) -> Any:
    args = getattr(annotation, "__args__", None)
    if args and type(None) in args:
        rest = [a for a in args if a is not type(None)]
        if len(rest) == 1:
            return rest[0]
    return annotation


@dataclass
class SearchableDocument:
    """
    Base class for documents stored in the search engine.

    The id is assigned by the application and is never part of the
    indexed source; it travels in the request path instead.
    """
    id: str

    @classmethod
    def type_name(cls) -> str:
        """Name of the document type inside an index."""
        return cls.__name__

    @classmethod
    def describe_fields(cls) -> List[FieldSpec]:
        """
        Describe the indexed fields of this document type.

        Returns:
            List[FieldSpec]: One entry per field except the id
        """
        hints = get_type_hints(cls)
        specs = []
        for f in dataclasses.fields(cls):
            if f.name == "id":
                continue
            python_type = _unwrap_optional(hints.get(f.name, f.type))
            kind = f.metadata.get(KIND) or _INFERRED_KINDS.get(python_type)
            specs.append(FieldSpec(
                name=f.name,
                kind=kind,
                analyzed=bool(f.metadata.get(ANALYZED, False)),
                python_type=python_type
            ))
        return specs

    def to_source(self) -> Dict[str, Any]:
        """Convert document to the source body sent to the engine."""
        return {
            f.name: getattr(self, f.name)
            for f in dataclasses.fields(self)
            if f.name != "id"
        }


@dataclass
class Poem(SearchableDocument):
    """A poem as indexed for full-text search."""
    dynasty_id: str = ""
    poet_id: str = ""
    poet_name: str = searchable_field(analyzed=True, default="")
    poet_name_cht: str = searchable_field(analyzed=True, default="")
    name: str = searchable_field(analyzed=True, default="")
    name_cht: str = searchable_field(analyzed=True, default="")
    content: str = searchable_field(analyzed=True, default="")
    content_cht: str = searchable_field(analyzed=True, default="")
    appreciation: str = ""
    form: int = 0
    tags: List[str] = field(default_factory=list)
    version: int = searchable_field(kind=FieldKind.LONG, default=0)


@dataclass
class Poet(SearchableDocument):
    """A poet as indexed for full-text search."""
    dynasty_id: str = ""
    name: str = searchable_field(analyzed=True, default="")
    name_cht: str = searchable_field(analyzed=True, default="")
    description: str = searchable_field(analyzed=True, default="")
    description_cht: str = searchable_field(analyzed=True, default="")
    birth: str = ""
    death: str = ""
    poem_count: int = 0


DOCUMENT_TYPES: Dict[str, Type[SearchableDocument]] = {
    Poem.type_name(): Poem,
    Poet.type_name(): Poet,
}


def resolve_document_type(name: str) -> Type[SearchableDocument]:
    """
    Look up a registered document type by its type name.

    Raises:
        KeyError: If no document type has that name
    """
    try:
        return DOCUMENT_TYPES[name]
    except KeyError:
        raise KeyError(
            f"Unknown document type '{name}', expected one of: {', '.join(sorted(DOCUMENT_TYPES))}"
        ) from None
