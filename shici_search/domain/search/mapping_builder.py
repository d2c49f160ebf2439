"""
Index mapping derived from a document type's declared fields.
"""

import logging
import threading
from typing import Dict, List, Optional, Type

from ...core.entities import FieldKind, SearchableDocument
from ...shared.exceptions.search_exceptions import UnsupportedFieldTypeError

logger = logging.getLogger(__name__)

SUPPORTED_KINDS = frozenset(FieldKind)


class MappingBuilder:
    """
    Builds {field: {"type": ..., "index": ...}} mappings.

    Analyzed fields must have a supported type. Non-analyzed fields
    with an unsupported type are left out of the mapping.
    """

    def __init__(self):
        self._analyzed_fields: Dict[Type[SearchableDocument], List[str]] = {}
        self._lock = threading.Lock()

    def build_mapping(self, document_type: Type[SearchableDocument]) -> Dict[str, Dict[str, str]]:
        """
        Build the mapping properties of a document type.

        Args:
            document_type: The document type

        Returns:
            Dict[str, Dict[str, str]]: Field name to mapping property

        Raises:
            UnsupportedFieldTypeError: If an analyzed field cannot be mapped
        """
        logger.info(f"Building mapping for type: {document_type.__name__}")
        properties: Dict[str, Dict[str, str]] = {}
        for spec in document_type.describe_fields():
            if spec.analyzed:
                properties[spec.name] = self.mapping_property(spec.name, spec.kind, True)
            elif spec.kind in SUPPORTED_KINDS:
                properties[spec.name] = self.mapping_property(spec.name, spec.kind, False)
            else:
                logger.info(f"Ignore unsupported field: {spec.name}")
        return properties

    def build_mapping_request(self, document_type: Type[SearchableDocument]) -> Dict[str, Dict]:
        """Wrap the mapping as the body of a put-mapping request."""
        return {"properties": self.build_mapping(document_type)}

    @staticmethod
    def mapping_property(
        field_name: str,
        kind: Optional[FieldKind],
        analyzed: bool
    ) -> Dict[str, str]:
        if kind not in SUPPORTED_KINDS:
            raise UnsupportedFieldTypeError(field_name, kind)
        return {"type": kind.value, "index": "analyzed" if analyzed else "not_analyzed"}

    def analyzed_fields(self, document_type: Type[SearchableDocument]) -> List[str]:
        """
        Names of the analyzed fields of a document type, cached per type.

        The `mapping` command reports them next to the derived mapping.

        Returns:
            List[str]: Field names in declaration order
        """
        fields = self._analyzed_fields.get(document_type)
        if fields is None:
            computed = [s.name for s in document_type.describe_fields() if s.analyzed]
            with self._lock:
                fields = self._analyzed_fields.setdefault(document_type, computed)
        return list(fields)
