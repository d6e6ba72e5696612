"""InfraGraph state extraction -- raw Terraform state to resource records."""

from infragraph.extractor.attributes import (
    SENSITIVE_ATTR_PATTERNS,
    extract_tags,
    redact_attributes,
)
from infragraph.extractor.tfstate import (
    ExtractionResult,
    StateParseError,
    extract_resources,
    parse_state_text,
)

__all__ = [
    "SENSITIVE_ATTR_PATTERNS",
    "extract_tags",
    "redact_attributes",
    "ExtractionResult",
    "StateParseError",
    "extract_resources",
    "parse_state_text",
]
