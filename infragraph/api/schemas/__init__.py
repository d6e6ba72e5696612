"""
Pydantic v2 schemas for the InfraGraph REST API.

Re-exports every public schema so consumers can do::

    from infragraph.api.schemas import ParseResponse, RawParseRequest  # etc.
"""

from infragraph.api.schemas.graph import (
    GraphEdgeSchema,
    GraphNodeSchema,
    ParseResponse,
    PositionSchema,
    ResourceSchema,
    SizeSchema,
)
from infragraph.api.schemas.parse import RawParseRequest

__all__: list[str] = [
    # graph
    "GraphEdgeSchema",
    "GraphNodeSchema",
    "ParseResponse",
    "PositionSchema",
    "ResourceSchema",
    "SizeSchema",
    # parse
    "RawParseRequest",
]
