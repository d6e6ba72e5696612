"""InfraGraph Engine - Terraform resources to a laid-out diagram graph."""

from infragraph.models import (
    GraphEdge,
    GraphNode,
    GraphResult,
    NodeType,
    Position,
    Resource,
    Size,
    node_type_for,
)
from infragraph.engine.resolver import IdentifierResolver
from infragraph.engine.relationships import RelationshipExtractor, EDGE_ATTRIBUTES
from infragraph.engine.containment import ContainmentResolver
from infragraph.engine.layout import LayoutEngine
from infragraph.engine.graph import assemble_graph, build_graph, prune_edges

__all__ = [
    "GraphEdge",
    "GraphNode",
    "GraphResult",
    "NodeType",
    "Position",
    "Resource",
    "Size",
    "node_type_for",
    "IdentifierResolver",
    "RelationshipExtractor",
    "EDGE_ATTRIBUTES",
    "ContainmentResolver",
    "LayoutEngine",
    "assemble_graph",
    "build_graph",
    "prune_edges",
]
