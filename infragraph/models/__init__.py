"""
InfraGraph models package.

Re-exports every model class so that consumers can import directly from
``infragraph.models`` instead of reaching into individual submodules::

    from infragraph.models import Resource, GraphNode, GraphEdge
"""

from infragraph.models.resource import Resource, SUBNET_TYPE, VPC_TYPE
from infragraph.models.graph import (
    GraphEdge,
    GraphNode,
    GraphResult,
    NodeType,
    Position,
    Size,
    node_type_for,
)

__all__: list[str] = [
    "Resource",
    "SUBNET_TYPE",
    "VPC_TYPE",
    "GraphEdge",
    "GraphNode",
    "GraphResult",
    "NodeType",
    "Position",
    "Size",
    "node_type_for",
]
