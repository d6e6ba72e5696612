"""
Diagram graph models.

The engine turns a list of :class:`~infragraph.models.resource.Resource`
records into :class:`GraphNode` and :class:`GraphEdge` instances, bundled
into a :class:`GraphResult` that the API layer serialises as the parse
response.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from infragraph.models.resource import Resource


class NodeType(str, Enum):
    """Visual category of a diagram node.

    The values are the node-type keys the frontend renderer registers, so
    they are part of the wire contract.
    """

    VPC = "vpcNode"
    SUBNET = "subnetNode"
    INTERNET_GATEWAY = "igwNode"
    NAT_GATEWAY = "natNode"
    ROUTE_TABLE = "routeTableNode"
    SECURITY_GROUP = "securityGroupNode"
    EC2 = "ec2Node"
    RDS = "rdsNode"
    LOAD_BALANCER = "lbNode"
    ELASTIC_IP = "eipNode"
    S3 = "s3Node"
    LAMBDA = "lambdaNode"
    GENERIC = "genericNode"


# Terraform resource type -> node category.  Unlisted types render generically.
NODE_TYPES: dict[str, NodeType] = {
    "aws_vpc": NodeType.VPC,
    "aws_subnet": NodeType.SUBNET,
    "aws_internet_gateway": NodeType.INTERNET_GATEWAY,
    "aws_nat_gateway": NodeType.NAT_GATEWAY,
    "aws_route_table": NodeType.ROUTE_TABLE,
    "aws_route_table_association": NodeType.ROUTE_TABLE,
    "aws_security_group": NodeType.SECURITY_GROUP,
    "aws_instance": NodeType.EC2,
    "aws_db_instance": NodeType.RDS,
    "aws_lb": NodeType.LOAD_BALANCER,
    "aws_alb": NodeType.LOAD_BALANCER,
    "aws_eip": NodeType.ELASTIC_IP,
    "aws_s3_bucket": NodeType.S3,
    "aws_lambda_function": NodeType.LAMBDA,
}


def node_type_for(resource_type: str) -> NodeType:
    """Return the visual category for a Terraform resource type."""
    return NODE_TYPES.get(resource_type, NodeType.GENERIC)


@dataclass
class Position:
    x: int
    y: int


@dataclass
class Size:
    width: int
    height: int


@dataclass
class GraphNode:
    """A laid-out diagram node.

    ``position`` is relative to ``parent`` when one is set and absolute
    otherwise.
    """

    id: str
    type: NodeType
    label: str
    position: Position
    size: Size
    resource: Resource
    parent: Optional[str] = None


@dataclass
class GraphEdge:
    id: str
    source: str
    target: str
    label: str
    animated: bool = False


@dataclass
class GraphResult:
    """Complete output of one parse: nodes, edges, resources, warnings."""

    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)
    resources: list[Resource] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
