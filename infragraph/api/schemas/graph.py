"""
Pydantic v2 schemas for the parse response.

The frontend renders these structures with React Flow.  Each parse produces
a set of **nodes** (one per resource, nested through ``parent``) and
**edges** (labelled relationships), plus the untouched resource list and
any extraction warnings.

Every model uses ``ConfigDict(from_attributes=True)`` so that the engine's
dataclasses can be serialised directly via ``Model.model_validate(result)``.
Field names that are multi-word on the wire keep their camelCase spelling
through ``serialization_alias``.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from infragraph.models import NodeType


class ResourceSchema(BaseModel):
    """A Terraform resource as returned to the client.

    Attributes:
        id: Terraform address, e.g. ``aws_instance.web``.
        type: Terraform resource type.
        name: Declared resource name.
        display_name: Label shown in the UI (``displayName`` on the wire).
        attributes: Instance attributes, secrets masked.
        dependencies: Explicit dependency references.
        tags: Resource tags.
    """

    id: str
    type: str
    name: str
    display_name: str = Field(serialization_alias="displayName")
    attributes: dict[str, Any] = Field(default_factory=dict)
    dependencies: list[str] = Field(default_factory=list)
    tags: dict[str, str] = Field(default_factory=dict)

    model_config = ConfigDict(from_attributes=True)


class PositionSchema(BaseModel):
    x: int
    y: int

    model_config = ConfigDict(from_attributes=True)


class SizeSchema(BaseModel):
    width: int
    height: int

    model_config = ConfigDict(from_attributes=True)


class GraphNodeSchema(BaseModel):
    """A single laid-out diagram node.

    Attributes:
        id: Same as the resource id.
        type: Visual category, e.g. ``vpcNode``.
        label: Resource display name.
        position: Relative to ``parent`` when set, absolute otherwise.
        size: Rendered width and height.
        parent: Id of the containing VPC or subnet node, if any.
        resource: The resource this node represents.
    """

    id: str
    type: NodeType
    label: str
    position: PositionSchema
    size: SizeSchema
    parent: Optional[str] = None
    resource: ResourceSchema

    model_config = ConfigDict(from_attributes=True)


class GraphEdgeSchema(BaseModel):
    """A directed, labelled relationship between two nodes."""

    id: str
    source: str
    target: str
    label: str
    animated: bool = False

    model_config = ConfigDict(from_attributes=True)


class ParseResponse(BaseModel):
    """Payload returned by every parse endpoint.

    Attributes:
        nodes: All nodes, parents before their children.
        edges: Deduplicated relationship edges.
        resources: Extracted resources in state order.
        warnings: Non-fatal extraction problems.
    """

    nodes: list[GraphNodeSchema] = Field(default_factory=list)
    edges: list[GraphEdgeSchema] = Field(default_factory=list)
    resources: list[ResourceSchema] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)
