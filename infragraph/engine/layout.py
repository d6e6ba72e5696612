"""
Deterministic grid layout for the InfraGraph diagram.

Given the containment forest produced by
:class:`~infragraph.engine.containment.ContainmentResolver`, the
:class:`LayoutEngine` assigns every resource a position and a size:

* VPCs are stacked vertically at ``x = 0`` in input order.  Each VPC is
  measured first (subnet block plus VPC-direct children), then sized, then
  its children are placed.  Its height never drops below ``VPC_HEIGHT``.
* Subnets are laid out two per row inside their VPC.
* Resources inside a subnet are laid out three per row.
* Resources attached to a VPC but not to a subnet (gateways, security
  groups, route tables) are laid out three per row below the subnet block.
* Root-level resources are stacked in a single column to the right of the
  VPCs.

Nested positions are relative to the parent node.  All values are integer
layout units and the output depends only on the resource order and the
containment mapping.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

from infragraph.models import (
    SUBNET_TYPE,
    VPC_TYPE,
    GraphNode,
    Position,
    Resource,
    Size,
    node_type_for,
)

# -- VPC ------------------------------------------------------------------------
VPC_WIDTH: int = 900
VPC_HEIGHT: int = 700
VPC_GAP: int = 60
VPC_BOTTOM_MARGIN: int = 40
VPC_DIRECT_OFFSET: int = 40

# -- Subnet ---------------------------------------------------------------------
SUBNET_WIDTH: int = 380
SUBNET_HEIGHT: int = 280
SUBNET_PAD_X: int = 30
SUBNET_PAD_Y: int = 100
SUBNET_COL_GAP: int = 420
SUBNET_ROW_GAP: int = 320
SUBNET_COLUMNS: int = 2

# -- Leaf resource --------------------------------------------------------------
RESOURCE_WIDTH: int = 200
RESOURCE_HEIGHT: int = 90
RESOURCE_PAD_X: int = 20
RESOURCE_PAD_Y: int = 60
RESOURCE_COL_GAP: int = 230
RESOURCE_ROW_GAP: int = 120
RESOURCE_COLUMNS: int = 3

# -- Root column ----------------------------------------------------------------
ROOT_X: int = 980
ROOT_Y_GAP: int = 130
ROOT_MARGIN: int = 40


def _rows(count: int, columns: int) -> int:
    return -(-count // columns)


def _grid_cell(index: int, columns: int) -> tuple[int, int]:
    """Return ``(column, row)`` of the *index*-th item in a row-major grid."""
    return index % columns, index // columns


def subnet_block_bottom(subnet_count: int) -> int:
    """Return the y coordinate, inside a VPC, just below its subnet grid."""
    rows = _rows(subnet_count, SUBNET_COLUMNS)
    if rows == 0:
        return SUBNET_PAD_Y
    return SUBNET_PAD_Y + (rows - 1) * SUBNET_ROW_GAP + SUBNET_HEIGHT


def vpc_height(subnet_count: int, direct_count: int) -> int:
    """Measure a VPC from the number of subnets and VPC-direct children."""
    content_bottom = subnet_block_bottom(subnet_count)
    rows = _rows(direct_count, RESOURCE_COLUMNS)
    if rows > 0:
        content_bottom += (
            VPC_DIRECT_OFFSET + (rows - 1) * RESOURCE_ROW_GAP + RESOURCE_HEIGHT
        )
    return max(VPC_HEIGHT, content_bottom + VPC_BOTTOM_MARGIN)


class LayoutEngine:
    """Place resources on a fixed grid according to their containment.

    The engine holds no state between calls; :meth:`layout` can be invoked
    repeatedly and always yields the same result for the same input.
    """

    def layout(
        self,
        resources: Sequence[Resource],
        parent_of: Mapping[str, str],
    ) -> dict[str, GraphNode]:
        """Compute a node for every resource.

        Args:
            resources: Resources in input order.
            parent_of: ``child id -> parent id`` mapping.

        Returns:
            An insertion-ordered ``id -> GraphNode`` mapping: each VPC
            followed by its subnets, their children and the VPC-direct
            children, then the root-level nodes.  A later resource with a
            duplicate id replaces the earlier node.
        """
        nodes: dict[str, GraphNode] = {}
        children_of: dict[str, list[Resource]] = {}
        root_resources: list[Resource] = []

        for resource in resources:
            parent = parent_of.get(resource.id)
            if parent is not None:
                children_of.setdefault(parent, []).append(resource)
            elif resource.type != VPC_TYPE:
                root_resources.append(resource)

        y_offset = 0
        for vpc in (r for r in resources if r.type == VPC_TYPE):
            y_offset += self._place_vpc(vpc, y_offset, children_of, nodes) + VPC_GAP

        y_offset = 0
        for resource in root_resources:
            node = self._place_root(resource, y_offset, children_of, nodes)
            y_offset += max(ROOT_Y_GAP, node.size.height + ROOT_MARGIN)

        return nodes

    # -- Placement helpers ----------------------------------------------------

    def _place_vpc(
        self,
        vpc: Resource,
        y_offset: int,
        children_of: Mapping[str, list[Resource]],
        nodes: dict[str, GraphNode],
    ) -> int:
        """Measure, size and place one VPC subtree; return the VPC height."""
        children = children_of.get(vpc.id, [])
        subnets = [r for r in children if r.type == SUBNET_TYPE]
        direct = [r for r in children if r.type != SUBNET_TYPE]

        height = vpc_height(len(subnets), len(direct))
        nodes[vpc.id] = _node(vpc, 0, y_offset, VPC_WIDTH, height)

        for index, subnet in enumerate(subnets):
            col, row = _grid_cell(index, SUBNET_COLUMNS)
            nodes[subnet.id] = _node(
                subnet,
                SUBNET_PAD_X + col * SUBNET_COL_GAP,
                SUBNET_PAD_Y + row * SUBNET_ROW_GAP,
                SUBNET_WIDTH,
                SUBNET_HEIGHT,
                parent=vpc.id,
            )
            self._place_subnet_children(subnet, children_of, nodes)

        direct_top = subnet_block_bottom(len(subnets)) + VPC_DIRECT_OFFSET
        for index, child in enumerate(direct):
            if child.id in nodes:
                continue
            col, row = _grid_cell(index, RESOURCE_COLUMNS)
            nodes[child.id] = _node(
                child,
                SUBNET_PAD_X + col * RESOURCE_COL_GAP,
                direct_top + row * RESOURCE_ROW_GAP,
                RESOURCE_WIDTH,
                RESOURCE_HEIGHT,
                parent=vpc.id,
            )

        return height

    def _place_subnet_children(
        self,
        subnet: Resource,
        children_of: Mapping[str, list[Resource]],
        nodes: dict[str, GraphNode],
    ) -> None:
        for index, child in enumerate(children_of.get(subnet.id, [])):
            col, row = _grid_cell(index, RESOURCE_COLUMNS)
            nodes[child.id] = _node(
                child,
                RESOURCE_PAD_X + col * RESOURCE_COL_GAP,
                RESOURCE_PAD_Y + row * RESOURCE_ROW_GAP,
                RESOURCE_WIDTH,
                RESOURCE_HEIGHT,
                parent=subnet.id,
            )

    def _place_root(
        self,
        resource: Resource,
        y_offset: int,
        children_of: Mapping[str, list[Resource]],
        nodes: dict[str, GraphNode],
    ) -> GraphNode:
        # A subnet whose VPC is not in the state keeps its own contents.
        if resource.type == SUBNET_TYPE:
            node = _node(resource, ROOT_X, y_offset, SUBNET_WIDTH, SUBNET_HEIGHT)
            nodes[resource.id] = node
            self._place_subnet_children(resource, children_of, nodes)
            return node

        node = _node(resource, ROOT_X, y_offset, RESOURCE_WIDTH, RESOURCE_HEIGHT)
        nodes[resource.id] = node
        return node


def _node(
    resource: Resource,
    x: int,
    y: int,
    width: int,
    height: int,
    parent: Optional[str] = None,
) -> GraphNode:
    return GraphNode(
        id=resource.id,
        type=node_type_for(resource.type),
        label=resource.display_name,
        position=Position(x=x, y=y),
        size=Size(width=width, height=height),
        resource=resource,
        parent=parent,
    )
