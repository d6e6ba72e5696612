"""
Graph assembly -- the InfraGraph parse pipeline.

Runs the engine passes in order over one resource list::

    IdentifierResolver -> RelationshipExtractor -> ContainmentResolver
        -> LayoutEngine -> pruning

and returns a :class:`~infragraph.models.graph.GraphResult`.  Each call
builds its own lookup tables, so concurrent parses share nothing.

Pruning removes edges that point at a resource without a node and edges
that merely restate containment (the source is already drawn inside the
target).
"""

from __future__ import annotations

from collections import Counter
from typing import Any, Mapping, Optional, Sequence

from infragraph.core.logging import get_logger
from infragraph.engine.containment import ContainmentResolver
from infragraph.engine.layout import LayoutEngine
from infragraph.engine.relationships import RelationshipExtractor
from infragraph.engine.resolver import IdentifierResolver
from infragraph.extractor.tfstate import extract_resources
from infragraph.models import GraphEdge, GraphNode, GraphResult, Resource

logger = get_logger(__name__)


def prune_edges(
    edges: Sequence[GraphEdge], nodes: Mapping[str, GraphNode]
) -> list[GraphEdge]:
    """Drop dangling edges and edges that duplicate visual nesting."""
    kept: list[GraphEdge] = []
    for edge in edges:
        source = nodes.get(edge.source)
        if source is None or edge.target not in nodes:
            continue
        if source.parent == edge.target:
            continue
        kept.append(edge)
    return kept


def assemble_graph(
    resources: Sequence[Resource],
    warnings: Optional[Sequence[str]] = None,
    *,
    source: str = "-",
) -> GraphResult:
    """Build the diagram for an already-extracted resource list.

    Args:
        resources: Resources in input order.  Never modified.
        warnings: Extraction warnings, passed through unchanged.
        source: Short description of where the state came from, used only
            for logging.

    Returns:
        The assembled :class:`GraphResult`.
    """
    duplicates = sorted(
        resource_id
        for resource_id, count in Counter(r.id for r in resources).items()
        if count > 1
    )
    if duplicates:
        logger.warning(
            "Duplicate resource ids, later records win: %s",
            ", ".join(duplicates),
            extra={"action": "assemble", "target": source},
        )

    resolver = IdentifierResolver(resources)
    edges = RelationshipExtractor().extract(resources, resolver)
    parent_of = ContainmentResolver().resolve(resources, resolver)
    nodes = LayoutEngine().layout(resources, parent_of)
    pruned = prune_edges(edges, nodes)

    logger.info(
        "Graph built: %d resources, %d nodes, %d edges (%d pruned)",
        len(resources),
        len(nodes),
        len(pruned),
        len(edges) - len(pruned),
        extra={"action": "assemble", "target": source},
    )

    return GraphResult(
        nodes=list(nodes.values()),
        edges=pruned,
        resources=list(resources),
        warnings=list(warnings or []),
    )


def build_graph(
    document: Mapping[str, Any],
    *,
    redact: bool = True,
    source: str = "-",
) -> GraphResult:
    """Extract resources from a decoded state document and assemble them."""
    extraction = extract_resources(document, redact=redact)
    return assemble_graph(extraction.resources, extraction.warnings, source=source)
