"""
Relationship extraction for the InfraGraph engine.

Edges come from two independent sources:

* **Attribute references** -- a fixed, ordered table maps attribute keys such
  as ``vpc_id`` or ``vpc_security_group_ids`` to an edge label.  Adding
  support for a new reference is a matter of adding a row.
* **Explicit dependencies** -- every entry of a resource's ``dependencies``
  list produces a ``"depends on"`` edge.

Both passes resolve their candidates through the
:class:`~infragraph.engine.resolver.IdentifierResolver`; unresolved
references and self-references are dropped silently.  At most one edge is
kept per ordered ``(source, target)`` pair and the first label seen wins.
"""

from __future__ import annotations

from typing import Any, Sequence

from infragraph.core.logging import get_logger
from infragraph.engine.resolver import IdentifierResolver
from infragraph.models import GraphEdge, Resource

logger = get_logger(__name__)

# -- Attribute key -> edge label, in evaluation order --------------------------
EDGE_ATTRIBUTES: list[tuple[str, str]] = [
    ("vpc_id", "in vpc"),
    ("subnet_id", "in subnet"),
    ("security_groups", "secured by"),
    ("vpc_security_group_ids", "secured by"),
    ("nat_gateway_id", "routes via"),
    ("internet_gateway_id", "routes via"),
    ("instance_id", "attached to"),
    ("allocation_id", "uses eip"),
    ("load_balancer_arn", "behind lb"),
]

DEPENDS_ON_LABEL: str = "depends on"


def edge_id(source: str, target: str) -> str:
    """Return the deterministic id of the edge ``source -> target``."""
    return f"e-{source}-{target}"


def candidate_references(value: Any) -> list[str]:
    """Return the string references contained in an attribute value.

    Sequences contribute each of their string elements, a plain string
    contributes itself, and anything else (numbers, mappings, ``None``)
    contributes nothing.
    """
    if not value:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, (list, tuple)):
        return [item for item in value if isinstance(item, str)]
    return []


class RelationshipExtractor:
    """Build the deduplicated edge list for a resource set.

    The extractor is stateless between calls; :meth:`extract` keeps its
    deduplication set local so one instance can serve many parses.
    """

    EDGE_ATTRIBUTES: list[tuple[str, str]] = EDGE_ATTRIBUTES

    def extract(
        self,
        resources: Sequence[Resource],
        resolver: IdentifierResolver,
    ) -> list[GraphEdge]:
        """Return edges in discovery order.

        Args:
            resources: Resources in input order.
            resolver: Lookup tables built from the same resources.

        Returns:
            A list of :class:`GraphEdge` with unique ``(source, target)``
            pairs.
        """
        edges: list[GraphEdge] = []
        seen: set[tuple[str, str]] = set()

        def add(source: str, raw: str, label: str) -> None:
            target = resolver.resolve(raw)
            if target is None:
                logger.debug(
                    "Dropping unresolved reference %r",
                    raw,
                    extra={"action": "resolve_reference", "target": source},
                )
                return
            if target == source or (source, target) in seen:
                return
            seen.add((source, target))
            edges.append(
                GraphEdge(id=edge_id(source, target), source=source, target=target, label=label)
            )

        for resource in resources:
            for attr_key, label in self.EDGE_ATTRIBUTES:
                for raw in candidate_references(resource.attributes.get(attr_key)):
                    add(resource.id, raw, label)

            for dependency in resource.dependencies:
                if isinstance(dependency, str):
                    add(resource.id, dependency, DEPENDS_ON_LABEL)

        return edges
