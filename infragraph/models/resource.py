"""
Resource record model.

A :class:`Resource` is one managed object from a Terraform state file, as
produced by :mod:`infragraph.extractor` and consumed by the graph engine.
Records are created once per parse and never mutated or persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

VPC_TYPE: str = "aws_vpc"
SUBNET_TYPE: str = "aws_subnet"


@dataclass(frozen=True)
class Resource:
    """A single managed infrastructure object.

    Attributes:
        id: Tool-native identifier, ``"<type>.<name>"`` (module-prefixed and
            index-suffixed where Terraform does so).  Unique per parse.
        type: Terraform resource type, e.g. ``"aws_vpc"``.
        name: Declared resource name.
        display_name: Human-readable label.
        attributes: Raw instance attributes as found in the state file.
        dependencies: Explicit dependency references, in state order.
        tags: ``tags`` (or ``tags_all``) flattened to strings.
    """

    id: str
    type: str
    name: str
    display_name: str
    attributes: dict[str, Any] = field(default_factory=dict)
    dependencies: list[str] = field(default_factory=list)
    tags: dict[str, str] = field(default_factory=dict)
