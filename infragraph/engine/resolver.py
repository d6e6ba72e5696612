"""
Identifier resolution between provider-native and Terraform ids.

Terraform records references between resources in two shapes: as the
provider's own id (``vpc-0abc123``, found under another resource's ``id``
attribute) or as a Terraform address (``aws_vpc.main``).  The
:class:`IdentifierResolver` normalises both to the Terraform address, which
is the primary key for resources and nodes.
"""

from __future__ import annotations

from typing import Any, Optional, Sequence

from infragraph.models import SUBNET_TYPE, VPC_TYPE, Resource


def provider_id(resource: Resource) -> Optional[str]:
    """Return the provider-native id of *resource*, or ``None`` if absent."""
    value = resource.attributes.get("id")
    if isinstance(value, str) and value:
        return value
    return None


class IdentifierResolver:
    """Lookup tables built once per parse from the full resource list.

    Example::

        resolver = IdentifierResolver(resources)
        resolver.resolve("vpc-0abc123")    # -> "aws_vpc.main"
        resolver.resolve("aws_vpc.main")   # -> "aws_vpc.main"
        resolver.resolve("sg-unknown")     # -> None

    When two resources report the same provider id, the later one wins.
    """

    def __init__(self, resources: Sequence[Resource]) -> None:
        self._by_provider_id: dict[str, str] = {}
        self._known_ids: set[str] = set()
        self._vpcs: dict[str, str] = {}
        self._subnets: dict[str, str] = {}

        for resource in resources:
            self._known_ids.add(resource.id)
            native = provider_id(resource)
            if native is None:
                continue
            self._by_provider_id[native] = resource.id
            if resource.type == VPC_TYPE:
                self._vpcs[native] = resource.id
            elif resource.type == SUBNET_TYPE:
                self._subnets[native] = resource.id

    def resolve(self, value: Any) -> Optional[str]:
        """Resolve a provider id or Terraform id to a known Terraform id.

        Args:
            value: A candidate reference.  Non-string values never resolve.

        Returns:
            The Terraform id of the referenced resource, or ``None`` when the
            reference points outside the resource set.
        """
        if not isinstance(value, str):
            return None
        if value in self._by_provider_id:
            return self._by_provider_id[value]
        if value in self._known_ids:
            return value
        return None

    def vpc_for(self, value: Any) -> Optional[str]:
        """Return the Terraform id of the VPC whose provider id is *value*."""
        if not isinstance(value, str):
            return None
        return self._vpcs.get(value)

    def subnet_for(self, value: Any) -> Optional[str]:
        """Return the Terraform id of the subnet whose provider id is *value*."""
        if not isinstance(value, str):
            return None
        return self._subnets.get(value)
