"""
Containment inference for the InfraGraph engine.

Decides which subnet or VPC each resource is drawn inside.  The policy is an
ordered rule cascade listed in :attr:`ContainmentResolver.RULES`; for each
name ``rule`` the resolver calls ``_rule_{rule}`` and the first rule that
returns a parent wins.  The order encodes "prefer the most specific
placement": a subnet beats a VPC.

VPCs are always roots and never enter the cascade.  A subnet can only be
placed inside a VPC, every other resource inside a subnet or a VPC, so the
resulting forest is acyclic and at most three levels deep.
"""

from __future__ import annotations

from typing import Optional, Sequence

from infragraph.engine.resolver import IdentifierResolver
from infragraph.models import SUBNET_TYPE, VPC_TYPE, Resource


class ContainmentResolver:
    """Rule-based structural parent assignment.

    Example::

        parent_of = ContainmentResolver().resolve(resources, resolver)
        parent_of["aws_instance.web"]   # -> "aws_subnet.public"
    """

    RULES: list[str] = [
        "subnet_id",
        "subnet_ids",
        "subnet_in_vpc",
        "vpc_id",
    ]

    def resolve(
        self,
        resources: Sequence[Resource],
        resolver: IdentifierResolver,
    ) -> dict[str, str]:
        """Return a ``child id -> parent id`` mapping.

        Resources without an entry are root-level.
        """
        parent_of: dict[str, str] = {}

        for resource in resources:
            if resource.type == VPC_TYPE:
                continue
            parent = self.parent_for(resource, resolver)
            if parent is not None:
                parent_of[resource.id] = parent

        return parent_of

    def parent_for(
        self, resource: Resource, resolver: IdentifierResolver
    ) -> Optional[str]:
        """Run the cascade for a single resource."""
        for rule_name in self.RULES:
            method = getattr(self, f"_rule_{rule_name}", None)
            if method is None:
                continue
            parent = method(resource, resolver)
            if parent is not None:
                return parent
        return None

    # -- Rule implementations -------------------------------------------------

    def _rule_subnet_id(
        self, resource: Resource, resolver: IdentifierResolver
    ) -> Optional[str]:
        """Single ``subnet_id`` pointing at a known subnet."""
        if resource.type == SUBNET_TYPE:
            return None
        return resolver.subnet_for(resource.attributes.get("subnet_id"))

    def _rule_subnet_ids(
        self, resource: Resource, resolver: IdentifierResolver
    ) -> Optional[str]:
        """First element of ``subnet_ids`` that is a known subnet."""
        if resource.type == SUBNET_TYPE:
            return None
        subnet_ids = resource.attributes.get("subnet_ids")
        if not isinstance(subnet_ids, (list, tuple)):
            return None
        for value in subnet_ids:
            subnet = resolver.subnet_for(value)
            if subnet is not None:
                return subnet
        return None

    def _rule_subnet_in_vpc(
        self, resource: Resource, resolver: IdentifierResolver
    ) -> Optional[str]:
        """Subnets sit inside the VPC named by their ``vpc_id``."""
        if resource.type != SUBNET_TYPE:
            return None
        return resolver.vpc_for(resource.attributes.get("vpc_id"))

    def _rule_vpc_id(
        self, resource: Resource, resolver: IdentifierResolver
    ) -> Optional[str]:
        # Gateways, NATs, security groups and route tables land here.
        return resolver.vpc_for(resource.attributes.get("vpc_id"))
