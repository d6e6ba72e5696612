"""
Attribute helpers for Terraform resource records.

Covers tag extraction, display-name selection and masking of attribute
values that look like secrets before they are returned to the client.
"""

from __future__ import annotations

from typing import Any, Mapping

# Attribute-key fragments whose values are never echoed back to the client.
SENSITIVE_ATTR_PATTERNS: list[str] = [
    "password", "secret", "private_key", "access_key", "secret_key",
    "token", "api_key", "auth", "credential",
]

REDACTED_VALUE: str = "(sensitive)"

# Reference keys consumed by the graph engine; always kept verbatim.
_REFERENCE_KEYS: frozenset[str] = frozenset({
    "id", "vpc_id", "subnet_id", "subnet_ids", "security_groups",
    "vpc_security_group_ids", "nat_gateway_id", "internet_gateway_id",
    "instance_id", "allocation_id", "load_balancer_arn",
})

# Attributes that commonly carry a human-friendly name, in priority order.
_NAME_ATTRIBUTES: list[str] = ["name", "bucket", "function_name", "identifier"]


def extract_tags(attributes: Mapping[str, Any]) -> dict[str, str]:
    """Return the resource tags as a ``str -> str`` mapping.

    ``tags`` is preferred; ``tags_all`` is used only when ``tags`` is missing
    or null, so an explicit empty ``tags`` stays empty.  Anything that is not
    a mapping yields no tags.
    """
    raw = attributes.get("tags")
    if raw is None:
        raw = attributes.get("tags_all")
    if not isinstance(raw, Mapping):
        return {}
    return {str(key): str(value) for key, value in raw.items()}


def display_name_for(
    name: str, attributes: Mapping[str, Any], tags: Mapping[str, str]
) -> str:
    """Pick a label: the ``Name`` tag, a naming attribute, or *name*."""
    if tags.get("Name"):
        return tags["Name"]
    for key in _NAME_ATTRIBUTES:
        value = attributes.get(key)
        if isinstance(value, str) and value:
            return value
    return name


def is_sensitive_key(key: str) -> bool:
    if key in _REFERENCE_KEYS:
        return False
    lowered = key.lower()
    return any(pattern in lowered for pattern in SENSITIVE_ATTR_PATTERNS)


def redact_attributes(attributes: Mapping[str, Any]) -> dict[str, Any]:
    """Return a copy of *attributes* with secret-looking scalars masked.

    Only top-level values are inspected.  Empty values and nested
    structures are left untouched.
    """
    redacted: dict[str, Any] = {}
    for key, value in attributes.items():
        if (
            is_sensitive_key(key)
            and value not in (None, "")
            and not isinstance(value, (dict, list, bool))
        ):
            redacted[key] = REDACTED_VALUE
        else:
            redacted[key] = value
    return redacted
