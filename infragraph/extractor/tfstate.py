"""
Terraform state extraction for InfraGraph.

Turns a decoded state document into the flat list of
:class:`~infragraph.models.resource.Resource` records consumed by the graph
engine.  Two document shapes are understood:

* the on-disk ``terraform.tfstate`` format (version 4), where each entry of
  ``resources`` carries a list of ``instances``;
* the output of ``terraform show -json``, where resources live under
  ``values.root_module`` and nested ``child_modules``.

Only managed resources are kept; data sources are skipped.  Problems with
individual records never abort extraction; they are reported as warning
strings next to the resources.  Only an undecodable document raises
:class:`StateParseError`.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Iterator, Mapping, Optional, Union

from infragraph.core.logging import get_logger
from infragraph.extractor.attributes import (
    display_name_for,
    extract_tags,
    redact_attributes,
)
from infragraph.models import Resource

logger = get_logger(__name__)

SUPPORTED_STATE_VERSION: int = 4


class StateParseError(ValueError):
    """Raised when the raw state text cannot be turned into a JSON object."""


@dataclass
class ExtractionResult:
    """Resources extracted from one state document plus non-fatal warnings."""

    resources: list[Resource] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


# -- Decoding ----------------------------------------------------------------


def parse_state_text(raw: Union[str, bytes]) -> dict[str, Any]:
    """Decode raw state text into a JSON object.

    Args:
        raw: File contents as ``bytes`` (UTF-8, optional BOM) or ``str``.

    Returns:
        The decoded top-level JSON object.

    Raises:
        StateParseError: If the text is not UTF-8, not valid JSON, or its
            top-level value is not an object.
    """
    if isinstance(raw, bytes):
        try:
            raw = raw.decode("utf-8-sig")
        except UnicodeDecodeError as exc:
            raise StateParseError("State file is not valid UTF-8 text.") from exc

    try:
        document = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise StateParseError(
            f"State file is not valid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})."
        ) from exc

    if not isinstance(document, dict):
        raise StateParseError("State file must contain a JSON object at the top level.")
    return document


# -- Addressing --------------------------------------------------------------


def index_suffix(index_key: Any) -> str:
    """Return the Terraform address suffix for a ``count``/``for_each`` key."""
    if index_key is None:
        return ""
    if isinstance(index_key, str):
        return f'["{index_key}"]'
    return f"[{index_key}]"


def resource_address(
    resource_type: str,
    name: str,
    module: Optional[str] = None,
    index_key: Any = None,
) -> str:
    """Build the Terraform address used as the resource id.

    Example::

        resource_address("aws_subnet", "private", "module.network", 0)
        # -> 'module.network.aws_subnet.private[0]'
    """
    address = f"{resource_type}.{name}"
    if module:
        address = f"{module}.{address}"
    return address + index_suffix(index_key)


# -- Extraction --------------------------------------------------------------


def extract_resources(
    document: Mapping[str, Any], *, redact: bool = True
) -> ExtractionResult:
    """Extract managed resources from a decoded state document.

    Args:
        document: Decoded state JSON (see :func:`parse_state_text`).
        redact: Mask secret-looking attribute values.

    Returns:
        An :class:`ExtractionResult` with resources in state order.
    """
    result = ExtractionResult()

    values = document.get("values")
    if isinstance(values, Mapping):
        root_module = values.get("root_module")
        if root_module is None:
            records = iter(())
        elif isinstance(root_module, Mapping):
            records = _iter_show_json(root_module, result.warnings)
        else:
            result.warnings.append(
                "State 'root_module' is not an object; no resources extracted."
            )
            records = iter(())
    elif "resources" in document:
        version = document.get("version")
        if version is not None and version != SUPPORTED_STATE_VERSION:
            result.warnings.append(
                f"State format version {version} is not supported; "
                f"parsing as version {SUPPORTED_STATE_VERSION}."
            )
        records = _iter_state_v4(document.get("resources"), result.warnings)
    else:
        records = iter(())

    seen: set[str] = set()
    for address, resource_type, name, index_key, attributes, dependencies in records:
        if address in seen:
            result.warnings.append(
                f"Duplicate resource id '{address}'; the later instance replaces the earlier one."
            )
        seen.add(address)

        tags = extract_tags(attributes)
        result.resources.append(
            Resource(
                id=address,
                type=resource_type,
                name=name,
                display_name=display_name_for(
                    name + index_suffix(index_key), attributes, tags
                ),
                attributes=redact_attributes(attributes) if redact else dict(attributes),
                dependencies=[dep for dep in dependencies if isinstance(dep, str)],
                tags=tags,
            )
        )

    if not result.resources:
        result.warnings.append("No managed resources found in state file.")

    logger.debug(
        "Extracted %d resources with %d warnings",
        len(result.resources),
        len(result.warnings),
        extra={"action": "extract"},
    )
    return result


_Record = tuple[str, str, str, Any, Mapping[str, Any], list[Any]]


def _iter_state_v4(entries: Any, warnings: list[str]) -> Iterator[_Record]:
    """Yield one record per instance of every managed v4 resource."""
    if not isinstance(entries, list):
        warnings.append("State 'resources' is not a list; no resources extracted.")
        return

    for entry in entries:
        if not isinstance(entry, Mapping):
            warnings.append("Skipping resource entry that is not an object.")
            continue
        if entry.get("mode", "managed") != "managed":
            continue

        resource_type = entry.get("type")
        name = entry.get("name")
        if not isinstance(resource_type, str) or not isinstance(name, str):
            warnings.append("Skipping resource without a type or name.")
            continue

        module = entry.get("module") if isinstance(entry.get("module"), str) else None
        instances = entry.get("instances")
        if not isinstance(instances, list) or not instances:
            warnings.append(
                f"Resource '{resource_address(resource_type, name, module)}' has no instances."
            )
            continue

        for instance in instances:
            instance = instance if isinstance(instance, Mapping) else {}
            index_key = instance.get("index_key")
            address = resource_address(resource_type, name, module, index_key)
            attributes = instance.get("attributes")
            if not isinstance(attributes, Mapping):
                warnings.append(
                    f"Resource '{address}' has attributes that are not an object; skipped."
                )
                continue
            dependencies = instance.get("dependencies")
            yield (
                address,
                resource_type,
                name,
                index_key,
                attributes,
                dependencies if isinstance(dependencies, list) else [],
            )


def _iter_show_json(module: Mapping[str, Any], warnings: list[str]) -> Iterator[_Record]:
    """Yield records from a ``terraform show -json`` module, depth first."""
    label = module.get("address") if isinstance(module.get("address"), str) else "root"

    entries = module.get("resources")
    if entries is not None and not isinstance(entries, list):
        warnings.append(f"Module '{label}' has 'resources' that is not a list; skipped.")
        entries = None

    for entry in entries or []:
        if not isinstance(entry, Mapping):
            warnings.append("Skipping resource entry that is not an object.")
            continue
        if entry.get("mode", "managed") != "managed":
            continue

        resource_type = entry.get("type")
        name = entry.get("name")
        if not isinstance(resource_type, str) or not isinstance(name, str):
            warnings.append("Skipping resource without a type or name.")
            continue

        index_key = entry.get("index")
        address = entry.get("address")
        if not isinstance(address, str) or not address:
            address = resource_address(resource_type, name, None, index_key)

        attributes = entry.get("values")
        if not isinstance(attributes, Mapping):
            warnings.append(
                f"Resource '{address}' has attributes that are not an object; skipped."
            )
            continue
        dependencies = entry.get("depends_on")
        yield (
            address,
            resource_type,
            name,
            index_key,
            attributes,
            dependencies if isinstance(dependencies, list) else [],
        )

    children = module.get("child_modules")
    if children is not None and not isinstance(children, list):
        warnings.append(
            f"Module '{label}' has 'child_modules' that is not a list; skipped."
        )
        children = None

    for child in children or []:
        if isinstance(child, Mapping):
            yield from _iter_show_json(child, warnings)
        else:
            warnings.append(f"Skipping child module of '{label}' that is not an object.")
