"""
Tests for Terraform state extraction.

Validates text decoding, Terraform addressing, version-4 and
``terraform show -json`` documents, and the warnings produced for
malformed records.
"""

from __future__ import annotations

import json

import pytest

from infragraph.extractor.tfstate import (
    StateParseError,
    extract_resources,
    index_suffix,
    parse_state_text,
    resource_address,
)


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------

def test_parse_state_text_accepts_bytes_with_bom() -> None:
    """A UTF-8 byte-order mark is stripped before decoding."""
    raw = "\ufeff" + json.dumps({"version": 4, "resources": []})

    assert parse_state_text(raw.encode("utf-8")) == {"version": 4, "resources": []}


def test_parse_state_text_accepts_str() -> None:
    """Already-decoded text is loaded as JSON."""
    assert parse_state_text('{"version": 4}') == {"version": 4}


@pytest.mark.parametrize(
    ("raw", "message"),
    [
        ("{not json", "not valid JSON"),
        ("[1, 2, 3]", "JSON object"),
        ('"just a string"', "JSON object"),
        (b"\xff\xfe\x00garbage", "UTF-8"),
    ],
)
def test_parse_state_text_rejects_bad_input(raw, message: str) -> None:
    """Undecodable, invalid or non-object input raises StateParseError."""
    with pytest.raises(StateParseError, match=message):
        parse_state_text(raw)


def test_state_parse_error_is_a_value_error() -> None:
    """Callers catching ValueError also catch parse failures."""
    assert issubclass(StateParseError, ValueError)


# ---------------------------------------------------------------------------
# Addressing
# ---------------------------------------------------------------------------

def test_index_suffix() -> None:
    """Numeric keys are bare, string keys are quoted."""
    assert index_suffix(None) == ""
    assert index_suffix(0) == "[0]"
    assert index_suffix("blue") == '["blue"]'


def test_resource_address_with_module_and_index() -> None:
    """Module prefix and index suffix wrap the type.name core."""
    assert resource_address("aws_subnet", "private", "module.network", 1) == (
        "module.network.aws_subnet.private[1]"
    )
    assert resource_address("aws_vpc", "main") == "aws_vpc.main"


# ---------------------------------------------------------------------------
# Version 4 documents
# ---------------------------------------------------------------------------

def test_extracts_managed_resources_in_order(sample_state) -> None:
    """Managed resources keep state order; data sources are dropped."""
    result = extract_resources(sample_state)

    assert result.warnings == []
    assert len(result.resources) == 9
    assert all(r.type != "aws_ami" for r in result.resources)

    subnet = result.resources[1]
    assert subnet.id == "aws_subnet.public"
    assert subnet.type == "aws_subnet"
    assert subnet.name == "public"
    assert subnet.display_name == "public"
    assert subnet.tags == {"Name": "public", "Tier": "web"}
    assert subnet.dependencies == ["aws_vpc.main"]
    assert subnet.attributes["vpc_id"] == "vpc-001"


def test_counted_and_module_resources_get_full_addresses() -> None:
    """count and for_each instances get one resource each with a full address."""
    document = {
        "version": 4,
        "resources": [
            {
                "module": "module.network",
                "mode": "managed",
                "type": "aws_subnet",
                "name": "private",
                "instances": [
                    {"index_key": 0, "attributes": {"id": "subnet-a"}},
                    {"index_key": 1, "attributes": {"id": "subnet-b"}},
                ],
            },
            {
                "mode": "managed",
                "type": "aws_s3_bucket",
                "name": "env",
                "instances": [{"index_key": "prod", "attributes": {"id": "prod-bucket"}}],
            },
        ],
    }

    result = extract_resources(document)

    assert [r.id for r in result.resources] == [
        "module.network.aws_subnet.private[0]",
        "module.network.aws_subnet.private[1]",
        'aws_s3_bucket.env["prod"]',
    ]
    assert result.resources[0].name == "private"
    assert result.resources[0].display_name == "private[0]"


def test_unsupported_version_still_parses_with_warning() -> None:
    """A non-4 version is parsed best-effort and reported."""
    document = {
        "version": 3,
        "resources": [
            {"mode": "managed", "type": "aws_vpc", "name": "main",
             "instances": [{"attributes": {"id": "vpc-1"}}]},
        ],
    }

    result = extract_resources(document)

    assert [r.id for r in result.resources] == ["aws_vpc.main"]
    assert result.warnings == [
        "State format version 3 is not supported; parsing as version 4."
    ]


def test_malformed_entries_are_skipped_with_warnings() -> None:
    """Each malformed entry is skipped with its own warning."""
    document = {
        "version": 4,
        "resources": [
            "not-an-object",
            {"mode": "managed", "name": "no_type", "instances": [{"attributes": {}}]},
            {"mode": "managed", "type": "aws_vpc", "name": "empty", "instances": []},
            {"mode": "managed", "type": "aws_vpc", "name": "bad",
             "instances": [{"attributes": ["id", "vpc-1"]}]},
            {"mode": "managed", "type": "aws_vpc", "name": "good",
             "instances": [{"attributes": {"id": "vpc-2"}, "dependencies": ["x", 5]}]},
        ],
    }

    result = extract_resources(document)

    assert [r.id for r in result.resources] == ["aws_vpc.good"]
    assert result.resources[0].dependencies == ["x"]
    assert result.warnings == [
        "Skipping resource entry that is not an object.",
        "Skipping resource without a type or name.",
        "Resource 'aws_vpc.empty' has no instances.",
        "Resource 'aws_vpc.bad' has attributes that are not an object; skipped.",
    ]


def test_resources_not_a_list() -> None:
    """A non-list resources value yields no resources and a warning."""
    result = extract_resources({"version": 4, "resources": {"oops": True}})

    assert result.resources == []
    assert result.warnings == [
        "State 'resources' is not a list; no resources extracted.",
        "No managed resources found in state file.",
    ]


def test_duplicate_address_is_reported() -> None:
    """A repeated address is kept but reported as a collision."""
    instance = {"attributes": {"id": "vpc-1"}}
    entry = {"mode": "managed", "type": "aws_vpc", "name": "main", "instances": [instance]}

    result = extract_resources({"version": 4, "resources": [entry, entry]})

    assert len(result.resources) == 2
    assert result.warnings == [
        "Duplicate resource id 'aws_vpc.main'; the later instance replaces the earlier one."
    ]


def test_document_without_resources_warns() -> None:
    """A state with no resources section reports that nothing was found."""
    result = extract_resources({"version": 4, "terraform_version": "1.7.0"})

    assert result.resources == []
    assert result.warnings == ["No managed resources found in state file."]


def test_redaction_can_be_disabled(sample_state) -> None:
    """redact=False returns attribute values verbatim."""
    redacted = extract_resources(sample_state)
    raw = extract_resources(sample_state, redact=False)

    db_redacted = next(r for r in redacted.resources if r.id == "aws_db_instance.db")
    db_raw = next(r for r in raw.resources if r.id == "aws_db_instance.db")
    assert db_redacted.attributes["password"] == "(sensitive)"
    assert db_raw.attributes["password"] == "hunter2"


# ---------------------------------------------------------------------------
# terraform show -json documents
# ---------------------------------------------------------------------------

def test_show_json_walks_child_modules() -> None:
    """show -json output is read depth first through child modules."""
    document = {
        "format_version": "1.0",
        "values": {
            "root_module": {
                "resources": [
                    {
                        "address": "aws_vpc.main",
                        "mode": "managed",
                        "type": "aws_vpc",
                        "name": "main",
                        "values": {"id": "vpc-1", "tags": {"Name": "core"}},
                    },
                    {
                        "address": "data.aws_region.current",
                        "mode": "data",
                        "type": "aws_region",
                        "name": "current",
                        "values": {"id": "eu-west-1"},
                    },
                ],
                "child_modules": [
                    {
                        "address": "module.app",
                        "resources": [
                            {
                                "address": "module.app.aws_instance.web[0]",
                                "mode": "managed",
                                "type": "aws_instance",
                                "name": "web",
                                "index": 0,
                                "values": {"id": "i-1", "subnet_id": "subnet-1"},
                                "depends_on": ["aws_vpc.main"],
                            }
                        ],
                    }
                ],
            }
        },
    }

    result = extract_resources(document)

    assert result.warnings == []
    assert [r.id for r in result.resources] == [
        "aws_vpc.main",
        "module.app.aws_instance.web[0]",
    ]
    assert result.resources[0].display_name == "core"
    assert result.resources[1].dependencies == ["aws_vpc.main"]
    assert result.resources[1].display_name == "web[0]"


def test_show_json_without_address_builds_one() -> None:
    """A missing address is rebuilt from type, name and index."""
    document = {
        "values": {
            "root_module": {
                "resources": [
                    {"type": "aws_eip", "name": "nat", "index": 2, "values": {"id": "eip-1"}},
                ]
            }
        }
    }

    result = extract_resources(document)

    assert [r.id for r in result.resources] == ["aws_eip.nat[2]"]


@pytest.mark.parametrize("root_module", [["not", "a", "module"], "oops", 7])
def test_show_json_root_module_not_an_object(root_module) -> None:
    """A root_module that is not an object yields no resources and a warning."""
    result = extract_resources({"values": {"root_module": root_module}})

    assert result.resources == []
    assert result.warnings == [
        "State 'root_module' is not an object; no resources extracted.",
        "No managed resources found in state file.",
    ]


def test_show_json_resources_not_a_list() -> None:
    """A module whose resources value is not a list is skipped, children still read."""
    document = {
        "values": {
            "root_module": {
                "resources": 5,
                "child_modules": [
                    {
                        "address": "module.app",
                        "resources": [
                            {"type": "aws_s3_bucket", "name": "logs", "values": {"id": "logs"}},
                        ],
                    }
                ],
            }
        }
    }

    result = extract_resources(document)

    assert [r.id for r in result.resources] == ["aws_s3_bucket.logs"]
    assert result.warnings == ["Module 'root' has 'resources' that is not a list; skipped."]


def test_show_json_child_modules_not_a_list() -> None:
    """Malformed child_modules values are reported instead of raising."""
    document = {
        "values": {
            "root_module": {
                "resources": [
                    {"type": "aws_vpc", "name": "main", "values": {"id": "vpc-1"}},
                ],
                "child_modules": 7,
            }
        }
    }

    result = extract_resources(document)

    assert [r.id for r in result.resources] == ["aws_vpc.main"]
    assert result.warnings == [
        "Module 'root' has 'child_modules' that is not a list; skipped."
    ]


def test_show_json_child_module_entry_not_an_object() -> None:
    """A non-object entry inside child_modules is skipped with a warning."""
    document = {
        "values": {
            "root_module": {
                "address": "module.net",
                "child_modules": ["module.app"],
            }
        }
    }

    result = extract_resources(document)

    assert result.resources == []
    assert result.warnings == [
        "Skipping child module of 'module.net' that is not an object.",
        "No managed resources found in state file.",
    ]
