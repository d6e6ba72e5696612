"""
Shared pytest fixtures for the InfraGraph test suite.

Provides a resource factory for engine tests, a realistic Terraform state
document, and a FastAPI test application wired to an ``httpx.AsyncClient``
with the settings dependency overridden.
"""

from __future__ import annotations

from typing import Any, AsyncGenerator, Callable, Optional

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from infragraph.config import Settings, get_settings
from infragraph.models import Resource


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------

@pytest.fixture()
def make_resource() -> Callable[..., Resource]:
    """Return a factory that builds a :class:`Resource` from a Terraform address.

    Example::

        vpc = make_resource("aws_vpc.main", id="vpc-001")
    """

    def _make(
        address: str,
        dependencies: Optional[list[str]] = None,
        **attributes: Any,
    ) -> Resource:
        resource_type, name = address.split(".", 1)
        return Resource(
            id=address,
            type=resource_type,
            name=name,
            display_name=name,
            attributes=attributes,
            dependencies=dependencies or [],
        )

    return _make


@pytest.fixture()
def sample_state() -> dict[str, Any]:
    """Return a realistic version-4 state document.

    Layout of the described infrastructure::

        aws_vpc.main (vpc-001)
        ├── aws_subnet.public (subnet-pub)
        │   └── aws_instance.web            -> secured by aws_security_group.web
        ├── aws_subnet.private (subnet-priv)
        │   └── aws_db_subnet_group.default
        ├── aws_internet_gateway.gw
        └── aws_security_group.web
        aws_db_instance.db                  -> secured by aws_security_group.web
        aws_s3_bucket.assets
    """

    def managed(
        resource_type: str,
        name: str,
        attributes: dict[str, Any],
        dependencies: Optional[list[str]] = None,
    ) -> dict[str, Any]:
        instance: dict[str, Any] = {"schema_version": 0, "attributes": attributes}
        if dependencies:
            instance["dependencies"] = dependencies
        return {
            "mode": "managed",
            "type": resource_type,
            "name": name,
            "provider": 'provider["registry.terraform.io/hashicorp/aws"]',
            "instances": [instance],
        }

    return {
        "version": 4,
        "terraform_version": "1.7.5",
        "serial": 12,
        "lineage": "3f1c2a9e-0d4b-4c55-9d7e-1a2b3c4d5e6f",
        "outputs": {},
        "resources": [
            managed(
                "aws_vpc", "main",
                {"id": "vpc-001", "cidr_block": "10.0.0.0/16", "tags": {"Name": "main-vpc"}},
            ),
            managed(
                "aws_subnet", "public",
                {
                    "id": "subnet-pub",
                    "vpc_id": "vpc-001",
                    "cidr_block": "10.0.1.0/24",
                    "tags": {"Name": "public", "Tier": "web"},
                },
                ["aws_vpc.main"],
            ),
            managed(
                "aws_subnet", "private",
                {"id": "subnet-priv", "vpc_id": "vpc-001", "cidr_block": "10.0.2.0/24"},
                ["aws_vpc.main"],
            ),
            managed("aws_internet_gateway", "gw", {"id": "igw-001", "vpc_id": "vpc-001"}),
            managed(
                "aws_security_group", "web",
                {"id": "sg-web", "vpc_id": "vpc-001", "name": "web-sg"},
            ),
            managed(
                "aws_instance", "web",
                {
                    "id": "i-001",
                    "subnet_id": "subnet-pub",
                    "vpc_security_group_ids": ["sg-web"],
                    "instance_type": "t3.micro",
                    "tags": {"Name": "web-server"},
                },
                ["aws_subnet.public", "aws_security_group.web"],
            ),
            managed(
                "aws_db_instance", "db",
                {
                    "id": "db-001",
                    "identifier": "app-db",
                    "vpc_security_group_ids": ["sg-web"],
                    "password": "hunter2",
                },
            ),
            managed(
                "aws_db_subnet_group", "default",
                {"id": "default", "subnet_ids": ["subnet-gone", "subnet-priv"]},
            ),
            managed("aws_s3_bucket", "assets", {"id": "assets-bucket", "bucket": "assets-bucket"}),
            {
                "mode": "data",
                "type": "aws_ami",
                "name": "ubuntu",
                "instances": [{"attributes": {"id": "ami-123"}}],
            },
        ],
    }


# ---------------------------------------------------------------------------
# FastAPI application with settings override
# ---------------------------------------------------------------------------

@pytest.fixture()
def test_settings() -> Settings:
    """Settings with a small upload limit so size checks are cheap to hit."""
    return Settings(MAX_UPLOAD_BYTES=64 * 1024, REDACT_SENSITIVE_ATTRIBUTES=True)


@pytest_asyncio.fixture()
async def test_app(test_settings: Settings):
    """Return the FastAPI application with the settings dependency overridden."""
    from infragraph.main import create_app

    app = create_app()
    app.dependency_overrides[get_settings] = lambda: test_settings

    yield app

    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def client(test_app) -> AsyncGenerator[AsyncClient, None]:
    """Yield an httpx.AsyncClient wired to the test FastAPI app."""
    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
