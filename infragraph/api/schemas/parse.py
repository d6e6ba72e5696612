"""
Pydantic v2 schemas for parse requests.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class RawParseRequest(BaseModel):
    """Payload for ``POST /api/parse/raw``.

    Attributes:
        tfstate: The raw ``.tfstate`` file content as a JSON string.
    """

    tfstate: str = Field(
        ...,
        description="Raw .tfstate file content as JSON string.",
        examples=['{"version": 4, "resources": []}'],
    )

    model_config = ConfigDict(from_attributes=True)
