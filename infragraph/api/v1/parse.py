"""
State parsing endpoints.

Both endpoints converge on the same pipeline: decode the raw state text,
extract resources, and assemble the laid-out graph.  They differ only in
transport -- a multipart file upload or a JSON body carrying the state as
a string.
"""

from __future__ import annotations

from typing import Union

from fastapi import APIRouter, Depends, HTTPException, status

from infragraph.api.deps import ensure_within_limit, read_state_upload
from infragraph.api.schemas.graph import ParseResponse
from infragraph.api.schemas.parse import RawParseRequest
from infragraph.config import Settings, get_settings
from infragraph.core.logging import get_logger
from infragraph.engine.graph import build_graph
from infragraph.extractor.tfstate import StateParseError, parse_state_text

logger = get_logger(__name__)

router = APIRouter()

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _parse_state(
    raw: Union[str, bytes], source: str, settings: Settings
) -> ParseResponse:
    """Run the full pipeline over raw state text.

    Args:
        raw: State file contents.
        source: Where the state came from (file name or ``"raw"``), used
            for logging.
        settings: Application settings.

    Returns:
        The serialisable :class:`ParseResponse`.

    Raises:
        HTTPException: *422 Unprocessable Entity* when the text is not a
            JSON object.
    """
    try:
        document = parse_state_text(raw)
    except StateParseError as exc:
        logger.warning(
            "Rejected state file: %s",
            exc,
            extra={"action": "parse_state", "target": source},
        )
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=str(exc),
        ) from exc

    result = build_graph(
        document,
        redact=settings.REDACT_SENSITIVE_ATTRIBUTES,
        source=source,
    )
    return ParseResponse.model_validate(result)


# ---------------------------------------------------------------------------
# POST /parse
# ---------------------------------------------------------------------------


@router.post(
    "",
    response_model=ParseResponse,
    summary="Parse tfstate file (multipart upload)",
)
async def parse_upload(
    upload: tuple[str, bytes] = Depends(read_state_upload),
    settings: Settings = Depends(get_settings),
) -> ParseResponse:
    """Parse an uploaded ``.tfstate`` file into diagram graph data.

    Returns:
        Nodes, edges, resources, and warnings for the uploaded state.
    """
    filename, content = upload
    return _parse_state(content, filename, settings)


# ---------------------------------------------------------------------------
# POST /parse/raw
# ---------------------------------------------------------------------------


@router.post(
    "/raw",
    response_model=ParseResponse,
    summary="Parse raw tfstate JSON",
)
async def parse_raw(
    body: RawParseRequest,
    settings: Settings = Depends(get_settings),
) -> ParseResponse:
    """Parse state content sent as a JSON string.

    Raises:
        HTTPException: *400* for an empty ``tfstate`` string, *413* when
            the content is over the size limit, *422* when it is not a
            JSON object.
    """
    ensure_within_limit(len(body.tfstate.encode("utf-8")), settings)
    if not body.tfstate.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Request body must include a non-empty 'tfstate' string.",
        )
    return _parse_state(body.tfstate, "raw", settings)
