"""
Shared FastAPI dependency functions for the InfraGraph API.

Provides settings injection and the request validation helpers reused by
the parse endpoints.
"""

from __future__ import annotations

from typing import Optional

from fastapi import Depends, File, HTTPException, UploadFile, status

from infragraph.config import Settings, get_settings


def ensure_within_limit(size: int, settings: Settings) -> None:
    """Raise *413* when a payload exceeds ``settings.MAX_UPLOAD_BYTES``.

    Raises:
        HTTPException: *413 Request Entity Too Large* if *size* is over the
            configured limit.
    """
    if size > settings.MAX_UPLOAD_BYTES:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=(
                f"State file exceeds the maximum size of "
                f"{settings.MAX_UPLOAD_BYTES} bytes."
            ),
        )


async def read_state_upload(
    tfstate: Optional[UploadFile] = File(
        default=None, description="A .tfstate file."
    ),
    settings: Settings = Depends(get_settings),
) -> tuple[str, bytes]:
    """Read the uploaded state file or raise.

    At most ``MAX_UPLOAD_BYTES + 1`` bytes are read so an oversized upload
    is rejected without buffering all of it.

    Usage::

        @router.post("")
        async def parse_upload(
            upload: tuple[str, bytes] = Depends(read_state_upload),
        ) -> ParseResponse:
            ...

    Returns:
        A ``(filename, content)`` tuple.

    Raises:
        HTTPException: *400 Bad Request* if no file (or an empty file) was
            uploaded, *413* if it is too large.
    """
    if tfstate is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No file uploaded. Send the state file in the 'tfstate' form field.",
        )

    try:
        content = await tfstate.read(settings.MAX_UPLOAD_BYTES + 1)
    finally:
        await tfstate.close()

    ensure_within_limit(len(content), settings)
    if not content.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Uploaded state file is empty.",
        )
    return tfstate.filename or "upload.tfstate", content
