"""
app/api/dependencies.py

Shared FastAPI dependencies for request validation.
"""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request, status
from starlette.datastructures import UploadFile

from app.config import IngestionSettings, get_ingestion_settings

UPLOAD_FIELD_NAME = "file"


async def get_price_payload(
    request: Request,
    settings: IngestionSettings = Depends(get_ingestion_settings),
) -> bytes:
    """
    Read the uploaded payload from a multipart ``file`` field or the raw body.

    The whole payload is buffered; anything above ``max_payload_bytes`` is
    rejected before processing.
    """

    content_type = request.headers.get("content-type", "").lower()

    if "multipart/form-data" in content_type:
        form = await request.form()
        upload = form.get(UPLOAD_FIELD_NAME)
        if not isinstance(upload, UploadFile):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Multipart request must include a '{UPLOAD_FIELD_NAME}' file field.",
            )
        try:
            payload = await upload.read()
        finally:
            await upload.close()
    else:
        payload = await request.body()

    if not payload:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Empty request body or file.",
        )
    if len(payload) > settings.max_payload_bytes:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Payload exceeds {settings.max_payload_bytes} bytes.",
        )

    return payload
