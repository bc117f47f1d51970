"""Transactional email endpoint."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_db
from api.services.email_service import (
    EmailNotConfiguredError,
    EmailSendError,
    load_email_config,
    send_email,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/send-email")
async def post_send_email(request: Request, db: AsyncSession = Depends(get_db)):
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        return JSONResponse(status_code=400, content={"error": "Invalid JSON body"})

    to = str(body.get("to") or "").strip()
    subject = str(body.get("subject") or "").strip()
    html_body = str(body.get("html") or "")
    if not to or not subject or not html_body.strip():
        return JSONResponse(
            status_code=400, content={"error": "Missing required fields: to, subject, html"}
        )

    config = await load_email_config(db, include_secret_key=True)
    try:
        message_id = await send_email(
            api_key=config["api_key"],
            to=to,
            subject=subject,
            html_body=html_body,
            from_email=str(body.get("from") or "").strip() or config["from_email"] or None,
        )
    except EmailNotConfiguredError:
        return JSONResponse(
            status_code=503,
            content={"error": "Resend not configured. Set the API key in the admin email settings."},
        )
    except EmailSendError as exc:
        logger.error("Email send error: %s", exc)
        return JSONResponse(status_code=500, content={"error": "Failed to send email"})
    return {"success": True, "id": message_id}
