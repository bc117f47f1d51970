"""AI copy assistance endpoints used by the wizard and the admin content editor."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sitekit.schemas.copy import CopyAssistRequest, PolishResponse
from sitekit.services.copy_assist import (
    CopyAssistClient,
    CopyAssistError,
    CopyAssistErrorReason,
)

from api.dependencies import get_copy_assist

router = APIRouter()

ERROR_STATUS: dict[CopyAssistErrorReason, int] = {
    CopyAssistErrorReason.INPUT: 400,
    CopyAssistErrorReason.UNAVAILABLE: 503,
    CopyAssistErrorReason.UPSTREAM: 500,
    CopyAssistErrorReason.PARSE: 500,
}


def _error_response(error: CopyAssistError) -> JSONResponse:
    content = {"error": error.message}
    if error.details:
        content["details"] = error.details
    return JSONResponse(status_code=ERROR_STATUS[error.reason], content=content)


async def _json_body(request: Request) -> dict | None:
    try:
        body = await request.json()
    except ValueError:
        return None
    return body if isinstance(body, dict) else None


@router.post("/ai-generate")
async def ai_generate(
    request: Request,
    copy_assist: CopyAssistClient = Depends(get_copy_assist),
):
    body = await _json_body(request)
    if body is None:
        return JSONResponse(status_code=400, content={"error": "Invalid JSON body"})
    try:
        req = CopyAssistRequest.model_validate(body)
    except ValidationError:
        return JSONResponse(status_code=400, content={"error": "Invalid request body"})

    result = await copy_assist.generate(
        req.business_description,
        industry=req.industry,
        business_name=req.business_name,
    )
    if isinstance(result, CopyAssistError):
        return _error_response(result)
    return result.content.model_dump(by_alias=True)


@router.post("/ai-polish")
async def ai_polish(
    request: Request,
    copy_assist: CopyAssistClient = Depends(get_copy_assist),
):
    body = await _json_body(request)
    if body is None:
        return JSONResponse(status_code=400, content={"error": "Invalid JSON body"})

    text = body.get("text")
    result = await copy_assist.polish(text)
    if isinstance(result, CopyAssistError):
        return _error_response(result)
    return PolishResponse(
        polished=result.content,
        original_length=len(text),
        polished_length=len(result.content),
    ).model_dump(by_alias=True)
