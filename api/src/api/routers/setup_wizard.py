"""Setup wizard API."""
from __future__ import annotations
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, RedirectResponse
from sqlalchemy.ext.asyncio import AsyncSession
from sitekit.wizard import (
    COLOR_PRESETS,
    INDUSTRIES,
    SubmissionHandler,
    SubmissionRejected,
    WizardState,
    WizardStep,
)
from sitekit.wizard.steps import PRODUCT_SCHEMA_INDUSTRY, STEP_TITLES
from sitekit.wizard.validation import BUSINESS_NAME_MIN_LENGTH
from api.dependencies import get_db
from api.services.setup_submission import FormDecodeError, provisioning_request, state_from_form
from api.services.site_config import SiteConfigRepository

router = APIRouter()


def _steps_payload() -> list[dict]:
    return [
        {
            "step": int(step),
            "title": STEP_TITLES[step],
            "only_for_industry": PRODUCT_SCHEMA_INDUSTRY if step == WizardStep.PRODUCT_SCHEMA else None,
        }
        for step in WizardStep
    ]


@router.get("")
async def get_wizard(db: AsyncSession = Depends(get_db)):
    existing = await SiteConfigRepository(db).load()
    if existing is not None and existing.setup_complete:
        return RedirectResponse("/", status_code=302)
    return {
        "steps": _steps_payload(),
        "industries": [{"value": value, "label": label} for value, label in INDUSTRIES],
        "color_presets": [
            {"name": name, "primary_color": primary, "secondary_color": secondary}
            for name, (primary, secondary) in COLOR_PRESETS.items()
        ],
        "defaults": WizardState().to_dict(),
        "business_name_min_length": BUSINESS_NAME_MIN_LENGTH,
    }


@router.post("")
async def submit_wizard(request: Request, db: AsyncSession = Depends(get_db)):
    repository = SiteConfigRepository(db)
    existing = await repository.load()
    if existing is not None and existing.setup_complete:
        return RedirectResponse("/", status_code=302)

    form = await request.form()
    try:
        state = state_from_form(form)
    except FormDecodeError as exc:
        return JSONResponse(status_code=400, content={"error": exc.message, "step": exc.step})

    result = await SubmissionHandler(repository).submit(state)
    if isinstance(result, SubmissionRejected):
        return JSONResponse(
            status_code=result.status_code,
            content={"error": result.message, "step": result.step},
        )
    return RedirectResponse(result.location, status_code=result.status_code)


@router.get("/pending")
async def get_pending(name: str = "", email: str = ""):
    return provisioning_request(name, email)
