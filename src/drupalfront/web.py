# src/drupalfront/web.py
"""
FastAPI surface for the contact form.

    uvicorn drupalfront.web:create_app --factory   # settings from the environment
    drupalfront serve                              # same, via the CLI (loads .env)
"""

from __future__ import annotations

import logging
from typing import Optional

import httpx
from fastapi import APIRouter, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from drupalfront.config import Settings
from drupalfront.contact import rejected, relay_contact

logger = logging.getLogger(__name__)

router = APIRouter()

CONTACT_FORM_PATH = "/contact"


@router.get("/health")
def health_check() -> dict:
    return {"status": "healthy", "service": "drupalfront"}


@router.post("/api/contact")
async def contact(request: Request) -> RedirectResponse:
    """Always answers with a 303 back to the form page."""
    try:
        form = await request.form()
    except StarletteHTTPException as e:
        # malformed body (e.g. multipart without a boundary)
        logger.info("unreadable contact form: %s", e.detail)
        return RedirectResponse(rejected("form").redirect_url(CONTACT_FORM_PATH), status_code=303)
    settings: Settings = request.app.state.settings
    http: Optional[httpx.Client] = getattr(request.app.state, "http", None)
    client_ip = request.client.host if request.client else None

    # relay does blocking I/O
    outcome = await run_in_threadpool(
        relay_contact, form, settings, client_ip=client_ip, http=http
    )
    return RedirectResponse(outcome.redirect_url(CONTACT_FORM_PATH), status_code=303)


def create_app(settings: Optional[Settings] = None, http: Optional[httpx.Client] = None) -> FastAPI:
    """Build the app. `http` is shared by outbound calls when given (tests pass a mock)."""
    application = FastAPI(title="drupalfront")
    application.state.settings = settings or Settings.from_env()
    application.state.http = http
    application.include_router(router)
    return application
