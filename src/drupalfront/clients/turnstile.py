# src/drupalfront/clients/turnstile.py
"""Cloudflare Turnstile server-side token check."""

from __future__ import annotations

import logging
from typing import Dict, Optional

import httpx

logger = logging.getLogger(__name__)

SITEVERIFY_URL = "https://challenges.cloudflare.com/turnstile/v0/siteverify"


class VerifyUnavailable(Exception):
    """Siteverify could not give an answer (transport error or non-2xx)."""


def verify_token(
    http: httpx.Client,
    secret: str,
    token: str,
    remote_ip: Optional[str] = None,
) -> bool:
    """
    POST the token to siteverify (form-encoded) and return its `success` flag.

    Raises VerifyUnavailable when Cloudflare cannot be asked or answers non-2xx.
    """
    data: Dict[str, str] = {"secret": secret, "response": token}
    if remote_ip:
        data["remoteip"] = remote_ip

    try:
        resp = http.post(SITEVERIFY_URL, data=data)
    except httpx.HTTPError as e:
        raise VerifyUnavailable(str(e)) from e
    if not resp.is_success:
        raise VerifyUnavailable(f"siteverify returned {resp.status_code}")

    try:
        body = resp.json()
    except ValueError as e:
        raise VerifyUnavailable("siteverify returned non-JSON") from e

    if not isinstance(body, dict) or not body.get("success"):
        codes = body.get("error-codes") if isinstance(body, dict) else None
        logger.info("turnstile rejected token: %s", codes)
        return False
    return True
