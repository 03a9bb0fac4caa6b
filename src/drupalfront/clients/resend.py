# src/drupalfront/clients/resend.py
"""
Send plain-text mail through Resend's HTTP API.

Only what the contact form needs: one POST, bearer auth, no attachments.
"""

from __future__ import annotations

import logging
from typing import Dict, List

import httpx

logger = logging.getLogger(__name__)

EMAILS_URL = "https://api.resend.com/emails"


class SendError(Exception):
    """Resend did not accept the message."""


def split_recipients(raw: str) -> List[str]:
    """'a@x.com, b@y.com' -> ['a@x.com', 'b@y.com']"""
    return [part.strip() for part in raw.split(",") if part.strip()]


def send_email(
    http: httpx.Client,
    api_key: str,
    *,
    sender: str,
    to: List[str],
    subject: str,
    text: str,
    reply_to: str,
) -> Dict:
    """
    Send one message. Returns Resend's JSON (it carries the message id).

    Raises SendError on transport failure or a non-2xx answer.
    """
    payload = {
        "from": sender,
        "to": to,
        "subject": subject,
        "text": text,
        "reply_to": reply_to,
    }
    headers = {"Authorization": f"Bearer {api_key}"}

    try:
        resp = http.post(EMAILS_URL, json=payload, headers=headers)
    except httpx.HTTPError as e:
        raise SendError(str(e)) from e
    if not resp.is_success:
        raise SendError(f"resend returned {resp.status_code}: {resp.text[:200]}")

    try:
        return resp.json()
    except ValueError:
        return {}
