# src/drupalfront/contact.py
"""
Contact form relay: honeypot -> field checks -> Turnstile -> Resend.

Each gate is final: the first one that fails decides the outcome, and every
outcome (including success) becomes a redirect back to the form with either
`sent=1` or `error=<code>` in the query string.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Mapping, Optional
from urllib.parse import urlencode

import httpx

from drupalfront.clients.resend import SendError, send_email, split_recipients
from drupalfront.clients.turnstile import VerifyUnavailable, verify_token
from drupalfront.config import Settings

logger = logging.getLogger(__name__)

TURNSTILE_FIELD = "cf-turnstile-response"
HONEYPOT_FIELD = "website"

MIN_NAME_LEN = 2
MIN_MESSAGE_LEN = 10

# deliberately loose: something@something.tld
_EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def is_valid_email(value: str) -> bool:
    return bool(_EMAIL_RE.match(value))


@dataclass(frozen=True)
class ContactOutcome:
    sent: bool
    error: Optional[str] = None   # machine-readable code when not sent
    delivered: bool = False       # False for honeypot hits, which look sent but are not

    def redirect_url(self, form_path: str = "/contact") -> str:
        query = {"sent": "1"} if self.sent else {"error": self.error or "unknown"}
        return f"{form_path}?{urlencode(query)}"


SENT = ContactOutcome(sent=True, delivered=True)
ABSORBED = ContactOutcome(sent=True)


def rejected(code: str) -> ContactOutcome:
    return ContactOutcome(sent=False, error=code)


def _missing_config(settings: Settings) -> Optional[str]:
    if not settings.turnstile_secret_key:
        return "turnstile_secret"
    if not settings.resend_api_key:
        return "resend_key"
    if not settings.contact_to_email:
        return "to_missing"
    if not settings.contact_from_email:
        return "from_missing"
    return None


def _field(form: Mapping[str, object], name: str) -> str:
    value = form.get(name)
    return str(value).strip() if value is not None else ""


def compose_message(name: str, email: str, message: str) -> str:
    return f"Name: {name}\nEmail: {email}\n\nMessage:\n{message}\n"


def relay_contact(
    form: Mapping[str, object],
    settings: Settings,
    *,
    client_ip: Optional[str] = None,
    http: Optional[httpx.Client] = None,
) -> ContactOutcome:
    """
    Run one submission through every gate and, if it survives, email it.

    `form` is any mapping of field name -> value (a Starlette FormData works).
    `http` is used for both Turnstile and Resend; one is created if omitted.
    """
    code = _missing_config(settings)
    if code:
        logger.error("contact relay not configured: %s", code)
        return rejected(code)

    if _field(form, HONEYPOT_FIELD):
        logger.info("honeypot filled; dropping submission")
        return ABSORBED

    name = _field(form, "name")
    email = _field(form, "email")
    message = _field(form, "message")
    token = _field(form, TURNSTILE_FIELD)

    if len(name) < MIN_NAME_LEN:
        return rejected("name")
    if not is_valid_email(email):
        return rejected("email")
    if len(message) < MIN_MESSAGE_LEN:
        return rejected("message")
    if not token:
        return rejected("turnstile")

    owns_http = http is None
    http = http or httpx.Client()
    try:
        try:
            human = verify_token(http, settings.turnstile_secret_key, token, client_ip)
        except VerifyUnavailable as e:
            logger.warning("turnstile verification unavailable: %s", e)
            return rejected("turnstile_verify")
        if not human:
            return rejected("turnstile_fail")

        try:
            send_email(
                http,
                settings.resend_api_key,
                sender=settings.contact_from_email,
                to=split_recipients(settings.contact_to_email),
                subject=f"{settings.contact_subject_prefix} {name}",
                text=compose_message(name, email, message),
                reply_to=email,
            )
        except SendError as e:
            logger.warning("contact email not sent: %s", e)
            return rejected("send")
    finally:
        if owns_http:
            http.close()

    logger.info("contact message relayed")
    return SENT
