# src/drupalfront/clients/drupal.py

"""
Small client for Drupal's JSON:API and path router.

Design goals:
- Keep all HTTP details here (URLs, headers, status handling).
- Return raw JSON (dict); normalization happens in drupalfront.pipeline.
- No retries and no caching: one call, one request.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from drupalfront.config import Settings

logger = logging.getLogger(__name__)

JSONAPI_ACCEPT = "application/vnd.api+json"


class DrupalError(Exception):
    """Base class for errors talking to Drupal."""


class RequestError(DrupalError):
    """Drupal answered with a non-success status."""

    def __init__(self, status: int, path: str):
        self.status = status
        self.path = path
        super().__init__(f"JSON:API {status}: {path}")


# ---- Internal helpers ---------------------------------------------------------

def as_base_url(raw: str) -> str:
    """Guarantee exactly one trailing slash so relative joins keep the last segment."""
    return raw.rstrip("/") + "/"


def _default_headers() -> Dict[str, str]:
    return {"Accept": JSONAPI_ACCEPT, "User-Agent": "drupalfront/0.1"}


# ---- Public API ---------------------------------------------------------------

class DrupalClient:
    """
    Wraps one httpx.Client bound to the configured Drupal site.

    Pass `http` to share or mock a client (tests use httpx.MockTransport);
    otherwise one is created and closed with the DrupalClient.
    """

    def __init__(self, settings: Settings, http: Optional[httpx.Client] = None):
        settings.require_drupal()
        self.base_url = as_base_url(settings.drupal_base_url)
        self.api_base = as_base_url(settings.drupal_api_base)
        self._owns_http = http is None
        self._http = http or httpx.Client()

    def __enter__(self) -> "DrupalClient":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def url_for(self, path: str) -> str:
        # "node/work" and "/node/work" both land under the API base;
        # absolute links (e.g. from the router) are used as given
        if path.startswith(("http://", "https://")):
            return path
        return self.api_base + path.lstrip("/")

    def api(self, path: str, params: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
        """
        GET a JSON:API path relative to the API base and return the decoded body.

        Raises RequestError on a non-2xx status; transport failures surface as
        httpx.HTTPError.
        """
        url = self.url_for(path)
        logger.debug("GET %s params=%s", url, params)
        resp = self._http.get(url, params=params or {}, headers=_default_headers())
        if not resp.is_success:
            raise RequestError(resp.status_code, httpx.URL(url).path)
        return resp.json()

    def resolve_alias(self, alias: str) -> Optional[Dict[str, Any]]:
        """
        Ask Drupal's router which entity sits behind a path alias.

        Returns None when the router says no (unknown paths are normal here).
        """
        url = self.base_url + "router/translate-path"
        resp = self._http.get(url, params={"path": alias})
        if not resp.is_success:
            logger.info("alias %s not resolved (%s)", alias, resp.status_code)
            return None
        return resp.json()
