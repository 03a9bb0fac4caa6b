# src/drupalfront/config.py
"""
Settings for the Drupal mirror and the contact relay.

Everything comes from the environment (a .env file is loaded by the CLI with
python-dotenv). Build one Settings at startup and pass it down; nothing in
the package reads os.environ on its own.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_SUBJECT_PREFIX = "[Contact]"
VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


class ConfigurationError(RuntimeError):
    """A required setting is missing."""


@dataclass(frozen=True)
class Settings:
    # Drupal site root (used for relative file URLs and alias lookups)
    drupal_base_url: Optional[str] = None
    # JSON:API root, e.g. https://cms.example.com/jsonapi
    drupal_api_base: Optional[str] = None

    turnstile_secret_key: Optional[str] = None
    turnstile_site_key: Optional[str] = None

    resend_api_key: Optional[str] = None
    contact_to_email: Optional[str] = None    # comma-separated recipients
    contact_from_email: Optional[str] = None  # must be verified in Resend
    contact_subject_prefix: str = DEFAULT_SUBJECT_PREFIX

    log_level: str = "INFO"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        """Read settings from a mapping (defaults to os.environ). Blank values count as unset."""
        env = os.environ if env is None else env

        def get(name: str) -> Optional[str]:
            value = (env.get(name) or "").strip()
            return value or None

        return cls(
            drupal_base_url=get("DRUPAL_BASE_URL"),
            drupal_api_base=get("DRUPAL_API_BASE"),
            turnstile_secret_key=get("TURNSTILE_SECRET_KEY"),
            turnstile_site_key=get("TURNSTILE_SITE_KEY"),
            resend_api_key=get("RESEND_API_KEY"),
            contact_to_email=get("CONTACT_TO_EMAIL"),
            contact_from_email=get("CONTACT_FROM_EMAIL"),
            contact_subject_prefix=get("CONTACT_SUBJECT_PREFIX") or DEFAULT_SUBJECT_PREFIX,
            log_level=(get("LOG_LEVEL") or "INFO").upper(),
        )

    @property
    def drupal_configured(self) -> bool:
        return bool(self.drupal_base_url and self.drupal_api_base)

    def require_drupal(self) -> None:
        """Raise ConfigurationError unless both Drupal URLs are set."""
        if not self.drupal_configured:
            raise ConfigurationError(
                f"Missing env. DRUPAL_BASE_URL={self.drupal_base_url!s} "
                f"DRUPAL_API_BASE={self.drupal_api_base!s}"
            )


def configure_logging(level: str = "INFO") -> None:
    """Attach a stream handler to the package logger at the given level."""
    level_upper = level.upper()
    if level_upper not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Invalid log level: {level}. Valid: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))

    pkg_logger = logging.getLogger("drupalfront")
    pkg_logger.setLevel(level_upper)
    # replace instead of stacking handlers on repeated calls
    pkg_logger.handlers = [handler]
