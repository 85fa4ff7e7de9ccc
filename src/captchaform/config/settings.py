from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

from .env import SITEVERIFY_URL


@dataclass(frozen=True)
class RecaptchaSettings:
    """reCAPTCHA configuration resolved once when the app is created."""

    site_key: str
    # Never rendered, never logged
    secret_key: str = field(repr=False)
    version: str = "v2"
    verify_url: str = SITEVERIFY_URL
    timeout: float = 5.0
    min_score: Optional[float] = None

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "RecaptchaSettings":
        min_score = config.get("RECAPTCHA_MIN_SCORE")
        return cls(
            site_key=config.get("RECAPTCHA_SITE_KEY") or "",
            secret_key=config.get("RECAPTCHA_SECRET_KEY") or "",
            version=(config.get("RECAPTCHA_VERSION") or "v2").lower(),
            verify_url=config.get("RECAPTCHA_VERIFY_URL") or SITEVERIFY_URL,
            timeout=float(config.get("RECAPTCHA_TIMEOUT") or 5.0),
            min_score=float(min_score) if min_score not in (None, "") else None,
        )
