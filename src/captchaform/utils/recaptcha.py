"""Server-side verification of reCAPTCHA tokens (v2 checkbox and v3 score)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from ..config.env import SITEVERIFY_URL
from .logging_config import get_logger, redact_payload

logger = get_logger(__name__)


class RecaptchaError(Exception):
    """Base class for errors raised while verifying a reCAPTCHA token."""


class RecaptchaUnavailableError(RecaptchaError):
    """The verification service could not give a usable answer.

    Raised for transport failures, timeouts and non-2xx responses.  The token
    itself may be perfectly valid, so callers should ask the user to retry.
    """

    def __init__(self, message, original_exception=None):
        super().__init__(message)
        self.message = message
        self.original_exception = original_exception


class RecaptchaResponseError(RecaptchaUnavailableError):
    """The service answered, but not with a JSON body holding a boolean ``success``."""


@dataclass
class VerificationResult:
    success: bool
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def score(self) -> Optional[float]:
        score = self.metadata.get("score")
        if isinstance(score, bool) or not isinstance(score, (int, float)):
            return None
        return float(score)

    @property
    def action(self) -> Optional[str]:
        return self.metadata.get("action")

    @property
    def hostname(self) -> Optional[str]:
        return self.metadata.get("hostname")

    @property
    def error_codes(self) -> List[str]:
        return list(self.metadata.get("error-codes") or [])

    @classmethod
    def from_json(cls, data: Any) -> "VerificationResult":
        """Build a result from a decoded ``siteverify`` body.

        ``success`` must be present and boolean; ``{"success": "false"}`` or a
        missing key is a malformed response, not a failed verification.
        """
        if not isinstance(data, dict):
            raise RecaptchaResponseError(f"Expected a JSON object, got {type(data).__name__}")
        if "success" not in data:
            raise RecaptchaResponseError("Verification response has no 'success' field")
        success = data["success"]
        if not isinstance(success, bool):
            raise RecaptchaResponseError(
                f"Verification response 'success' is not a boolean: {success!r}"
            )
        metadata = {k: v for k, v in data.items() if k != "success"}
        return cls(success=success, metadata=metadata)


class RecaptchaClient:
    """Redeem reCAPTCHA tokens against Google's ``siteverify`` endpoint.

    Args:
        secret_key: The private reCAPTCHA key. Only ever sent to ``verify_url``.
        verify_url: Endpoint to POST to.
        timeout: Seconds to wait for the service before giving up.
        session: Optional ``requests.Session``; plain ``requests.post`` is used
            when omitted.
    """

    def __init__(self, secret_key: str, verify_url: str = SITEVERIFY_URL,
                 timeout: float = 5.0, session: Optional[requests.Session] = None):
        if not secret_key:
            raise ValueError("reCAPTCHA secret key missing")
        self.secret_key = secret_key
        self.verify_url = verify_url
        self.timeout = timeout
        self.session = session

    @classmethod
    def from_settings(cls, settings, session=None) -> "RecaptchaClient":
        return cls(
            settings.secret_key,
            verify_url=settings.verify_url,
            timeout=settings.timeout,
            session=session,
        )

    def verify(self, token: str, remote_ip: Optional[str] = None) -> VerificationResult:
        """Verify a token with a single form-encoded POST.

        Raises:
            RecaptchaUnavailableError: transport error, timeout or HTTP error.
            RecaptchaResponseError: the body is not JSON or lacks a boolean
                ``success``.
        """
        payload = {"secret": self.secret_key, "response": token}
        if remote_ip:
            payload["remoteip"] = remote_ip
        logger.debug("Calling reCAPTCHA siteverify", extra={"payload": redact_payload(payload)})

        post = self.session.post if self.session is not None else requests.post
        try:
            response = post(self.verify_url, data=payload, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("reCAPTCHA verification request failed: %s", e)
            raise RecaptchaUnavailableError("reCAPTCHA service unavailable", e) from e

        try:
            data = response.json()
        except ValueError as e:
            logger.error("reCAPTCHA verification returned a non-JSON body")
            raise RecaptchaResponseError("reCAPTCHA response is not valid JSON", e) from e

        result = VerificationResult.from_json(data)
        logger.info(
            "reCAPTCHA verification completed",
            extra={
                "success": result.success,
                "score": result.score,
                "error_codes": result.error_codes,
                "hostname": result.hostname,
            },
        )
        return result
