"""Validate, verify and store one form submission.

``SubmissionHandler.handle`` runs a single linear pass:

1. shape validation (``SubmissionForm``),
2. one call to the reCAPTCHA verification client,
3. one append to the record store,

and always returns an ``Outcome`` value. It never flashes, redirects or
renders; the caller decides how an outcome is presented.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Optional, Union

from .forms import SubmissionForm
from .store import RecordStoreError, SubmissionRecord
from ..utils.logging_config import get_logger
from ..utils.recaptcha import RecaptchaUnavailableError

logger = get_logger(__name__)

SUCCESS_MESSAGE = "Data saved successfully!"
VERIFICATION_FAILED = "verification failed"


def _text(value):
    """Keep strings only; JSON numbers, lists and objects become missing fields."""
    return value if isinstance(value, str) else None


@dataclass(frozen=True)
class SubmissionRequest:
    name: Optional[str]
    email: Optional[str]
    verification_token: Optional[str]
    remote_ip: Optional[str] = None

    @classmethod
    def from_form(cls, form, remote_ip=None) -> "SubmissionRequest":
        """Build a request from posted form fields (``g-recaptcha-response`` for the token)."""
        token = _text(form.get('g-recaptcha-response')) or _text(form.get('verification_token'))
        return cls(
            name=_text(form.get('name')),
            email=_text(form.get('email')),
            verification_token=token.strip() if token else None,
            remote_ip=remote_ip,
        )


@dataclass(frozen=True)
class Accepted:
    name: str
    email: str
    record_id: int
    message: str = SUCCESS_MESSAGE
    ok = True
    kind = "accepted"


@dataclass(frozen=True)
class Rejected:
    name: Optional[str]
    email: Optional[str]
    errors: Dict[str, str] = field(default_factory=dict)
    ok = False
    kind = "rejected"


@dataclass(frozen=True)
class VerificationUnavailable:
    name: Optional[str]
    email: Optional[str]
    reason: str = ""
    ok = False
    kind = "verification_unavailable"


@dataclass(frozen=True)
class PersistenceFailed:
    name: Optional[str]
    email: Optional[str]
    reason: str = ""
    ok = False
    kind = "persistence_failed"


Outcome = Union[Accepted, Rejected, VerificationUnavailable, PersistenceFailed]


class SubmissionHandler:
    """Orchestrate validation, CAPTCHA verification and persistence.

    Args:
        client: Object with ``verify(token, remote_ip=None) -> VerificationResult``.
        store: Object with ``append(SubmissionRecord) -> int``.
        min_score: Optional reCAPTCHA v3 threshold. When set, a successful
            verification without a score, or with a lower one, is rejected.
    """

    def __init__(self, client, store, min_score: Optional[float] = None):
        self.client = client
        self.store = store
        self.min_score = min_score

    def handle(self, request: SubmissionRequest) -> Outcome:
        form = SubmissionForm(data={
            'name': _text(request.name),
            'email': _text(request.email),
            'verification_token': _text(request.verification_token),
        })
        if not form.validate():
            errors = form.first_errors()
            logger.info("Submission rejected by validation", extra={"fields": sorted(errors)})
            return Rejected(request.name, request.email, errors)

        try:
            result = self.client.verify(request.verification_token, remote_ip=request.remote_ip)
        except RecaptchaUnavailableError as e:
            logger.warning("Verification unavailable: %s", e, extra={"outcome": VerificationUnavailable.kind})
            return VerificationUnavailable(request.name, request.email, str(e))

        if not self._passes(result):
            logger.info(
                "Submission rejected by reCAPTCHA",
                extra={"score": result.score, "error_codes": result.error_codes},
            )
            return Rejected(request.name, request.email, {'verification_token': VERIFICATION_FAILED})

        try:
            record_id = self.store.append(SubmissionRecord(name=request.name, email=request.email))
        except RecordStoreError as e:
            logger.error("Submission could not be persisted: %s", e, extra={"outcome": PersistenceFailed.kind})
            return PersistenceFailed(request.name, request.email, str(e))

        return Accepted(request.name, request.email, record_id)

    def _passes(self, result) -> bool:
        if not result.success:
            return False
        if self.min_score is None:
            return True
        score = result.score
        return score is not None and score >= self.min_score
