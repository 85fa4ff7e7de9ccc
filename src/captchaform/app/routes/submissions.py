# routes/submissions.py
from flask import (
    Blueprint,
    current_app,
    flash,
    redirect,
    render_template,
    request,
    url_for,
)

from ..store import SqlAlchemyRecordStore
from ..submission import Accepted, PersistenceFailed, Rejected, SubmissionHandler, SubmissionRequest
from ...extensions import db, limiter
from ...utils.logging_config import get_logger
from ...utils.recaptcha import RecaptchaClient

logger = get_logger(__name__)

submissions_bp = Blueprint('submissions', __name__)

TOKEN_FIELD = 'g-recaptcha-response'
TOKEN_ERROR_MESSAGE = "reCAPTCHA verification failed. Please try again."
UNAVAILABLE_MESSAGE = "We could not verify the reCAPTCHA right now. Please try again in a moment."
PERSISTENCE_MESSAGE = "Your data could not be saved. Please try again later."


def submission_rate_limit():
    return current_app.config.get('SUBMISSION_RATE_LIMIT', '10 per minute')


def build_submission_handler():
    """Assemble a handler for the current request from the app's settings."""
    settings = current_app.extensions['recaptcha_settings']
    return SubmissionHandler(
        RecaptchaClient.from_settings(settings),
        SqlAlchemyRecordStore(db.session),
        min_score=settings.min_score,
    )


def form_errors(outcome):
    """Map handler errors back to the names of the posted form fields."""
    if not isinstance(outcome, Rejected):
        return {}
    errors = dict(outcome.errors)
    if 'verification_token' in errors:
        message = errors.pop('verification_token')
        errors[TOKEN_FIELD] = TOKEN_ERROR_MESSAGE if message == "verification failed" else message
    return errors


@submissions_bp.route('/', methods=['GET'])
def form():
    return render_template('submission_form.html', values={}, errors={})


@submissions_bp.route('/', methods=['POST'])
@limiter.limit(submission_rate_limit)
def submit():
    submission = SubmissionRequest.from_form(request.form, remote_ip=request.remote_addr)
    outcome = build_submission_handler().handle(submission)

    if isinstance(outcome, Accepted):
        flash(outcome.message, 'success')
        return redirect(url_for('submissions.form'), code=303)

    values = {'name': outcome.name or '', 'email': outcome.email or ''}
    if isinstance(outcome, Rejected):
        status = 422
    elif isinstance(outcome, PersistenceFailed):
        flash(PERSISTENCE_MESSAGE, 'danger')
        status = 500
    else:
        flash(UNAVAILABLE_MESSAGE, 'warning')
        status = 503
    return render_template('submission_form.html', values=values, errors=form_errors(outcome)), status
