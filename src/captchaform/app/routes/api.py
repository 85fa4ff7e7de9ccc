"""JSON endpoint for submitting the form over XHR."""

from flask import Blueprint, jsonify, request

from .submissions import build_submission_handler, submission_rate_limit
from ..submission import Accepted, PersistenceFailed, Rejected, SubmissionRequest
from ...extensions import limiter

api_bp = Blueprint('api', __name__, url_prefix='/api')

_STATUS = {
    Accepted: 201,
    Rejected: 422,
    PersistenceFailed: 500,
}


def outcome_to_dict(outcome):
    data = {'ok': outcome.ok, 'outcome': outcome.kind, 'name': outcome.name, 'email': outcome.email}
    if isinstance(outcome, Accepted):
        data.update(message=outcome.message, id=outcome.record_id)
    elif isinstance(outcome, Rejected):
        data['errors'] = dict(outcome.errors)
    else:
        data['reason'] = outcome.reason
    return data


@api_bp.route('/submissions', methods=['POST'])
@limiter.limit(submission_rate_limit)
def create_submission():
    """Accept a JSON or form-encoded body and return the outcome as JSON."""
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = request.form
    submission = SubmissionRequest.from_form(payload, remote_ip=request.remote_addr)
    outcome = build_submission_handler().handle(submission)
    return jsonify(outcome_to_dict(outcome)), _STATUS.get(type(outcome), 503)
