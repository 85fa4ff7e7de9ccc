# routes/system.py
from flask import Blueprint, jsonify
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from ...config.version import __version__
from ...extensions import db
from ...utils.logging_config import get_logger

logger = get_logger(__name__)

system_bp = Blueprint('system', __name__)


@system_bp.route('/version')
def version():
    return jsonify({'version': __version__})


@system_bp.route('/health')
def health():
    try:
        db.session.execute(text('SELECT 1'))
        db.session.commit()
        return jsonify({'status': 'ok'}), 200
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error("Health check failed: %s", e)
        return jsonify({'status': 'error'}), 503
