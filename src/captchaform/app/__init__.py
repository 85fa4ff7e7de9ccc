"""Application factory and setup for the captchaform project."""

# captchaform/app/__init__.py

import os

from flask import Flask, jsonify, render_template_string
from flask_migrate import Migrate
from flask_wtf.csrf import generate_csrf
from werkzeug.middleware.proxy_fix import ProxyFix

from . import models  # noqa: F401
from .routes.api import api_bp
from .routes.submissions import submissions_bp
from .routes.system import system_bp

from ..config.version import __version__
from ..config.settings import RecaptchaSettings
from ..extensions import db, csrf, limiter
from ..config.env import (
    SECRET_KEY,
    RECAPTCHA_SITE_KEY,
    RECAPTCHA_SECRET_KEY,
    RECAPTCHA_VERSION,
    RECAPTCHA_MIN_SCORE,
    RECAPTCHA_TIMEOUT,
    RECAPTCHA_VERIFY_URL,
    DATABASE_URL,
    SUBMISSION_RATE_LIMIT,
    RATELIMIT_STORAGE_URI,
    validate,
)

from ..utils.logging_config import get_logger

# Initialize logger
logger = get_logger(__name__)


class TestConfig:
    """Testing configuration."""
    TESTING = True
    SERVER_NAME = 'localhost.localdomain'
    APPLICATION_ROOT = '/'
    PREFERRED_URL_SCHEME = 'http'
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    WTF_CSRF_ENABLED = False
    SECRET_KEY = 'test_key'
    RECAPTCHA_SITE_KEY = 'test_public'
    RECAPTCHA_SECRET_KEY = 'test_secret'
    RECAPTCHA_VERSION = 'v2'
    RECAPTCHA_MIN_SCORE = None
    RECAPTCHA_TIMEOUT = 5
    SUBMISSION_RATE_LIMIT = '1000 per minute'
    # Avoid Flask-Limiter warning by explicitly setting storage backend in tests
    RATELIMIT_STORAGE_URI = 'memory://'


def create_app(testing=False, config=None):
    """Build the Flask application.

    Args:
        testing: Use ``TestConfig`` instead of the environment.
        config: Optional mapping applied on top of the selected configuration.
    """
    if not testing:
        validate()
    app = Flask(__name__, template_folder="templates")

    # Respect reverse proxy headers for scheme, host and path prefix
    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    if testing:
        app.config.from_object(TestConfig)
    else:
        instance_dir = app.instance_path
        os.makedirs(instance_dir, exist_ok=True)
        db_uri = DATABASE_URL or f"sqlite:///{os.path.join(instance_dir, 'submissions.db')}?timeout=30"
        app.config.update(
            SQLALCHEMY_DATABASE_URI=db_uri,
            SQLALCHEMY_TRACK_MODIFICATIONS=False,
            SECRET_KEY=SECRET_KEY,
            RECAPTCHA_SITE_KEY=RECAPTCHA_SITE_KEY,
            RECAPTCHA_SECRET_KEY=RECAPTCHA_SECRET_KEY,
            RECAPTCHA_VERSION=RECAPTCHA_VERSION,
            RECAPTCHA_MIN_SCORE=RECAPTCHA_MIN_SCORE,
            RECAPTCHA_TIMEOUT=RECAPTCHA_TIMEOUT,
            RECAPTCHA_VERIFY_URL=RECAPTCHA_VERIFY_URL,
            SUBMISSION_RATE_LIMIT=SUBMISSION_RATE_LIMIT,
            RATELIMIT_STORAGE_URI=RATELIMIT_STORAGE_URI,
            WTF_CSRF_ENABLED=True,
            SESSION_COOKIE_HTTPONLY=True,
            SESSION_COOKIE_SAMESITE='Lax',
        )
    if config:
        app.config.update(config)

    settings = RecaptchaSettings.from_config(app.config)
    app.extensions['recaptcha_settings'] = settings
    logger.info("reCAPTCHA configured", extra={"recaptcha": repr(settings)})

    # Initialize extensions
    db.init_app(app)
    csrf.init_app(app)
    limiter.init_app(app)
    if not testing:
        Migrate(app, db)

    # Register blueprints
    app.register_blueprint(submissions_bp)
    app.register_blueprint(api_bp)
    app.register_blueprint(system_bp)
    csrf.exempt(api_bp)

    @app.context_processor
    def inject_globals():
        return dict(
            version=__version__,
            recaptcha_site_key=settings.site_key,
            recaptcha_version=settings.version,
            csrf_token=generate_csrf,
        )

    @app.errorhandler(404)
    def not_found(e):
        return render_template_string(
            "<h1>404 - Page Not Found</h1><p><a href='{{ url_for(\"submissions.form\") }}'>Go Home</a></p>"
        ), 404

    @app.errorhandler(429)
    def rate_limited(e):
        logger.warning("Rate limit exceeded: %s", e.description)
        return jsonify(error="rate_limited", error_description=str(e.description)), 429

    @app.errorhandler(500)
    def server_error(e):
        logger.error("Unhandled server error: %s", e)
        return "<h1>500 - Internal Server Error</h1><p>Something went wrong. Please try again later.</p>", 500

    return app
