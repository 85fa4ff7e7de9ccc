import os
import sys

import pytest

# Ensure that the application's source code is importable without installation.
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))
from captchaform.app import create_app
from captchaform.extensions import db


def _make_app(config=None):
    return create_app(testing=True, config=config)


@pytest.fixture
def app():
    """
    Create and configure an instance of the application for testing.
    The database is created before tests and dropped after.
    """
    app = _make_app()

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def make_app():
    """Factory for apps with configuration overrides (reCAPTCHA v3, limits, ...)."""
    contexts = []

    def factory(**config):
        app = _make_app(config)
        ctx = app.app_context()
        ctx.push()
        db.create_all()
        contexts.append(ctx)
        return app

    yield factory

    for ctx in reversed(contexts):
        db.session.remove()
        db.drop_all()
        ctx.pop()


@pytest.fixture
def client(app):
    """
    Provides a test client for simulating HTTP requests.
    """
    return app.test_client()


class MockResponse:
    """Stand-in for ``requests.Response`` returned by a mocked ``requests.post``."""

    def __init__(self, payload=None, status_code=200, json_error=None):
        self.payload = payload
        self.status_code = status_code
        self.json_error = json_error

    def raise_for_status(self):
        import requests
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error", response=self)

    def json(self):
        if self.json_error is not None:
            raise self.json_error
        return self.payload


@pytest.fixture
def siteverify(monkeypatch):
    """Replace ``requests.post`` in the reCAPTCHA client and record the calls.

    ``siteverify.respond(payload)`` sets the JSON body to return,
    ``siteverify.fail(exc)`` makes the call raise instead.
    """

    class SiteVerify:
        def __init__(self):
            self.calls = []
            self.response = MockResponse({"success": True})
            self.error = None

        def respond(self, payload=None, **kwargs):
            self.response = MockResponse(payload, **kwargs)
            self.error = None

        def fail(self, error):
            self.error = error

        def __call__(self, url, data=None, timeout=None):
            self.calls.append({"url": url, "data": data, "timeout": timeout})
            if self.error is not None:
                raise self.error
            return self.response

    fake = SiteVerify()
    monkeypatch.setattr("captchaform.utils.recaptcha.requests.post", fake)
    return fake
