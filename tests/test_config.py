import pytest

from captchaform.config.env import SITEVERIFY_URL, validate
from captchaform.config.settings import RecaptchaSettings


VALID = {
    'SECRET_KEY': 'flask-secret',
    'RECAPTCHA_SITE_KEY': 'site-key',
    'RECAPTCHA_SECRET_KEY': 'secret-key',
    'RECAPTCHA_VERSION': 'v2',
}


def test_validate_accepts_complete_environment():
    validate(dict(VALID))


@pytest.mark.parametrize("name", ['SECRET_KEY', 'RECAPTCHA_SITE_KEY', 'RECAPTCHA_SECRET_KEY'])
def test_validate_reports_missing_variable(name):
    with pytest.raises(RuntimeError, match=name):
        validate(dict(VALID, **{name: None}))


def test_validate_rejects_identical_keys():
    with pytest.raises(RuntimeError, match="must be different"):
        validate(dict(VALID, RECAPTCHA_SECRET_KEY='site-key'))


def test_validate_rejects_unknown_version():
    with pytest.raises(RuntimeError, match="RECAPTCHA_VERSION"):
        validate(dict(VALID, RECAPTCHA_VERSION='v4'))


def test_settings_from_config():
    settings = RecaptchaSettings.from_config({
        'RECAPTCHA_SITE_KEY': 'site-key',
        'RECAPTCHA_SECRET_KEY': 'secret-key',
        'RECAPTCHA_VERSION': 'V3',
        'RECAPTCHA_MIN_SCORE': '0.7',
        'RECAPTCHA_TIMEOUT': '3',
    })

    assert settings.version == 'v3'
    assert settings.min_score == 0.7
    assert settings.timeout == 3.0
    assert settings.verify_url == SITEVERIFY_URL
    assert 'secret-key' not in repr(settings)


def test_settings_without_min_score():
    settings = RecaptchaSettings.from_config({'RECAPTCHA_SITE_KEY': 'a', 'RECAPTCHA_SECRET_KEY': 'b', 'RECAPTCHA_MIN_SCORE': ''})

    assert settings.min_score is None
    assert settings.timeout == 5.0


def test_app_exposes_settings(app):
    settings = app.extensions['recaptcha_settings']

    assert settings.site_key == 'test_public'
    assert settings.secret_key == 'test_secret'
