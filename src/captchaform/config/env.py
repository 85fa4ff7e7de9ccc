from __future__ import annotations
import os
from dotenv import load_dotenv

# Load environment variables once
load_dotenv()

SITEVERIFY_URL = "https://www.google.com/recaptcha/api/siteverify"

# Exposed settings
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
SECRET_KEY = os.getenv("SECRET_KEY")
RECAPTCHA_SITE_KEY = os.getenv("RECAPTCHA_SITE_KEY")
RECAPTCHA_SECRET_KEY = os.getenv("RECAPTCHA_SECRET_KEY")
RECAPTCHA_VERSION = os.getenv("RECAPTCHA_VERSION", "v2").lower()
RECAPTCHA_MIN_SCORE = os.getenv("RECAPTCHA_MIN_SCORE") or None
RECAPTCHA_TIMEOUT = float(os.getenv("RECAPTCHA_TIMEOUT", "5"))
RECAPTCHA_VERIFY_URL = os.getenv("RECAPTCHA_VERIFY_URL", SITEVERIFY_URL)
DATABASE_URL = os.getenv("DATABASE_URL")
SUBMISSION_RATE_LIMIT = os.getenv("SUBMISSION_RATE_LIMIT", "10 per minute")
RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")


def validate(env=None) -> None:
    """Raise a RuntimeError if required environment variables are missing.

    The site key is rendered into public markup while the secret key only
    leaves the server in the verification call, so identical values are
    rejected as well.
    """
    if env is None:
        env = {
            'SECRET_KEY': SECRET_KEY,
            'RECAPTCHA_SITE_KEY': RECAPTCHA_SITE_KEY,
            'RECAPTCHA_SECRET_KEY': RECAPTCHA_SECRET_KEY,
            'RECAPTCHA_VERSION': RECAPTCHA_VERSION,
        }
    missing = [name for name in ('SECRET_KEY', 'RECAPTCHA_SITE_KEY', 'RECAPTCHA_SECRET_KEY')
               if not env.get(name)]
    if missing:
        raise RuntimeError(f"Missing required environment variables: {', '.join(missing)}")
    if env['RECAPTCHA_SITE_KEY'] == env['RECAPTCHA_SECRET_KEY']:
        raise RuntimeError("RECAPTCHA_SITE_KEY and RECAPTCHA_SECRET_KEY must be different keys")
    version = env.get('RECAPTCHA_VERSION') or 'v2'
    if version not in ('v2', 'v3'):
        raise RuntimeError(f"Unsupported RECAPTCHA_VERSION: {version!r} (expected 'v2' or 'v3')")
