"""captchaform: a reCAPTCHA-protected form submission service built on Flask."""

from .config.version import __version__  # noqa: F401
