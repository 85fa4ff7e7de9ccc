"""WSGI entrypoint for running captchaform with Gunicorn.

    gunicorn -c src/captchaform/config/gunicorn.conf.py captchaform.wsgi:application
"""

from .config.env import LOG_LEVEL
from .utils.logging_config import resolve_level, setup_logging

setup_logging(level=resolve_level(LOG_LEVEL))

from .app import create_app

application = create_app()
app = application

if __name__ == "__main__":
    application.run()
