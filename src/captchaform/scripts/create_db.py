# create_db.py
"""Create the submission table in the configured database.

    python -m captchaform.scripts.create_db [--drop]
"""
import argparse

from ..app import create_app
from ..extensions import db
from ..utils.logging_config import get_logger

logger = get_logger(__name__)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Create the captchaform database tables.")
    parser.add_argument("--drop", action="store_true", help="Drop existing tables first (destroys stored submissions).")
    args = parser.parse_args(argv)

    app = create_app()
    with app.app_context():
        if args.drop:
            db.drop_all()
            logger.warning("Existing tables dropped.")
        db.create_all()
        logger.info("Tables created at %s", db.engine.url.render_as_string(hide_password=True))


if __name__ == "__main__":
    main()
