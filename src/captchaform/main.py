import os

from .config.env import LOG_LEVEL
from .utils.logging_config import resolve_level, setup_logging

setup_logging(level=resolve_level(LOG_LEVEL))

from .app import create_app

app = create_app()

if __name__ == '__main__':
    app.run(debug=os.environ.get("FLASK_DEBUG") == "1", host="0.0.0.0", port=5000)
