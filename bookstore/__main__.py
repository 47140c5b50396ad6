"""
Run the API server:

  python -m bookstore

Host, port and log level come from HOST, PORT and LOG_LEVEL (env or .env).
"""

import logging
import sys

from dotenv import load_dotenv

load_dotenv()

import uvicorn

from bookstore.core.config import get_settings
from bookstore.main import create_app


def main() -> int:
    settings = get_settings()
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%SZ",
    )
    app = create_app(settings)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT, log_level=settings.LOG_LEVEL.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
