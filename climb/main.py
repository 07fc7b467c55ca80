"""
Entry point — start the Climb engine.

Usage:
    python -m climb.main
    uvicorn climb.api.app:app --host 127.0.0.1 --port 8765 --reload
"""

import uvicorn

from .config import config
from .logging_setup import setup_logging


def main():
    setup_logging()
    uvicorn.run(
        "climb.api.app:app",
        host=config.api_host,
        port=config.api_port,
        reload=False,
        log_level=config.log_level.lower(),
    )


if __name__ == "__main__":
    main()
