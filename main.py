"""
Main entrypoint: FastAPI transaction export server.

Env: SOLANA_RPC_URL (required, http/https), API_HOST, API_PORT, OUTPUT_DIR, LOG_LEVEL.

Equivalent: uvicorn backend_txexport.api_server.app:app --host 0.0.0.0 --port 3001
"""

import os
import sys

# Configure structured JSON logging before other imports that may log
from backend_txexport.txexport_logging import get_logger

logger = get_logger("main")


def main() -> None:
    """Validate config, then run the API server in the main thread."""
    from backend_txexport.config import get_settings
    from backend_txexport.core.exceptions import ConfigError

    try:
        settings = get_settings()
    except ConfigError as e:
        logger.error("main_config_error", message=str(e))
        sys.exit(1)

    from backend_txexport.api_server.app import app
    import uvicorn

    logger.info("main_server_starting", host=settings.api_host, port=settings.api_port)
    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
