"""Main application entry point.

Runs FastAPI with the NiceGUI tool pages mounted on the same server.
Environment variables are loaded from .env file.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

# Configure logging
logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


def main() -> None:
    """Run FastAPI with NiceGUI mounted on the same server.

    FastAPI serves the tool API under /api, NiceGUI serves the pages.
    """
    import uvicorn
    from nicegui import ui

    from career_copilot.api.app import create_app
    from career_copilot.ui import tool_pages  # noqa: F401 - Registers the pages

    app = create_app()

    ui.run_with(
        app,
        title="Career Copilot",
        favicon="💼",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "career-copilot-secret"),
    )

    host = os.getenv("HOST", "0.0.0.0")
    port = int(os.getenv("PORT", "8000"))
    logger.info(f"Starting Career Copilot on http://localhost:{port}")
    logger.info(f"API docs available at http://localhost:{port}/docs")

    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


if __name__ == "__main__":
    main()
