"""Main application entry point.

Serves the YUNO API and the NiceGUI chat interface. Environment variables are
loaded from .env file.

RUN_MODE:
    integrated (default): API and UI share one server on PORT (8000).
    separate: API on PORT, UI on UI_PORT (8080), as two processes.
"""

import logging
import os
import subprocess
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


def _host() -> str:
    return os.getenv("HOST", "0.0.0.0")


def _port() -> int:
    return int(os.getenv("PORT", "8000"))


def run_integrated() -> None:
    """Mount the chat UI onto the API app and serve both from one uvicorn."""
    import uvicorn
    from nicegui import ui

    from yuno.api.app import create_app
    from yuno.storage.store import get_conversation_store
    from yuno.ui.chat_page import chat_page  # noqa: F401 - Registers the page

    app = create_app()
    get_conversation_store()

    ui.run_with(
        app,
        title="YUNO",
        favicon="🌸",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "yuno-secret"),
    )

    logger.info(f"Chat UI and API on http://localhost:{_port()} (docs at /docs)")

    uvicorn.run(
        app,
        host=_host(),
        port=_port(),
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_separate() -> None:
    """Run the API and the UI as two child processes until either exits."""
    ui_port = os.getenv("UI_PORT", "8080")
    os.environ.setdefault("YUNO_CHAT_URL", f"http://localhost:{_port()}/chat")

    api_proc = subprocess.Popen(
        [
            sys.executable,
            "-m",
            "uvicorn",
            "yuno.api.app:app",
            "--host",
            _host(),
            "--port",
            str(_port()),
        ]
    )
    ui_proc = subprocess.Popen(
        [sys.executable, "-c", f"from yuno.ui.chat_page import main; main({ui_port})"]
    )
    logger.info(f"API on http://localhost:{_port()}, UI on http://localhost:{ui_port}")

    try:
        while api_proc.poll() is None and ui_proc.poll() is None:
            try:
                api_proc.wait(timeout=1)
            except subprocess.TimeoutExpired:
                continue
    except KeyboardInterrupt:
        logger.info("Shutting down servers...")
    finally:
        for proc in (api_proc, ui_proc):
            proc.terminate()
            proc.wait()


def main() -> None:
    """Application entry point."""
    mode = os.getenv("RUN_MODE", "integrated").lower()
    logger.info(f"Starting YUNO in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
