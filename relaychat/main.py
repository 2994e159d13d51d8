"""Main application entry point.

Runs the FastAPI relay with the NiceGUI chat pages mounted under /ui, or
the two as separate processes. Environment variables are loaded from .env.
"""

import logging
import os
import sys

from dotenv import load_dotenv

# Load environment variables before any other imports that might need them
load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)

API_PORT = int(os.getenv("PORT", "8000"))
UI_PORT = int(os.getenv("UI_PORT", "8080"))
HOST = os.getenv("HOST", "0.0.0.0")


def run_integrated() -> None:
    """Serve the relay and the chat pages from one uvicorn server.

    FastAPI keeps /, /ping and /chat; NiceGUI pages live under /ui.
    """
    import uvicorn
    from nicegui import ui

    from relaychat.api.app import create_app
    from relaychat.ui.chat_page import chat_page  # noqa: F401 - Registers the pages

    os.environ.setdefault("API_BASE_URL", f"http://localhost:{API_PORT}")
    app = create_app()

    ui.run_with(
        app,
        title="Gemini Chatbot",
        mount_path="/ui",
        favicon="🤖",
        storage_secret=os.getenv("NICEGUI_STORAGE_SECRET", "relay-chat-secret"),
    )

    logger.info(f"Relay listening on http://localhost:{API_PORT}")
    logger.info(f"Chat UI available at http://localhost:{API_PORT}/ui/")

    uvicorn.run(
        app,
        host=HOST,
        port=API_PORT,
        log_level=os.getenv("LOG_LEVEL", "info").lower(),
    )


def run_separate() -> None:
    """Run the relay and the chat pages as two processes.

    The UI process is pointed at the relay through API_BASE_URL, the same
    way a deployed frontend reaches a separately hosted backend.
    """
    import subprocess

    env = {**os.environ, "API_BASE_URL": os.getenv("API_BASE_URL", f"http://localhost:{API_PORT}")}
    commands = [
        [
            sys.executable,
            "-m",
            "uvicorn",
            "relaychat.api.app:app",
            "--host",
            HOST,
            "--port",
            str(API_PORT),
        ],
        [sys.executable, "-c", "from relaychat.ui.chat_page import main; main()"],
    ]

    logger.info(f"Starting relay on http://localhost:{API_PORT}")
    logger.info(f"Starting chat UI on http://localhost:{UI_PORT}")
    procs = [subprocess.Popen(cmd, env=env) for cmd in commands]
    try:
        # Exit as soon as either process dies
        while all(proc.poll() is None for proc in procs):
            try:
                procs[0].wait(timeout=1)
            except subprocess.TimeoutExpired:
                continue
    except KeyboardInterrupt:
        logger.info("Shutting down servers...")
    finally:
        for proc in procs:
            proc.terminate()
        for proc in procs:
            proc.wait()


def main() -> None:
    """Application entry point.

    Set RUN_MODE=separate to run the relay and the UI on different ports.
    Default is integrated mode (one port).
    """
    mode = os.getenv("RUN_MODE", "integrated").lower()

    logger.info(f"Starting Relay Chat in {mode} mode")

    if mode == "separate":
        run_separate()
    else:
        run_integrated()


if __name__ == "__main__":
    main()
