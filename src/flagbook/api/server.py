"""
ASGI Entry Point for the Flagbook API.

This module exposes the `app` object required by ASGI servers (Uvicorn/Gunicorn).
It loads environment variables from `.env` before the application factory
runs, so that settings read at import time see them.

Usage
-----
Run via the console script:
    $ flagbook-api

Or via uvicorn directly:
    $ uvicorn flagbook.api.server:app --reload
"""

from pathlib import Path

import uvicorn
from dotenv import load_dotenv

from flagbook.api.app import create_app
from flagbook.core.settings import load_settings

# --------------------------------------------------------------------------- #
# Environment Setup
# --------------------------------------------------------------------------- #
env_path = Path(".env")
load_dotenv(dotenv_path=env_path)
load_settings.cache_clear()

# Factory invocation
app = create_app()


def main() -> None:
    """Run the API server locally for development."""
    s = load_settings()

    print(f"{'[ Flagbook ]':=^60}")
    print(f"{'Environment':<20} : {s.environment}")
    print(f"{'Message file':<20} : {s.data_file or '(in memory)'}")
    print(f"{'Uploads dir':<20} : {s.uploads_dir}")
    print(f"{'reCAPTCHA':<20} : {'✅ Enabled' if s.recaptcha_enabled else '❌ Disabled'}")
    print(f"{'='*60}\n")

    uvicorn.run(
        "flagbook.api.server:app",
        host="0.0.0.0",
        port=8000,
        reload=s.is_dev,
        log_level=s.log_level.lower(),
    )


if __name__ == "__main__":
    main()
