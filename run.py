"""Development entry point for the records service."""
from __future__ import annotations

import os

from dotenv import load_dotenv

# Config reads os.environ on import, so .env must be loaded first.
load_dotenv()

from moldtrack import create_app  # noqa: E402


def serve() -> None:
    app = create_app()
    debug = app.config["DEBUG"]
    app.run(
        host=os.getenv("FLASK_RUN_HOST", "0.0.0.0"),
        port=int(os.getenv("PORT", os.getenv("FLASK_RUN_PORT", "5000"))),
        debug=debug,
        use_reloader=debug,
    )


if __name__ == "__main__":
    serve()
