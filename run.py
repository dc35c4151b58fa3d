#!/usr/bin/env python3
"""SITEPLAN - scaled site plan generator.

Starts the Flask API the map editor talks to.
"""

import logging
import os

from siteplan.server import app

PORT = int(os.environ.get("PORT", 5050))
HOST = os.environ.get("HOST", "127.0.0.1")
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")


if __name__ == "__main__":
    logging.basicConfig(
        level=LOG_LEVEL.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.run(host=HOST, port=PORT, debug=os.environ.get("FLASK_ENV") == "development")
