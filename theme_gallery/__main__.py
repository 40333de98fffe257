from __future__ import annotations

import logging

import uvicorn

from theme_gallery.main import app

HOST = "localhost"
PORT = 3000

logger = logging.getLogger("theme_gallery")


def main() -> int:
    logger.info(
        "Server is running on http://%s:%s",
        HOST,
        PORT,
        extra={"event": "server.starting", "host": HOST, "port": PORT},
    )
    uvicorn.run(app, host=HOST, port=PORT, log_config=None)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
