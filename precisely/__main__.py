"""Runs the API with uvicorn: `python -m precisely`."""

import uvicorn

from precisely.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "precisely.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
        timeout_keep_alive=settings.request_timeout,
        timeout_graceful_shutdown=settings.request_timeout,
    )


if __name__ == "__main__":
    main()
