"""Run the API server: ``python -m finboard``."""

import uvicorn

from finboard.config.settings import get_settings
from finboard.main import app


def main() -> None:
    settings = get_settings()
    uvicorn.run(app, host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    main()
