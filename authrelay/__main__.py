"""authrelay entrypoint.

Run with:
  python -m authrelay
or:
  uvicorn authrelay.main:app
"""

import uvicorn

from .config import Settings
from .main import configure_logging, create_app


def main() -> None:
    settings = Settings.from_env()
    configure_logging(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
