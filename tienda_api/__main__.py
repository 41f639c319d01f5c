"""Run the API with uvicorn: python -m tienda_api"""

import logging

import uvicorn

from tienda_api.app import create_app
from tienda_api.core.config import get_settings


def main() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = create_app(settings)
    logging.getLogger(__name__).info("Backend corriendo en http://localhost:%s", settings.port)
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
