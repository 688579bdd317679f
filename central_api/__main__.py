import logging

import uvicorn

from central_api import app
from django.conf import settings

logger = logging.getLogger("central_api")


def main() -> None:
    logger.info("Servidor rodando em http://%s:%s", settings.API_HOST, settings.API_PORT)
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)


if __name__ == "__main__":
    main()
