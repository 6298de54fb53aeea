# cart_service/main.py
import uvicorn

from cart_service.api import create_app
from cart_service.utils.logging import get_logger
from cart_service.utils.settings import PORT

logger = get_logger(__name__)

app = create_app()


def run() -> None:
    logger.info(f"Cart service listening on port {PORT}")
    uvicorn.run(app, host="0.0.0.0", port=PORT)


if __name__ == "__main__":
    run()
