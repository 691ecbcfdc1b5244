import logging

from movie_tracker.core.config import get_settings
from movie_tracker.main import app

# Serverless entry point: configure root logging once, then export the FastAPI app.
logging.basicConfig(
    level=get_settings().log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

logger.info("Movie tracker api/index.py initialized")

__all__ = ["app"]
