import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

REQUIRED_VARS = ('DATABASE_URL', 'JWT_SECRET_KEY')


def init_env():
    """Loads .env and checks the variables the API cannot start without."""
    load_dotenv()

    missing = [var for var in REQUIRED_VARS if not os.getenv(var)]
    if missing:
        raise EnvironmentError(f"Missing required environment variables: {', '.join(missing)}")

    # Review sync is optional; every other endpoint works without it
    if not os.getenv('YELP_API_KEY'):
        logger.warning("YELP_API_KEY is not set, Yelp sync requests will fail")
