# catalog/utils/settings.py
import os
from dotenv import load_dotenv

from catalog.core import ConfigurationError

load_dotenv()

# MongoConnectionString is the name the function host used before the rename
MONGO_CONNECTION_STRING = os.getenv("MONGO_CONNECTION_STRING") or os.getenv("MongoConnectionString")
MONGO_DATABASE = os.getenv("MONGO_DATABASE", "corazonrosadb")
MONGO_COLLECTION = os.getenv("MONGO_COLLECTION", "products")

CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

API_HOST = os.getenv("API_HOST", "0.0.0.0")
API_PORT = int(os.getenv("API_PORT", 8085))


def require_connection_string() -> str:
    if not MONGO_CONNECTION_STRING:
        raise ConfigurationError("MONGO_CONNECTION_STRING is not set in the environment.")
    return MONGO_CONNECTION_STRING
