# Server Configuration
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8000
API_PREFIX = "/api"

ALLOWED_ORIGINS = ["http://localhost:3000", "http://localhost:8080"]
GZIP_MIN_SIZE = 1000

# Logging
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Thread View Settings
STRICT_ID_MATCHING = False  # raise instead of warn when a reply/hide target is not in the chain
MAX_PAGES = 100
