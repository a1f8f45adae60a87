"""Catalog API paths and request defaults."""

# Catalog API base
DEFAULT_API_BASE_URL = "https://api.mucajey.twicemind.com"

# Device registration
REGISTER_PATH = "/api/register"

# Catalog endpoints
EDITIONS_PATH = "/edition/all"
CARDS_PATH = "/card/all"
CARD_MAP_PATH = "/card/{edition}/{card_id}/apple/search"

# Authentication header
API_KEY_HEADER = "X-API-Key"

# Request defaults
DEFAULT_REQUEST_TIMEOUT = 30.0  # seconds

# Diagnostics
BODY_SNIPPET_MAX_CHARS = 800
