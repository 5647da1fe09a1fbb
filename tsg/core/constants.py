# Runtime parameter reported to the database as application_name
PROGNAME = "tsg-keys"

# Database table backing the Key record
KEYS_TABLE_NAME = "tsg_keys"

# Reserved identifier that never matches a real key row
SENTINEL_KEY_ID = "00000000-0000-0000-0000-000000000000"

# Default connection parameters
DEFAULT_HTTP_BIND = "127.0.0.1"
DEFAULT_HTTP_PORT = 3000
DEFAULT_PG_PORT = 26257  # commonly configured CockroachDB port
DEFAULT_PG_MAX_CONNECTIONS = 5

# Structured logging module tags
DRIVER_LOG_MODULE = "sqlalchemy"
HTTP_LOG_MODULE = "http"
