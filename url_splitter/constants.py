"""Shared constants for url-splitter."""

DEFAULT_DELIMITER = ","
"""Field delimiter used for reading CSV input and writing output."""

URL_COLUMN_NAME = "url"
"""Name of the single input column when reading newline separated URLs."""

COMPONENT_COLUMNS = (
    "scheme",
    "host",
    "port",
    "path",
    "query",
    "fragment",
    "userinfo",
    "hostname",
    "domain",
    "subdomain",
    "suffix",
    "registration",
    "error",
)
"""Columns appended to every output row, in order."""

NETWORK_SCHEMES = frozenset({"http", "https", "ws", "wss", "ftp"})
"""Schemes whose URLs must carry an authority with a non-empty host."""

MAX_PORT = 65535
