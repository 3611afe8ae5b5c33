"""
Configuration constants for the transfer pipeline.
"""

# Read size for streaming the response body
DEFAULT_CHUNK_SIZE = 64 * 1024  # 64KB

# Reported when the response has no Content-Type header
DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Schemes the pipeline will fetch
ALLOWED_SCHEMES = ("http", "https")

DEFAULT_USER_AGENT = "url-content-saver/1.0"

# Characters that never appear in a host name
INVALID_HOST_CHARS = frozenset(' <>"{}|\\^`%')
