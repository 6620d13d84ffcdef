"""
dbxcore - Protocol Constants

Limits and defaults imposed by the Dropbox Core API.

Author: dbxcore Project
"""

# Long-poll timeout bounds (seconds)
POLL_MIN_TIMEOUT = 30
POLL_MAX_TIMEOUT = 480

# Extra read time granted to long-poll requests; the server adds random jitter
POLL_JITTER_MARGIN = 90

# Chunked upload sizes (bytes)
DEFAULT_CHUNK_SIZE = 4 * 1024 * 1024
MAX_PUT_FILE_SIZE = 150 * 1024 * 1024

# Entry limits for listing endpoints
METADATA_LIMIT_MAX = 25000
METADATA_LIMIT_DEFAULT = 10000
REVISIONS_LIMIT_MAX = 1000
REVISIONS_LIMIT_DEFAULT = 10
SEARCH_LIMIT_MAX = 1000
SEARCH_LIMIT_DEFAULT = 1000

# Response header carrying entry metadata on thumbnail replies
METADATA_HEADER = "x-dropbox-metadata"
