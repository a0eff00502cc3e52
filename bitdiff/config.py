"""Service configuration - paths, limits, and constants."""

from pathlib import Path

# Output directory for runtime data
OUTPUT_ROOT = Path(__file__).resolve().parent.parent / "output"

# Database path
DB_PATH = OUTPUT_ROOT / "payloads.db"

# HTTP API
API_PREFIX = "/v1/diff"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5000

# Maximum request body size: 1024 * 1024 * 10 = 10 MiB
MAX_CONTENT_LENGTH = 10 * 1024 * 1024

# Diff engine scan sizes (bytes)
#   BLOCK_SIZE: identical blocks are skipped with a single slice comparison
#   WORD_SIZE: differing blocks are scanned word by word
BLOCK_SIZE = 64 * 1024
WORD_SIZE = 8

# Bulk loader: files named <comparison id>_<side><PAYLOAD_SUFFIX>
PAYLOAD_SUFFIX = ".bin"

# Comparison ids are 32-bit signed integers; anything else is not routed
MIN_COMPARISON_ID = -2**31
MAX_COMPARISON_ID = 2**31 - 1
