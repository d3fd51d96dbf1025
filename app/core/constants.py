"""Core constants: storage keys, token format, and shared literal values.

Single source of truth for the staging slot key and the reset token
wire format (DRY).
"""

# Staging slot key (same name the web client used in localStorage)
PENDING_RESET_KEY = "pending_password_reset"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"

# Reset token: <payload>.<signature>
TOKEN_SEGMENT_SEP = "."
DEFAULT_TOKEN_TTL_HOURS = 24
MS_PER_HOUR = 60 * 60 * 1000
# Longest payload segment validate() will decode (tokens travel in URLs)
MAX_TOKEN_PAYLOAD_LENGTH = 4096

# HKDF info for the HMAC signature scheme (domain separation)
RESET_TOKEN_KEY_INFO = b"scribe-reset-token-v1"

# Staging slot lifetime
PENDING_RESET_TTL_SECONDS = 5 * 60

# Reset flow
RESET_LINK_PATH = "/auth/reset-password"
RESET_RATE_LIMIT_SECONDS = 60
