"""Default values for settings.

All default values used in the MonitorSettings model.
"""

from typing import Final

# ============================================================================
# Polling defaults (seconds)
# ============================================================================

CACHE_LOG_SIZE_DEFAULT: Final = 200
APP_LOOKUP_TIMEOUT_DEFAULT: Final = 600.0
POLL_INTERVAL_DEFAULT: Final = 5.0

# ============================================================================
# Leak check defaults (seconds)
# ============================================================================

LEAK_CHECK_INTERVAL_DEFAULT: Final = 60.0
LEAK_CHECK_TIMEOUT_DEFAULT: Final = 600.0

# ============================================================================
# UI defaults
# ============================================================================

TRACKING_URL_DEFAULT: Final = "localhost:4040"
SESSION_STOPPED_MESSAGE: Final = "Session stopped by user."

__all__ = [
    "APP_LOOKUP_TIMEOUT_DEFAULT",
    "CACHE_LOG_SIZE_DEFAULT",
    "LEAK_CHECK_INTERVAL_DEFAULT",
    "LEAK_CHECK_TIMEOUT_DEFAULT",
    "POLL_INTERVAL_DEFAULT",
    "SESSION_STOPPED_MESSAGE",
    "TRACKING_URL_DEFAULT",
]
