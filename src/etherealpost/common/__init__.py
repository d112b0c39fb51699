# Common utilities and shared modules
"""
Shared components used across the library:
- Configuration (YAML + environment)
- Logging configuration
- HTTP client and rate limiting
- Database utilities
"""

from .config import PROJECT_ROOT, DATA_DIR, Settings
from .database import get_connection, init_db
from .http_client import HTTPClient
from .logging import setup_logging
from .rate_limiter import RateLimiter

__all__ = [
    "Settings",
    "PROJECT_ROOT",
    "DATA_DIR",
    "get_connection",
    "init_db",
    "HTTPClient",
    "RateLimiter",
    "setup_logging",
]
