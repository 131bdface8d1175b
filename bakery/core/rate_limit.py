from slowapi import Limiter
from slowapi.util import get_remote_address

from bakery.core.config import settings

# Per-client limits for sign-in, registration and checkout; counters live in
# RATE_LIMIT_STORAGE_URI so several workers can share them
limiter = Limiter(key_func=get_remote_address, storage_uri=settings.RATE_LIMIT_STORAGE_URI)
