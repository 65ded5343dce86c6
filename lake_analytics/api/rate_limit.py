"""
Shared rate limiter.
"""
from slowapi import Limiter
from slowapi.util import get_remote_address

from lake_analytics.config import settings


limiter = Limiter(key_func=get_remote_address)

# Applied per client address to every lake endpoint
LAKE_ENDPOINT_LIMIT = f"{settings.rate_limit_requests}/minute"
