"""
Utility modules for the YGL proxy
"""
from .config_loader import Settings, load_settings
from .rate_limiter import RateLimiter

__all__ = [
    'Settings',
    'load_settings',
    'RateLimiter',
]
