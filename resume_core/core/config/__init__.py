from .scoring import get_scoring_config, get_scoring_value, reset_scoring_config_cache
from .settings import Settings, settings

__all__ = [
    "Settings",
    "settings",
    "get_scoring_config",
    "get_scoring_value",
    "reset_scoring_config_cache",
]
