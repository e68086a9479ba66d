from .loader import DEFAULT_CONFIG_TEMPLATE, config_search_paths, load_config
from .models import PubResolveConfig

__all__ = [
    "DEFAULT_CONFIG_TEMPLATE",
    "PubResolveConfig",
    "config_search_paths",
    "load_config",
]
