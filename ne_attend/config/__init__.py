from .loader import ApiConfig, ConfigError, UploadConfig, load_config

__all__ = [
    "ApiConfig",
    "ConfigError",
    "UploadConfig",
    "load_config",
]
