from env.env import (
    Environment,
    get_env,
    reset_env_caches,
    get_logging_env,
    mask_secret,
    ConfigError,
)

from env.paths import PROJECT_ROOT, auth_dir, logs_dir

__all__ = [
    "Environment",
    "get_env",
    "reset_env_caches",
    "get_logging_env",
    "mask_secret",
    "ConfigError",
    "PROJECT_ROOT",
    "auth_dir",
    "logs_dir",
]
