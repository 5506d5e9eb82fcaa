"""Configuration loader for the creator claim service

Values are resolved with the following priority:
1. Environment variables (highest priority)
2. .env file (path overridable with GAMELAB_ENV_FILE)
3. Hardcoded defaults (lowest priority)
"""

import logging
import os
from pathlib import Path
from typing import Any, Optional
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_FILE_VAR = "GAMELAB_ENV_FILE"


class ConfigLoader:
    """Resolves typed settings from the environment and an optional .env file"""

    def __init__(self, env_path: Optional[str] = None):
        """Initialize the config loader

        Args:
            env_path: Optional path to .env file.
                     Defaults to '.env' in the current directory.
        """
        self.env_path = Path(env_path) if env_path else Path(".env")
        self._load_env_file()

    def _load_env_file(self):
        if self.env_path.exists():
            # Real environment variables win over the file
            load_dotenv(dotenv_path=self.env_path, override=False)
            logger.debug(f"Loaded environment variables from {self.env_path}")
        else:
            logger.debug(f".env file not found at {self.env_path}, using environment variables and defaults only")

    @staticmethod
    def _coerce(env_var: str, raw: str, default: Any) -> Any:
        """Convert a raw string to the type of the default"""
        if isinstance(default, bool):
            return raw.strip().lower() in ("true", "1", "yes", "on")
        for kind in (int, float):
            if isinstance(default, kind):
                try:
                    return kind(raw)
                except ValueError:
                    logger.warning(
                        f"Failed to parse {env_var}={raw!r} as {kind.__name__}, using default: {default}"
                    )
                    return default
        return raw

    def get(self, env_var: str, default: Any) -> Any:
        """Get a configuration value with priority: env > default

        Args:
            env_var: Environment variable name to check
            default: Default value; also decides the returned type

        Returns:
            The configuration value from environment or default
        """
        raw = os.getenv(env_var)
        if raw is not None:
            return self._coerce(env_var, raw, default)

        if isinstance(default, str) and default.startswith("~/"):
            return str(Path(default).expanduser())
        return default

    def get_secret(self, env_var: str) -> str:
        """Get a credential without ever logging its value

        Missing secrets are reported once so a misconfigured deployment
        is visible at startup instead of at the first provider call.
        """
        value = os.getenv(env_var, "")
        if not value:
            logger.warning(f"{env_var} is not set")
        return value


_config_loader = None

def get_config_loader() -> ConfigLoader:
    """Get or create the global ConfigLoader instance"""
    global _config_loader
    if _config_loader is None:
        _config_loader = ConfigLoader(os.getenv(ENV_FILE_VAR))
    return _config_loader
