"""
# Configuration Management Module

Application settings for the Communication Tracker, built on **Pydantic Settings**.

## Loading Order

1. `COMMUNICATION_TRACKER_CONFIG_PATH` environment variable (if it points at an existing file)
2. `.env` file in the project root
3. Plain environment variables

Values found in a config file are loaded into the process environment with `python-dotenv`
before `Settings` is instantiated, so both sources resolve through the same fields.

## Settings Groups

### Server
```python
HOST: str = "0.0.0.0"
PORT: int = 5000
DEBUG: bool = False
CORS_ORIGINS: str = "*"  # comma separated
```

### MongoDB
```python
MONGODB_URL: str  # REQUIRED, also accepted as MONGO_URL
MONGODB_DATABASE: str = "communication_tracker"
MONGODB_CONNECTION_TIMEOUT: int = 10000  # ms
MONGODB_SERVER_SELECTION_TIMEOUT: int = 5000  # ms
MONGODB_RETRY_DELAY_SECONDS: float = 5.0  # fixed delay between startup connection attempts
```

### Logging
```python
LOG_LEVEL: str = "INFO"
```

## Usage

```python
from communication_tracker.config import settings

print(settings.MONGODB_DATABASE)
```

The module must stay free of application logging imports so that it can be loaded
before the logging manager is configured.
"""

import os
from pathlib import Path
from typing import Any, List, Optional

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# --- Constants ---
DEFAULT_ENV_FILENAME: str = ".env"
CONFIG_ENV_VAR: str = "COMMUNICATION_TRACKER_CONFIG_PATH"
PROJECT_ROOT: Path = Path(__file__).resolve().parent.parent.parent


# --- Config file discovery (no logging) ---
def get_config_path() -> Optional[str]:
    """
    Determine the configuration file path.

    Checks the `COMMUNICATION_TRACKER_CONFIG_PATH` environment variable first, then a `.env`
    file in the project root. Returns `None` when neither exists, which leaves the
    application in environment-variable-only mode.

    Returns:
        Optional[str]: Path to the configuration file, or `None` if not found.
    """
    env_path: Optional[str] = os.environ.get(CONFIG_ENV_VAR)
    if env_path and os.path.exists(env_path):
        return env_path
    env_path_file: Path = PROJECT_ROOT / DEFAULT_ENV_FILENAME
    if env_path_file.exists():
        return str(env_path_file)
    return None


CONFIG_PATH: Optional[str] = get_config_path()
if CONFIG_PATH:
    # Explicit environment variables win over the file
    load_dotenv(dotenv_path=CONFIG_PATH, override=False)


class Settings(BaseSettings):
    """
    Application configuration settings model.

    **Configuration Groups:**
    *   **Server**: Host, port, debug mode and CORS origins.
    *   **Database**: MongoDB connection string, database name, timeouts and startup retry delay.
    *   **Logging**: Root log level.

    **Validation:**
    An empty `MONGODB_URL` is rejected at startup, and the retry delay must be positive.
    """

    model_config = SettingsConfigDict(
        env_file=CONFIG_PATH if CONFIG_PATH else None,
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
        populate_by_name=True,
    )

    # Server configuration
    HOST: str = "0.0.0.0"
    PORT: int = 5000
    DEBUG: bool = False
    CORS_ORIGINS: str = "*"

    # MongoDB configuration
    MONGODB_URL: str = Field(..., validation_alias=AliasChoices("MONGODB_URL", "MONGO_URL"))
    MONGODB_DATABASE: str = "communication_tracker"
    MONGODB_CONNECTION_TIMEOUT: int = 10000
    MONGODB_SERVER_SELECTION_TIMEOUT: int = 5000
    MONGODB_RETRY_DELAY_SECONDS: float = 5.0

    # Logging
    LOG_LEVEL: str = "INFO"

    @field_validator("MONGODB_URL", mode="before")
    @classmethod
    def no_empty_urls(cls, v: Any, info: Any) -> Any:
        """
        Validate that the MongoDB URL is not empty.

        Raises:
            ValueError: If the URL is empty or whitespace.
        """
        if not v or not str(v).strip():
            raise ValueError(f"{info.field_name} must be set via environment or .env and not empty!")
        return v

    @field_validator("MONGODB_RETRY_DELAY_SECONDS", mode="before")
    @classmethod
    def validate_retry_delay(cls, v: Any) -> float:
        delay = float(v)
        if delay <= 0:
            raise ValueError("MONGODB_RETRY_DELAY_SECONDS must be positive")
        return delay

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse `CORS_ORIGINS` into a list, dropping blank entries."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


# Global settings instance
settings: Settings = Settings()
