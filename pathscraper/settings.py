"""
pathscraper configuration using pydantic-settings.

All settings can be set via environment variables with PATHSCRAPER_ prefix,
or via Docker secrets in /run/secrets directory. A ``Settings`` instance is
created by the caller and handed to the components that need it.
"""

from importlib.metadata import version

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Get version from package metadata
try:
    VERSION = version("pathscraper")
except Exception:
    VERSION = "0.0.0"


class Settings(BaseSettings):
    """
    pathscraper configuration using pydantic-settings.

    Settings are loaded from (in order of priority, highest first):
    1. Keyword arguments
    2. Environment variables with PATHSCRAPER_ prefix
    3. .env file
    4. Docker secrets in /run/secrets directory
    """

    model_config = SettingsConfigDict(
        env_prefix="pathscraper_",
        env_file=".env",
        secrets_dir="/run/secrets",
        extra="ignore",
    )

    # Fetch behavior
    retries: int = Field(default=3, ge=1, description="Total number of attempts")
    retry_delay: float = Field(
        default=30.0, ge=0, description="Seconds to wait between attempts"
    )

    # HTTP configuration
    http_timeout: float = Field(default=30.0)
    user_agent: str = Field(
        default="Mozilla/5.0 (Windows; U; Windows NT 6.0; en-US; rv:1.1) "
        f"pathscraper/{VERSION}"
    )
