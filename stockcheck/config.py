from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="STOCKCHECK_")

    app_name: str = "StockCheck"
    debug: bool = False

    database_url: str = "sqlite+aiosqlite:///./stockcheck.db"

    # Storage bin capacity used by the bin analysis
    bin_capacity: int = 60

    # Restrict matching to one language when set (e.g. "German" or "de")
    default_language: str | None = None


settings = Settings()


# =============================================================================
# STOCK LIMITS
# =============================================================================

# Cards that fit into one storage bin (e.g. "A-0-1-4")
DEFAULT_BIN_CAPACITY = 60

# Copies represented by one playset row
PLAYSET_SIZE = 4

# Rendered in place of a missing storage location
LOCATION_UNKNOWN = "location unknown"
