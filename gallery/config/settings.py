from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""

    # Supabase Storage
    storage_bucket: str = "artworks"
    max_image_bytes: int = 10 * 1024 * 1024

    # Profiles created on first sign-in
    profile_name_prefix: str = "user_"
    profile_id_prefix_length: int = 8

    # Name of a Postgres function doing the reaction toggle in one statement.
    # Unset means read-then-write from the service.
    reaction_toggle_rpc: Optional[str] = None

    # OAuth
    oauth_redirect_url: Optional[str] = None

    # App
    app_name: str = "gallery-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",
        extra="ignore"
    )


settings = Settings()
