from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AnyHttpUrl, SecretStr

class Settings(BaseSettings):
    # Action API (api.php) and REST API (rest.php) endpoints of the wiki
    mw_api_base_url: AnyHttpUrl
    mw_rest_base_url: AnyHttpUrl
    mw_article_url: Optional[str] = None  # e.g. "https://wiki.example.org/wiki/"

    # Bidirectional JWT secrets
    jwt_mw_to_mcp_secret: SecretStr  # For verifying tokens from the wiki extension
    jwt_mcp_to_mw_secret: SecretStr  # For signing tokens to MediaWiki

    JWT_ALGO: str = "HS256"
    jwt_ttl_seconds: int = 30

    http_timeout_seconds: float = 15.0

    # Edit governance
    verification_enabled: bool = True
    verification_attribution: str = "bot"
    edit_comment_tag: str = "mw-edit-server"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

settings = Settings()
