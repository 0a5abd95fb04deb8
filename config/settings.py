"""Application configuration management."""

from pathlib import Path

from pydantic_settings import BaseSettings


class MissingCredentialError(RuntimeError):
    """Raised at startup when a required API key is not configured."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__(f"Missing required credentials: {', '.join(missing)}")


class Settings(BaseSettings):
    """SiteBot application settings loaded from environment variables."""

    # Credentials
    openai_api_key: str = ""
    anthropic_api_key: str = ""
    google_api_key: str = ""

    # Site to crawl
    sitebot_site: str = "https://www.arcade.ai"

    # Embedding
    sitebot_embedding_provider: str = "sentence-transformers"
    sitebot_embedding_model: str = "all-MiniLM-L6-v2"
    sitebot_embedding_timeout: float = 30.0

    # LLM
    sitebot_llm_provider: str = "anthropic"
    sitebot_llm_model: str = "claude-sonnet-4-5-20250929"
    sitebot_llm_temperature: float = 0.2
    sitebot_llm_max_tokens: int = 400
    sitebot_llm_timeout: float = 60.0

    # Storage
    sitebot_index_path: str = "./data/index.json"

    # Crawling
    sitebot_crawl_limit: int = 40
    sitebot_crawl_timeout_ms: int = 15000
    sitebot_user_agent: str = "SiteBotIngest/0.1"

    # Ingestion (character-based)
    sitebot_chunk_size: int = 1200
    sitebot_chunk_overlap: int = 150
    sitebot_min_page_chars: int = 200

    # Retrieval
    sitebot_top_k: int = 6
    sitebot_validate_model: bool = True

    @property
    def index_path(self) -> Path:
        return Path(self.sitebot_index_path)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


def get_settings() -> Settings:
    """Get application settings."""
    return Settings()


def require_credentials(settings: Settings, llm: bool = False) -> None:
    """Fail fast when the configured providers have no API key.

    The embedding provider is always checked; the completion provider only
    when ``llm`` is set (ingestion never calls the LLM).
    """
    missing = []

    if settings.sitebot_embedding_provider.lower() == "openai" and not settings.openai_api_key:
        missing.append("OPENAI_API_KEY")

    if llm:
        provider = settings.sitebot_llm_provider.lower()
        if provider == "anthropic" and not settings.anthropic_api_key:
            missing.append("ANTHROPIC_API_KEY")
        elif provider == "google" and not settings.google_api_key:
            missing.append("GOOGLE_API_KEY")

    if missing:
        raise MissingCredentialError(missing)
