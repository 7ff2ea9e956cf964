from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    openai_api_key: SecretStr
    openai_base_url: str = "https://api.openai.com/v1"
    completion_model: str = "gpt-4o-mini"
    embedding_model: str = "text-embedding-3-small"
    llm_temperature: float = 0.2

    # Outbound timeouts (seconds)
    fetch_timeout: float = 10.0
    embedding_timeout: float = 30.0
    llm_timeout: float = 60.0

    user_agent: str = "AI-LinkSuggestionTool"

    # Embedding fan-out
    embedding_batch_size: int = 16
    embedding_concurrency: int = 4

    # Pipeline limits
    min_paragraph_length: int = 30
    max_candidate_paragraphs: int = 50
    top_k_candidates: int = 6
    target_embed_chars: int = 2000
    target_summary_chars: int = 800
    max_suggestions: int = 3

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

settings = Settings()
