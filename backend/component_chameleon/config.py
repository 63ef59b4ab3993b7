from pydantic_settings import BaseSettings
from functools import lru_cache
from pydantic import Field


class Settings(BaseSettings):
    app_name: str = "Component Chameleon"
    debug: bool = False
    env: str = "development"
    log_level: str = "INFO"

    # Server
    backend_host: str = "0.0.0.0"
    backend_port: int = 8000
    cors_origins: list[str] = Field(
        default_factory=lambda: [
            "http://localhost:5173",
            "http://localhost:3000",
        ]
    )

    # LLM (OpenAI-compatible)
    llm_api_key: str = "sk-placeholder"
    llm_base_url: str = ""  # Empty = OpenAI default. Set for local/proxy.
    llm_model: str = "gpt-4o-mini"
    llm_temperature: float = 0.1

    # Oracle call policy
    oracle_timeout_s: float | None = 60.0
    max_retries: int = Field(default=2, ge=0)
    retry_base_delay_s: float = Field(default=1.0, ge=0.0)
    max_alternatives: int = Field(default=3, ge=0)

    # BOM health
    bom_batch_size: int = Field(default=5, ge=1)
    bom_reconcile: bool = True

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


@lru_cache()
def get_settings() -> Settings:
    return Settings()
