"""Application configuration via Pydantic Settings."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Database
    database_url: str = "sqlite+aiosqlite:///./dicepool.db"

    # Roller defaults
    default_pool_size: int = 8
    default_again_threshold: int = 10
    default_exploding_enabled: bool = True
    default_rote: bool = False

    # Simulator
    max_chain_draws: int = 10_000  # per die, explosions included
    random_seed: int | None = None  # set for replayable rolls

    # App
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_debug: bool = False
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
