from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Logging
    log_level: str = "INFO"
    json_logs: bool = False
    log_to_file: bool = True

    # AI provider (primary scoring path; heuristic model is the fallback)
    ai_enabled: bool = True

    # Heuristic model, trained once at startup on synthetic data
    heuristic_num_trees: int = 15
    heuristic_training_samples: int = 1000
    heuristic_seed: int | None = None  # None = fresh ensemble each process

    # Feature estimation under missing data (owner %, lock days, complexity)
    feature_seed: int | None = None

    # Honeypot simulator network when the caller does not pass one
    default_network: str = "ethereum"


settings = Settings()
