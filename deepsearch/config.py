from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Retrieval (best-effort, results are advisory only)
    search_enabled: bool = True
    search_max_results: int = 3
    search_timeout_seconds: float = 30.0
    search_user_agent: str = (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
    )

    # Streaming cadence between stage results
    pacing_min_ms: int = 800
    pacing_max_ms: int = 1200

    # Document
    report_subtitle: str = "Deep Research Report"
    report_author: str = "DeepSearch"

    # App
    cors_origins: str = "http://localhost:3000"
    app_log_level: str = "INFO"
    noisy_log_level: str = "WARNING"
    log_dir: str = "logs"
    log_to_file: bool = True

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @property
    def cors_origin_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",")]


settings = Settings()
