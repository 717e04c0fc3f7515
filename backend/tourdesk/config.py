from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Pricing defaults
    default_currency: str = "USD"
    default_tax_rate: float = 0.08

    # Recommendations
    max_recommendations: int = 8

    # Catalog
    seed_catalog: bool = True

    # Logging
    log_level: str = "INFO"
    log_dir: str = ""

    # CORS
    cors_origins: str = "http://localhost:5173"

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",")]

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
