"""Settings for the loan document analyzer, read from the environment."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="LOAN_ANALYZER_",
        case_sensitive=False,
    )

    model_name: str = Field(default="gpt-4o", description="OpenAI model used for the analysis")
    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")


def get_settings() -> Settings:
    return Settings()
