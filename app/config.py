from enum import StrEnum

from pydantic_settings import BaseSettings


class Mode(StrEnum):
    development = "development"
    production = "production"


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    environment: Mode = Mode.development
    log_level: str = "INFO"
    gsmarena_base_url: str = "https://www.gsmarena.com"
    chromium_executable_path: str = ""
    headless: bool = True
    navigation_timeout_ms: int = 20_000
    results_timeout_ms: int = 15_000
    close_timeout_s: float = 3.0
    force_close_timeout_s: float = 1.0
