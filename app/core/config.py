from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_title: str = "Counter Service"
    app_version: str = "1.0.0"

    # JSON-файл с документом {counter, history, deletedHistory}
    db_file: str = "db.json"

    host: str = "0.0.0.0"
    port: int = 4000
    cors_origins: List[str] = ["*"]
    log_level: str = "INFO"

    model_config = {"env_file": ".env", "extra": "ignore"}

settings = Settings()
