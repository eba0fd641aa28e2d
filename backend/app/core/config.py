# backend/app/core/config.py
from pydantic_settings import BaseSettings
from pathlib import Path
from functools import lru_cache


class Settings(BaseSettings):
    PROJECT_NAME: str = "IsoSentinel"
    API_V1_STR: str = "/api/v1"
    VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent.parent
    FIELD_CONFIG_PATH: Path = BASE_DIR / "config" / "field_config.json"
    OUTPUT_DIR: Path = BASE_DIR / "backend" / "storage" / "outputs"

    MAX_UPLOAD_SIZE: int = 10 * 1024 * 1024  # 10MB

    # Servicios externos de parseo y canonicalización
    PARSER_URL: str = "http://localhost:8080/api/iso/parse"
    CANONICAL_URL: str = "http://localhost:8080/api/iso/canonical"
    REQUEST_TIMEOUT_SECONDS: float = 30
    CHECK_RESPONSE: bool = True             # Parsear la respuesta del emisor (MTI y DE 39)

    DEFAULT_MTI: str = "0100"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


@lru_cache()
def get_settings() -> Settings:
    """
    Crea una instancia única de Settings que se reutiliza.
    El decorador lru_cache asegura que solo se cree una vez.
    """
    return Settings()
