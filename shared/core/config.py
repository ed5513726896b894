import os
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# Always load .env from root
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(__file__)))
load_dotenv(os.path.join(BASE_DIR, ".env"))


class Settings(BaseSettings):
    DB_USER: str | None = os.getenv("DB_USER")
    DB_PASS: str | None = os.getenv("DB_PASS")
    DB_HOST: str | None = os.getenv("DB_HOST", "localhost")
    DB_PORT: str | None = os.getenv("DB_PORT", "5432")
    ASSET_DB_NAME: str | None = os.getenv("ASSET_DB_NAME", "assets")
    DB_SSLMODE: str = os.getenv("DB_SSLMODE", "require")

    # Full SQLAlchemy URL, wins over the DB_* parts (e.g. sqlite for local runs)
    ASSET_DATABASE_URL: str | None = os.getenv("ASSET_DATABASE_URL")

    # Reference codes: ORG-YEAR-CAT-DIS-SEQ
    ASSET_ORG_CODE: str = os.getenv("ASSET_ORG_CODE", "CON")

    # Reject assets saved without equipment type and subtype
    REQUIRE_FULL_CLASSIFICATION: bool = os.getenv(
        "REQUIRE_FULL_CLASSIFICATION", "False").lower() == "true"

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_JSON: bool = os.getenv("LOG_JSON", "False").lower() == "true"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"


settings = Settings()

ASSET_DATABASE_URL = settings.ASSET_DATABASE_URL or (
    f"postgresql+psycopg2://{settings.DB_USER}:{settings.DB_PASS}@{settings.DB_HOST}:{settings.DB_PORT}/{settings.ASSET_DB_NAME}?sslmode={settings.DB_SSLMODE}"
)
