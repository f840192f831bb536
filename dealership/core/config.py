from pathlib import Path
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings
from dotenv import load_dotenv

# -------------------------------------------------
# Explicitly load .env
# -------------------------------------------------

BASE_DIR = Path(__file__).resolve().parent.parent.parent
ENV_PATH = BASE_DIR / ".env"

load_dotenv(dotenv_path=ENV_PATH)


class Settings(BaseSettings):
    DATABASE_URL: str
    SECRET_KEY: str
    ENVIRONMENT: str = "development"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60 * 24
    ALGORITHM: str = "HS256"
    DB_ECHO: bool = False
    LOG_LEVEL: str = "INFO"

    # Bootstrap admin (optional; both must be set)
    DEFAULT_ADMIN_EMAIL: str = ""
    DEFAULT_ADMIN_PASSWORD: str = ""

    # S3 for car images (leave S3_BUCKET_NAME empty to disable uploads)
    AWS_ACCESS_KEY_ID: str | None = None
    AWS_SECRET_ACCESS_KEY: str | None = None
    AWS_REGION: str = "ap-south-1"
    S3_BUCKET_NAME: str = ""
    S3_CAR_IMAGES_PREFIX: str = "car-images"
    CAR_IMAGE_MAX_BYTES: int = Field(default=5 * 1024 * 1024, description="Max upload size per image")

    # Sold listings are pruned after this many days (env: SOLD_CAR_RETENTION_DAYS)
    SOLD_CAR_RETENTION_DAYS: int = Field(default=7, description="Days a sold listing stays visible before deletion")
    CRON_SOLD_CLEANUP_INTERVAL_HOURS: float = Field(default=6.0, description="Cron run interval in hours")

    # Mail: accept MAIL_* or SMTP_*. Inquiry alerts are skipped unless INQUIRY_ALERT_EMAIL and MAIL_SERVER are set.
    MAIL_FROM: str = Field(default="", validation_alias=AliasChoices("MAIL_FROM", "SMTP_FROM_EMAIL"))
    MAIL_FROM_NAME: str = Field(default="Dealership", validation_alias=AliasChoices("MAIL_FROM_NAME", "SMTP_FROM_NAME"))
    MAIL_USERNAME: str = Field(default="", validation_alias=AliasChoices("MAIL_USERNAME", "SMTP_USER"))
    MAIL_PASSWORD: str = Field(default="", validation_alias=AliasChoices("MAIL_PASSWORD", "SMTP_PASSWORD"))
    MAIL_SERVER: str = Field(default="", validation_alias=AliasChoices("MAIL_SERVER", "SMTP_HOST"))
    MAIL_PORT: int = Field(default=587, validation_alias=AliasChoices("MAIL_PORT", "SMTP_PORT"))
    INQUIRY_ALERT_EMAIL: str = ""

    class Config:
        extra = "ignore"
        env_file = str(ENV_PATH)
        env_file_encoding = "utf-8"


settings = Settings()
