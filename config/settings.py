from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal, Optional
import os

# Load .env file if it exists, for local development
# In production, environment variables should be set directly.
if os.path.exists(".env"):
    from dotenv import load_dotenv
    load_dotenv()


class AppSettings(BaseSettings):
    log_level: str = "INFO"
    # Where visitors land when a short link cannot be resolved
    survey_path: str = "/aireadinesscheck"
    catalog_path: Optional[str] = None  # None -> bundled assets/readiness_catalog.yml
    cors_origins: str = "*"  # Comma separated

    model_config = SettingsConfigDict(env_prefix='APP_')


class DatabaseSettings(BaseSettings):
    url: str = "sqlite+aiosqlite:///./readiness.db"
    echo: bool = False

    model_config = SettingsConfigDict(env_prefix='DATABASE_')


class StorageSettings(BaseSettings):
    backend: Literal["s3", "local"] = "local"
    bucket: str = "ai-readiness"
    prefix: str = ""
    endpoint_url: Optional[str] = None  # Set for MinIO or other S3-compatible stores
    region: Optional[str] = None
    access_key_id: Optional[str] = None
    secret_access_key: Optional[str] = None
    # Presigned URL lifetime in seconds; None serves plain public URLs instead
    signed_url_ttl: Optional[int] = 3600
    public_base_url: Optional[str] = None
    local_root: str = "./artifacts"

    model_config = SettingsConfigDict(env_prefix='STORAGE_')

    @field_validator("signed_url_ttl", mode="before")
    @classmethod
    def _blank_ttl_means_unsigned(cls, value):
        if isinstance(value, str) and value.strip().lower() in ("", "0", "none"):
            return None
        return value


class ReportSettings(BaseSettings):
    logo_path: Optional[str] = None
    theme: Literal["light", "dark", "system"] = "light"

    model_config = SettingsConfigDict(env_prefix='REPORT_')


# Instantiate settings
app_settings = AppSettings()
database_settings = DatabaseSettings()
storage_settings = StorageSettings()
report_settings = ReportSettings()

if __name__ == "__main__":
    # For testing the configuration loading
    print("App Configuration:")
    print(f"  Log level: {app_settings.log_level}")
    print(f"  Survey path: {app_settings.survey_path}")
    print("\nDatabase Configuration:")
    print(f"  URL: {database_settings.url}")
    print("\nStorage Configuration:")
    print(f"  Backend: {storage_settings.backend}")
    print(f"  Bucket: {storage_settings.bucket}")
    print(f"  Endpoint: {storage_settings.endpoint_url}")
    # Secret key is intentionally not printed for security
    print(f"  Signed URL TTL: {storage_settings.signed_url_ttl}")
    print("\nReport Configuration:")
    print(f"  Logo: {report_settings.logo_path}")
    print(f"  Theme: {report_settings.theme}")
    print("\nOverride with environment variables such as APP_LOG_LEVEL, DATABASE_URL, STORAGE_BACKEND, STORAGE_SIGNED_URL_TTL, REPORT_LOGO_PATH.")
