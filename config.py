import logging
import os
from dataclasses import dataclass
from dotenv import load_dotenv

load_dotenv()

@dataclass
class Settings:
    # API Ayarları
    api_host: str = os.getenv("API_HOST", "127.0.0.1")
    api_port: int = int(os.getenv("API_PORT", "8000"))

    # Uygulama Ayarları
    app_name: str = os.getenv("APP_NAME", "Kütüphane Ödünç Servisi")
    app_version: str = os.getenv("APP_VERSION", "1.0.0")
    debug: bool = os.getenv("DEBUG", "False").lower() in ("true", "1", "yes")
    environment: str = os.getenv("ENVIRONMENT", "development")

    # Günlük Ayarları
    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # CLI çıktı modu: plain | json | rich
    default_output_mode: str = os.getenv("DEFAULT_OUTPUT_MODE", "plain")


settings = Settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else getattr(logging, settings.log_level, logging.INFO),
    format="%(levelname)s: %(name)s: %(message)s",
)
