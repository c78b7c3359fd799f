# pulse_bridge/config.py
from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    SERVICE_NAME: str = "pulse-bridge"
    ENV: str = "dev"
    HOST: str = "0.0.0.0"
    PORT: int = 8020
    LOG_LEVEL: str = "INFO"

    # Media scanner channel
    MEDIA_SCANNER_CHANNEL: str = "com.pulse.app/media_scanner"
    # {path} is substituted per scanned file; appended when absent
    MEDIA_SCAN_COMMAND: List[str] = ["tracker3", "index", "--file", "{path}"]
    # seconds per indexer run; unset waits for the indexer indefinitely
    MEDIA_SCAN_TIMEOUT_S: Optional[float] = None

    # Push notifications (firebase-admin)
    PUSH_ENABLED: bool = True
    FIREBASE_SERVICE_ACCOUNT_PATH: str = "./service-account-key.json"
    FIREBASE_DATABASE_URL: Optional[str] = (
        "https://pulse-app-ea5be-default-rtdb.asia-southeast1.firebasedatabase.app"
    )
    FIREBASE_HTTP_TIMEOUT_S: int = 30

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")


settings = Settings()
