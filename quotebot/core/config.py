from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    OPENAI_API_KEY: str | None = None

    OPENAI_MODEL_EXTRACT: str = "gpt-4o-mini"
    OPENAI_TEMPERATURE_EXTRACT: float = 0.0
    OPENAI_TIMEOUT_SECONDS: float = 15.0
    OPENAI_MODEL_TRANSCRIBE: str = "whisper-1"

    META_VERIFY_TOKEN: str = ""
    META_APP_SECRET: str | None = None
    WHATSAPP_GRAPH_API_VERSION: str = "v20.0"
    WHATSAPP_PHONE_NUMBER_ID: str | None = None
    WHATSAPP_ACCESS_TOKEN: str | None = None

    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"
    AUTO_REPLY_ENABLED: bool = False

    CATALOG_PATH: str | None = None  # built-in seed catalog when unset
    STORE_DATA_DIR: str = "data"
    QUOTE_DOCUMENT_DIR: str = "data/quotes"

    TAX_RATE: float = 0.08
    SHIPPING_FEE: float = 15.0
    FREE_SHIPPING_THRESHOLD: float = 100.0
    QUOTE_VALID_DAYS: int = 30


settings = Settings()
