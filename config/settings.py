from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Admin shared secret checked on auth:login
    ADMIN_PASSWORD: str = "1010"

    # Admin capability token. No default secret; MUST be set in .env
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    ADMIN_TOKEN_EXPIRE_MINUTES: int = 720

    # Persistence
    PERSIST_FILE: str = "auction_data.json"
    DEFAULT_PURSE: int = 500

    # Client page + live reload
    STATIC_DIR: str = "."
    CLIENT_PAGE: str = "Auction.html"
    WATCHED_FILES: list[str] = ["Auction.html"]
    RELOAD_POLL_SECONDS: float = 1.0

    # App
    APP_NAME: str = "Sports Auction"
    DEBUG: bool = False  # Safe default for production; set DEBUG=True in .env for local dev


settings = Settings()
