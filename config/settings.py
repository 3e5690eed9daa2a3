from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Database (defaults to a local SQLite file; point at postgresql+asyncpg:// in prod)
    DATABASE_URL: str = "sqlite+aiosqlite:///./erp.db"

    # JWT: no default, MUST be set in .env
    JWT_SECRET: str
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60 * 24

    # Password hashing work factor
    BCRYPT_ROUNDS: int = 10

    # App
    APP_NAME: str = "ERP Backend"
    PORT: int = 3000
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False  # Safe default for production; set DEBUG=True in .env for local dev


settings = Settings()
