from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import make_url


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # 🧠 App Info
    PROJECT_NAME: str = "Account Service"
    ENVIRONMENT: str = "development"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # 🗄️ Database (PostgreSQL in deployment, SQLite file locally)
    DATABASE_URL: str = "sqlite:///./data/accounts.db"
    DB_POOL_SIZE: int = 5
    DB_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: float = 10.0
    DB_CONNECT_TIMEOUT: int = 10

    # 🔁 Startup connect retry
    DB_CONNECT_ATTEMPTS: int = 10
    DB_RETRY_BASE_DELAY: float = 1.0
    DB_RETRY_MAX_DELAY: float = 30.0

    # 🔒 Password hashing
    BCRYPT_ROUNDS: int = 12

    # 📦 File storage
    UPLOADS_DIR: str = "./uploads"

    # 🌍 CORS
    CORS_ORIGINS: str = "*"

    # 🕓 Logs
    LOG_LEVEL: str = "INFO"

    @property
    def cors_origins(self) -> list[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

    @property
    def safe_database_url(self) -> str:
        """Database URL with the password masked, for log output."""
        return make_url(self.DATABASE_URL).render_as_string(hide_password=True)

    @property
    def is_sqlite(self) -> bool:
        return self.DATABASE_URL.startswith("sqlite")


def get_settings() -> Settings:
    return Settings()
