from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Book Catalog API"
    app_version: str = "0.1.0"
    app_description: str = "Create, browse and search a catalog of books."
    database_url: str = "sqlite:///./books.db"
    migrate_on_startup: bool = True
    alembic_config: str = "alembic.ini"
    host: str = "0.0.0.0"
    port: int = 8081
    default_page_size: int = 10
    log_level: str = "INFO"
    log_format: str = "json"
    log_service_name: str = "book-catalog-api"

    model_config = SettingsConfigDict(
        env_prefix="BOOK_CATALOG_", env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )


settings = Settings()
