from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_title: str = "Etat Civil API"
    service_name: str = "etat_civil"

    # Where the CLI script writes finished PDFs when no path is given.
    pdf_output_dir: str = "storage/pdfs"

    monitoring_webhook_url: str | None = None
    monitoring_timeout_seconds: float = 5.0

    env: str = "dev"
    log_level: str = "info"


settings = Settings()
