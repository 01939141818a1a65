from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict
from sqlalchemy.engine import URL, make_url

from contacts_service.core.errors import ConfigurationError

PROFILES = ("direct", "cloud")


class Settings(BaseSettings):
    """Application configuration.

    Values are loaded from environment variables and optional .env file.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", case_sensitive=False, extra="ignore")

    # App
    app_name: str = "Contacts Service"
    environment: str = "dev"  # dev|staging|prod
    api_prefix: str = "/api"
    host: str = "0.0.0.0"
    port: int = 9001

    # Database
    profile: str = "direct"  # direct|cloud
    db_properties: str = "db.properties"
    database_url: str = ""  # overrides the profile when set
    sql_echo: bool = False
    create_schema: bool = True

    # Logging
    log_level: str = "INFO"
    log_format: str = "standard"  # standard|json

    # Security / JWT
    secret_key: str = "CHANGE_ME"  # change in prod
    access_token_exp_minutes: int = 60
    jwt_algorithm: str = "HS256"
    token_required: bool = False


class DirectDataSource(BaseSettings):
    """Connection parameters read from a properties file only.

    The file uses dotenv syntax::

        DB_URL=postgresql+psycopg2://localhost:5432/contacts
        DB_USERNAME=contacts
        DB_PASSWORD=secret
    """

    model_config = SettingsConfigDict(env_prefix="DB_", env_file_encoding="utf-8", case_sensitive=False, extra="ignore")

    url: str = "sqlite:///contacts.db"
    username: str = ""
    password: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, dotenv_settings

    @classmethod
    def load(cls, path: str) -> "DirectDataSource":
        return cls(_env_file=path)

    def database_url(self) -> str:
        url = make_url(self.url)
        if self.username:
            url = url.set(username=self.username)
        if self.password:
            url = url.set(password=self.password)
        return url.render_as_string(hide_password=False)


class CloudDataSource(BaseSettings):
    """Connection parameters read from environment variables only."""

    model_config = SettingsConfigDict(env_prefix="DB_", case_sensitive=False, extra="ignore")

    driver: str = "postgresql+psycopg2"
    host: str = "localhost"
    port: int | None = None
    name: str = "samples"
    username: str = ""
    password: str = ""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return init_settings, env_settings

    def database_url(self) -> str:
        url = URL.create(
            self.driver,
            username=self.username or None,
            password=self.password or None,
            host=self.host,
            port=self.port,
            database=self.name,
        )
        return url.render_as_string(hide_password=False)


def resolve_database_url(settings: Settings) -> str:
    """Pick the connection URL for the configured profile."""
    if settings.database_url:
        return settings.database_url

    if settings.profile == "direct":
        return DirectDataSource.load(settings.db_properties).database_url()
    if settings.profile == "cloud":
        return CloudDataSource().database_url()
    raise ConfigurationError(f"unknown profile '{settings.profile}', expected one of {', '.join(PROFILES)}")


def redact_url(url: str) -> str:
    return make_url(url).render_as_string(hide_password=True)


@lru_cache
def get_settings() -> Settings:
    return Settings()
