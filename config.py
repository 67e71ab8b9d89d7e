# config.py
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    DATABASE_HOST: str = "localhost"
    DATABASE_PORT: int = 5432
    DATABASE_USER: str = "postgres"
    DATABASE_PASSWORD: str = ""
    DATABASE_NAME: str = "espaco_bronze"
    DATABASE_URL: str = ""

    SECRET_KEY: str
    APP_PORT: int = 8001
    LOG_LEVEL: str = "INFO"

    # Dados do negócio
    BUSINESS_NAME: str = "Espaço Carla Bronze"
    TIMEZONE: str = "America/Sao_Paulo"
    WHATSAPP_NUMBER: str = "5521999999999"
    INSTAGRAM_URL: str = "https://instagram.com/espacocarlabronze"
    ALLOW_ADMIN_SIGNUP: bool = False

    @property
    def constructed_database_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql+psycopg2://{self.DATABASE_USER}:{self.DATABASE_PASSWORD}@{self.DATABASE_HOST}:{self.DATABASE_PORT}/{self.DATABASE_NAME}"

settings = Settings()

class Config:
    SQLALCHEMY_DATABASE_URI = settings.constructed_database_url
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SECRET_KEY = settings.SECRET_KEY
    LOG_LEVEL = settings.LOG_LEVEL
    BUSINESS_NAME = settings.BUSINESS_NAME
    TIMEZONE = settings.TIMEZONE
    WHATSAPP_NUMBER = settings.WHATSAPP_NUMBER
    INSTAGRAM_URL = settings.INSTAGRAM_URL
    ALLOW_ADMIN_SIGNUP = settings.ALLOW_ADMIN_SIGNUP
