from typing import List, Union
from pydantic_settings import BaseSettings
from pydantic import field_validator


class Settings(BaseSettings):
    # App Info
    APP_NAME: str = "CoE Research Activity Tracker"
    VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"

    # Database
    DATABASE_URL: str

    # Security
    SECRET_KEY: str
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440  # 1 day
    AUTH_COOKIE_NAME: str = "token"

    # Roles
    DIRECTOR_ROLE: str = "director"
    DEFAULT_ROLE: str = "Researcher/Dev"
    # Users created with one of these emails get the director role
    DIRECTOR_EMAILS: Union[str, List[str]] = ""

    # Custom reports: when false, any authenticated user may read/edit/delete a report by id
    REPORTS_ENFORCE_OWNERSHIP: bool = False

    # CORS
    CORS_ORIGINS: Union[str, List[str]] = "http://localhost:3000"

    @field_validator('CORS_ORIGINS', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',')]
        return v

    @field_validator('DIRECTOR_EMAILS', mode='before')
    @classmethod
    def parse_director_emails(cls, v):
        if isinstance(v, str):
            return [email.strip().lower() for email in v.split(',') if email.strip()]
        return [email.lower() for email in v]

    class Config:
        env_file = ".env"
        case_sensitive = True
        validate_default = True

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"

    @property
    def director_emails(self) -> set[str]:
        return set(self.DIRECTOR_EMAILS)


# Create settings instance
settings = Settings()
