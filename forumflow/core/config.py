# Defines application-wide settings using pydantic-settings
# Manages environment variables for various aspects of the application:
# API configuration (project name, version)
# Database connection details (MongoDB credentials, cluster, database name)
# Firebase service-account material
# Runtime mode controlling error-detail exposure


import json
from typing import Annotated, List, Optional, Union
from urllib.parse import quote_plus

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict
from dotenv import load_dotenv

load_dotenv()

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    # API configuration
    PROJECT_NAME: str = "ForumFlow API"
    VERSION: str = "1.0.0"

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    SHUTDOWN_GRACE_SECONDS: int = 10

    # Database
    DB_USER: str = ""
    DB_PASS: str = ""
    DB_CLUSTER: str = "cluster0.mongodb.net"
    DB_NAME: str = "forumflow"
    MONGODB_URI: Optional[str] = None

    # Firebase
    FIREBASE_SERVICE_ACCOUNT: Optional[str] = None
    FIREBASE_SERVICE_ACCOUNT_PATH: str = "firebase-service-account.json"

    # CORS
    BACKEND_CORS_ORIGINS: Annotated[List[str], NoDecode] = ["*"]

    # Development settings - set these differently in production
    DEBUG: bool = False
    ENVIRONMENT: str = "production"

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str) and not v.startswith("["):
            return [i.strip() for i in v.split(",") if i.strip()]
        elif isinstance(v, str):
            # Handle JSON string format
            try:
                return json.loads(v)
            except ValueError:
                return []
        return v

    @property
    def mongodb_uri(self) -> str:
        """Full connection string, assembled from credentials unless overridden."""
        if self.MONGODB_URI:
            return self.MONGODB_URI
        return (
            f"mongodb+srv://{quote_plus(self.DB_USER)}:{quote_plus(self.DB_PASS)}"
            f"@{self.DB_CLUSTER}/?retryWrites=true&w=majority"
        )

    @property
    def expose_error_details(self) -> bool:
        return self.ENVIRONMENT == "development"

# Create settings instance
settings = Settings()

if settings.DEBUG:
    print(f"Environment: {settings.ENVIRONMENT}")
    print(f"Database: {settings.DB_NAME} on {settings.DB_CLUSTER}")
