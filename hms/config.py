"""
Application configuration settings loaded from environment variables.
Uses pydantic_settings for validation and type conversion.
"""
from fastapi import Request
from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    """
    Application settings class with environment variable validation.

    Attributes:
        database_url: Full SQLAlchemy connection string (overrides the db_* fields)
        db_host: MySQL server hostname
        db_port: MySQL server port
        db_user: MySQL username
        db_password: MySQL password
        db_name: MySQL database name
        db_pool_size: Number of pooled connections kept by the engine

        # HTTP settings
        cors_origins: Origins allowed by the CORS middleware
        app_url: Public URL of the frontend, used to build password reset links
        static_dir: Optional directory of frontend files served at /

        # Behaviour settings
        reset_token_ttl_minutes: Lifetime of a password reset token
        emr_placeholder_alert: Whether the EMR returns a "No alerts" entry when nothing is abnormal
        create_tables: Whether missing tables are created at startup
        log_level: Root logging level
    """
    # Database settings
    database_url: Optional[str] = None
    db_host: str = "localhost"
    db_port: int = 3307
    db_user: str = "root"
    db_password: str = ""
    db_name: str = "login_db"
    db_pool_size: int = 10

    # HTTP settings
    cors_origins: List[str] = ["*"]
    app_url: str = "http://localhost:3000"
    static_dir: Optional[str] = None

    # Behaviour settings
    reset_token_ttl_minutes: int = 60
    emr_placeholder_alert: bool = True
    create_tables: bool = True
    log_level: str = "INFO"

    class Config:
        """Configuration for environment variables loading"""
        env_file = ".env"
        case_sensitive = False

    @property
    def sqlalchemy_url(self) -> str:
        """Connection URL handed to SQLAlchemy."""
        if self.database_url:
            return self.database_url
        return (
            f"mysql+pymysql://{self.db_user}:{self.db_password}"
            f"@{self.db_host}:{self.db_port}/{self.db_name}"
        )

# Create settings instance
settings = Settings()


def get_settings(request: Request) -> Settings:
    """Settings the running application was built with."""
    return request.app.state.settings
