"""
Application settings and configuration management.

This module centralizes all application configuration using Pydantic settings
for type validation and environment variable handling.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Main application settings class.

    Uses Pydantic BaseSettings to automatically load configuration from:
    1. Environment variables
    2. .env file
    3. Default values defined here
    """

    # Database Configuration
    database_url: str = "sqlite:///./groupread.db"

    # Application Configuration
    debug: bool = False
    log_level: str = "INFO"
    project_name: str = "Group Read Service"

    # Group read configuration
    group_role_code_name: str = "GROUPROLE"
    max_page_limit: int = 200

    # Group lookups are not hierarchy scoped unless this is switched on
    scope_lookup_to_hierarchy: bool = False

    class Config:
        """Pydantic configuration for settings loading."""
        env_file = ".env"
        env_prefix = "GROUPREAD_"
        case_sensitive = False


# Global settings instance
# This will be imported throughout the application for configuration access
settings = Settings()
