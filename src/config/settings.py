"""
Configuration management for the timesheet and invoicing system.
"""

from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class InvoicingConfig(BaseSettings):
    """Configuration settings for the timesheet and invoicing system."""

    # Company details printed in the invoice header
    company_name: str = Field(default="STAFFING COMPANY", alias="COMPANY_NAME")
    company_address_line1: str = Field(
        default="123 Business Street, Suite 100", alias="COMPANY_ADDRESS_LINE1"
    )
    company_address_line2: str = Field(
        default="Business City, State 12345", alias="COMPANY_ADDRESS_LINE2"
    )
    payment_terms_days: int = Field(default=30, ge=0, alias="PAYMENT_TERMS_DAYS")

    # Timesheet view
    default_page_size: int = Field(default=10, ge=1, alias="DEFAULT_PAGE_SIZE")

    # Input/output locations
    invoice_output_dir: str = Field(default="output", alias="INVOICE_OUTPUT_DIR")
    seed_data_file: Optional[str] = Field(default=None, alias="SEED_DATA_FILE")

    # Application Configuration
    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        populate_by_name=True,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        """Ensure environment is valid."""
        valid_envs = ["development", "testing", "production"]
        if v.lower() not in valid_envs:
            raise ValueError(f"Environment must be one of: {valid_envs}")
        return v.lower()

    @field_validator("company_name")
    @classmethod
    def validate_company_name(cls, v):
        """Ensure the invoice header has a company name."""
        if not v or not v.strip():
            raise ValueError("Company name cannot be empty")
        return v.strip()

    @property
    def payment_terms_text(self) -> str:
        """Footer line describing the payment terms."""
        return f"Payment due within {self.payment_terms_days} days"

    def get_company_address_lines(self) -> list:
        """Get the non-empty company address lines in print order."""
        return [
            line
            for line in (self.company_address_line1, self.company_address_line2)
            if line and line.strip()
        ]


def load_config(env_file: Optional[str] = None) -> InvoicingConfig:
    """Load configuration from environment variables and .env file."""
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    return InvoicingConfig()


# Global configuration instance
_config: Optional[InvoicingConfig] = None


def get_config() -> InvoicingConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(env_file: Optional[str] = None) -> InvoicingConfig:
    """Reload configuration (useful for testing)."""
    global _config
    _config = load_config(env_file)
    return _config
