"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class LedgerbookConfig(BaseSettings):
    """Ledgerbook configuration"""
    
    model_config = SettingsConfigDict(
        env_prefix="LEDGERBOOK_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )
    
    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    
    # Business rules configuration (money as Decimal strings)
    checking_transaction_fee: str = "2.50"
    checking_free_transactions: int = 10
    savings_minimum_balance: str = "100.00"
    savings_monthly_interest_rate: str = "0.02"
    savings_max_withdrawals: int = 5
    account_number_base: int = 1000  # First account opened is base + 1
    zero_balance_tolerance: str = "0.01"
    
    # Gradebook configuration
    weight_tolerance: float = 0.01


# Global configuration instance
config = LedgerbookConfig()


def get_config() -> LedgerbookConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> LedgerbookConfig:
    """Reload configuration from environment"""
    global config
    config = LedgerbookConfig()
    return config
