"""
config.py — Application configuration through environment variables.
Every variable carries the TERMCALC_ prefix.
"""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Decimal arithmetic
    decimal_precision: int = 28

    # Logging
    log_level: str = "WARNING"

    # Session protocol
    greeting: str = "Welcome to Glom's Calculator!"
    prompt: str = ">> "
    exit_command: str = "exit"
    inline_command: str = "inline"
    history_size: int = 1000   # lines the terminal console remembers

    # App
    app_title: str = "TermCalc"
    app_version: str = "0.1.0"

    model_config = SettingsConfigDict(env_prefix="TERMCALC_", env_file=".env", extra="ignore")
