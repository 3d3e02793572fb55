from pathlib import Path
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix='AIRLINE_',
        env_file='.env',
        env_ignore_empty=True,
        extra='ignore',
    )

    APP_NAME: str = 'Airline Reservation System'

    # Flat-file storage
    DATA_DIR: Path = Path('data')

    # Fixed fare charged through the payment strategies
    TICKET_PRICE: float = 500.00

    # Logging
    LOG_LEVEL: str = 'WARNING'
    LOG_FILE: Optional[Path] = None
    LOG_ROTATION: str = '1 day'
    LOG_RETENTION: str = '30 days'

    @field_validator('LOG_LEVEL', mode='before')
    @classmethod
    def normalize_level(cls, v: str) -> str:
        return v.strip().upper() if isinstance(v, str) else v

    @field_validator('TICKET_PRICE')
    @classmethod
    def check_price(cls, v: float) -> float:
        if v < 0:
            raise ValueError('TICKET_PRICE cannot be negative')
        return v


def get_settings(**overrides) -> Settings:
    return Settings(**overrides)
