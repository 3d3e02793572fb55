"""Unit tests for environment settings and loguru sink setup"""

from pathlib import Path

import pytest
from loguru import logger
from pydantic import ValidationError as SettingsError

from airline_reservation.config import get_settings
from airline_reservation.logger_config import configure_logging


@pytest.fixture(autouse=True)
def isolated_env(tmp_path, monkeypatch):
    # Keep a developer's .env out of the settings
    monkeypatch.chdir(tmp_path)
    for name in ('DATA_DIR', 'TICKET_PRICE', 'LOG_LEVEL', 'LOG_FILE', 'APP_NAME'):
        monkeypatch.delenv(f'AIRLINE_{name}', raising=False)


@pytest.mark.unit
class TestSettings:

    def test_defaults(self):
        settings = get_settings()
        assert settings.DATA_DIR == Path('data')
        assert settings.TICKET_PRICE == 500.00
        assert settings.LOG_LEVEL == 'WARNING'
        assert settings.LOG_FILE is None

    def test_environment_prefix(self, monkeypatch):
        monkeypatch.setenv('AIRLINE_DATA_DIR', '/srv/airline')
        monkeypatch.setenv('AIRLINE_TICKET_PRICE', '1250.50')
        monkeypatch.setenv('AIRLINE_LOG_LEVEL', ' debug ')
        settings = get_settings()
        assert settings.DATA_DIR == Path('/srv/airline')
        assert settings.TICKET_PRICE == 1250.50
        assert settings.LOG_LEVEL == 'DEBUG'

    def test_dotenv_file(self, tmp_path):
        (tmp_path / '.env').write_text('AIRLINE_APP_NAME=Sky Booker\n')
        assert get_settings().APP_NAME == 'Sky Booker'

    def test_negative_price_rejected(self):
        with pytest.raises(SettingsError):
            get_settings(TICKET_PRICE=-1)


@pytest.mark.unit
class TestConfigureLogging:

    def test_file_sink(self, tmp_path):
        log_file = tmp_path / 'logs' / 'airline.log'
        configure_logging(get_settings(LOG_FILE=log_file))
        logger.debug('seat 1A booked')
        logger.remove()  # closes the file sink
        assert 'seat 1A booked' in log_file.read_text()
