"""Tests for agent settings."""

from unittest.mock import patch

import pytest
from pydantic import ValidationError

from ops_agent.config import load_settings


@patch("ops_agent.config.load_dotenv")
def test_defaults(mock_load_dotenv):
    with patch.dict('os.environ', {}, clear=True):
        settings = load_settings()

    assert settings.model_name == "gpt-4o"
    assert settings.max_retries == 3
    assert settings.max_drive_cycles == 4
    assert settings.retry_delay_seconds == 0.5
    assert settings.history_window == 10
    assert settings.session_ttl_seconds == 7 * 24 * 60 * 60
    assert settings.log_level == "INFO"
    mock_load_dotenv.assert_called_once()


@patch("ops_agent.config.load_dotenv")
def test_values_from_environment(mock_load_dotenv):
    with patch.dict('os.environ', {
        'MODEL_NAME': 'gpt-4o-mini',
        'OPERATION_MAX_RETRIES': '1',
        'OPERATION_MAX_DRIVE_CYCLES': '2',
        'OPERATION_RETRY_DELAY_SECONDS': '0',
        'HISTORY_WINDOW': '4',
        'SESSION_TTL_SECONDS': '3600',
        'LOG_LEVEL': 'DEBUG',
    }, clear=True):
        settings = load_settings()

    assert settings.model_name == "gpt-4o-mini"
    assert settings.max_retries == 1
    assert settings.max_drive_cycles == 2
    assert settings.retry_delay_seconds == 0.0
    assert settings.history_window == 4
    assert settings.session_ttl_seconds == 3600
    assert settings.log_level == "DEBUG"


@patch("ops_agent.config.load_dotenv")
def test_invalid_value_is_rejected(mock_load_dotenv):
    with patch.dict('os.environ', {'OPERATION_MAX_RETRIES': '-1'}, clear=True):
        with pytest.raises(ValidationError):
            load_settings()
