"""Settings defaults and environment overrides."""

import config
from config import load_settings


def test_defaults():
    settings = load_settings({})
    assert settings.db_path == config.DB_PATH
    assert settings.log_level == "INFO"
    assert settings.tick_interval_ms == 1000
    assert settings.notify_command == "notify-send"
    assert settings.alert_title == "Countdown Finished"
    assert settings.alert_body == "Your configured time has elapsed."


def test_environment_overrides():
    settings = load_settings(
        {
            "COUNTDOWN_DB": "/tmp/c.db",
            "COUNTDOWN_LOG_LEVEL": "debug",
            "COUNTDOWN_NOTIFY_COMMAND": "/usr/local/bin/notify",
        }
    )
    assert settings.db_path == "/tmp/c.db"
    assert settings.log_level == "DEBUG"
    assert settings.notify_command == "/usr/local/bin/notify"


def test_empty_values_fall_back():
    settings = load_settings({"COUNTDOWN_DB": "", "COUNTDOWN_LOG_LEVEL": ""})
    assert settings.db_path == config.DB_PATH
    assert settings.log_level == "INFO"
