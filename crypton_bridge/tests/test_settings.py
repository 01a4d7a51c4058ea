"""
Tests para la configuracion de crypton_bridge.
"""

import pytest
from unittest.mock import patch

import sys
from pathlib import Path
src_path = Path(__file__).parent.parent.parent
sys.path.insert(0, str(src_path))

from crypton_bridge.config.settings import (
    CRYPTON_SETTINGS,
    TRANSPORT_DEFAULTS,
    configure_logging,
    get_credentials,
    get_env_or_default,
)


class TestSettings:
    """Tests para constantes y variables de entorno"""

    def test_exchange_constants(self):
        assert CRYPTON_SETTINGS.exchange_id == "crypton"
        assert CRYPTON_SETTINGS.api_url == "https://api.cryptonbtc.com"
        assert CRYPTON_SETTINGS.amount_precision == 8
        assert TRANSPORT_DEFAULTS.max_retries == 1

    def test_settings_are_frozen(self):
        with pytest.raises(Exception):
            CRYPTON_SETTINGS.maker_fee = 0.5

    def test_get_env_or_default(self, monkeypatch):
        monkeypatch.setenv("CRYPTON_TEST_INT", "12")
        monkeypatch.setenv("CRYPTON_TEST_BAD", "abc")
        monkeypatch.setenv("CRYPTON_TEST_BOOL", "yes")

        assert get_env_or_default("CRYPTON_TEST_INT", 1, int) == 12
        assert get_env_or_default("CRYPTON_TEST_BAD", 1, int) == 1
        assert get_env_or_default("CRYPTON_TEST_BOOL", False, bool) is True
        assert get_env_or_default("CRYPTON_TEST_MISSING", "x") == "x"

    def test_get_credentials_prefers_arguments(self, monkeypatch):
        monkeypatch.setenv("CRYPTON_API_KEY", "env-key")
        monkeypatch.setenv("CRYPTON_API_SECRET", "env-secret")

        assert get_credentials("key", None) == ("key", "env-secret")
        assert get_credentials() == ("env-key", "env-secret")

    def test_get_credentials_missing(self, monkeypatch):
        monkeypatch.delenv("CRYPTON_API_KEY", raising=False)
        monkeypatch.delenv("CRYPTON_API_SECRET", raising=False)

        assert get_credentials() == (None, None)

    def test_configure_logging(self):
        with patch("logging.basicConfig") as mock_config:
            configure_logging("debug")

        assert mock_config.call_args.kwargs["level"] == "DEBUG"
