"""Tests for configuration."""

import pytest

from xentropy.config import PLACEHOLDER_API_KEY, XEntropyConfig
from xentropy.errors import ConfigurationError


class TestDefaults:
    def test_reference_values(self):
        c = XEntropyConfig(api_key="k")
        assert c.query == "*"
        assert c.domain_list == ("x.com",)
        assert c.max_results == 50
        assert c.window_seconds == 60
        assert c.rate_limit_delay == 1.2
        assert c.entropy_bits == 128
        assert c.seed_bytes == 16

    def test_target_bytes(self):
        assert XEntropyConfig(api_key="k").target_bytes == 16
        assert XEntropyConfig(api_key="k", entropy_bits=256).target_bytes == 32

    def test_repr_masks_key(self):
        r = repr(XEntropyConfig(api_key="xai-supersecret"))
        assert "supersecret" not in r
        assert "xai-" in r

    def test_frozen(self):
        c = XEntropyConfig(api_key="k")
        with pytest.raises(Exception):
            c.api_key = "other"


class TestValidate:
    @pytest.mark.parametrize("key", ["", PLACEHOLDER_API_KEY, f" {PLACEHOLDER_API_KEY} "])
    def test_placeholder_key(self, key):
        with pytest.raises(ConfigurationError):
            XEntropyConfig(api_key=key).validate()

    @pytest.mark.parametrize("changes", [
        {"entropy_bits": 0},
        {"entropy_bits": 100},
        {"seed_bytes": 4},
        {"seed_bytes": 33},
        {"rate_limit_delay": -1.0},
        {"window_seconds": 0},
        {"max_results": 0},
        {"max_attempts": 0},
        {"deadline": 0.0},
    ])
    def test_bad_settings(self, changes):
        with pytest.raises(ConfigurationError):
            XEntropyConfig(api_key="k", **changes).validate()

    def test_valid_returns_self(self):
        c = XEntropyConfig(api_key="k", deadline=None, max_attempts=10)
        assert c.validate() is c


class TestFromEnv:
    def test_reads_key(self, monkeypatch):
        monkeypatch.setenv("XAI_API_KEY", "from-env")
        assert XEntropyConfig.from_env().api_key == "from-env"

    def test_missing_key_fails_validation(self, monkeypatch):
        monkeypatch.delenv("XAI_API_KEY", raising=False)
        with pytest.raises(ConfigurationError):
            XEntropyConfig.from_env().validate()

    def test_overrides_win(self, monkeypatch):
        monkeypatch.setenv("XAI_API_KEY", "from-env")
        monkeypatch.setenv("XENTROPY_RATE_LIMIT_DELAY", "2.5")
        c = XEntropyConfig.from_env(api_key="explicit", rate_limit_delay=None)
        assert c.api_key == "explicit"
        assert c.rate_limit_delay == 2.5

    def test_deadline_disabled(self, monkeypatch):
        monkeypatch.setenv("XAI_API_KEY", "k")
        monkeypatch.setenv("XENTROPY_DEADLINE", "none")
        assert XEntropyConfig.from_env().deadline is None

    def test_bad_number(self, monkeypatch):
        monkeypatch.setenv("XAI_API_KEY", "k")
        monkeypatch.setenv("XENTROPY_RATE_LIMIT_DELAY", "fast")
        with pytest.raises(ConfigurationError):
            XEntropyConfig.from_env()
