"""Tests for the CLI."""

import pytest
from click.testing import CliRunner

from tests.conftest import SCENARIO_EVENTS, ScriptedClient
from xentropy.cli import main


class FakeSearchClient(ScriptedClient):
    def __init__(self, config):
        super().__init__(SCENARIO_EVENTS)
        self.config = config

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        pass


@pytest.fixture
def offline(monkeypatch):
    monkeypatch.setenv("XAI_API_KEY", "test-key")
    monkeypatch.setattr("xentropy.rng.XSearchClient", FakeSearchClient)
    monkeypatch.setattr("xentropy.client.XSearchClient", FakeSearchClient)


class TestCLI:
    def test_version(self):
        r = CliRunner().invoke(main, ["--version"])
        assert r.exit_code == 0
        assert "0.1.0" in r.output

    def test_generate(self, offline):
        r = CliRunner().invoke(main, ["generate", "1", "6", "--delay", "0"])
        assert r.exit_code == 0, r.output
        assert r.output.strip() == "4"

    def test_generate_verbose(self, offline, tmp_path):
        log_file = tmp_path / "cli.log"
        r = CliRunner().invoke(
            main, ["generate", "1", "6", "--delay", "0", "-v", "--log-file", str(log_file)]
        )
        assert r.exit_code == 0, r.output
        assert r.output.splitlines()[0] == "4"
        assert "Seed:            045197c9a197226c" in r.output
        assert "Fallback chunks: 0" in r.output

    def test_generate_negative_range(self, offline):
        r = CliRunner().invoke(main, ["generate", "--delay", "0", "--", "-10", "-1"])
        assert r.exit_code == 0, r.output
        assert -10 <= int(r.output.strip()) <= -1

    def test_generate_invalid_range(self, offline):
        r = CliRunner().invoke(main, ["generate", "6", "1"])
        assert r.exit_code == 1
        assert "cannot be greater" in r.output

    def test_generate_missing_key(self, monkeypatch):
        monkeypatch.delenv("XAI_API_KEY", raising=False)
        r = CliRunner().invoke(main, ["generate", "1", "6"])
        assert r.exit_code == 1
        assert "API key" in r.output

    def test_generate_placeholder_key(self, monkeypatch):
        monkeypatch.delenv("XAI_API_KEY", raising=False)
        r = CliRunner().invoke(main, ["generate", "1", "6", "--api-key", "your-xai-api-key"])
        assert r.exit_code == 1

    def test_probe(self, offline):
        r = CliRunner().invoke(main, ["probe"])
        assert r.exit_code == 0, r.output
        assert "Timestamps: 2" in r.output
        assert "Shannon entropy" in r.output
        assert "Grade:           A (100.0/100)" in r.output

    def test_bias_dice(self):
        r = CliRunner().invoke(main, ["bias", "6", "--samples", "6000"])
        assert r.exit_code == 0
        assert "Theoretical bias" in r.output
        assert "4 residue(s)" in r.output

    def test_bias_power_of_two(self):
        r = CliRunner().invoke(main, ["bias", "256"])
        assert r.exit_code == 0
        assert "no modulo bias" in r.output

    def test_bias_large_width_skips_sweep(self):
        r = CliRunner().invoke(main, ["bias", str(10**9)])
        assert r.exit_code == 0
        assert "skipped" in r.output

    def test_bias_rejects_zero(self):
        r = CliRunner().invoke(main, ["bias", "0"])
        assert r.exit_code != 0
