"""
Tests for the offline CLI commands.
"""

import json

import pytest
from click.testing import CliRunner

from ensar.cli.main import cli
from ensar.core.registrar import seal_bid
from ensar.crypto import namehash, sha3
from ensar.utils.logger import ENSARLogger

OWNER = "0x" + "11" * 20


@pytest.fixture
def runner(monkeypatch):
    for key in ("TLD", "MIN_LENGTH", "DECOY_COUNT", "REVEAL_WINDOW", "ENS_ADDRESS", "LOG_LEVEL"):
        monkeypatch.delenv(f"ENSAR_{key}", raising=False)
    # Keep handlers off the runner's temporary streams
    monkeypatch.setattr(ENSARLogger, "_initialized", True)
    return CliRunner()


class TestHashCommands:

    def test_hash(self, runner):
        result = runner.invoke(cli, ["hash", "FooBarBaz"])
        assert result.exit_code == 0
        assert result.output.strip() == sha3("foobarbaz")

    def test_hash_rejects_bad_name(self, runner):
        result = runner.invoke(cli, ["hash", "foo bar"])
        assert result.exit_code != 0
        assert "Cannot normalise" in result.output

    def test_namehash(self, runner):
        result = runner.invoke(cli, ["namehash", "foo.eth"])
        assert result.exit_code == 0
        assert result.output.strip() == namehash("foo.eth")


class TestSeal:

    def test_seal_prints_bid(self, runner):
        result = runner.invoke(cli, ["seal", "foobarbaz", OWNER, "1000", "secret"])
        assert result.exit_code == 0

        bid = json.loads(result.output)
        assert bid["hash"] == sha3("foobarbaz")
        assert bid["hex_secret"] == sha3("secret")
        assert bid["sha_bid"] == seal_bid(sha3("foobarbaz"), OWNER, 1000, sha3("secret"))

    def test_seal_short_name(self, runner):
        result = runner.invoke(cli, ["seal", "foo", OWNER, "1000", "secret"])
        assert result.exit_code != 0
        assert "too short" in result.output

    def test_seal_bad_owner(self, runner):
        result = runner.invoke(cli, ["seal", "foobarbaz", "0x12", "1000", "secret"])
        assert result.exit_code != 0
        assert "address" in result.output


class TestMode:

    def test_auction(self, runner):
        result = runner.invoke(
            cli,
            ["mode", "foobarbaz", "--status", "auction", "--registration-date", "1000000", "--now", "1000000"],
        )
        assert result.exit_code == 0
        assert result.output.strip() == "finalize"

    def test_short_name(self, runner):
        result = runner.invoke(cli, ["mode", "foo", "--status", "open"])
        assert result.output.strip() == "invalid"

    def test_min_length_from_config(self, runner, tmp_path):
        env_file = tmp_path / ".env"
        env_file.write_text("ENSAR_MIN_LENGTH=3\n")
        result = runner.invoke(cli, ["--config", str(env_file), "mode", "foo", "--status", "open"])
        assert result.output.strip() == "open"


class TestConfigCommand:

    def test_prints_effective_config(self, runner, monkeypatch):
        monkeypatch.setenv("ENSAR_TLD", "test")
        result = runner.invoke(cli, ["config"])
        assert result.exit_code == 0
        assert json.loads(result.output)["tld"] == "test"

    def test_bad_config_reported(self, runner, monkeypatch):
        monkeypatch.setenv("ENSAR_DECOY_COUNT", "many")
        result = runner.invoke(cli, ["config"])
        assert result.exit_code != 0
        assert "ENSAR_DECOY_COUNT" in result.output
