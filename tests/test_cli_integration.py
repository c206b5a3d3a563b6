"""CLI integration tests using Click's CliRunner."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest
from click.testing import CliRunner

from rehumanize.cli import main
from rehumanize.models.options import EmptyTextError, HumanizeOptions, Mode, Tone
from rehumanize.models.results import HumanizationResult


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def user_config(tmp_path: Path) -> Path:
    p = tmp_path / "config.toml"
    p.write_text('[service]\napi_key = "from-file-1234"\n', encoding="utf-8")
    return p


class TestMainGroup:
    """Top-level CLI group."""

    def test_version(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "rehumanize" in result.output.lower()

    def test_help(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        assert "humanize" in result.output
        assert "credits" in result.output
        assert "config" in result.output


class TestHumanizeCommand:
    """humanize subcommand."""

    @patch("rehumanize.service.HumanizeService")
    def test_text_argument(self, mock_service_cls: MagicMock, runner: CliRunner) -> None:
        mock_service = mock_service_cls.return_value
        mock_service.policy.max_attempts = 15
        mock_service.humanize_detailed_sync.return_value = HumanizationResult(
            text="Rewritten.", source="remote"
        )

        result = runner.invoke(
            main, ["humanize", "Original.", "--tone", "formal", "--mode", "rewrite"]
        )

        assert result.exit_code == 0, result.output
        assert "Rewritten." in result.output
        text, options = mock_service.humanize_detailed_sync.call_args.args
        assert text == "Original."
        assert options == HumanizeOptions(mode=Mode.REWRITE, tone=Tone.FORMAL)

    @patch("rehumanize.service.HumanizeService")
    def test_reads_file(
        self, mock_service_cls: MagicMock, runner: CliRunner, tmp_path: Path
    ) -> None:
        source = tmp_path / "in.txt"
        source.write_text("From a file.", encoding="utf-8")
        mock_service = mock_service_cls.return_value
        mock_service.policy.max_attempts = 15
        mock_service.humanize_detailed_sync.return_value = HumanizationResult(
            text="Done.", source="fallback"
        )

        result = runner.invoke(main, ["humanize", "--file", str(source)])

        assert result.exit_code == 0, result.output
        assert mock_service.humanize_detailed_sync.call_args.args[0] == "From a file."

    @patch("rehumanize.service.HumanizeService")
    def test_reads_stdin_and_writes_output(
        self, mock_service_cls: MagicMock, runner: CliRunner, tmp_path: Path
    ) -> None:
        out = tmp_path / "out.txt"
        mock_service = mock_service_cls.return_value
        mock_service.policy.max_attempts = 15
        mock_service.humanize_detailed_sync.return_value = HumanizationResult(
            text="Piped result.", source="remote"
        )

        result = runner.invoke(main, ["humanize", "-o", str(out)], input="Piped text.")

        assert result.exit_code == 0, result.output
        assert mock_service.humanize_detailed_sync.call_args.args[0] == "Piped text."
        assert out.read_text(encoding="utf-8") == "Piped result."

    @patch("rehumanize.service.HumanizeService")
    def test_empty_text_is_usage_error(
        self, mock_service_cls: MagicMock, runner: CliRunner
    ) -> None:
        mock_service = mock_service_cls.return_value
        mock_service.policy.max_attempts = 15
        mock_service.humanize_detailed_sync.side_effect = EmptyTextError()

        result = runner.invoke(main, ["humanize", "   "])

        assert result.exit_code == 2
        assert "required" in result.output

    def test_text_and_file_conflict(self, runner: CliRunner, tmp_path: Path) -> None:
        source = tmp_path / "in.txt"
        source.write_text("x", encoding="utf-8")
        result = runner.invoke(main, ["humanize", "inline", "--file", str(source)])
        assert result.exit_code == 2

    def test_invalid_tone_rejected(self, runner: CliRunner) -> None:
        result = runner.invoke(main, ["humanize", "Text.", "--tone", "sarcastic"])
        assert result.exit_code == 2


class TestCreditsCommand:
    @patch("rehumanize.service.HumanizeService")
    def test_prints_balance(self, mock_service_cls: MagicMock, runner: CliRunner) -> None:
        mock_service_cls.return_value.get_credits_sync.return_value = 420
        result = runner.invoke(main, ["credits"])
        assert result.exit_code == 0
        assert result.output.strip() == "420"


class TestConfigCommand:
    def test_shows_masked_key(self, runner: CliRunner, user_config: Path) -> None:
        result = runner.invoke(main, ["--config", str(user_config), "config"])
        assert result.exit_code == 0
        assert "from-file-1234" not in result.output
        assert "1234" in result.output

    def test_api_key_from_env(self, runner: CliRunner, user_config: Path) -> None:
        with patch("rehumanize.service.HumanizeService") as mock_service_cls:
            mock_service_cls.return_value.get_credits_sync.return_value = 1
            result = runner.invoke(
                main,
                ["--config", str(user_config), "credits"],
                env={"REHUMANIZE_API_KEY": "env-key-9999"},
            )
        assert result.exit_code == 0
        config = mock_service_cls.call_args.args[0]
        assert config.service.api_key == "env-key-9999"

    def test_set_override(self, runner: CliRunner, user_config: Path) -> None:
        result = runner.invoke(
            main,
            ["--config", str(user_config), "config", "--set", "polling.max_attempts", "5"],
        )
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["polling"]["max_attempts"] == 5

    def test_set_unknown_key(self, runner: CliRunner, user_config: Path) -> None:
        result = runner.invoke(
            main, ["--config", str(user_config), "config", "--set", "service.bogus", "1"]
        )
        assert result.exit_code == 2

    @pytest.mark.parametrize("key", ["00123e4", "0042", "true"])
    def test_api_key_kept_verbatim(self, runner: CliRunner, key: str) -> None:
        with patch("rehumanize.service.HumanizeService") as mock_service_cls:
            mock_service_cls.return_value.get_credits_sync.return_value = 1
            result = runner.invoke(main, ["--api-key", key, "credits"])
        assert result.exit_code == 0, result.output
        config = mock_service_cls.call_args.args[0]
        assert config.service.api_key == key

    def test_api_key_survives_set(self, runner: CliRunner, user_config: Path) -> None:
        result = runner.invoke(
            main,
            [
                "--config", str(user_config),
                "--api-key", "00000042",
                "config", "--set", "polling.max_attempts", "3",
            ],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert data["service"]["api_key"] == "****0042"
        assert data["polling"]["max_attempts"] == 3

    def test_set_numeric_looking_key_verbatim(self, runner: CliRunner, user_config: Path) -> None:
        result = runner.invoke(
            main,
            ["--config", str(user_config), "config", "--set", "service.api_key", "000123456"],
        )
        assert result.exit_code == 0, result.output
        assert json.loads(result.output)["service"]["api_key"] == "*****3456"


class TestLoggingLevel:
    """Root logging level chosen by main."""

    @pytest.mark.parametrize(
        ("args", "toml", "expected"),
        [
            ([], "", logging.WARNING),
            ([], '[general]\nlog_level = "info"\n', logging.INFO),
            (["-v"], '[general]\nlog_level = "error"\n', logging.DEBUG),
            (["-q"], '[general]\nlog_level = "debug"\n', logging.CRITICAL),
        ],
    )
    def test_level_source(
        self,
        runner: CliRunner,
        tmp_path: Path,
        args: list[str],
        toml: str,
        expected: int,
    ) -> None:
        cfg = tmp_path / "config.toml"
        cfg.write_text(toml, encoding="utf-8")
        with patch("rehumanize.cli.logging.basicConfig") as basic_config:
            result = runner.invoke(main, ["--config", str(cfg), *args, "config"])
        assert result.exit_code == 0, result.output
        assert basic_config.call_args.kwargs["level"] == expected

    def test_invalid_level_is_usage_error(self, runner: CliRunner, tmp_path: Path) -> None:
        cfg = tmp_path / "config.toml"
        cfg.write_text('[general]\nlog_level = "loud"\n', encoding="utf-8")
        result = runner.invoke(main, ["--config", str(cfg), "config"])
        assert result.exit_code == 2
        assert "log_level" in result.output
