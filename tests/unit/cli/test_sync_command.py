"""Unit tests for cli.sync_command module."""

import logging
from unittest.mock import Mock, patch

import pytest

from src.cli.errors import InvalidOptionError
from src.cli.models import ExitCode
from src.cli.sync_command import SyncCommand
from src.mirror.errors import (
    ConfigError,
    FileProcessingError,
    SourceNotFoundError,
    UnsafeOutputError,
)
from src.mirror.models import SyncOptions, SyncResult


@pytest.fixture
def output():
    return Mock()


class TestLoadOptions:
    """Test cases for SyncCommand.load_options."""

    def test_defaults_without_config(self, tmp_path, output):
        cmd = SyncCommand(config_path=str(tmp_path / "missing.yaml"), output_handler=output)
        assert cmd.load_options() == SyncOptions()

    def test_config_file_values(self, tmp_path, output):
        config = tmp_path / "config.yaml"
        config.write_text("source_dir: notes\nconcurrency: 2\n")
        cmd = SyncCommand(config_path=str(config), output_handler=output)

        options = cmd.load_options()

        assert options.source_dir == "notes"
        assert options.concurrency == 2

    def test_overrides_win(self, tmp_path, output):
        """Command-line overrides replace configured values; None keeps them."""
        config = tmp_path / "config.yaml"
        config.write_text("source_dir: notes\noutput_dir: site\nheading: true\n")
        cmd = SyncCommand(config_path=str(config), output_handler=output)

        options = cmd.load_options(output_dir="public", clean=False, heading=False, concurrency=8)

        assert options.source_dir == "notes"
        assert options.output_dir == "public"
        assert options.clean is False
        assert options.heading is False
        assert options.concurrency == 8

    def test_config_path_relative_to_base_dir(self, tmp_path, output):
        (tmp_path / ".docs-mirror").mkdir()
        (tmp_path / ".docs-mirror" / "config.yaml").write_text("output_dir: public\n")
        cmd = SyncCommand(output_handler=output, base_dir=tmp_path)

        assert cmd.load_options().output_dir == "public"

    def test_invalid_concurrency_override(self, tmp_path, output):
        cmd = SyncCommand(config_path=str(tmp_path / "missing.yaml"), output_handler=output)

        with pytest.raises(InvalidOptionError):
            cmd.load_options(concurrency=0)


class TestRun:
    """Test cases for SyncCommand.run."""

    @patch('src.cli.sync_command.run_sync')
    def test_success_prints_summary(self, mock_run_sync, tmp_path, output):
        mock_run_sync.return_value = SyncResult(processed_count=3, written_count=1, unchanged_count=2)
        cmd = SyncCommand(config_path=str(tmp_path / "missing.yaml"), output_handler=output)

        exit_code = cmd.run(source_dir="src-dir", output_dir="out-dir")

        assert exit_code == ExitCode.SUCCESS
        options = mock_run_sync.call_args.args[0]
        assert options.source_dir == "src-dir"
        assert options.output_dir == "out-dir"
        output.print_summary.assert_called_once_with(
            processed_count=3, written_count=1, unchanged_count=2
        )

    @pytest.mark.parametrize("error", [
        SourceNotFoundError("/missing"),
        UnsafeOutputError("/s", "/s", "same directory"),
        FileProcessingError("a.md", "boom"),
        ConfigError("bad value", "concurrency"),
    ])
    @patch('src.cli.sync_command.run_sync')
    def test_mirror_errors_are_general_errors(self, mock_run_sync, error, tmp_path, output):
        """Fatal mirror errors map to exit code 1 with one error line."""
        mock_run_sync.side_effect = error
        cmd = SyncCommand(config_path=str(tmp_path / "missing.yaml"), output_handler=output)

        assert cmd.run() == ExitCode.GENERAL_ERROR
        output.error.assert_called_once()
        assert str(error) in output.error.call_args.args[0]
        output.print_summary.assert_not_called()

    @pytest.mark.parametrize("error,hint", [
        (UnsafeOutputError("/s", "/s", "same directory"), "different from the source directory"),
        (UnsafeOutputError("/p/source", "/p", "source inside output"), "does not contain the source directory"),
    ])
    @patch('src.cli.sync_command.run_sync')
    def test_unsafe_output_hint_matches_reason(self, mock_run_sync, error, hint, tmp_path, output):
        mock_run_sync.side_effect = error
        cmd = SyncCommand(config_path=str(tmp_path / "missing.yaml"), output_handler=output)

        assert cmd.run() == ExitCode.GENERAL_ERROR
        assert hint in output.info.call_args.args[0]

    @patch('src.cli.sync_command.run_sync')
    def test_fatal_errors_are_not_logged_as_warnings(self, mock_run_sync, tmp_path, output, caplog):
        """The handler line is the only diagnostic at default verbosity."""
        mock_run_sync.side_effect = FileProcessingError("a.md", "boom")
        cmd = SyncCommand(config_path=str(tmp_path / "missing.yaml"), output_handler=output)

        with caplog.at_level(logging.DEBUG, logger="src"):
            cmd.run()

        assert [r for r in caplog.records if r.levelno >= logging.WARNING] == []

    def test_invalid_config_file(self, tmp_path, output):
        config = tmp_path / "config.yaml"
        config.write_text("concurrency: 0\n")
        cmd = SyncCommand(config_path=str(config), output_handler=output)

        assert cmd.run() == ExitCode.GENERAL_ERROR
        assert "concurrency" in output.error.call_args.args[0]

    def test_invalid_override(self, tmp_path, output):
        cmd = SyncCommand(config_path=str(tmp_path / "missing.yaml"), output_handler=output)

        assert cmd.run(concurrency=0) == ExitCode.GENERAL_ERROR
        assert "--concurrency" in output.error.call_args.args[0]

    @patch('src.cli.sync_command.run_sync')
    def test_unexpected_error(self, mock_run_sync, tmp_path, output):
        mock_run_sync.side_effect = RuntimeError("surprise")
        cmd = SyncCommand(config_path=str(tmp_path / "missing.yaml"), output_handler=output)

        assert cmd.run() == ExitCode.GENERAL_ERROR
        assert "surprise" in output.error.call_args.args[0]
