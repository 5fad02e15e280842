"""
Tests for CLI argument parsing in kvbench.cli and kvbench.cli_parser.

Tests cover:
- Help messages and program descriptions
- ``run`` command arguments and defaults
- ``backends`` command arguments
- YAML config file overrides
"""

import argparse

import pytest

from kvbench.cli import (
    HELP_MESSAGES,
    PROGRAM_DESCRIPTIONS,
    add_run_arguments,
    add_universal_arguments,
)
from kvbench.cli_parser import apply_yaml_config_overrides, build_parser, parse_arguments
from kvbench.errors import ConfigurationError, ErrorCode


class TestHelpMessages:
    """Tests for help message dictionaries."""

    def test_required_keys(self):
        for key in ('backend', 'target', 'workers', 'duration', 'idle_pool_size', 'phases'):
            assert key in HELP_MESSAGES

    def test_target_help_lists_defaults(self):
        assert "redis://localhost:6379/0" in HELP_MESSAGES['target']

    def test_program_descriptions(self):
        assert 'run' in PROGRAM_DESCRIPTIONS
        assert 'backends' in PROGRAM_DESCRIPTIONS


class TestAddUniversalArguments:
    """Tests for add_universal_arguments."""

    @pytest.fixture
    def parser(self):
        parser = argparse.ArgumentParser()
        add_universal_arguments(parser)
        return parser

    def test_defaults(self, parser):
        args = parser.parse_args([])
        assert args.debug is False
        assert args.verbose is False
        assert args.stream_log_level == "INFO"
        assert args.config_file is None

    def test_config_file_short_flag(self, parser):
        args = parser.parse_args(['-c', 'run.yaml'])
        assert args.config_file == 'run.yaml'


class TestRunArguments:
    """Tests for ``kvbench run`` arguments."""

    @pytest.fixture
    def parser(self):
        parser = argparse.ArgumentParser()
        add_run_arguments(parser)
        return parser

    def test_defaults(self, parser):
        args = parser.parse_args([])
        assert args.backend == "postgresql"
        assert args.target is None
        assert args.workers == 100
        assert args.duration == 10.0
        assert args.idle_pool_size == 30
        assert args.phases == ["set", "get"]
        assert args.output is None
        assert args.what_if is False

    def test_all_flags(self, parser):
        args = parser.parse_args([
            '--backend', 'redis', '--target', 'redis://cache:6379/0',
            '--workers', '16', '--duration', '2.5', '--idle-pool-size', '4',
            '--phases', 'set', '--output', 'out.json', '--what-if',
        ])
        assert args.backend == 'redis'
        assert args.target == 'redis://cache:6379/0'
        assert args.workers == 16
        assert args.duration == 2.5
        assert args.idle_pool_size == 4
        assert args.phases == ['set']
        assert args.output == 'out.json'
        assert args.what_if is True

    def test_short_flags(self, parser):
        args = parser.parse_args(['-b', 'memory', '-w', '3', '-d', '0.5', '-o', 'r.json'])
        assert (args.backend, args.workers, args.duration, args.output) == ('memory', 3, 0.5, 'r.json')

    def test_unknown_backend_rejected(self, parser):
        with pytest.raises(SystemExit):
            parser.parse_args(['--backend', 'etcd'])

    def test_unknown_phase_rejected(self, parser):
        with pytest.raises(SystemExit):
            parser.parse_args(['--phases', 'delete'])


class TestParseArguments:
    """Tests for the top level parser."""

    def test_run_subcommand(self):
        args = parse_arguments(['run', '--backend', 'memory', '--workers', '5'])
        assert args.program == 'run'
        assert args.backend == 'memory'
        assert args.workers == 5

    def test_backends_subcommand(self):
        args = parse_arguments(['backends', '--json'])
        assert args.program == 'backends'
        assert args.json is True

    def test_subcommand_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_config_file_applied(self, tmp_path):
        config_file = tmp_path / "run.yaml"
        config_file.write_text("workers: 12\nduration: 0.5\n")

        args = parse_arguments(['run', '--backend', 'memory', '-c', str(config_file)])

        assert args.workers == 12
        assert args.duration == 0.5


class TestApplyYamlConfigOverrides:
    """Tests for apply_yaml_config_overrides."""

    @pytest.fixture
    def args(self, run_args):
        return run_args

    def _write(self, tmp_path, text):
        path = tmp_path / "config.yaml"
        path.write_text(text)
        return str(path)

    def test_overrides_values(self, args, tmp_path):
        args.config_file = self._write(tmp_path, "backend: redis\ntarget: redis://h:1/0\nidle_pool_size: 2\n")

        result = apply_yaml_config_overrides(args)

        assert result.backend == "redis"
        assert result.target == "redis://h:1/0"
        assert result.idle_pool_size == 2

    def test_aliases(self, args, tmp_path):
        args.config_file = self._write(tmp_path, "worker_count: 7\nphase_duration: 3\n")

        result = apply_yaml_config_overrides(args)

        assert result.workers == 7
        assert result.duration == 3

    def test_dashed_keys(self, args, tmp_path):
        args.config_file = self._write(tmp_path, "idle-pool-size: 9\n")
        assert apply_yaml_config_overrides(args).idle_pool_size == 9

    def test_comma_string_for_list(self, args, tmp_path):
        args.config_file = self._write(tmp_path, "phases: set, get\n")
        assert apply_yaml_config_overrides(args).phases == ["set", "get"]

    def test_yaml_list_for_list(self, args, tmp_path):
        args.config_file = self._write(tmp_path, "phases:\n  - get\n")
        assert apply_yaml_config_overrides(args).phases == ["get"]

    def test_null_value_skipped(self, args, tmp_path):
        args.config_file = self._write(tmp_path, "workers:\n")
        assert apply_yaml_config_overrides(args).workers == 4

    def test_unknown_key_warns(self, args, tmp_path, mock_logger):
        args.config_file = self._write(tmp_path, "shards: 4\nworkers: 2\n")

        result = apply_yaml_config_overrides(args, logger=mock_logger)

        assert result.workers == 2
        assert not hasattr(result, 'shards')
        mock_logger.assert_logged('warning', "unknown parameter 'shards'")

    def test_unknown_key_without_logger_prints(self, args, tmp_path, capsys):
        args.config_file = self._write(tmp_path, "shards: 4\n")

        apply_yaml_config_overrides(args)

        assert "Warning: Config file contains unknown parameter 'shards'" in capsys.readouterr().err

    def test_empty_file(self, args, tmp_path, mock_logger):
        args.config_file = self._write(tmp_path, "")

        result = apply_yaml_config_overrides(args, logger=mock_logger)

        assert result is args
        mock_logger.assert_logged('warning', 'is empty')

    def test_missing_file(self, args, tmp_path):
        args.config_file = str(tmp_path / "missing.yaml")

        with pytest.raises(ConfigurationError) as exc_info:
            apply_yaml_config_overrides(args)

        assert exc_info.value.code == ErrorCode.CONFIG_FILE_NOT_FOUND

    def test_invalid_yaml(self, args, tmp_path):
        args.config_file = self._write(tmp_path, "workers: [1, 2\n")

        with pytest.raises(ConfigurationError) as exc_info:
            apply_yaml_config_overrides(args)

        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_non_mapping(self, args, tmp_path):
        args.config_file = self._write(tmp_path, "- workers\n- duration\n")

        with pytest.raises(ConfigurationError) as exc_info:
            apply_yaml_config_overrides(args)

        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR
