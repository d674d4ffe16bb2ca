"""Tests for the Click CLI interface."""

import logging
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from tooling_support import __version__
from tooling_support._extraction import TRANSITIVE_TAG, SquareDependency
from tooling_support.cli.main import Config, build_config, cli, run_extraction
from tooling_support.exceptions import ConfigurationError, ResolutionError


class TestCLIHelp:
    """Test CLI help and version options."""

    def test_help_option(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Normalize build dependencies" in result.output
        assert "--log-level" in result.output

    def test_short_help_option(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["extract", "-h"])
        assert result.exit_code == 0
        assert "--project" in result.output
        assert "--configuration" in result.output

    def test_version_option(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestExtractCommand:
    """Tests for the extract command."""

    def test_plain_output(self, build_file):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["extract", str(build_file), "--project", ":app", "--configuration", "implementation", "--format", "plain"],
        )

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines == [
            "implementation:",
            "@maven://com.squareup:foo",
            "@maven://undefined:bar",
            "/lib [transitive]",
        ]

    def test_plain_output_with_resolved_artifacts(self, build_file):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["extract", str(build_file), "-p", ":app", "-c", "runtimeClasspath", "--format", "plain"],
        )

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert lines[:4] == [
            "runtimeClasspath:",
            "@maven://com.squareup:foo",
            "/lib [transitive]",
            "/project/path [transitive]",
        ]
        assert sorted(lines[4:]) == ["/includeBuild/project/path", "/lib"]

    def test_no_resolved(self, build_file):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["extract", str(build_file), "-p", ":app", "-c", "runtimeClasspath", "--no-resolved", "--format", "plain"],
        )

        assert result.exit_code == 0, result.output
        assert "/includeBuild/project/path" not in result.output

    def test_table_output(self, build_file):
        runner = CliRunner()
        result = runner.invoke(cli, ["extract", str(build_file), "--project", ":app"])

        assert result.exit_code == 0, result.output
        assert "implementation" in result.output
        assert "runtimeClasspath" in result.output
        assert "Summary" in result.output

    def test_project_without_configurations(self, build_file):
        runner = CliRunner()
        result = runner.invoke(cli, ["extract", str(build_file), "--project", ":lib"])

        assert result.exit_code == 0, result.output
        assert "Summary" not in result.output

    def test_project_from_env(self, build_file):
        runner = CliRunner()
        result = runner.invoke(
            cli,
            ["extract", str(build_file), "-c", "implementation", "--format", "plain"],
            env={"TOOLING_SUPPORT_PROJECT": ":app"},
        )

        assert result.exit_code == 0, result.output
        assert "/lib [transitive]" in result.output

    def test_unknown_project(self, build_file):
        runner = CliRunner()
        result = runner.invoke(cli, ["extract", str(build_file), "--project", ":missing"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_unknown_configuration(self, build_file):
        runner = CliRunner()
        result = runner.invoke(cli, ["extract", str(build_file), "-p", ":app", "-c", "missing"])

        assert result.exit_code == 1
        assert "missing" in result.output

    def test_relative_project_rejected(self, build_file):
        runner = CliRunner()
        result = runner.invoke(cli, ["extract", str(build_file), "--project", "app"])

        assert result.exit_code == 1
        assert "must be absolute" in result.output

    def test_missing_build_file(self, tmp_path):
        runner = CliRunner()
        result = runner.invoke(cli, ["extract", str(tmp_path / "missing.yml")])
        assert result.exit_code != 0

    def test_malformed_build_file(self, tmp_path):
        path = tmp_path / "build.yml"
        path.write_text("- just\n- a list\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["extract", str(path)])

        assert result.exit_code == 1
        assert "must be a mapping" in result.output

    def test_resolution_error_reported(self, tmp_path):
        path = tmp_path / "build.yml"
        path.write_text("name: root\nconfigurations:\n  runtimeClasspath:\n    dependencies:\n      - com.squareup:foo\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["extract", str(path)])

        assert result.exit_code == 1
        assert "Could not resolve" in result.output

    def test_undecodable_build_file(self, tmp_path):
        path = tmp_path / "build.yml"
        path.write_bytes(b"name: r\xff\xfe\n")

        runner = CliRunner()
        result = runner.invoke(cli, ["extract", str(path)])

        assert result.exit_code == 1
        assert "Cannot parse build description" in result.output

    def test_duplicate_project_entries(self, tmp_path):
        path = tmp_path / "build.yml"
        path.write_text(
            "name: root\nprojects:\n"
            "  - name: app\n    configurations:\n      api: {}\n"
            "  - name: app\n    configurations:\n      api: {}\n"
        )

        runner = CliRunner()
        result = runner.invoke(cli, ["extract", str(path)])

        assert result.exit_code == 1
        assert "Duplicate project app" in result.output

    def test_bracketed_coordinates_in_table(self, tmp_path):
        path = tmp_path / "build.yml"
        path.write_text(
            "name: root\nconfigurations:\n  api:\n    resolvable: false\n    dependencies:\n      - com.x:foo[/x]:1.0\n"
        )

        runner = CliRunner()
        result = runner.invoke(cli, ["extract", str(path)])

        assert result.exit_code == 0, result.output
        assert "foo[/x]" in result.output

    def test_log_level_applied(self, build_file):
        runner = CliRunner()
        with patch("tooling_support.cli.main.set_log_level") as mock_set_level:
            result = runner.invoke(cli, ["--log-level", "debug", "extract", str(build_file), "-p", ":lib"])

        assert result.exit_code == 0, result.output
        mock_set_level.assert_called_once()
        assert mock_set_level.call_args.args[0].upper() == "DEBUG"
        assert mock_set_level.call_args.kwargs == {"structured": False}

    def test_invalid_log_level(self, build_file):
        runner = CliRunner()
        result = runner.invoke(cli, ["--log-level", "LOUD", "extract", str(build_file)])
        assert result.exit_code == 2


class TestConfig:
    """Tests for Config validation and build_config."""

    def test_defaults(self):
        config = Config(build_file="build.yml")
        config.validate()
        assert config.project_path == ":"
        assert config.configurations == []
        assert config.include_resolved is True
        assert config.output_format == "table"

    def test_missing_build_file(self):
        with pytest.raises(ConfigurationError):
            Config(build_file="").validate()

    def test_invalid_format(self):
        with pytest.raises(ConfigurationError):
            Config(build_file="build.yml", output_format="xml").validate()

    def test_malformed_project_path(self):
        with pytest.raises(ConfigurationError):
            Config(build_file="build.yml", project_path=":app::lib").validate()

    def test_duplicate_configurations(self):
        config = build_config("build.yml", ":", ("api", "api", "implementation"), True, "PLAIN")
        assert config.configurations == ["api", "implementation"]
        assert config.output_format == "plain"


class TestRunExtraction:
    """Tests for run_extraction function."""

    def test_selected_configuration(self, build_file):
        config = build_config(str(build_file), ":app", ("implementation",), True, "table")

        project, results = run_extraction(config)

        assert project.path == ":app"
        assert results == {
            "implementation": [
                SquareDependency(target="@maven://com.squareup:foo"),
                SquareDependency(target="@maven://undefined:bar"),
                SquareDependency(target="/lib", tags={TRANSITIVE_TAG}),
            ]
        }

    def test_all_configurations(self, build_file):
        config = build_config(str(build_file), ":app", (), False, "table")

        _, results = run_extraction(config)

        assert list(results) == ["implementation", "runtimeClasspath"]

    def test_resolution_error_propagates(self, tmp_path):
        path = tmp_path / "build.yml"
        path.write_text("name: root\nconfigurations:\n  runtimeClasspath:\n    dependencies:\n      - com.squareup:foo\n")

        with pytest.raises(ResolutionError):
            run_extraction(build_config(str(path), ":", (), True, "table"))


@pytest.fixture(autouse=True)
def restore_log_level():
    """Keep CLI log level changes from leaking into other tests."""
    logger = logging.getLogger("tooling_support")
    level = logger.level
    yield
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)
