import sys
from dataclasses import dataclass, field

import click

from .. import __version__
from .._extraction import SquareDependency, extract_dependency_map
from .._extraction.paths import is_absolute_path, path_segments
from .._host import InMemoryProject, load_build_description
from ..console import console, gha_error, print_dependency_lines, print_dependency_table, print_summary_table
from ..exceptions import ConfigurationError, InvalidBuildPathError, ToolingSupportError
from ..logging_config import logger, set_log_level

OUTPUT_FORMATS = ("table", "plain")
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")

CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


@dataclass
class Config:
    """Configuration settings for a dependency extraction run."""

    build_file: str
    project_path: str = ":"
    configurations: list[str] = field(default_factory=list)
    include_resolved: bool = True
    output_format: str = "table"

    def validate(self) -> None:
        """
        Validate configuration settings.

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not self.build_file:
            raise ConfigurationError("Build file is not defined")

        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"Invalid output format '{self.output_format}'. Expected one of: {', '.join(OUTPUT_FORMATS)}"
            )

        if not is_absolute_path(self.project_path):
            raise ConfigurationError(f"Project path must be absolute (start with ':'): '{self.project_path}'")
        try:
            path_segments(self.project_path)
        except InvalidBuildPathError as e:
            raise ConfigurationError(f"Invalid project path: {e}") from e

        # Drop repeated configuration names, keeping the first occurrence
        unique = list(dict.fromkeys(self.configurations))
        if len(unique) != len(self.configurations):
            logger.warning("Duplicate configuration names given, each configuration is extracted once")
            self.configurations = unique


def build_config(
    build_file: str,
    project_path: str,
    configurations: tuple[str, ...],
    include_resolved: bool,
    output_format: str,
) -> Config:
    """
    Build and validate configuration from CLI arguments.

    Raises:
        ConfigurationError: If configuration is invalid
    """
    config = Config(
        build_file=build_file,
        project_path=project_path,
        configurations=list(configurations),
        include_resolved=include_resolved,
        output_format=output_format.lower(),
    )
    config.validate()
    return config


def run_extraction(config: Config) -> tuple[InMemoryProject, dict[str, list[SquareDependency]]]:
    """
    Load the build description and extract the requested configurations.

    Returns:
        The selected project and its dependencies per configuration name

    Raises:
        ConfigurationError: If the project or a configuration does not exist
        BuildDescriptionError: If the build description is malformed
        ResolutionError: If the host fails to resolve a configuration
    """
    root = load_build_description(config.build_file)

    try:
        project = root.find_project(config.project_path)
        if config.configurations:
            configurations = [project.get_configuration(name) for name in config.configurations]
        else:
            configurations = project.configurations
    except KeyError as e:
        raise ConfigurationError(e.args[0]) from e

    logger.info(f"Extracting {len(configurations)} configuration(s) of {project.path} from {config.build_file}")
    return project, extract_dependency_map(configurations, project, include_resolved=config.include_resolved)


def _render(project: InMemoryProject, results: dict[str, list[SquareDependency]], output_format: str) -> None:
    if output_format == "plain":
        for name, dependencies in results.items():
            console.print(f"{name}:", markup=False, highlight=False)
            print_dependency_lines(dependencies)
        return

    for name, dependencies in results.items():
        print_dependency_table(f"{project.path} {name}", dependencies)
    print_summary_table("Summary", [(name, len(deps)) for name, deps in results.items()], show_if_empty=True)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, "--version", prog_name="tooling-support")
@click.option(
    "--log-level",
    envvar="TOOLING_SUPPORT_LOG_LEVEL",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="INFO",
    show_default=True,
    help="Logging level. [env: TOOLING_SUPPORT_LOG_LEVEL]",
)
@click.option(
    "--structured-logs/--no-structured-logs",
    envvar="TOOLING_SUPPORT_STRUCTURED_LOGS",
    default=False,
    help="Emit logs as JSON lines. [env: TOOLING_SUPPORT_STRUCTURED_LOGS]",
)
def cli(log_level: str, structured_logs: bool) -> None:
    """Normalize build dependencies into canonical target and tag records."""
    set_log_level(log_level, structured=structured_logs)


@cli.command()
@click.argument("build_file", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--project",
    "-p",
    "project_path",
    envvar="TOOLING_SUPPORT_PROJECT",
    default=":",
    show_default=True,
    help="Absolute path of the project to inspect. [env: TOOLING_SUPPORT_PROJECT]",
)
@click.option(
    "--configuration",
    "-c",
    "configurations",
    multiple=True,
    help="Configuration to extract, repeatable. Defaults to all configurations of the project.",
)
@click.option(
    "--resolved/--no-resolved",
    "include_resolved",
    envvar="TOOLING_SUPPORT_INCLUDE_RESOLVED",
    default=True,
    help="Also report projects found in resolved artifacts. [env: TOOLING_SUPPORT_INCLUDE_RESOLVED]",
)
@click.option(
    "--format",
    "output_format",
    envvar="TOOLING_SUPPORT_FORMAT",
    type=click.Choice(OUTPUT_FORMATS, case_sensitive=False),
    default="table",
    show_default=True,
    help="Output format. [env: TOOLING_SUPPORT_FORMAT]",
)
def extract(
    build_file: str,
    project_path: str,
    configurations: tuple[str, ...],
    include_resolved: bool,
    output_format: str,
) -> None:
    """Extract canonical dependencies of a project in BUILD_FILE (YAML or JSON)."""
    try:
        config = build_config(build_file, project_path, configurations, include_resolved, output_format)
        project, results = run_extraction(config)
    except ConfigurationError as e:
        gha_error(str(e), title="Configuration error")
        sys.exit(1)
    except ToolingSupportError as e:
        logger.debug("Extraction failed", exc_info=True)
        gha_error(str(e))
        sys.exit(1)

    _render(project, results, config.output_format)


def main() -> None:
    """Console script entry point."""
    cli()


if __name__ == "__main__":
    main()
