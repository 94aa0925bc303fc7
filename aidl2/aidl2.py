import json
import sys
from pathlib import Path

import click

from .cli_utils import reconstruct_command_line
from .log import setup_logging
from .pipeline import CodeGeneratorConfig, ProjectGenerator


@click.command()
@click.option(
    "--prefix",
    "-p",
    required=True,
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Project directory containing src/ and receiving gen/",
)
@click.option("--update", "-u", multiple=True, type=click.Path(), help="Changed .aidl2 file (repeatable)")
@click.option("--remove", "-r", multiple=True, type=click.Path(), help="Deleted .aidl2 file (repeatable)")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option(
    "--log-level",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
    help="Defaults to $AIDL2_LOG_LEVEL, then INFO",
)
@click.option("--log-file", default=None, type=click.Path(dir_okay=False))
def aidl2(prefix, update, remove, config, log_level, log_file):
    setup_logging(log_level, log_file)

    if config is not None:
        config_dir = Path(config).parent
        with open(config) as f:
            config = CodeGeneratorConfig.from_dict(json.load(f))
        # relative to the config file; an absolute path is kept as is
        if config.known_parcelables_file:
            config.known_parcelables_file = str(config_dir / config.known_parcelables_file)
    else:
        config = CodeGeneratorConfig()

    command_line = reconstruct_command_line(aidl2)
    generator = ProjectGenerator(prefix, config, command_line)
    report = generator.run(list(update), list(remove))

    for _, error in report.failures:
        click.echo(str(error), err=True)

    if not report.ok:
        sys.exit(1)
