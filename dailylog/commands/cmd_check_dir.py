import click

from dailylog.cli import pass_environment, Environment, CONTEXT_SETTINGS
from dailylog.core.errors import FatalConfigurationError
from dailylog.core.store import ConfigurationStore
from dailylog.core.validator import validate_and_install


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument("path", type=click.Path())
@pass_environment
def cli(environment: Environment, path: str):
    """Check that PATH can be used as a log directory"""
    try:
        installed = validate_and_install(path, ConfigurationStore())
    except FatalConfigurationError as e:
        environment.fail(e)
    else:
        environment.log(f"Log directory '{installed}' is valid.")
