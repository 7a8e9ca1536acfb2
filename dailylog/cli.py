import sys
import time
from pathlib import Path

import click
from beartype.typing import Any, Dict, Optional

from dailylog.constants import TOOL_USAGE, TOOL_VERSION
from dailylog.core.config import LoggingConfig
from dailylog.core.errors import FatalConfigurationError, OutputLevelMisuse
from dailylog.core.facility import LogFacility
from dailylog.settings import DEFAULT_GRACE_DELAY

CONTEXT_SETTINGS = dict(auto_envvar_prefix="DAILYLOG")

dailylog_folder = Path(__file__).parent
cmd_folder = dailylog_folder / "commands/"


class Environment:
    def __init__(self):
        self.config = None
        self.output = None
        self.directory = None
        self.max_size = None
        self.max_age = None
        self.grace_delay = None
        self.require_file_output = None
        self.silent = None
        self._settings: Optional[Dict[str, Any]] = None

    def log(self, msg: str, new_line=True, *args):
        """Logs a message to stdout only is silent mode is disabled."""
        if not self.silent:
            if args:
                msg %= args
            click.echo(msg, file=sys.stdout, nl=new_line)

    @staticmethod
    def elog(msg: str, new_line=True, *args):
        """Logs a message to stderr."""
        if args:
            msg %= args
        click.echo(msg, file=sys.stderr, nl=new_line)

    def set_parameters(self, context: click.core.Context):
        for param, value in context.params.items():
            setattr(self, param, value)

    @property
    def settings(self) -> Dict[str, Any]:
        """Effective configuration: options > environment > config file > defaults."""
        if self._settings is None:
            self._settings = LoggingConfig.load(
                self.config,
                output=self.output,
                directory=self.directory,
                max_size=self.max_size,
                max_age=self.max_age,
                grace_delay=self.grace_delay,
                require_file_output=self.require_file_output or None,
            )
            is_valid, error = LoggingConfig.validate(self._settings)
            if not is_valid:
                self.elog(error)
                sys.exit(1)
        return self._settings

    def fail(self, error: FatalConfigurationError):
        """Reports a fatal configuration error, waits for the grace delay and exits with code 1."""
        self.elog(str(error))
        time.sleep(LoggingConfig.grace_delay(self.settings))
        sys.exit(1)

    def get_facility(self) -> LogFacility:
        """Builds the facility for the effective configuration, exiting on configuration errors."""
        settings = self.settings
        try:
            return LoggingConfig.configure(settings)
        except FatalConfigurationError as e:
            self.fail(e)
        except OutputLevelMisuse as e:
            self.elog(str(e))
            sys.exit(1)


pass_environment = click.make_pass_decorator(Environment, ensure=True)


class DailyLogCLI(click.Group):
    def __init__(self, *args, **kwargs):
        # Use invoke_without_command=True to be able to print
        # short tool description when starting without a command
        click.Group.__init__(self, invoke_without_command=True, *args, **kwargs)

    def list_commands(self, context: click.Context):
        commands = []
        for filename in cmd_folder.iterdir():
            if filename.name.endswith(".py") and filename.name.startswith("cmd_"):
                commands.append(filename.name[4:-3])
        commands.sort()
        return commands

    def get_command(self, context: click.Context, name: str):
        try:
            mod = __import__(f"dailylog.commands.cmd_{name}", None, None, ["cli"])
        except ImportError:
            return None
        return mod.cli


@click.command(cls=DailyLogCLI, context_settings=CONTEXT_SETTINGS)
@click.pass_context
@pass_environment
@click.option(
    "-c",
    "--config",
    type=click.Path(),
    metavar="",
    help="Optional path to a YAML file with a 'dailylog' section.",
)
@click.option(
    "-o",
    "--output",
    type=click.Choice(["console", "file", "both"], case_sensitive=False),
    help="Where records go.",
)
@click.option("-d", "--directory", metavar="", help="Log directory (default: current directory).")
@click.option("--max-size", metavar="", help="Rotate the log file above this size, e.g. 5MB.")
@click.option("--max-age", metavar="", help="Rotate the log file above this age, e.g. 1h.")
@click.option(
    "--grace-delay",
    metavar="",
    help=f"Seconds to wait before exiting on a bad log directory. [default: {DEFAULT_GRACE_DELAY:g}]",
)
@click.option(
    "--require-file-output",
    is_flag=True,
    help="Refuse a log directory while output is console only.",
)
@click.option(
    "-s",
    "--silent",
    flag_value=True,
    is_flag=True,
    help="Silence stdout",
    default=False,
)
def cli(environment: Environment, context: click.core.Context, *args, **kwargs):
    """Leveled logging to the console and date-stamped files"""
    if not context.invoked_subcommand:
        click.echo(TOOL_VERSION)
        click.echo(TOOL_USAGE)
        sys.exit(0)

    environment.set_parameters(context)
