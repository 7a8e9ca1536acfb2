import click

from dailylog.cli import pass_environment, Environment, CONTEXT_SETTINGS
from dailylog.constants import LEVEL_TAGS


@click.command(context_settings=CONTEXT_SETTINGS)
@click.argument("level", type=click.Choice([tag.lower() for tag in LEVEL_TAGS], case_sensitive=False))
@click.argument("messages", nargs=-1, required=True)
@pass_environment
def cli(environment: Environment, level: str, messages: tuple):
    """Log each MESSAGE at LEVEL

    Records go to the console, to <directory>/<YYYY-MM-DD>.log or to both,
    depending on --output.

    Examples:
        dailylog emit info "Backup started"
        dailylog -o both -d /var/log/app --max-size 5MB --max-age 1d emit error "Backup failed"
    """
    facility = environment.get_facility()
    log = getattr(facility, level.lower())
    for message in messages:
        log(message)
