import click
import yaml
from serde import to_dict

from dailylog.cli import pass_environment, Environment, CONTEXT_SETTINGS


@click.command(context_settings=CONTEXT_SETTINGS)
@pass_environment
def cli(environment: Environment):
    """Print the effective logging configuration as YAML"""
    facility = environment.get_facility()
    snapshot = facility.store.snapshot()
    if snapshot["rotation"] is not None:
        snapshot["rotation"] = to_dict(snapshot["rotation"])
    snapshot["log_file"] = str(facility.log_file_path())
    snapshot["require_file_output"] = facility.require_file_output
    environment.log(yaml.safe_dump({"dailylog": snapshot}, sort_keys=False), new_line=False)
