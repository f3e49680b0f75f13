"""Command-line entry point for Taskpal."""

import sys
from dataclasses import replace
from pathlib import Path
from typing import Optional, Tuple

import click

from . import __version__
from .assistant import Assistant
from .config import load_config
from .errors import StorageError, TaskpalError
from .logging_setup import setup_logging
from .ui import Ui, format_error


@click.command()
@click.option("--config", "config_path", type=click.Path(dir_okay=False, path_type=Path), help="Path to config file")
@click.option("--data-file", type=click.Path(dir_okay=False, path_type=Path), help="Task file to use")
@click.option("--command", "-c", "commands", multiple=True, help="Run a command and exit (repeatable)")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output")
@click.version_option(__version__, prog_name="taskpal")
def main(config_path: Optional[Path], data_file: Optional[Path], commands: Tuple[str, ...], verbose: bool):
    """Taskpal - a personal task assistant driven by short commands."""
    config = load_config(config_path)
    if data_file is not None:
        config = replace(config, data_file=str(data_file.expanduser().resolve()))

    setup_logging(config, verbose)

    ui = Ui(config)
    assistant = Assistant(config, ui=ui)

    try:
        assistant.start()
    except StorageError as e:
        ui.show_error(e)
        sys.exit(1)

    if not commands:
        assistant.run()
        return

    failed = False
    for line in commands:
        try:
            response = assistant.handle(line)
        except TaskpalError as e:
            click.echo(format_error(e))
            failed = True
            continue

        click.echo(response.message)
        if response.is_exit:
            break

    if failed:
        sys.exit(1)
