"""Config commands.

Show the effective configuration and create a default config file.
"""

from typing import Annotated

import typer

from fileref.core.config import FileRefConfig, load_config_or_default, save_config
from fileref.core.errors import ConfigError
from fileref.core.paths import get_config_path
from fileref.utils.formatting import console, print_error, print_info, print_success, print_warning

app = typer.Typer(
    help="Show or initialize the fileref configuration.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective configuration as JSON."""
    config_path = get_config_path()
    try:
        config = load_config_or_default(config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if not config_path.exists():
        print_info(f"No config file at {config_path}, showing defaults.")
    console.print_json(config.model_dump_json())


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config file with the default settings."""
    config_path = get_config_path()
    if config_path.exists() and not force:
        print_warning(f"Config already exists: {config_path} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_config(FileRefConfig(), config_path)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
    print_success(f"Config written to {saved}")
