"""CLI application for cloudops."""

import typer

from cloudops.cli.commands.apis import apis_app
from cloudops.cli.commands.cloudstack import cloudstack_app
from cloudops.cli.commands.config import config_app
from cloudops.cli.commands.s3 import s3_app
from cloudops.cli.common.logs import configure_logging
from cloudops.cli.common.options import VerboseOpt

app = typer.Typer(
    help="cloudops - multi-provider cloud API tooling",
    no_args_is_help=True,
)


@app.callback()
def _main(verbose: bool = VerboseOpt):
    """Configure logging before any command runs."""
    configure_logging(verbose)


app.add_typer(apis_app, name="apis")
app.add_typer(s3_app, name="s3")
app.add_typer(cloudstack_app, name="cloudstack")
app.add_typer(config_app, name="config")


if __name__ == "__main__":
    app()
