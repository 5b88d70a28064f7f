"""Commands for CloudStack documents."""

import json
from pathlib import Path

import typer

from cloudops.cli.common.exits import exit_from_exc, warn_exit
from cloudops.cli.common.output import out
from cloudops.core.extractions import extractions_from_document

cloudstack_app = typer.Typer(
    help="Inspect CloudStack API documents.",
    no_args_is_help=True,
)


@cloudstack_app.command("extraction")
def extraction(
    path: Path = typer.Argument(
        ...,
        exists=True,
        dir_okay=False,
        readable=True,
        help="JSON file with one or more template extractions",
    ),
):
    """
    Decode template extractions from a JSON file and list them by id.
    """
    try:
        document = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        exit_from_exc(exc, message=f"Invalid JSON in {path}: {exc}", code=2)

    try:
        extractions = extractions_from_document(document)
    except (TypeError, ValueError) as exc:
        exit_from_exc(exc, message=f"Could not decode extractions: {exc}", code=1)

    if not extractions:
        warn_exit("No extractions found", code=0)

    out.extractions_table(extractions, title=f"Extractions ({len(extractions)})")
