"""Common CLI options for the CLI."""

import typer

ProfileOpt = typer.Option(
    None,
    "--profile",
    "-p",
    help="cloudops profile (from ~/.cloudopscfg)",
)

VerboseOpt = typer.Option(
    False,
    "--verbose",
    "-v",
    help="Show debug logging",
)

ApiTypeOpt = typer.Option(
    None,
    "--type",
    "-t",
    help="Only show APIs of this type (compute, blobstore, ...)",
)

BucketOpt = typer.Option(
    None,
    "--bucket",
    help="Bucket that receives the access logs",
)

PrefixOpt = typer.Option(
    "",
    "--prefix",
    help="Key prefix for delivered log files",
)

GrantOpt = typer.Option(
    [],
    "--grant",
    help="Grant on log files (group:URI=PERM, user:ID[:NAME]=PERM, email:ADDR=PERM). Repeatable.",
    show_default=False,
)

DisableOpt = typer.Option(
    False,
    "--disable",
    help="Render the body that turns logging off",
)
