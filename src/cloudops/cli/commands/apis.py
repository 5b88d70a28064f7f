"""Commands for browsing provider API metadata."""

import typer

from cloudops.cli.common.context import ApisAppContext, build_apis_context
from cloudops.cli.common.exits import die, exit_from_exc, warn_exit
from cloudops.cli.common.options import ApiTypeOpt
from cloudops.cli.common.output import out
from cloudops.cli.tui import select_api
from cloudops.core.apis import ApiType, UnknownApiError

apis_app = typer.Typer(
    help="Inspect registered provider APIs.",
    no_args_is_help=False,
    invoke_without_command=True,
)


@apis_app.callback()
def _init(ctx: typer.Context):
    """Initialize the registry context."""
    ctx.obj = build_apis_context()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(0)


def _parse_api_type(raw: str) -> ApiType:
    """Convert a --type value to ApiType, rejecting unknown values."""
    value = raw.strip().lower()
    api_type = ApiType(value)
    if api_type is ApiType.UNRECOGNIZED and value != ApiType.UNRECOGNIZED.value:
        allowed = ", ".join(t.value for t in ApiType if t is not ApiType.UNRECOGNIZED)
        die(f"Unknown API type '{raw}' (expected one of {allowed})", code=2)
    return api_type


@apis_app.command("list")
def list_apis(
    ctx: typer.Context,
    api_type: str | None = ApiTypeOpt,
):
    """
    List registered APIs.
    """
    appctx: ApisAppContext = ctx.obj

    if api_type:
        apis = appctx.registry.of_type(_parse_api_type(api_type))
    else:
        apis = appctx.registry.all()

    if not apis:
        warn_exit("No APIs found", code=0)

    out.apis_table(apis, title="Registered APIs")


@apis_app.command("show")
def show(
    ctx: typer.Context,
    api_id: str | None = typer.Argument(None, help="API id (prompted when omitted)"),
):
    """
    Show the metadata of one API.
    """
    appctx: ApisAppContext = ctx.obj

    if api_id is None:
        metadata = select_api(appctx.registry.all())
        if metadata is None:
            warn_exit("No API selected", code=0)
    else:
        try:
            metadata = appctx.registry.get(api_id)
        except UnknownApiError as exc:
            exit_from_exc(exc, message=str(exc), code=1)

    out.header(metadata.name or str(metadata.id))
    out.kv(
        {
            "id": metadata.id,
            "type": metadata.type.value if metadata.type else "",
            "identity": metadata.identity_name or "",
            "credential": metadata.credential_name or "",
            "version": metadata.version or "",
            "default endpoint": metadata.default_endpoint or "",
            "documentation": metadata.documentation or "",
        }
    )
