"""Commands for inspecting cloudops configuration."""

import typer

from cloudops.cli.common.context import build_client_context
from cloudops.cli.common.options import ProfileOpt
from cloudops.cli.common.output import out

config_app = typer.Typer(
    help="Inspect resolved configuration.",
    no_args_is_help=True,
)


@config_app.command("show")
def show(profile: str | None = ProfileOpt):
    """
    Show the configuration a profile resolves to.
    """
    appctx = build_client_context(profile)
    cfg = appctx.config

    out.header(appctx.api.name or cfg.provider)
    out.kv(
        {
            "profile": cfg.profile or "default",
            "provider": cfg.provider,
            "endpoint": cfg.endpoint or "",
            appctx.api.identity_name or "identity": cfg.identity or "",
            appctx.api.credential_name or "credential": "****" if cfg.credential else "",
        }
    )
