"""Terminal UI utilities for cloudops."""

from __future__ import annotations

import questionary

from cloudops.cli.common.tui_style import QUESTIONARY_STYLE_SELECT
from cloudops.core.apis import ApiMetadata


def _api_choice_title(api: ApiMetadata, *, id_width: int) -> str:
    """Format one API choice as `<id>  <name>` with an aligned name column."""
    return f"{str(api.id).ljust(id_width)}  {api.name or ''}"


def select_api(apis: list[ApiMetadata]) -> ApiMetadata | None:
    """Display a list prompt to pick one API.

    Args:
        apis: Descriptors to choose from.

    Returns:
        The selected descriptor, or None if the prompt was cancelled.
    """
    if not apis:
        return None

    id_width = max(len(str(api.id)) for api in apis)
    choices = [
        questionary.Choice(title=_api_choice_title(api, id_width=id_width), value=api)
        for api in apis
    ]

    return questionary.select(
        "Select an API:",
        choices=choices,
        style=QUESTIONARY_STYLE_SELECT,
    ).ask()
