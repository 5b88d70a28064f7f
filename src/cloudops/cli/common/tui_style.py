"""Questionary / prompt_toolkit theme for cloudops.

Questionary uses prompt_toolkit under the hood. All interactive prompts
share this style so they match the rich output theme.
"""

from __future__ import annotations

from prompt_toolkit.styles import Style

QUESTIONARY_STYLE_SELECT = Style.from_dict(
    {
        "qmark": "bold ansicyan",
        "question": "bold ansicyan",
        "answer": "bold ansigreen",
        "pointer": "bold ansigreen",
        "highlighted": "bold ansigreen",
        "instruction": "ansibrightblack",
        "error": "bold ansired",
    }
)
