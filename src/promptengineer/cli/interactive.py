"""Interactive form prompts."""

from typing import Optional

import click

from promptengineer.core.state import FormState
from promptengineer.schemas.fields import ExpertiseLevel, OutputFormat

FIELD_HINTS = {
    "prompt": "Your main question or request for the AI. Be clear and specific.",
    "role": "The role the AI should take, e.g. Teacher, Scientist, Historian.",
    "topic": "The subject area, e.g. Biology, Computer Science, History.",
    "goal": "What you want to achieve, e.g. Understand basics, Solve a problem, Get examples.",
    "output_format": "How the answer should be structured.",
    "expertise_level": "Your knowledge level, so the answer matches it.",
    "details": "Specific areas of interest, or any constraints.",
}

FIELD_LABELS = {
    "prompt": "Your Prompt (required)",
    "role": "Role",
    "topic": "Topic",
    "goal": "Goal",
    "output_format": "Output Format",
    "expertise_level": "Expertise Level",
    "details": "Additional Details",
}

CLEAR_TOKEN = "-"


def prompt_text(name: str, current: str = "", required: bool = False) -> str:
    """
    Prompt for a free-text field.

    Empty input keeps the current value; CLEAR_TOKEN clears an optional field.
    """
    click.echo(click.style(f"  {FIELD_HINTS[name]}", dim=True))
    while True:
        value = click.prompt(
            FIELD_LABELS[name],
            default=current or ("" if not required else None),
            show_default=bool(current),
        ).strip()
        if value == CLEAR_TOKEN and not required:
            return ""
        if value or not required:
            return value
        click.echo("A prompt is required.", err=True)


def prompt_choice(name: str, options: list[str], current: str = "") -> str:
    """Prompt for one of a fixed set of options; blank keeps current, CLEAR_TOKEN clears."""
    click.echo(click.style(f"  {FIELD_HINTS[name]}", dim=True))
    click.echo(f"  Options: {', '.join(options)}")
    while True:
        value = click.prompt(
            FIELD_LABELS[name],
            default=current,
            show_default=bool(current),
        ).strip().lower()
        if value == CLEAR_TOKEN:
            return ""
        if not value or value in options:
            return value
        click.echo(f"Please choose one of: {', '.join(options)}", err=True)


def fill_form(state: FormState, only: Optional[list[str]] = None) -> None:
    """
    Prompt for the form fields and store the answers in the state.

    Args:
        state: Form state to update
        only: Restrict prompting to these field names
    """
    for name in FIELD_LABELS:
        if only is not None and name not in only:
            continue
        current = state.get_field(name)
        if name == "output_format":
            value = prompt_choice(name, [f.value for f in OutputFormat], current)
        elif name == "expertise_level":
            value = prompt_choice(name, [lvl.value for lvl in ExpertiseLevel], current)
        else:
            value = prompt_text(name, current, required=(name == "prompt"))
        if value != current:
            state.set_field(name, value)


def prompt_action(can_generate: bool, has_result: bool) -> str:
    """Ask what to do next."""
    actions = ["generate", "edit", "reset", "quit"]
    if has_result:
        actions.insert(1, "copy")
    return click.prompt(
        "Action",
        type=click.Choice(actions, case_sensitive=False),
        default="generate" if can_generate else "edit",
        show_choices=True,
    ).lower()
