"""CLI interface for Prompt Engineer."""

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Callable, Optional

import click
import yaml

from promptengineer import __version__
from promptengineer.assembler.prompt_builder import build_messages
from promptengineer.cli.formatters import BUSY_LABEL, OutputFormatter
from promptengineer.cli.interactive import fill_form, prompt_action
from promptengineer.core.clipboard import copy_to_clipboard
from promptengineer.core.config import Config, user_config_file
from promptengineer.core.event_bus import EVENT_GENERATION_FINISHED
from promptengineer.core.events import GenerationFinishedEvent
from promptengineer.core.logging import configure_logging
from promptengineer.core.requester import PromptRequester
from promptengineer.core.state import FormState
from promptengineer.schemas.fields import ExpertiseLevel, OutputFormat


def field_options(func: Callable) -> Callable:
    """Options for the form fields."""
    options = [
        click.option(
            "--prompt",
            "-p",
            default=None,
            help="Your main question or request for the AI (required). Use '-' to read from stdin.",
        ),
        click.option("--role", "-r", default=None, help="Role the AI should take (e.g. Teacher, Scientist)"),
        click.option("--topic", "-t", default=None, help="Subject area (e.g. Biology, History)"),
        click.option("--goal", "-g", default=None, help="What you want to achieve (e.g. Understand basics)"),
        click.option(
            "--format",
            "-f",
            "output_format",
            type=click.Choice([f.value for f in OutputFormat], case_sensitive=False),
            default=None,
            help="Output format of the answer",
        ),
        click.option(
            "--expertise",
            "-e",
            "expertise_level",
            type=click.Choice([lvl.value for lvl in ExpertiseLevel], case_sensitive=False),
            default=None,
            help="Your expertise level",
        ),
        click.option("--details", "-d", default=None, help="Specific areas of interest, or any constraints"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def service_options(func: Callable) -> Callable:
    """Options for the completion service, configuration and logging."""
    options = [
        click.option("--model", "-m", default=None, help="Model identifier (default: gpt-3.5-turbo)"),
        click.option("--api-key", default=None, help="API key (or use OPENAI_API_KEY env var)"),
        click.option("--base-url", default=None, help="Base URL of an OpenAI-compatible endpoint"),
        click.option("--timeout", type=float, default=None, help="Request timeout in seconds"),
        click.option("--temperature", type=float, default=None, help="Sampling temperature"),
        click.option(
            "--config",
            "config_path",
            type=click.Path(exists=True, dir_okay=False),
            default=None,
            help="Path to configuration file (YAML or JSON)",
        ),
        click.option(
            "--log-level",
            default=None,
            type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"], case_sensitive=False),
            help="Logging level (default: WARNING)",
        ),
        click.option("--log-file", type=click.Path(), default=None, help="Path to log file (default: stderr)"),
        click.option("--json-logging", is_flag=True, default=None, help="Output logs in JSON format"),
        click.option("--color/--no-color", default=None, help="Force colored output (default: auto-detect)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


SERVICE_KEYS = (
    "model",
    "api_key",
    "base_url",
    "timeout",
    "temperature",
    "log_level",
    "log_file",
    "json_logging",
    "color",
)


def load_config(config_path: Optional[str], **cli_args: Any) -> Config:
    """Load configuration, set up logging and resolve the API key."""
    config = Config.load(
        {k: v for k, v in cli_args.items() if v is not None},
        config_file=Path(config_path) if config_path else None,
    )
    config.apply_environment()
    configure_logging(level=config.log_level, json_output=config.json_logging, log_file=config.log_file)
    return config


def read_fields(**values: Optional[str]) -> dict[str, str]:
    """Collect field options, reading the prompt from stdin when given as '-'."""
    if values.get("prompt") == "-":
        values["prompt"] = sys.stdin.read().strip()
    return {k: v for k, v in values.items() if v is not None}


def split_kwargs(kwargs: dict[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    service = {k: kwargs.pop(k) for k in SERVICE_KEYS if k in kwargs}
    return service, kwargs


@click.group()
@click.version_option(version=__version__, prog_name="promptengineer")
def main():
    """
    Prompt Engineer - craft tailored prompts with AI.

    Describe what you want (a prompt plus optional role, topic, goal, output
    format, expertise level and details) and an LLM turns it into a
    well-structured prompt you can copy and reuse.

    Requires an OpenAI API key in OPENAI_API_KEY, a config file, or --api-key.
    """
    pass


@main.command()
@field_options
@service_options
@click.option("--copy", "-c", "copy", is_flag=True, default=False, help="Copy the generated prompt to the clipboard")
@click.option("--output", "-o", type=click.Path(dir_okay=False, writable=True), default=None, help="Write the generated prompt to a file")
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the result and statistics as JSON")
@click.option("--stats/--no-stats", default=False, help="Show generation statistics")
def generate(
    config_path: Optional[str],
    copy: bool,
    output: Optional[str],
    as_json: bool,
    stats: bool,
    **kwargs: Any,
):
    """
    Generate a tailored prompt.

    Examples:

      # Minimal
      promptengineer generate -p "Explain recursion"

      # With optional fields, copied to the clipboard
      promptengineer generate -p "Explain recursion" -r Teacher -f bullet-points --copy

      # Prompt from stdin
      echo "Explain recursion" | promptengineer generate -p -
    """
    service_args, field_args = split_kwargs(kwargs)
    config = load_config(config_path, **service_args)
    formatter = OutputFormatter(color=config.color)

    state = FormState(**read_fields(**field_args))
    if not state.prompt:
        formatter.print_error("A prompt is required (use --prompt/-p).")
        sys.exit(1)

    requester = PromptRequester(state, config=config)
    if as_json:
        outcome = asyncio.run(requester.generate())
    else:
        with formatter.status(BUSY_LABEL):
            outcome = asyncio.run(requester.generate())

    if as_json:
        formatter.print_json({"generated_prompt": state.generated_prompt, **outcome.stats()})
    else:
        formatter.print_result(state.generated_prompt, success=outcome.success)
        if stats:
            formatter.print_stats(outcome.stats())

    if not outcome.success:
        sys.exit(1)

    if output:
        try:
            Path(output).write_text(state.generated_prompt, encoding="utf-8")
        except OSError as e:
            formatter.print_error(f"Failed to write {output}: {e}")
            sys.exit(1)
        if not as_json:
            formatter.print_success(f"Saved to {output}")

    if copy:
        if copy_to_clipboard(state.generated_prompt):
            if not as_json:
                formatter.print_success("Copied to clipboard")
        else:
            formatter.print_warning("Could not copy to clipboard")


@main.command()
@field_options
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the messages as JSON")
def preview(as_json: bool, **field_args: Optional[str]):
    """
    Show the request that would be sent, without sending it.
    """
    formatter = OutputFormatter()
    state = FormState(**read_fields(**field_args))
    if not state.prompt:
        formatter.print_error("A prompt is required (use --prompt/-p).")
        sys.exit(1)

    messages = build_messages(state.fields)
    if as_json:
        formatter.print_json(messages)
    else:
        formatter.print_messages(messages)


@main.command()
@field_options
@service_options
def interactive(config_path: Optional[str], **kwargs: Any):
    """
    Fill in the prompt form interactively and generate as often as you like.

    Field values given as options are used as starting values. Press Enter
    to keep a value, or type '-' to clear an optional field.
    """
    service_args, field_args = split_kwargs(kwargs)
    config = load_config(config_path, **service_args)
    formatter = OutputFormatter(color=config.color)

    state = FormState(**read_fields(**field_args))
    requester = PromptRequester(state, config=config)

    def on_finished(event: GenerationFinishedEvent) -> None:
        formatter.print_result(event.result, success=event.success)

    state.event_bus.subscribe(EVENT_GENERATION_FINISHED, on_finished)

    formatter.console.print("[bold]Your AI Prompt Engineer[/bold] - Crafting Tailored Prompts with AI\n")
    # One event loop for the whole session: the AsyncOpenAI client is bound to it and reused per generation
    asyncio.run(_run_form(state, requester, formatter))


async def _run_form(state: FormState, requester: PromptRequester, formatter: OutputFormatter) -> None:
    if not state.prompt:
        fill_form(state)

    while True:
        action = prompt_action(state.can_generate, bool(state.generated_prompt))
        if action == "generate":
            if not state.can_generate:
                formatter.print_warning("A prompt is required before generating.")
                continue
            with formatter.status(BUSY_LABEL):
                await requester.generate()
        elif action == "copy":
            if copy_to_clipboard(state.generated_prompt):
                formatter.print_success("Copied to clipboard")
            else:
                formatter.print_warning("Could not copy to clipboard")
        elif action == "edit":
            fill_form(state)
        elif action == "reset":
            state.reset()
            fill_form(state)
        else:
            break


@main.group()
def config():
    """Configuration management commands."""
    pass


@config.command("show")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), default=None)
def config_show(config_path: Optional[str]):
    """Show the effective configuration (API key redacted)."""
    config_obj = Config.load(config_file=Path(config_path) if config_path else None)
    config_obj.apply_environment()
    click.echo(yaml.dump(config_obj.to_dict(redact=True), default_flow_style=False, sort_keys=False))


@config.command("export")
@click.option(
    "--output",
    "-o",
    type=click.Path(),
    default=None,
    help="Output file path (default: stdout)",
)
@click.option(
    "--format",
    "-f",
    type=click.Choice(["yaml", "json"], case_sensitive=False),
    default="yaml",
    help="Output format (default: yaml)",
)
def config_export(output: Optional[str], format: str):
    """Export current configuration to file."""
    config_obj = Config.load()

    if output:
        output_path = Path(output)
        config_obj.save(output_path, format=format)
        click.echo(f"Configuration exported to: {output_path}")
    else:
        data = {k: v for k, v in config_obj.to_dict().items() if v is not None}
        if format == "yaml":
            content = yaml.dump(data, default_flow_style=False, sort_keys=False)
        else:
            content = json.dumps(data, indent=2)
        click.echo(content)


@config.command("import")
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False))
def config_import(config_file: str):
    """Import configuration from file into the user config."""
    config_obj = Config()
    config_obj.load_file(Path(config_file))

    user_config_path = user_config_file()
    config_obj.save(user_config_path, format="yaml")
    click.echo(f"Configuration imported and saved to: {user_config_path}")


if __name__ == "__main__":
    main()
