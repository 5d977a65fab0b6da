"""PomPom CLI - natural language scheduling helpers."""

import json
import logging
import sys
from datetime import datetime

import click

from .ai_parser import AIParseError
from .config import load_config
from .core.due import normalize_due_local, parse_due_or_null, to_iso_from_any
from .core.extract import extract_json
from .core.tags import extract_tags_from_text
from .core.tasks import parse_task_input
from .workflows import parse_event


def _parse_now(value: str | None) -> datetime | None:
    if not value:
        return None
    try:
        return datetime.fromisoformat(value)
    except ValueError:
        raise click.BadParameter(f"expected ISO date/time, got {value!r}", param_hint="--now")


now_option = click.option(
    "--now", "now_str", default=None, help="Reference time (YYYY-MM-DDTHH:MM), defaults to now"
)


@click.group()
@click.version_option(package_name="pompom")
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool):
    """PomPom - natural language scheduling helpers."""
    if debug:
        logging.basicConfig(
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            level=logging.DEBUG,
        )


@main.command()
@click.argument("text")
@now_option
@click.option("--ai", "use_ai", is_flag=True, help="Parse with the configured AI backend")
@click.option("--no-fallback", is_flag=True, help="Fail instead of falling back to the local parser")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def event(text: str, now_str: str | None, use_ai: bool, no_fallback: bool, as_json: bool):
    """Parse a calendar event, e.g. "Weekly sync Monday at 2pm"."""
    config = load_config()
    now = _parse_now(now_str)
    try:
        ev = parse_event(text, config, now=now, use_ai=use_ai, fallback=False if no_fallback else None)
    except (AIParseError, ValueError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(ev.to_dict(), indent=2))
        return

    click.echo(f"Summary: {ev.summary}")
    click.echo(f"Start:   {ev.start_local}")
    click.echo(f"End:     {ev.end_local}")
    if ev.is_recurring:
        click.echo(f"Repeats: {ev.recurrence_rrule}")


@main.command()
@click.argument("text")
@now_option
@click.option("--strict", is_flag=True, help="Only report a due date when the text names one")
@click.option("--iso", "as_iso", is_flag=True, help="Print as UTC ISO-8601")
def due(text: str, now_str: str | None, strict: bool, as_iso: bool):
    """Normalize a task due date, e.g. "fri 3:30pm"."""
    now = _parse_now(now_str)
    result = parse_due_or_null(text, now) if strict else normalize_due_local(text, now)
    if result is None:
        click.echo("No due date.")
        return
    click.echo(to_iso_from_any(result) if as_iso else result)


@main.command()
@click.argument("text")
def tags(text: str):
    """Split #tags out of task text."""
    clean, found = extract_tags_from_text(text)
    click.echo(f"Text: {clean}")
    click.echo(f"Tags: {', '.join(found) if found else 'none'}")


@main.command()
@click.argument("text")
@now_option
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def task(text: str, now_str: str | None, as_json: bool):
    """Parse quick-add task text into title, tags and due date."""
    draft = parse_task_input(text, _parse_now(now_str))
    if as_json:
        click.echo(json.dumps(draft.to_dict(), indent=2))
        return

    tag_str = " ".join(f"#{t}" for t in draft.tags)
    due_str = f" (due {draft.due_local})" if draft.due_local else ""
    click.echo(f"• {draft.title}{due_str} {tag_str}".rstrip())


@main.command("extract-json")
@click.argument("source", type=click.File("r"), default="-")
def extract_json_cmd(source):
    """Recover JSON from an LLM completion (file or stdin)."""
    value = extract_json(source.read())
    if value is None:
        click.echo("Error: no JSON found", err=True)
        sys.exit(1)
    click.echo(json.dumps(value, indent=2))
