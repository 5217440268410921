"""CLI for the value hierarchy tool."""

from __future__ import annotations

import logging
import random
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path
from typing import Annotated, Literal

import structlog
import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from value_hierarchy import __version__
from value_hierarchy.core.config import HierarchyConfig, load_config
from value_hierarchy.core.errors import ValueHierarchyError
from value_hierarchy.prompts import DEFAULT_PERSONALITY, guide_lines
from value_hierarchy.services.hierarchy import (
    compute_stats,
    create_value,
    edit_value,
    group_by_tag,
    is_broad_title,
    rank_values,
    remove_value,
    validate_values,
)
from value_hierarchy.services.reporting import (
    render_hierarchy,
    render_stats,
    render_tags,
    render_values,
)
from value_hierarchy.services.session import ComparisonSession
from value_hierarchy.services.storage import ValueStore
from value_hierarchy.services.tags import load_tags

# Configure structlog
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.dev.ConsoleRenderer(),
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)

logger = structlog.get_logger()

app = typer.Typer(
    name="value-hierarchy",
    help=(
        "Value Hierarchy - build and refine a personal value ranking through "
        "pairwise comparison interviews. Each hierarchy lives in a portable "
        "<name>.values.csv file."
    ),
    add_completion=False,
)
console = Console()
err_console = Console(stderr=True)

OutputFormat = Literal["table", "json", "yaml"]

FileArg = Annotated[Path, typer.Argument(help="Hierarchy file ending in .values.csv")]
FormatOpt = Annotated[
    OutputFormat, typer.Option("--format", "-f", help="Output format: table, json or yaml")
]


def _now() -> datetime:
    return datetime.now(UTC)


def _emit(text: str) -> None:
    # Value titles and templates contain square brackets; never read them as markup.
    console.print(text, markup=False, highlight=False, emoji=False, soft_wrap=True)


def _config(ctx: typer.Context) -> HierarchyConfig:
    if isinstance(ctx.obj, HierarchyConfig):
        return ctx.obj
    return HierarchyConfig()


@contextmanager
def _cli_errors(verbose: bool = False) -> Iterator[None]:
    """Report known failures in red and exit with status 1."""
    try:
        yield
    except FileNotFoundError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(1) from e
    except ValueHierarchyError as e:
        err_console.print(f"[red]{escape(str(e))}[/red]", highlight=False)
        raise typer.Exit(1) from e
    except ValueError as e:
        err_console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        if verbose:
            err_console.print_exception()
        raise typer.Exit(1) from e


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"value-hierarchy v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    config_path: Annotated[
        Path | None, typer.Option("--config", "-c", help="Path to config YAML file")
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-V", help="Verbose output")] = False,
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
) -> None:
    """Value Hierarchy CLI."""
    log_level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
        force=True,
    )

    with _cli_errors(verbose):
        ctx.obj = load_config(config_path)


@app.command()
def init(
    file: FileArg,
    force: Annotated[bool, typer.Option("--force", help="Replace an existing file")] = False,
) -> None:
    """Create a new, empty .values.csv hierarchy (parent directories included)."""
    with _cli_errors():
        ValueStore(file).init(overwrite=force)
        _emit(f"Created {file}")


@app.command()
def add(
    ctx: typer.Context,
    file: FileArg,
    title: Annotated[str, typer.Argument(help="Title of the new value")],
    tags: Annotated[
        str | None, typer.Option("--tags", help='Pipe-separated tags, e.g. "health|habits"')
    ] = None,
    desc: Annotated[str | None, typer.Option("--desc", help="Initial rationale")] = None,
    detail: Annotated[
        bool, typer.Option("--detail", help="Warn when the title looks too broad")
    ] = False,
) -> None:
    """Append a new value to the hierarchy."""
    config = _config(ctx)
    with _cli_errors():
        store = ValueStore(file)
        records = store.load()
        if detail and is_broad_title(title):
            _emit(
                f'"{title}" seems broad. Consider making it more specific, e.g., '
                '"Daily Walking and Strength Training" instead of "Physical Fitness".'
            )
        record = create_value(
            title,
            _now(),
            tags=tags,
            rationale=desc,
            initial_rating=config.ranking.initial_rating,
        )
        records.append(record)
        store.save(records)
        logger.info("value_added", id=record.id)
        _emit(f'Added "{record.title}" to {file} (id: {record.id})')


@app.command()
def edit(
    file: FileArg,
    value_id: Annotated[str, typer.Argument(metavar="ID", help="Id of the value to edit")],
    title: Annotated[str | None, typer.Option("--title", help="New title")] = None,
    tags: Annotated[str | None, typer.Option("--tags", help="New pipe-separated tags")] = None,
    desc: Annotated[str | None, typer.Option("--desc", help="New rationale")] = None,
) -> None:
    """Edit the title, tags, or rationale of an existing value."""
    with _cli_errors():
        store = ValueStore(file)
        records = store.load()
        edit_value(records, value_id, _now(), title=title, tags=tags, rationale=desc)
        store.save(records)
        _emit(f'Edited value "{value_id}" in {file}')


@app.command()
def remove(
    file: FileArg,
    value_id: Annotated[str, typer.Argument(metavar="ID", help="Id of the value to remove")],
) -> None:
    """Remove a value from the hierarchy."""
    with _cli_errors():
        store = ValueStore(file)
        records = store.load()
        remove_value(records, value_id)
        store.save(records)
        _emit(f'Removed value "{value_id}" from {file}')


@app.command()
def interview(
    ctx: typer.Context,
    file: FileArg,
    num: Annotated[
        int | None, typer.Option("--num", "-n", min=1, help="Number of comparison pairs")
    ] = None,
    personality: Annotated[
        str, typer.Option("--personality", help="Interviewer personality")
    ] = DEFAULT_PERSONALITY,
    seed: Annotated[
        int | None, typer.Option("--seed", help="Random seed for reproducible pairs")
    ] = None,
) -> None:
    """Generate the interview protocol and comparison pairs.

    Pairs favour the least-compared values. Apply the human's answers
    afterwards with 'update-scores'.
    """
    config = _config(ctx)
    with _cli_errors():
        rng = random.Random(seed if seed is not None else config.seed)  # noqa: S311
        session = ComparisonSession(config, ValueStore(file), rng=rng)
        plan = session.prepare_interview(_now(), num_pairs=num, personality=personality)
        _emit(plan.protocol)


@app.command("update-scores")
def update_scores(
    ctx: typer.Context,
    file: FileArg,
    responses: Annotated[
        str,
        typer.Option("--responses", "-r", help='Comma-separated responses, e.g. "A>B,C>D"'),
    ],
) -> None:
    """Apply interview responses to ratings and comparison counts.

    The file is left untouched if any response is invalid.
    """
    config = _config(ctx)
    with _cli_errors():
        session = ComparisonSession(config, ValueStore(file))
        applied = session.record_responses(responses, _now())
        _emit(f"Updated scores for {applied} comparisons in {file}")


@app.command()
def top10(
    ctx: typer.Context,
    file: FileArg,
    tag: Annotated[str | None, typer.Option("--tag", help="Only values with this tag")] = None,
    fmt: FormatOpt = "table",
) -> None:
    """Show the current top values (the view to share after each session)."""
    config = _config(ctx)
    with _cli_errors():
        records = ValueStore(file).load()
        top = rank_values(records, tag=tag, limit=config.top_k)
        _emit(render_values("top-values", str(file), top, _now(), fmt, filter=tag or "all"))


@app.command("list")
def list_values(
    file: FileArg,
    limit: Annotated[int | None, typer.Option("--limit", min=1, help="Maximum values")] = None,
    tag: Annotated[str | None, typer.Option("--tag", help="Only values with this tag")] = None,
    fmt: FormatOpt = "table",
) -> None:
    """List all values sorted by score, highest first."""
    with _cli_errors():
        records = ValueStore(file).load()
        ranked = rank_values(records, tag=tag, limit=limit)
        _emit(
            render_values(
                "value-list",
                str(file),
                ranked,
                _now(),
                fmt,
                filter=tag or "all",
                limit=limit if limit is not None else "none",
            )
        )


@app.command()
def hierarchy(file: FileArg, fmt: FormatOpt = "table") -> None:
    """Show the full ranking followed by tag clusters."""
    with _cli_errors():
        records = ValueStore(file).load()
        _emit(render_hierarchy(str(file), group_by_tag(records), rank_values(records), _now(), fmt))


@app.command()
def validate(file: FileArg) -> None:
    """Check for duplicate titles and values that are too broad."""
    with _cli_errors():
        issues = validate_values(ValueStore(file).load())
        if not issues:
            _emit(f"{file} is valid.")
            return
        _emit("Issues found:")
        for issue in issues:
            _emit(f"- {issue}")


@app.command()
def stats(file: FileArg, fmt: FormatOpt = "table") -> None:
    """Show totals, least-compared values, tag clusters, and an insight."""
    with _cli_errors():
        summary = compute_stats(ValueStore(file).load())
        _emit(render_stats(str(file), summary, _now(), fmt))


@app.command()
def guide() -> None:
    """Show value specificity guidelines."""
    _emit("VALUE SPECIFICITY GUIDELINES:")
    for line in guide_lines():
        _emit(f"• {line}")


@app.command()
def feedback(message: Annotated[str, typer.Argument(help="Issue or suggestion")]) -> None:
    """Log feedback for future improvements."""
    logger.info("feedback", message=message)
    _emit(f"Feedback logged: {message}")


@app.command()
def tags(ctx: typer.Context, fmt: FormatOpt = "table") -> None:
    """Show the master tag list (tag file, or the built-in fallback)."""
    config = _config(ctx)
    with _cli_errors():
        tag_list, source = load_tags(config.resolved_tags_file())
        _emit(render_tags(tag_list, source, _now(), fmt))


if __name__ == "__main__":
    app()
