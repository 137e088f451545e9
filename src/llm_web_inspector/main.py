"""
LLM Web Inspector - CLI Entry Point.

Configuration Priority:
    1. CLI arguments (--model, --api-url, etc.)
    2. Environment variables (LLM_WEB_INSPECTOR__LLM__MODEL, etc.)
    3. Config file (inspector.yaml)

Usage:
    llm-web-inspector describe snapshot.json
    llm-web-inspector locate snapshot.json "the search box"
    llm-web-inspector locate snapshot.json --position 240,96
    llm-web-inspector extract snapshot.json "the product prices"
    llm-web-inspector assert snapshot.json "the cart is empty"
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Awaitable, Callable, Dict, List, Optional, TypeVar, Union

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from llm_web_inspector.ai_model.schemas import ElementRef, PositionModel
from llm_web_inspector.config import Settings, get_settings
from llm_web_inspector.exceptions import WebInspectorError
from llm_web_inspector.insight import Insight, InsightDumpStore
from llm_web_inspector.llm.openai_provider import OpenAIProvider
from llm_web_inspector.llm.service_caller import create_ai_caller
from llm_web_inspector.snapshot.description import (
    describe_elements,
    describe_text_format,
    format_number,
    describe_user_page,
)
from llm_web_inspector.snapshot.models import Element, UIContext
from llm_web_inspector.utils.logging import setup_logging_from_settings

app = typer.Typer(
    name="llm-web-inspector",
    help="Resolve UI element descriptions against captured page snapshots",
    add_completion=False,
)

console = Console()

T = TypeVar("T")


def load_snapshot(path: Path) -> UIContext:
    """Read a snapshot JSON file ({tree, screenshotBase64, size?})."""
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Error: cannot read snapshot {path}: {e}[/red]")
        raise typer.Exit(1)
    return UIContext.from_dict(data)


def parse_position(value: str) -> PositionModel:
    try:
        x, y = (float(part) for part in value.split(","))
    except ValueError:
        raise typer.BadParameter(f"Expected X,Y but got '{value}'")
    return PositionModel(x=x, y=y)


def render_elements(elements: List[Element]) -> Table:
    table = Table(title="Matched elements")
    table.add_column("id", style="cyan")
    table.add_column("type")
    table.add_column("rect (l, t, w, h)")
    table.add_column("center")
    table.add_column("content", overflow="fold")
    for element in elements:
        rect = element.rect
        table.add_row(
            element.id,
            element.node_type.name,
            ", ".join(format_number(v) for v in (rect.left, rect.top, rect.width, rect.height)),
            ", ".join(format_number(v) for v in element.center),
            element.content[:80],
        )
    return table


@app.command()
def describe(
    snapshot: Path = typer.Argument(..., help="Snapshot JSON file"),
    flat: bool = typer.Option(False, "--flat", help="One row per element instead of a tag tree"),
    truncate: Optional[int] = typer.Option(None, "--truncate", help="Cut element text to N characters"),
    text_only: bool = typer.Option(False, "--text-only", help="Describe text nodes only"),
):
    """Print the page description the model would receive."""
    settings = get_settings()
    setup_logging_from_settings(settings.logging)
    context = load_snapshot(snapshot)

    try:
        page = describe_user_page(
            context,
            truncate_text_length=truncate or settings.inspector.truncate_text_length,
            filter_non_text_content=text_only or settings.inspector.filter_non_text_content,
        )
    except WebInspectorError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if flat:
        console.print(describe_text_format())
        console.print(describe_elements(page.index.elements), markup=False, soft_wrap=True)
    else:
        console.print(page.description, markup=False, soft_wrap=True)


def load_settings(model: Optional[str], api_url: Optional[str], verbose: bool) -> Settings:
    """Global settings with --model / --api-url applied, logging configured."""
    settings = get_settings()
    setup_logging_from_settings(settings.logging, verbose=verbose)

    overrides = {}
    if model:
        overrides["model"] = model
    if api_url:
        overrides["base_url"] = api_url
    if overrides:
        settings = settings.merge_with({"llm": overrides})
    return settings


def print_banner(snapshot: Path, label: str, text: str, settings: Settings) -> None:
    console.print(Panel.fit(
        f"[bold blue]LLM Web Inspector[/bold blue]\n"
        f"[dim]Snapshot:[/dim] {snapshot}\n"
        f"[dim]{label}:[/dim] {text}"
        + (f"\n[dim]Model:[/dim] {settings.llm.model}" if settings.llm.model else ""),
        border_style="blue",
    ))


@app.command()
def locate(
    snapshot: Path = typer.Argument(..., help="Snapshot JSON file"),
    query: str = typer.Argument("", help="Description of the target element"),
    element_id: Optional[str] = typer.Option(None, "--id", help="Known element id to try first"),
    position: Optional[str] = typer.Option(None, "--position", "-p", help="Known X,Y position to try first"),
    multi: bool = typer.Option(False, "--multi", help="Return every matching element"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="LLM model (default: from config)"),
    api_url: Optional[str] = typer.Option(None, "--api-url", help="LLM API base URL (default: from config)"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output"),
):
    """
    Resolve a target against a snapshot.

    A quick answer (--id / --position) is tried first; the model is only
    called when it does not resolve.

    Examples:
        llm-web-inspector locate page.json "the Sign in link"
        llm-web-inspector locate page.json --id 12
    """
    settings = load_settings(model, api_url, verbose)

    quick_answer = None
    if element_id or position:
        quick_answer = ElementRef(
            id=element_id,
            position=parse_position(position) if position else None,
        )

    context = load_snapshot(snapshot)
    print_banner(snapshot, "Query", query or "(quick answer only)", settings)

    elements = asyncio.run(_run_insight(
        context,
        settings,
        lambda insight: insight.locate(query, multi=multi, quick_answer=quick_answer),
    ))

    if not elements:
        console.print("[yellow]No element matched.[/yellow]")
        raise typer.Exit(1)
    console.print(render_elements(elements))


@app.command()
def extract(
    snapshot: Path = typer.Argument(..., help="Snapshot JSON file"),
    query: str = typer.Argument("", help="What to extract"),
    keys: Optional[List[str]] = typer.Option(
        None, "--key", "-k", help="KEY=DESCRIPTION pair; repeat for a key-value answer"
    ),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="LLM model (default: from config)"),
    api_url: Optional[str] = typer.Option(None, "--api-url", help="LLM API base URL (default: from config)"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output"),
):
    """
    Extract data from a snapshot and print it as JSON.

    Examples:
        llm-web-inspector extract page.json "the titles of all articles"
        llm-web-inspector extract page.json -k title="page heading" -k user="logged in user name"
    """
    settings = load_settings(model, api_url, verbose)

    data_query: Union[str, Dict[str, str]] = query
    if keys:
        data_query = {}
        for pair in keys:
            key, sep, description = pair.partition("=")
            if not sep or not key:
                raise typer.BadParameter(f"Expected KEY=DESCRIPTION but got '{pair}'")
            data_query[key] = description

    context = load_snapshot(snapshot)
    print_banner(snapshot, "Extract", query or ", ".join(data_query), settings)

    data = asyncio.run(_run_insight(context, settings, lambda insight: insight.extract(data_query)))
    console.print_json(data=data)


@app.command("assert")
def assert_command(
    snapshot: Path = typer.Argument(..., help="Snapshot JSON file"),
    assertion: str = typer.Argument(..., help="Statement about the page to check"),
    model: Optional[str] = typer.Option(None, "--model", "-m", help="LLM model (default: from config)"),
    api_url: Optional[str] = typer.Option(None, "--api-url", help="LLM API base URL (default: from config)"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose output"),
):
    """
    Check an assertion against a snapshot; exits 1 when it does not hold.

    Examples:
        llm-web-inspector assert page.json "the cart shows 3 items"
    """
    settings = load_settings(model, api_url, verbose)
    context = load_snapshot(snapshot)
    print_banner(snapshot, "Assertion", assertion, settings)

    verdict = asyncio.run(_run_insight(context, settings, lambda insight: insight.assert_(assertion)))

    if verdict.thought:
        console.print(verdict.thought, style="dim", markup=False)
    if not verdict.passed:
        console.print("[red]✗ Assertion failed[/red]")
        raise typer.Exit(1)
    console.print("[green]✓ Assertion passed[/green]")


async def _run_insight(
    context: UIContext,
    settings: Settings,
    operation: Callable[[Insight], Awaitable[T]],
) -> T:
    """Run one Insight operation with a provider and dump store, then clean up."""
    provider = None
    call_ai = None
    if settings.llm.model and settings.llm.base_url:
        provider = OpenAIProvider.from_settings(settings.llm)
        call_ai = create_ai_caller(provider)

    store = InsightDumpStore(log_dir=settings.dump.log_dir, model_name=settings.llm.model or "")
    try:
        with store:
            insight = Insight(context, call_ai=call_ai, dump_store=store, settings=settings)
            return await operation(insight)
    except WebInspectorError as e:
        console.print(f"\n[red]Error: {e}[/red]")
        logging.debug("Inspector call failed", exc_info=True)
        raise typer.Exit(1)
    finally:
        if provider is not None:
            await provider.close()


def main():
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
