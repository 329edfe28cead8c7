# psref/cli/runner.py

"""Headless command runner: fetch one record set and print it."""

import argparse
import dataclasses
import json
import logging
import sys
from collections.abc import Callable
from datetime import date, datetime
from typing import Any

from rich.console import Console
from rich.table import Table

from psref.config.client_config import ClientConfig
from psref.errors import NotFoundError, PsrefError
from psref.models.catalog import ProductType
from psref.models.dates import format_date
from psref.models.product import Model, Product
from psref.models.search_result import Book, SearchResult
from psref.models.updates import Updates
from psref.services.psref_client import ProductQuery, PsrefClient
from psref.transport.cancellation import CancelToken

logger = logging.getLogger("psref.cli")

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_NOT_FOUND = 3

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)


def build_client(args: argparse.Namespace) -> PsrefClient:
    """Client configured from the environment plus command-line flags."""
    overrides: dict[str, Any] = {}
    if args.base_url:
        overrides["base_url"] = args.base_url
    if args.retries is not None:
        overrides["retries"] = args.retries
    if args.debug:
        overrides["debug"] = sys.stderr
    return PsrefClient(ClientConfig.from_env(**overrides))


def _json_default(value: Any) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return format_date(value)
    raise TypeError(f"not JSON serialisable: {type(value).__name__}")


def to_jsonable(data: Any) -> Any:
    """Turn records (or lists of records) into plain dicts."""
    if isinstance(data, list):
        return [to_jsonable(item) for item in data]
    if dataclasses.is_dataclass(data) and not isinstance(data, type):
        return dataclasses.asdict(data)
    return data


def print_json(data: Any) -> None:
    json.dump(
        to_jsonable(data),
        sys.stdout,
        ensure_ascii=False,
        indent=2,
        default=_json_default,
    )
    sys.stdout.write("\n")


def _date_str(value: date | None) -> str:
    return format_date(value) if value else "-"


def _new_table(title: str) -> Table:
    return Table(title=title, show_lines=False, title_style="bold cyan")


def _product_types_table(types: list[ProductType]) -> Table:
    table = _new_table("Products")
    table.add_column("Type", style="bold")
    table.add_column("Line")
    table.add_column("Series")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Key", style="magenta")
    table.add_column("Updated", justify="center")
    for ptype in types:
        for line in ptype.lineup:
            for series in line.series:
                for p in series.products:
                    table.add_row(
                        ptype.name,
                        line.name,
                        series.name,
                        str(p.pid),
                        p.key,
                        _date_str(p.updated),
                    )
    return table


def _search_table(results: list[SearchResult]) -> Table:
    table = _new_table("Search Results")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Name")
    table.add_column("Models", justify="right", style="green")
    for r in results:
        table.add_row(str(r.pid), r.name, str(r.models))
    return table


def _updates_table(updates: Updates) -> Table:
    table = _new_table(f"Version {updates.version}")
    table.add_column("Change", style="bold")
    table.add_column("ID", justify="right", style="dim")
    table.add_column("Title")
    table.add_column("Reason", style="yellow")
    for kind, entries in (
        ("new", updates.new),
        ("updated", updates.updated),
        ("withdrawn", updates.withdrawn),
    ):
        for e in entries:
            table.add_row(kind, str(e.pid), e.title, e.reason)
    return table


def _product_table(product: Product) -> Table:
    table = _new_table(f"{product.name} ({product.pid})")
    table.add_column("Model", style="magenta")
    table.add_column("Summary", max_width=80)
    table.add_column("Updated", justify="center")
    for m in product.models:
        table.add_row(m.code, m.summary, _date_str(m.updated))
    return table


def _model_table(model: Model) -> Table:
    table = _new_table(f"{model.key} {model.code}")
    table.add_column("Spec", style="bold")
    table.add_column("Value", overflow="fold")
    for kv in model.detail:
        table.add_row(kv.name, kv.value)
    return table


def _books_table(books: list[Book]) -> Table:
    table = _new_table("Books")
    table.add_column("Title")
    table.add_column("Geo", justify="center")
    table.add_column("URL", overflow="fold", style="dim")
    for b in books:
        table.add_row(b.title, b.geo, b.url)
    return table


_TABLES: dict[str, Callable[[Any], Table]] = {
    "products": _product_types_table,
    "withdrawn": _product_types_table,
    "updates": _updates_table,
    "books": _books_table,
    "search": _search_table,
    "product": _product_table,
    "model": _model_table,
}


def render_table(command: str, data: Any) -> Table:
    """Pick the table layout for the command that fetched *data*."""
    return _TABLES[command](data)


def fetch(
    client: PsrefClient,
    args: argparse.Namespace,
    cancel: CancelToken | None = None,
) -> Any:
    """Call the client method selected by ``args.command``."""
    command = args.command
    if command == "products":
        return client.products(cancel)
    if command == "withdrawn":
        return client.withdrawn_products(cancel)
    if command == "updates":
        return client.updates(cancel)
    if command == "books":
        return client.books(cancel)
    if command == "search":
        return client.search(args.keywords, cancel)
    if command == "product":
        if args.code:
            return client.product_by_model_code(args.code, cancel)
        query = ProductQuery(
            clsf=args.clsf or "",
            sc=args.sc or "",
            qt=args.qt or "",
            kw=args.kw or "",
            page=args.page or 0,
        )
        return client.product_by_id(args.pid, query, cancel)
    if command == "model":
        if args.code:
            return client.model_by_code(args.code, cancel)
        return client.model_by_id(args.pid, args.model_code, cancel)
    raise ValueError(f"unknown command {command!r}")


def run_command(
    args: argparse.Namespace, client: PsrefClient | None = None
) -> int:
    """Run one command and return an exit code."""
    if client is None:
        client = build_client(args)
    cancel = CancelToken(args.timeout) if args.timeout else None

    try:
        data = fetch(client, args, cancel)
    except NotFoundError as exc:
        logger.info("Not found: %s", exc)
        _err.print(f"[yellow]Not found: {exc}[/yellow]")
        return EXIT_NOT_FOUND
    except PsrefError as exc:
        logger.error("Command %s failed: %s", args.command, exc, exc_info=True)
        _err.print(f"[red]Error: {exc}[/red]")
        return EXIT_FAILURE

    if args.output_format == "table":
        Console().print(render_table(args.command, data))
    else:
        print_json(data)
    return EXIT_OK
