# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Click commands to inspect and exercise glin interfaces.

Commands:
    routes: Table of every interface method with its resolved request.
    call: Execute one interface method and print the decoded result.

Example:
    ::

        glin routes myapp.api:UserBiz --base-url http://192.168.201.39
        glin call myapp.api:UserBiz list name=qibin --debug
        glin call myapp.api:UserBiz create 'user={"name": "qibin"}'

Note:
    - KEY=VALUE pairs are passed as keyword arguments; values are strings
      coerced by argument validation, except values starting with ``{`` or
      ``[`` which are decoded as JSON
    - Environment defaults come from config_from_env (GLIN_* variables)
"""

from __future__ import annotations

import dataclasses
import importlib
import json
import logging
from typing import Any

import click
from pydantic import ValidationError
from pydantic_core import to_jsonable_python
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .call.registry import CallRegistry
from .errors import GlinError
from .glin_base import Glin, config_from_env
from .interface.descriptor import describe_interface
from .interface.resolver import resolve

console = Console()


def _cell(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else json.dumps(value)


def _print_result(value: Any) -> None:
    """Print a decoded value: records as a table, anything else as JSON."""
    if isinstance(value, list) and value and all(isinstance(row, dict) for row in value):
        columns = list(dict.fromkeys(key for row in value for key in row))
        table = Table(*columns, show_header=True, header_style="bold cyan")
        for row in value:
            table.add_row(*(_cell(row.get(key)) for key in columns))
        console.print(table)
    else:
        console.print_json(data=value)


def _load_interface(target: str) -> type:
    """Import ``module:Interface``."""
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise click.BadParameter(f"expected MODULE:INTERFACE, got '{target}'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        raise click.BadParameter(f"cannot import '{module_name}': {exc}") from exc
    interface = getattr(module, attr, None)
    if not isinstance(interface, type):
        raise click.BadParameter(f"'{attr}' is not a class in '{module_name}'")
    return interface


def _parse_pairs(pairs: tuple[str, ...]) -> dict[str, Any]:
    """Convert KEY=VALUE pairs to keyword arguments."""
    kwargs: dict[str, Any] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise click.BadParameter(f"expected KEY=VALUE, got '{pair}'")
        if value[:1] in ("{", "["):
            try:
                kwargs[key] = json.loads(value)
                continue
            except ValueError as exc:
                raise click.BadParameter(f"invalid JSON for '{key}': {exc}") from exc
        kwargs[key] = value
    return kwargs


def _setup_logging(debug: bool) -> None:
    level = logging.INFO if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@click.group()
@click.version_option(package_name="glin")
def cli() -> None:
    """Declarative HTTP interfaces."""


@cli.command("routes")
@click.argument("target")
@click.option("--base-url", envvar="GLIN_BASE_URL", default="", help="Base URL prefix")
@click.option("--lenient", is_flag=True, help="First verb tag wins instead of failing")
def routes_cmd(target: str, base_url: str, lenient: bool) -> None:
    """Show how every method of MODULE:INTERFACE resolves."""
    interface = _load_interface(target)
    registry = CallRegistry.default()

    table = Table(show_header=True, header_style="bold cyan")
    for column in ("method", "verb", "url", "call", "params"):
        table.add_column(column)

    for name, descriptor in describe_interface(interface).items():
        try:
            resolution = resolve(descriptor, registry, strict=not lenient)
        except GlinError as exc:
            table.add_row(name, "", "", "", f"[red]{exc}[/red]")
            continue
        factory = registry.lookup(resolution.kind)
        if descriptor.body:
            params = "<json body>"
        else:
            params = ", ".join(tag.name if tag else f"[red]{pname}?[/red]"
                               for pname, tag in zip(descriptor.param_names, descriptor.param_tags))
        table.add_row(
            name,
            resolution.verb,
            base_url + resolution.path,
            getattr(factory, "__name__", str(factory)),
            params,
        )
    console.print(table)


@cli.command("call")
@click.argument("target")
@click.argument("method_name")
@click.argument("pairs", nargs=-1)
@click.option("--base-url", envvar="GLIN_BASE_URL", default=None, help="Base URL prefix")
@click.option("--timeout", type=float, default=None, help="Request timeout in seconds")
@click.option("--debug", is_flag=True, help="Log the HTTP exchange")
@click.option("--lenient", is_flag=True, help="First verb tag wins instead of failing")
def call_cmd(
    target: str,
    method_name: str,
    pairs: tuple[str, ...],
    base_url: str | None,
    timeout: float | None,
    debug: bool,
    lenient: bool,
) -> None:
    """Execute METHOD_NAME of MODULE:INTERFACE with KEY=VALUE arguments."""
    _setup_logging(debug)
    interface = _load_interface(target)
    if method_name not in describe_interface(interface):
        raise click.BadParameter(f"'{interface.__name__}' has no method '{method_name}'")

    config = config_from_env()
    overrides: dict[str, Any] = {"debug": debug or config.debug}
    if base_url is not None:
        overrides["base_url"] = base_url
    if timeout is not None:
        overrides["timeout"] = timeout
    if lenient:
        overrides["strict"] = False

    with Glin(dataclasses.replace(config, **overrides)) as glin:
        impl = glin.create(interface, tag="cli")
        try:
            call = getattr(impl, method_name)(**_parse_pairs(pairs))
            result = call.execute()
        except (GlinError, ValidationError) as exc:
            raise click.ClickException(str(exc)) from exc

    if not result.is_ok():
        status = f"HTTP {result.status_code}: " if result.status_code else ""
        raise click.ClickException(f"{status}{result.message}")
    if result.value is not None:
        _print_result(to_jsonable_python(result.value))


__all__ = ["cli", "console"]
