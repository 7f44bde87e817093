from collections.abc import Sequence
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from click import Group

__all__ = ("add_bridge_commands", "get_sqlbridge_group")


def _split_pairs(values: "Sequence[str]", option: str) -> "dict[str, str]":
    from click import BadParameter

    pairs: dict[str, str] = {}
    for value in values:
        key, sep, item = value.partition("=")
        if not sep or not key.strip():
            msg = f"Expected KEY=VALUE, got {value!r}"
            raise BadParameter(msg, param_hint=option)
        pairs[key.strip()] = item
    return pairs


def get_sqlbridge_group() -> "Group":
    """Get the SQLBridge CLI group.

    Raises:
        MissingDependencyError: If the `click` package is not installed.

    Returns:
        The SQLBridge CLI group.
    """
    from sqlbridge.exceptions import MissingDependencyError

    try:
        import rich_click as click
    except ImportError:
        try:
            import click  # type: ignore[no-redef]
        except ImportError as e:
            raise MissingDependencyError(package="click", install_package="cli") from e

    @click.group(name="sqlbridge")
    @click.option("--verbose", help="Enable debug logging.", type=bool, default=False, is_flag=True)
    @click.pass_context
    def sqlbridge_group(ctx: "click.Context", verbose: bool) -> None:
        """SQLBridge CLI commands."""
        from sqlbridge.utils.logging import configure_logging

        ctx.ensure_object(dict)
        if verbose:
            configure_logging(level="DEBUG", format_style="simple")

    return sqlbridge_group


def add_bridge_commands(bridge_group: Optional["Group"] = None) -> "Group":
    """Add adapter inspection commands to the bridge group.

    Args:
        bridge_group: The group to add the commands to.

    Raises:
        MissingDependencyError: If the `click` package is not installed.

    Returns:
        The group with the commands added.
    """
    from sqlbridge.exceptions import MissingDependencyError

    try:
        import rich_click as click
    except ImportError:
        try:
            import click  # type: ignore[no-redef]
        except ImportError as e:
            raise MissingDependencyError(package="click", install_package="cli") from e
    from rich import get_console
    from rich.table import Table

    from sqlbridge.adapters import get_adapter_class, list_registered_adapters
    from sqlbridge.exceptions import SQLBridgeError

    console = get_console()

    if bridge_group is None:
        bridge_group = get_sqlbridge_group()

    @bridge_group.command(name="adapters", help="List the registered adapters.")
    def show_adapters() -> None:  # pyright: ignore[reportUnusedFunction]
        """List the registered adapters."""
        table = Table(title="Adapters")
        table.add_column("Key")
        table.add_column("Name")
        table.add_column("Driver")
        for key in list_registered_adapters():
            adapter_class = get_adapter_class(key)
            table.add_row(key, adapter_class.name, adapter_class.driver_class)
        console.print(table)

    @bridge_group.command(name="properties", help="Show the configurable properties of an adapter.")
    @click.argument("adapter", type=str)
    def show_properties(adapter: str) -> None:  # pyright: ignore[reportUnusedFunction]
        """Show the configurable properties of an adapter."""
        try:
            adapter_class = get_adapter_class(adapter)
        except SQLBridgeError as e:
            console.print(f"[red]{e}[/]")
            raise SystemExit(1) from e
        table = Table(title=adapter_class.name)
        table.add_column("Property")
        table.add_column("Required")
        table.add_column("Default")
        table.add_column("Description")
        for prop in adapter_class.get_properties():
            table.add_row(
                prop.name,
                "yes" if prop.required else "no",
                "" if prop.default is None else prop.default,
                prop.description,
            )
        console.print(table)

    @bridge_group.command(name="render", help="Render the statement an adapter would run for a request.")
    @click.argument("adapter", type=str)
    @click.option("--structure", "-s", required=True, help="Table or view to query.")
    @click.option("--field", "-f", "fields", multiple=True, help="Requested field, repeatable.")
    @click.option("--query", "-q", default="", help="Filter expression.")
    @click.option("--param", "-p", "params", multiple=True, help="Parameter value as KEY=VALUE, repeatable.")
    @click.option("--order", default=None, help="Order, e.g. 'LAST_NAME:DESC,FIRST_NAME'.")
    @click.option("--offset", type=int, default=0, show_default=True, help="Rows to skip.")
    @click.option("--page-size", type=int, default=0, show_default=True, help="Rows per page, 0 for all.")
    @click.option("--json", "as_json", is_flag=True, default=False, help="Print the statement as JSON.")
    def render_statement(  # pyright: ignore[reportUnusedFunction]
        adapter: str,
        structure: str,
        fields: "tuple[str, ...]",
        query: str,
        params: "tuple[str, ...]",
        order: Optional[str],
        offset: int,
        page_size: int,
        as_json: bool,
    ) -> None:
        """Render the statement an adapter would run for a request."""
        from sqlbridge._serialization import encode_json
        from sqlbridge.request import BridgeRequest

        request = BridgeRequest(
            structure=structure,
            fields=fields,
            query=query,
            parameters=_split_pairs(params, "--param"),
            metadata={"order": order} if order else {},
        )
        try:
            rendered = get_adapter_class(adapter).render_paginated_statement(request, offset, page_size)
        except SQLBridgeError as e:
            console.print(f"[red]{e}[/]")
            raise SystemExit(1) from e

        if as_json:
            click.echo(
                encode_json(
                    {
                        "sql": rendered.sql,
                        "parameters": [
                            {"position": b.position, "name": b.name, "value": b.value} for b in rendered.bindings
                        ],
                        "paginated": rendered.paginated,
                        "lowerBound": rendered.lower_bound,
                        "upperBound": rendered.upper_bound,
                    }
                )
            )
            return

        console.rule("[yellow]Statement[/]", align="left")
        console.print(rendered.sql, markup=False, highlight=False, soft_wrap=True)
        if rendered.bindings:
            table = Table(title="Bindings")
            table.add_column("Position")
            table.add_column("Parameter")
            table.add_column("Value")
            for binding in rendered.bindings:
                table.add_row(str(binding.position), binding.name, str(binding.value))
            console.print(table)

    return bridge_group
