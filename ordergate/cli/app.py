"""
ordergate CLI Application - Built with Click.

Commands:
    ordergate demo            Run the reference order scenarios
    ordergate place ...       Place a single order
    ordergate env-template    Write a .env template
"""

import asyncio
import logging
import sys
from pathlib import Path

import click
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ordergate import __version__
from ordergate.core.config import OrderConfig, parse_stock
from ordergate.core.env import EnvManager
from ordergate.core.logger import configure_default_logging
from ordergate.core.types import OrderStatus
from ordergate.facade import OrderFacade
from ordergate.monitoring.logging import setup_json_logging

console = Console()

STATUS_STYLES = {
    OrderStatus.COMPLETED: "green",
    OrderStatus.FAILED: "red",
    OrderStatus.CANCELED: "yellow",
    OrderStatus.CANCEL_FAILED: "magenta",
    OrderStatus.CREATING: "cyan",
}

# (order_id, item, quantity, amount, address)
DEMO_ORDERS = [
    ("o1", "item1", 2, 100, "123 Main St"),
    ("o2", "item2", 10, 100, "456 Maple St"),
    ("o3", "item1", 1, 0, "789 Oak St"),
]
DEMO_CANCELED_ORDER = ("o4", "item2", 1, 50, "987 Pine St")


class OrderedGroup(click.Group):
    """Click Group that lists commands in the order they were added."""

    def list_commands(self, ctx):
        return list(self.commands.keys())


@click.group(cls=OrderedGroup)
@click.version_option(version=__version__, prog_name="ordergate")
@click.option("--verbose", "-v", is_flag=True, help="Log every step to stderr")
@click.option("--json-logs", is_flag=True, help="Emit logs as JSON lines")
def cli(verbose: bool, json_logs: bool):
    """
    ordergate - Facade-based order processing.

    \b
    Commands:
      demo             Run the reference order scenarios
      place            Place a single order
      env-template     Write a .env template
    """
    level = logging.DEBUG if verbose else logging.WARNING
    if json_logs:
        setup_json_logging(level=level, stream=sys.stderr)
    elif verbose:
        configure_default_logging(level=level)


def _load_config(config_file: str | None, fast: bool) -> OrderConfig:
    config = OrderConfig.from_file(config_file) if config_file else OrderConfig.from_env()
    return config.with_delays(0) if fast else config


def _status_table(facade: OrderFacade, order_ids: list[str]) -> Table:
    table = Table(title="Orders")
    table.add_column("Order", style="bold")
    table.add_column("Status")
    table.add_column("Details")

    for order_id in order_ids:
        record = facade.get_order_status(order_id)
        if record is None:
            continue
        style = STATUS_STYLES.get(record.status, "white")
        table.add_row(
            order_id,
            f"[{style}]{record.status.value}[/{style}]",
            record.error or record.details or "",
        )
    return table


def _inventory_table(facade: OrderFacade) -> Table:
    table = Table(title="Inventory")
    table.add_column("Item", style="bold")
    table.add_column("Available", justify="right")
    table.add_column("Locked", justify="right")

    for item, counts in facade.inventory.snapshot().items():
        table.add_row(item, str(counts["available"]), str(counts["locked"]))
    return table


async def _run_demo(facade: OrderFacade) -> None:
    for order in DEMO_ORDERS:
        await facade.place_order(*order)

    # Cancel while the payment of o4 is in flight
    placing = asyncio.create_task(facade.place_order(*DEMO_CANCELED_ORDER))
    await asyncio.sleep(0)
    await facade.cancel_order(DEMO_CANCELED_ORDER[0])
    await placing


# ============================================================================
# ordergate demo
# ============================================================================


@click.command(name="demo")
@click.option("--fast", is_flag=True, help="Disable simulated latency")
@click.option(
    "--config", "config_file", type=click.Path(exists=True, dir_okay=False), default=None,
    help="YAML configuration file",
)
def demo_cmd(fast: bool, config_file: str | None):
    """
    Run the reference scenarios: a completed order, an out-of-stock order,
    a declined payment and an order canceled while paying.
    """
    config = _load_config(config_file, fast)
    facade = OrderFacade(config=config.with_stock({"item1": 10, "item2": 5}))

    console.print(
        Panel.fit(
            "[bold blue]ordergate demo[/bold blue]\n"
            "lock -> pay -> ship, with rollback and cancellation",
            border_style="blue",
        )
    )
    asyncio.run(_run_demo(facade))

    order_ids = [order[0] for order in DEMO_ORDERS] + [DEMO_CANCELED_ORDER[0]]
    console.print(_status_table(facade, order_ids))
    console.print(_inventory_table(facade))


# ============================================================================
# ordergate place
# ============================================================================


@click.command(name="place")
@click.argument("order_id")
@click.argument("item")
@click.argument("quantity", type=int)
@click.argument("amount", type=float)
@click.argument("address")
@click.option(
    "--stock", "-s", multiple=True,
    help="Seed stock as item=quantity (repeatable, replaces configured stock)",
)
@click.option("--fast", is_flag=True, help="Disable simulated latency")
@click.option(
    "--config", "config_file", type=click.Path(exists=True, dir_okay=False), default=None,
    help="YAML configuration file",
)
def place_cmd(
    order_id: str,
    item: str,
    quantity: int,
    amount: float,
    address: str,
    stock: tuple[str, ...],
    fast: bool,
    config_file: str | None,
):
    """Place a single order and print its final status."""
    config = _load_config(config_file, fast)
    if stock:
        try:
            config = config.with_stock(parse_stock(",".join(stock)))
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--stock") from e

    facade = OrderFacade(config=config)
    try:
        success = asyncio.run(facade.place_order(order_id, item, quantity, amount, address))
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(2)

    console.print(_status_table(facade, [order_id]))
    sys.exit(0 if success else 1)


# ============================================================================
# ordergate env-template
# ============================================================================


@click.command(name="env-template")
@click.argument("path", type=click.Path(dir_okay=False), default=".env.template")
@click.option("--force", is_flag=True, help="Overwrite an existing file")
def env_template_cmd(path: str, force: bool):
    """Write a .env template with every ORDERGATE_* variable."""
    target = Path(path)
    if target.exists() and not force:
        click.echo(f"Error: {target} already exists (use --force to overwrite)", err=True)
        sys.exit(1)

    EnvManager.create_env_template(target, OrderConfig(metrics=False, logging=False).initial_stock)
    click.echo(f"Wrote {target}")


cli.add_command(demo_cmd)
cli.add_command(place_cmd)
cli.add_command(env_template_cmd)
