import click

from backoffice.application.policies import Actor
from backoffice.infrastructure.bootstrap import create_schema, engine
from backoffice.infrastructure.cli.item_commands import item_add, item_remove, item_update
from backoffice.infrastructure.cli.order_commands import (
    order_create,
    order_delete,
    order_list,
    order_show,
    order_status,
)
from backoffice.infrastructure.cli.output import CliContext
from backoffice.infrastructure.cli.product_commands import (
    product_add,
    product_delete,
    product_list,
    product_update,
)
from backoffice.infrastructure.config import get_settings
from backoffice.infrastructure.logging import bind_actor, clear_context, configure_logging


@click.group()
@click.option("--user", "user_id", type=int, envvar="BACKOFFICE_USER", help="Acting user ID.")
@click.option("--admin", is_flag=True, default=False, help="Act with administrator rights.")
@click.option("--json", "as_json", is_flag=True, default=False, help="Emit JSON instead of tables.")
@click.pass_context
def cli(ctx: click.Context, user_id: int | None, admin: bool, as_json: bool) -> None:
    """Back office: products, orders and stock."""
    configure_logging(get_settings())

    if admin and user_id is None:
        raise click.BadParameter("--admin requires --user", param_hint="--admin")
    if user_id is None:
        actor = Actor.guest()
    elif admin:
        actor = Actor.admin(user_id)
    else:
        actor = Actor.customer(user_id)

    clear_context()
    bind_actor(actor.user_id)
    ctx.obj = CliContext(actor=actor, as_json=as_json)


@cli.group()
def db() -> None:
    """Manage the database."""


@db.command("init")
def db_init() -> None:
    """Create all tables."""
    create_schema(engine())
    click.echo("Database schema created.")


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def item() -> None:
    """Manage the items of a pending order."""


@cli.group()
def product() -> None:
    """Manage products."""


# Register subcommands
order.add_command(order_create)
order.add_command(order_delete)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
item.add_command(item_add)
item.add_command(item_remove)
item.add_command(item_update)
product.add_command(product_add)
product.add_command(product_delete)
product.add_command(product_list)
product.add_command(product_update)
