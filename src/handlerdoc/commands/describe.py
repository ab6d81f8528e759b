"""Command: resolve the definition of a handler/message pair."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from handlerdoc.commands._base import HandlerdocCommand

if TYPE_CHECKING:
    from handlerdoc.commands._context import AppContext


@click.command(
    cls=HandlerdocCommand,
    examples="""\
  handlerdoc describe shop.domain.order.command_handler.AddOrderHandler \\
      shop.domain.order.command.AddOrderCommand
  handlerdoc --json describe app.handlers:GetOrderHandler app.query:GetOrder
  handlerdoc describe --table descriptors.json \\
      'App\\Order\\CommandHandler\\AddOrderHandler' 'App\\Order\\Command\\AddOrder'""",
)
@click.argument("handler_class")
@click.argument("command_class")
@click.option(
    "--table",
    "table_path",
    type=click.Path(dir_okay=False, resolve_path=True, path_type=str),
    default=None,
    help="Read types from a pre-generated descriptor table instead of importing them.",
)
@click.pass_obj
def describe(app: AppContext, handler_class: str, command_class: str, table_path: str | None) -> None:
    """Describe the command or query handled by HANDLER_CLASS."""
    from handlerdoc.config.models import IntrospectionBackend
    from handlerdoc.services.definition import DefinitionService

    settings = app.settings
    if table_path is not None:
        introspection = settings.introspection.model_copy(
            update={"backend": IntrospectionBackend.TABLE, "table_path": table_path}
        )
        settings = settings.model_copy(update={"introspection": introspection})

    app.emit(DefinitionService(settings).describe(handler_class, command_class))
