"""Command: classify a message type name without loading it."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from handlerdoc.commands._base import HandlerdocCommand

if TYPE_CHECKING:
    from handlerdoc.commands._context import AppContext


@click.command(
    cls=HandlerdocCommand,
    examples="""\
  handlerdoc classify shop.domain.order.command.AddOrderCommand
  handlerdoc --quiet classify 'App\\Domain\\Order\\Query\\GetOrderForViewing'""",
)
@click.argument("command_class")
@click.pass_obj
def classify(app: AppContext, command_class: str) -> None:
    """Report whether COMMAND_CLASS is a command or a query, with its domain and slug."""
    from handlerdoc.services.definition import DefinitionService

    app.emit(DefinitionService(app.settings).classify(command_class))
