"""Glue between click commands and the command handlers."""

from __future__ import annotations

from typing import Any, Callable, TypeVar

import click
from rich.console import Console
from rich.markup import escape

from aios_core.config import CommandContext
from aios_core.errors import PreconditionError

T = TypeVar("T")


def get_command_context(ctx: click.Context) -> CommandContext:
    """
    CommandContext for a click invocation.

    Tests (or embedding code) can inject one through obj={"context": ...};
    otherwise it is built from the current process.
    """
    obj = ctx.find_object(dict) or {}
    context = obj.get("context")
    if context is None:
        context = CommandContext.create(settings=obj.get("settings"))
        if isinstance(ctx.obj, dict):
            ctx.obj["context"] = context
    return context


def print_precondition_failure(console: Console, error: PreconditionError) -> None:
    console.print(f"  [red]Error: {escape(error.message)}[/red]")
    if error.hint:
        console.print(f"  [dim]{escape(error.hint)}[/dim]\n")


def run_handler(ctx: click.Context, handler: Callable[..., T], **kwargs: Any) -> T:
    """
    Call a command handler, turning precondition failures into exit code 1.

    Other exceptions propagate to the dispatcher, which reports them.
    """
    context = get_command_context(ctx)
    try:
        return handler(context, **kwargs)
    except PreconditionError as e:
        print_precondition_failure(context.console, e)
        ctx.exit(1)
