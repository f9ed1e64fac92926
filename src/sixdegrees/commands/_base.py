"""Click classes for sixdeg commands that carry usage examples.

Pass ``examples="..."`` to ``@click.command``/``@click.group`` together
with ``cls=SixCommand``/``cls=SixGroup`` to get an eager ``--examples``
flag that prints them and exits.
"""

from __future__ import annotations

from typing import Any

import click


class _WithExamples:
    examples: str | None

    def __init__(self, *args: Any, examples: str | None = None, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = examples
        if examples:
            self.params.append(  # type: ignore[attr-defined]
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._print_examples,
                    help="Show usage examples and exit.",
                )
            )

    def _print_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if value and not ctx.resilient_parsing:
            click.echo(f"Examples for '{ctx.command_path}':\n\n{self.examples}")
            ctx.exit()


class SixCommand(_WithExamples, click.Command):
    """Command with an optional ``--examples`` flag."""


class SixGroup(_WithExamples, click.Group):
    """Group with an optional ``--examples`` flag; subcommands default to SixCommand."""

    command_class = SixCommand
