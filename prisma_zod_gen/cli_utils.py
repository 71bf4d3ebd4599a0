"""
Command line reporting for the generation comment.
"""

from pathlib import Path

import click

COMMAND_NAME = "prisma_zod_gen"

# Options that change how the module is written, not what it contains
UNREPORTED_PARAMS = {"force", "verbose", "add_generation_comment"}


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Rebuild the invocation that produced a module from the active Click context.

    Paths are reported by file name only, so the comment is the same on
    every machine that regenerates the module.

    Args:
        click_command: Command whose parameters are reported, in declaration order

    Returns:
        Command line string, or the bare command name outside a Click context
    """
    ctx = click.get_current_context(silent=True)
    if ctx is None:
        return COMMAND_NAME

    arguments = []
    options = []
    for param in click_command.params:
        value = ctx.params.get(param.name)
        if param.name in UNREPORTED_PARAMS or value is None:
            continue

        shown = Path(value).name if isinstance(param.type, click.Path) else str(value)
        if isinstance(param, click.Argument):
            arguments.append(shown)
        else:
            options.extend([param.opts[0], shown])

    return " ".join([COMMAND_NAME] + arguments + options)
