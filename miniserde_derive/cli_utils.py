"""
CLI utilities for command line reconstruction and introspection.
"""

from __future__ import annotations

from pathlib import Path

import click

PROGRAM_NAME = "miniserde_derive"


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Reconstruct the command line from the current Click context.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string, or just the program name when
        there is no active context
    """
    try:
        ctx = click.get_current_context()
    except RuntimeError:
        return PROGRAM_NAME

    cli_args = ctx.params
    cmd_parts = [PROGRAM_NAME]
    arguments = []
    options = []

    for param in click_command.params:
        value = cli_args.get(param.name)
        if value is None:
            continue

        if isinstance(param, click.Option) and param.is_flag:
            if param.secondary_opts:
                # --flag/--no-flag pairs: the value tells which side was chosen
                options.append(param.opts[0] if value else param.secondary_opts[0])
            elif value:
                options.append(param.opts[0])
            continue

        # Show file names only, full paths are machine specific
        if isinstance(param.type, click.Path):
            formatted_value = Path(str(value)).name
        else:
            formatted_value = str(value)

        if isinstance(param, click.Argument):
            arguments.append(formatted_value)
        elif value != param.default:
            options.extend([param.opts[0], formatted_value])

    cmd_parts.extend(arguments)
    cmd_parts.extend(options)
    return " ".join(cmd_parts)
