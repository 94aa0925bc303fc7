"""
CLI utilities for command line reconstruction and introspection.
"""

from pathlib import Path

import click

PROGRAM_NAME = "aidl2"


def format_value(value) -> str:
    """Show existing paths by file name only."""
    if isinstance(value, (str, Path)):
        path_obj = Path(str(value))
        return path_obj.name if path_obj.exists() else str(value)
    return str(value)


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Reconstruct command line from current Click context using introspection.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string
    """
    try:
        ctx = click.get_current_context()
        cli_args = ctx.params
    except RuntimeError:
        # No active context
        return PROGRAM_NAME

    if not cli_args:
        return PROGRAM_NAME

    cmd_parts = [PROGRAM_NAME]

    arguments = []
    options = []

    for param in click_command.params:
        param_name = param.name
        if param_name not in cli_args:
            continue

        value = cli_args[param_name]
        if not value:
            continue

        if isinstance(param, click.Argument):
            if isinstance(value, (list, tuple)):
                arguments.extend(format_value(v) for v in value)
            else:
                arguments.append(format_value(value))

        elif isinstance(param, click.Option):
            # Skip default values
            if param.default is not None and value == param.default:
                continue

            flag = param.opts[0] if param.opts else f"--{param_name}"
            # Options given several times are repeated
            if isinstance(value, (list, tuple)):
                for v in value:
                    options.extend([flag, format_value(v)])
            else:
                options.extend([flag, format_value(value)])

    cmd_parts.extend(arguments)
    cmd_parts.extend(options)

    return " ".join(cmd_parts)
