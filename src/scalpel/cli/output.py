"""
CLI Output Utilities

Machine-aware output functions that adapt based on machine mode.
"""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from scalpel.cli.config import CLIConfig
from scalpel.logging_config import logger
from scalpel.schemas import JsStatistics, OperationResult

# Errors and notices go to stderr so stdout stays pipeable
_console = Console(stderr=True)


def echo(message: str = "", **kwargs) -> None:
    typer.echo(message, **kwargs)


def print_json(data: dict, minified: Optional[bool] = None) -> None:
    """
    Print JSON data respecting machine mode.
    In machine mode, always minifies. In human mode, pretty prints.
    """
    if minified is None:
        minified = CLIConfig.is_machine_mode()

    if minified:
        echo(json.dumps(data, separators=(',', ':')))
    else:
        echo(json.dumps(data, indent=2))


def structured_error(code: str, message: str, input_value: Optional[str] = None) -> dict:
    """
    Create a structured error object for machine mode.

    Args:
        code: Error code (e.g., "OPERATION_FAILED", "FILE_READ_ERROR")
        message: Human-readable error message
        input_value: The input that caused the error

    Returns:
        Structured error dictionary
    """
    error_obj = {
        "status": "error",
        "code": code,
        "message": message
    }
    if input_value:
        error_obj["input"] = input_value
    return error_obj


def print_error(code: str, message: str, input_value: Optional[str] = None) -> None:
    """
    In machine mode, outputs a structured JSON error on stdout; in human mode,
    a red message on stderr.
    """
    if CLIConfig.is_machine_mode():
        print_json(structured_error(code, message, input_value))
    else:
        _console.print(f"[red]Error:[/red] {escape(message)}")


def read_source(file: Path) -> str:
    try:
        return file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print_error("FILE_READ_ERROR", f"Failed to read {file}: {e}", str(file))
        raise typer.Exit(code=1)


def report(result: OperationResult, file: Path, json_output: bool = False, write: bool = False) -> None:
    """
    Print an OperationResult and exit 1 if it is an error.

    Text results are printed, or written back to `file` with `write`.
    """
    if result.ok and write and isinstance(result.value, str):
        file.write_text(result.value, encoding="utf-8")
        logger.info(f"{result.operation.value}: wrote {file}")
        if not CLIConfig.is_machine_mode():
            _console.print(f"[green]Updated[/green] {escape(str(file))}")

    if json_output:
        print_json(result.model_dump(mode="json"))
    elif not result.ok and isinstance(result.value, str):
        print_error("OPERATION_FAILED", result.value, str(file))
    elif isinstance(result.value, JsStatistics):
        print_json(result.value.model_dump())
    elif isinstance(result.value, bool):
        echo("true" if result.value else "false")
    elif not write:
        echo(result.value, nl=False)

    if not result.ok:
        raise typer.Exit(code=1)
