"""
CLI JavaScript Commands

imported, insert-imports, remove-imports, var-exists, extend-object,
remove-entries, hooks-target, extend-hooks, remove-hooks, stats, format,
is-formatted
"""

from pathlib import Path
from typing import List

import typer

from scalpel.mutation import CodemodFacade
from .output import read_source, report

app = typer.Typer()

_FILE = typer.Argument(..., help="Path to the JavaScript file", exists=True, dir_okay=False, readable=True)
_JSON = typer.Option(False, "--json", help="Output the full result as JSON")
_WRITE = typer.Option(False, "--write", "-w", help="Write the transformed text back to the file")


@app.command("imported")
def imported_cmd(
    file: Path = _FILE,
    module: str = typer.Argument(..., help="Module specifier, e.g. 'phoenix_live_view'"),
    json_output: bool = _JSON,
):
    """
    Check whether the module already imports MODULE.
    """
    report(CodemodFacade().is_module_imported(read_source(file), module), file, json_output)


@app.command("insert-imports")
def insert_imports_cmd(
    file: Path = _FILE,
    imports: List[str] = typer.Argument(..., help="Import lines to insert"),
    json_output: bool = _JSON,
    write: bool = _WRITE,
):
    """
    Insert import declarations after the last existing import.
    """
    result = CodemodFacade().insert_imports(read_source(file), "\n".join(imports))
    report(result, file, json_output, write)


@app.command("remove-imports")
def remove_imports_cmd(
    file: Path = _FILE,
    modules: List[str] = typer.Argument(..., help="Module specifiers to remove"),
    json_output: bool = _JSON,
    write: bool = _WRITE,
):
    """
    Remove every import of the given modules.
    """
    report(CodemodFacade().remove_imports(read_source(file), modules), file, json_output, write)


@app.command("var-exists")
def var_exists_cmd(
    file: Path = _FILE,
    name: str = typer.Argument(..., help="Variable name"),
    json_output: bool = _JSON,
):
    """
    Check whether a variable named NAME is declared anywhere.
    """
    report(CodemodFacade().var_exists(read_source(file), name), file, json_output)


@app.command("extend-object")
def extend_object_cmd(
    file: Path = _FILE,
    variable: str = typer.Argument(..., help="Variable bound to an object literal"),
    entries: List[str] = typer.Argument(..., help="Entries to add: Name or ...Name"),
    json_output: bool = _JSON,
    write: bool = _WRITE,
):
    """
    Add shorthand or spread entries to the object bound to VARIABLE.
    """
    result = CodemodFacade().extend_var_object(read_source(file), variable, entries)
    report(result, file, json_output, write)


@app.command("remove-entries")
def remove_entries_cmd(
    file: Path = _FILE,
    variable: str = typer.Argument(..., help="Variable bound to an object literal"),
    entries: List[str] = typer.Argument(..., help="Entry keys to remove: Name or ...Name"),
    json_output: bool = _JSON,
    write: bool = _WRITE,
):
    """
    Remove entries from the object bound to VARIABLE.
    """
    result = CodemodFacade().remove_var_object_entries(read_source(file), variable, entries)
    report(result, file, json_output, write)


@app.command("hooks-target")
def hooks_target_cmd(
    file: Path = _FILE,
    json_output: bool = _JSON,
):
    """
    Check for `let liveSocket = new LiveSocket(..., {options})`.
    """
    report(CodemodFacade().hook_target_exists(read_source(file)), file, json_output)


@app.command("extend-hooks")
def extend_hooks_cmd(
    file: Path = _FILE,
    names: List[str] = typer.Argument(..., help="Hooks to register: Name or ...Name"),
    json_output: bool = _JSON,
    write: bool = _WRITE,
):
    """
    Register hooks in the LiveSocket options, creating `hooks` if needed.
    """
    report(CodemodFacade().extend_hook_object(read_source(file), names), file, json_output, write)


@app.command("remove-hooks")
def remove_hooks_cmd(
    file: Path = _FILE,
    names: List[str] = typer.Argument(..., help="Hooks to remove: Name or ...Name"),
    json_output: bool = _JSON,
    write: bool = _WRITE,
):
    """
    Remove hooks from the LiveSocket options.
    """
    report(CodemodFacade().remove_objects_from_hooks(read_source(file), names), file, json_output, write)


@app.command("stats")
def stats_cmd(
    file: Path = _FILE,
    json_output: bool = _JSON,
):
    """
    Count functions, classes, debugger statements, imports, try and throw statements.
    """
    report(CodemodFacade().statistics(read_source(file)), file, json_output)


@app.command("format")
def format_cmd(
    file: Path = _FILE,
    json_output: bool = _JSON,
    write: bool = _WRITE,
):
    """
    Format the file with prettier.
    """
    report(CodemodFacade().format_js(read_source(file)), file, json_output, write)


@app.command("is-formatted")
def is_formatted_cmd(
    file: Path = _FILE,
    json_output: bool = _JSON,
):
    """
    Check whether prettier would leave the file unchanged.
    """
    report(CodemodFacade().is_js_formatted(read_source(file)), file, json_output)
