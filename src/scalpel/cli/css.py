"""
CLI Stylesheet Commands

imported, insert-imports, remove-imports, rule-exists, set, unset, format,
is-formatted
"""

from pathlib import Path
from typing import List

import typer

from scalpel.mutation import CodemodFacade
from .output import read_source, report

app = typer.Typer()

_FILE = typer.Argument(..., help="Path to the CSS file", exists=True, dir_okay=False, readable=True)
_JSON = typer.Option(False, "--json", help="Output the full result as JSON")
_WRITE = typer.Option(False, "--write", "-w", help="Write the transformed text back to the file")


@app.command("imported")
def imported_cmd(
    file: Path = _FILE,
    href: str = typer.Argument(..., help="Imported stylesheet, e.g. 'tailwindcss/base'"),
    json_output: bool = _JSON,
):
    """
    Check whether the stylesheet already imports HREF.
    """
    report(CodemodFacade().css_imported(read_source(file), href), file, json_output)


@app.command("insert-imports")
def insert_imports_cmd(
    file: Path = _FILE,
    imports: List[str] = typer.Argument(..., help="@import lines to insert"),
    json_output: bool = _JSON,
    write: bool = _WRITE,
):
    """
    Insert @import statements after the existing ones.
    """
    result = CodemodFacade().css_insert_imports(read_source(file), "\n".join(imports))
    report(result, file, json_output, write)


@app.command("remove-imports")
def remove_imports_cmd(
    file: Path = _FILE,
    hrefs: List[str] = typer.Argument(..., help="Imported stylesheets to remove"),
    json_output: bool = _JSON,
    write: bool = _WRITE,
):
    """
    Remove @import statements by target.
    """
    report(CodemodFacade().css_remove_imports(read_source(file), hrefs), file, json_output, write)


@app.command("rule-exists")
def rule_exists_cmd(
    file: Path = _FILE,
    selector: str = typer.Argument(..., help="Rule selector"),
    json_output: bool = _JSON,
):
    """
    Check whether a top-level rule has SELECTOR.
    """
    report(CodemodFacade().css_rule_exists(read_source(file), selector), file, json_output)


@app.command("set")
def set_cmd(
    file: Path = _FILE,
    selector: str = typer.Argument(..., help="Rule selector"),
    name: str = typer.Argument(..., help="Property name"),
    value: str = typer.Argument(..., help="Property value"),
    json_output: bool = _JSON,
    write: bool = _WRITE,
):
    """
    Set NAME: VALUE in the rule for SELECTOR, creating the rule if needed.
    """
    result = CodemodFacade().css_ensure_declaration(read_source(file), selector, name, value)
    report(result, file, json_output, write)


@app.command("unset")
def unset_cmd(
    file: Path = _FILE,
    selector: str = typer.Argument(..., help="Rule selector"),
    name: str = typer.Argument(..., help="Property name"),
    json_output: bool = _JSON,
    write: bool = _WRITE,
):
    """
    Remove NAME from the rule for SELECTOR.
    """
    result = CodemodFacade().css_remove_declaration(read_source(file), selector, name)
    report(result, file, json_output, write)


@app.command("format")
def format_cmd(
    file: Path = _FILE,
    json_output: bool = _JSON,
    write: bool = _WRITE,
):
    """
    Format the stylesheet with prettier.
    """
    report(CodemodFacade().format_css(read_source(file)), file, json_output, write)


@app.command("is-formatted")
def is_formatted_cmd(
    file: Path = _FILE,
    json_output: bool = _JSON,
):
    """
    Check whether prettier would leave the stylesheet unchanged.
    """
    report(CodemodFacade().is_css_formatted(read_source(file)), file, json_output)
