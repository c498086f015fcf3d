"""
CodemodFacade: the host-facing entry point for every codemod.

Each method takes source text plus parameters, runs one operation on a fresh
parse and returns an OperationResult. Errors raised by the components
(ScalpelError) become error results; anything else propagates.
"""

from typing import Any, Callable, Dict, Iterable, List, Optional, Union

from scalpel.exceptions import ScalpelError
from scalpel.logging_config import logger
from scalpel.parser.css_parser import parse_css
from scalpel.parser.javascript_parser import parse_javascript
from scalpel.schemas import JsStatistics, Operation, OperationResult
from scalpel.stylesheet.emitter import emit_stylesheet
from scalpel.stylesheet.rules import StylesheetEditor

from .config import get_codemod_config
from .editor import emit
from .formatter import CodeFormatter
from .hook_extender import HookExtender
from .import_manager import ImportManager
from .locator import var_exists
from .object_extender import ObjectExtender
from .statistics import collect_statistics

Names = Union[str, Iterable[str]]


def _as_list(names: Names) -> List[str]:
    if isinstance(names, str):
        return [names]
    return list(names)


class CodemodFacade:
    """
    Run JavaScript and CSS codemods on source text.

    Pipeline per call: parse -> query or mutate -> emit (+ re-validate).
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Args:
            config: Optional config overrides
        """
        self.config = {**get_codemod_config(), **(config or {})}

        self.import_manager = ImportManager(self.config)
        self.object_extender = ObjectExtender(self.config)
        self.hook_extender = HookExtender(self.config)
        self.stylesheet_editor = StylesheetEditor(self.config)
        self.formatter = CodeFormatter(self.config)

        logger.debug("CodemodFacade initialized")

    # --- Result plumbing ---

    def _run(self, operation: Operation, action: Callable[[], Any]) -> OperationResult:
        try:
            value = action()
        except ScalpelError as e:
            logger.warning(f"{operation.value} failed: {e}")
            return OperationResult(status="error", operation=operation, value=str(e))
        return OperationResult(status="ok", operation=operation, value=value)

    def _probe(self, operation: Operation, action: Callable[[], bool]) -> OperationResult:
        result = self._run(operation, action)
        if result.ok and result.value is False:
            return OperationResult(status="error", operation=operation, value=False)
        return result

    def _js(self, text: str, mutation: Callable) -> Callable[[], str]:
        def action():
            tree = parse_javascript(text)
            mutation(tree)
            return emit(tree, self.config)
        return action

    def _css(self, text: str, mutation: Callable) -> Callable[[], str]:
        def action():
            stylesheet = parse_css(text)
            mutation(stylesheet)
            return emit_stylesheet(stylesheet, self.config)
        return action

    # --- JavaScript imports ---

    def is_module_imported(self, text: str, module: str) -> OperationResult:
        return self._probe(
            Operation.MODULE_IMPORTED,
            lambda: self.import_manager.is_module_imported(parse_javascript(text), module),
        )

    def insert_imports(self, text: str, imports: str) -> OperationResult:
        return self._run(
            Operation.INSERT_IMPORTS,
            self._js(text, lambda tree: self.import_manager.insert_imports(tree, imports)),
        )

    def remove_imports(self, text: str, modules: Names) -> OperationResult:
        modules = _as_list(modules)
        return self._run(
            Operation.REMOVE_IMPORTS,
            self._js(text, lambda tree: self.import_manager.remove_imports(tree, modules)),
        )

    # --- Named objects ---

    def var_exists(self, text: str, name: str) -> OperationResult:
        return self._probe(Operation.VAR_EXISTS, lambda: var_exists(parse_javascript(text), name))

    def extend_var_object(self, text: str, variable_name: str, entries: Names) -> OperationResult:
        entries = _as_list(entries)
        return self._run(
            Operation.EXTEND_VAR_OBJECT,
            self._js(text, lambda tree: self.object_extender.extend(tree, variable_name, entries)),
        )

    def remove_var_object_entries(self, text: str, variable_name: str, entries: Names) -> OperationResult:
        entries = _as_list(entries)
        return self._run(
            Operation.REMOVE_VAR_OBJECT_ENTRIES,
            self._js(text, lambda tree: self.object_extender.remove(tree, variable_name, entries)),
        )

    # --- LiveSocket hooks ---

    def hook_target_exists(self, text: str) -> OperationResult:
        return self._probe(
            Operation.HOOK_TARGET_EXISTS,
            lambda: self.hook_extender.find_marker(parse_javascript(text)),
        )

    def extend_hook_object(self, text: str, names: Names) -> OperationResult:
        names = _as_list(names)
        return self._run(
            Operation.EXTEND_HOOK_OBJECT,
            self._js(text, lambda tree: self.hook_extender.extend(tree, names)),
        )

    def remove_objects_from_hooks(self, text: str, names: Names) -> OperationResult:
        names = _as_list(names)
        return self._run(
            Operation.REMOVE_OBJECTS_FROM_HOOKS,
            self._js(text, lambda tree: self.hook_extender.remove(tree, names)),
        )

    # --- Statistics ---

    def statistics(self, text: str) -> OperationResult:
        def action() -> JsStatistics:
            return collect_statistics(parse_javascript(text))
        return self._run(Operation.STATISTICS, action)

    # --- Formatting ---

    def format_js(self, text: str) -> OperationResult:
        return self._run(Operation.FORMAT_JS, lambda: self.formatter.format(text, "javascript"))

    def is_js_formatted(self, text: str) -> OperationResult:
        return self._probe(Operation.IS_JS_FORMATTED, lambda: self.formatter.is_formatted(text, "javascript"))

    def format_css(self, text: str) -> OperationResult:
        return self._run(Operation.FORMAT_CSS, lambda: self.formatter.format(text, "css"))

    def is_css_formatted(self, text: str) -> OperationResult:
        return self._probe(Operation.IS_CSS_FORMATTED, lambda: self.formatter.is_formatted(text, "css"))

    # --- Stylesheets ---

    def css_imported(self, text: str, href: str) -> OperationResult:
        return self._probe(
            Operation.CSS_IMPORTED,
            lambda: self.stylesheet_editor.is_imported(parse_css(text), href),
        )

    def css_insert_imports(self, text: str, imports: str) -> OperationResult:
        return self._run(
            Operation.CSS_INSERT_IMPORTS,
            self._css(text, lambda sheet: self.stylesheet_editor.insert_imports(sheet, imports)),
        )

    def css_remove_imports(self, text: str, hrefs: Names) -> OperationResult:
        hrefs = _as_list(hrefs)
        return self._run(
            Operation.CSS_REMOVE_IMPORTS,
            self._css(text, lambda sheet: self.stylesheet_editor.remove_imports(sheet, hrefs)),
        )

    def css_rule_exists(self, text: str, selector: str) -> OperationResult:
        return self._probe(
            Operation.CSS_RULE_EXISTS,
            lambda: self.stylesheet_editor.rule_exists(parse_css(text), selector),
        )

    def css_ensure_declaration(self, text: str, selector: str, name: str, value: str) -> OperationResult:
        return self._run(
            Operation.CSS_ENSURE_DECLARATION,
            self._css(text, lambda sheet: self.stylesheet_editor.ensure_declaration(sheet, selector, name, value)),
        )

    def css_remove_declaration(self, text: str, selector: str, name: str) -> OperationResult:
        return self._run(
            Operation.CSS_REMOVE_DECLARATION,
            self._css(text, lambda sheet: self.stylesheet_editor.remove_declaration(sheet, selector, name)),
        )
