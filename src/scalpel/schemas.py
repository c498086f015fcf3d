from enum import Enum
from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class Operation(str, Enum):
    """
    Identifies which codemod produced an OperationResult.
    """
    MODULE_IMPORTED = "module_imported"
    INSERT_IMPORTS = "insert_imports"
    REMOVE_IMPORTS = "remove_imports"
    VAR_EXISTS = "var_exists"
    EXTEND_VAR_OBJECT = "extend_var_object"
    REMOVE_VAR_OBJECT_ENTRIES = "remove_var_object_entries"
    HOOK_TARGET_EXISTS = "hook_target_exists"
    EXTEND_HOOK_OBJECT = "extend_hook_object"
    REMOVE_OBJECTS_FROM_HOOKS = "remove_objects_from_hooks"
    STATISTICS = "statistics"
    FORMAT_JS = "format_js"
    IS_JS_FORMATTED = "is_js_formatted"
    CSS_IMPORTED = "css_imported"
    CSS_INSERT_IMPORTS = "css_insert_imports"
    CSS_REMOVE_IMPORTS = "css_remove_imports"
    CSS_RULE_EXISTS = "css_rule_exists"
    CSS_ENSURE_DECLARATION = "css_ensure_declaration"
    CSS_REMOVE_DECLARATION = "css_remove_declaration"
    FORMAT_CSS = "format_css"
    IS_CSS_FORMATTED = "is_css_formatted"


class JsStatistics(BaseModel):
    """
    Structural counters collected from one JavaScript source.
    """
    model_config = ConfigDict(frozen=True)

    functions: int = Field(default=0, ge=0)
    classes: int = Field(default=0, ge=0)
    debuggers: int = Field(default=0, ge=0)
    imports: int = Field(default=0, ge=0)
    trys: int = Field(default=0, ge=0)
    throws: int = Field(default=0, ge=0)


class OperationResult(BaseModel):
    """
    Tagged result handed back to the caller of a codemod.

    `value` holds the transformed text, a boolean probe answer or the
    statistics record on success, and the error message on failure.
    """
    model_config = ConfigDict(frozen=True)

    status: Literal["ok", "error"]
    operation: Operation
    value: Union[JsStatistics, bool, str]

    @property
    def ok(self) -> bool:
        return self.status == "ok"

    def as_tuple(self):
        """(status, operation, value) in the shape host bindings expect."""
        return (self.status, self.operation.value, self.value)
