"""
Parameter schemas for tools.

A tool declares its parameters once as an ordered mapping of `Param`
entries. From that declaration we derive both the JSON Schema advertised
over MCP and a pydantic model used to decode incoming arguments, so the two
can never drift apart.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Mapping, Optional, Tuple, Type, Union

from pydantic import BaseModel, ConfigDict, ValidationError, create_model

from ..models import FieldError, ValidationFailure

KINDS = ("string", "number", "integer", "boolean", "enum", "object", "array")

_MISSING: Any = object()


@dataclass(frozen=True)
class Param:
    kind: str
    description: str = ""
    required: bool = False
    default: Any = _MISSING
    choices: Tuple[str, ...] = ()
    items: Optional["Param"] = None
    properties: Optional[Mapping[str, "Param"]] = None

    def __post_init__(self) -> None:
        if self.kind not in KINDS:
            raise ValueError(f"Unknown parameter kind '{self.kind}'")
        if self.kind == "enum" and not self.choices:
            raise ValueError("Enum parameters need at least one choice")
        if self.kind == "array" and self.items is None:
            raise ValueError("Array parameters need an item type")
        if self.required and self.has_default:
            raise ValueError("A required parameter cannot declare a default")

    @property
    def has_default(self) -> bool:
        return self.default is not _MISSING


# Shorthand constructors used by the tool modules.


def string(description: str = "", required: bool = False, **kw: Any) -> Param:
    return Param("string", description, required, **kw)


def number(description: str = "", required: bool = False, **kw: Any) -> Param:
    return Param("number", description, required, **kw)


def boolean(description: str = "", required: bool = False, **kw: Any) -> Param:
    return Param("boolean", description, required, **kw)


def enum(
    choices: Tuple[str, ...],
    description: str = "",
    required: bool = False,
    **kw: Any,
) -> Param:
    return Param("enum", description, required, choices=tuple(choices), **kw)


def obj(
    properties: Optional[Mapping[str, Param]] = None,
    description: str = "",
    required: bool = False,
) -> Param:
    return Param("object", description, required, properties=properties)


def array(items: Param, description: str = "", required: bool = False) -> Param:
    return Param("array", description, required, items=items)


def _python_type(param: Param, model_name: str) -> Any:
    if param.kind == "string":
        return str
    if param.kind == "number":
        # A single type rather than int | float, so errors carry the bare field name.
        return float
    if param.kind == "integer":
        return int
    if param.kind == "boolean":
        return bool
    if param.kind == "enum":
        return Literal[param.choices]
    if param.kind == "array":
        assert param.items is not None
        return List[_python_type(param.items, f"{model_name}Item")]  # type: ignore[misc]
    if param.properties is None:
        return Dict[str, Any]
    return _build_model(model_name, param.properties)


def _build_model(name: str, params: Mapping[str, Param]) -> Type[BaseModel]:
    fields: Dict[str, Any] = {}
    for field_name, param in params.items():
        py_type = _python_type(param, f"{name}_{field_name}")
        if param.required:
            fields[field_name] = (py_type, ...)
        else:
            fields[field_name] = (Optional[py_type], None)
    # Unknown keys are dropped, not rejected.
    return create_model(name, __config__=ConfigDict(extra="ignore"), **fields)


def _json_schema(param: Param) -> Dict[str, Any]:
    schema: Dict[str, Any]
    if param.kind == "enum":
        schema = {"type": "string", "enum": list(param.choices)}
    elif param.kind == "array":
        assert param.items is not None
        schema = {"type": "array", "items": _json_schema(param.items)}
    elif param.kind == "object":
        schema = {"type": "object"}
        if param.properties is not None:
            schema["properties"] = {
                k: _json_schema(v) for k, v in param.properties.items()
            }
            required = [k for k, v in param.properties.items() if v.required]
            if required:
                schema["required"] = required
    else:
        schema = {"type": param.kind}
    if param.description:
        schema["description"] = param.description
    if param.has_default:
        schema["default"] = param.default
    return schema


def _narrow_numbers(value: Any) -> Any:
    """Turn whole-number floats back into ints so `10` goes upstream as `10`."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, dict):
        return {k: _narrow_numbers(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_narrow_numbers(v) for v in value]
    return value


def _error_path(loc: Tuple[Any, ...]) -> str:
    return ".".join(str(part) for part in loc) or "(arguments)"


def _error_message(error: Mapping[str, Any]) -> str:
    if error["type"] == "missing":
        return "required"
    if error["type"] == "literal_error":
        expected = error.get("ctx", {}).get("expected", "")
        return f"must be one of {expected}"
    return str(error["msg"])


@dataclass
class ParameterSchema:
    """Ordered parameter declaration for one tool."""

    params: Mapping[str, Param] = field(default_factory=dict)
    name: str = "Arguments"

    def __post_init__(self) -> None:
        self._model = _build_model(self.name, self.params)

    @property
    def required(self) -> List[str]:
        return [k for k, v in self.params.items() if v.required]

    def to_json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {
            "type": "object",
            "properties": {k: _json_schema(v) for k, v in self.params.items()},
            "additionalProperties": True,
        }
        if self.required:
            schema["required"] = self.required
        return schema

    def decode(self, arguments: Any) -> Union[Dict[str, Any], ValidationFailure]:
        """
        Validate raw arguments and return the decoded values.

        Every problem is collected in one pass. Optional fields that were
        not supplied (or supplied as null) are absent from the result unless
        they declare a default.
        """
        if arguments is None:
            arguments = {}
        try:
            parsed = self._model.model_validate(arguments)
        except ValidationError as exc:
            return ValidationFailure(
                errors=tuple(
                    FieldError(path=_error_path(err["loc"]), message=_error_message(err))
                    for err in exc.errors()
                )
            )

        values = _narrow_numbers(parsed.model_dump(exclude_unset=True, exclude_none=True))
        for name, param in self.params.items():
            if name not in values and param.has_default:
                values[name] = param.default
        return values
