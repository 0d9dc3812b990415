"""Document instances and attribute computation.

Type definitions never fail to build because of a missing required default;
the failure surfaces here, when an instance is created without the value.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from folio.core.exceptions import AttributeValidationError, RequiredAttributeError
from folio.core.utils.attributes import merge_attributes

from .attributes import AttributeSpec

_TYPE_CHECKS: Dict[str, Any] = {
    "string": lambda v: isinstance(v, str),
    "number": lambda v: isinstance(v, (int, float)) and not isinstance(v, bool),
    "boolean": lambda v: isinstance(v, bool),
    "null": lambda v: v is None,
    "object": lambda v: isinstance(v, dict),
    "array": lambda v: isinstance(v, (list, tuple)),
}


@dataclass(frozen=True)
class DocumentMark:
    type: str
    attrs: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class DocumentNode:
    type: str
    attrs: Mapping[str, Any] = field(default_factory=dict)
    content: Tuple["DocumentNode", ...] = ()
    marks: Tuple[DocumentMark, ...] = ()
    text: Optional[str] = None

    @property
    def is_text(self) -> bool:
        return self.text is not None

    @property
    def text_content(self) -> str:
        if self.text is not None:
            return self.text
        return "".join(child.text_content for child in self.content)


def _check_value(type_name: str, name: str, spec: AttributeSpec, value: Any) -> None:
    validate = spec.validate
    if validate is None:
        return

    if isinstance(validate, str):
        allowed = [part.strip() for part in validate.split("|") if part.strip()]
        unknown = [part for part in allowed if part not in _TYPE_CHECKS]
        if unknown:
            raise AttributeValidationError(
                f"Unknown validation type {unknown} for attribute '{name}' on '{type_name}'",
                type_name=type_name,
                attribute=name,
            )
        if not any(_TYPE_CHECKS[part](value) for part in allowed):
            raise AttributeValidationError(
                f"Expected value of type {validate} for attribute '{name}' on '{type_name}', "
                f"got {type(value).__name__}",
                type_name=type_name,
                attribute=name,
                context={"value": repr(value)},
            )
        return

    try:
        accepted = validate(value)
    except AttributeValidationError:
        raise
    except Exception as exc:
        raise AttributeValidationError(
            f"Invalid value for attribute '{name}' on '{type_name}': {exc}",
            type_name=type_name,
            attribute=name,
            context={"value": repr(value)},
        ) from exc

    if accepted is False:
        raise AttributeValidationError(
            f"Invalid value for attribute '{name}' on '{type_name}'",
            type_name=type_name,
            attribute=name,
            context={"value": repr(value)},
        )


def compute_attributes(
    type_name: str,
    attributes: Mapping[str, AttributeSpec],
    values: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """Fill defaults for ``type_name`` and validate the supplied values.

    Values for undeclared attributes are dropped.

    Raises:
        RequiredAttributeError: a required attribute without default got no value.
        AttributeValidationError: a validator rejected a supplied value.
    """
    values = values or {}
    result: Dict[str, Any] = {}

    for name, spec in attributes.items():
        if name in values:
            value = values[name]
            _check_value(type_name, name, spec, value)
            result[name] = value
        elif spec.has_default:
            result[name] = spec.default
        else:
            raise RequiredAttributeError(
                f"No value supplied for attribute '{name}' on '{type_name}'",
                type_name=type_name,
                attribute=name,
            )

    return result


def get_rendered_attributes(
    attrs: Mapping[str, Any],
    attributes: Mapping[str, AttributeSpec],
) -> Dict[str, Any]:
    """Merge the external representation of every rendered attribute."""
    result: Dict[str, Any] = {}
    for name, spec in attributes.items():
        if not spec.rendered:
            continue
        if spec.render_html is None:
            rendered: Optional[Mapping[str, Any]] = {name: attrs.get(name)}
        else:
            rendered = spec.render_html(attrs) or {}
        result = merge_attributes(result, rendered)
    return result


__all__ = [
    "DocumentMark",
    "DocumentNode",
    "compute_attributes",
    "get_rendered_attributes",
]
