from __future__ import annotations

from typing import Any, Dict, Mapping, Sequence


class FolioError(Exception):
    """Base exception for folio."""

    context: Dict[str, Any]

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(message)
        if context is not None:
            # Store a shallow copy to avoid accidental mutation.
            self.context = dict(context)
        else:
            self.context = {}

    def to_json_error(self) -> Dict[str, Any]:
        """Return a JSON-serializable error payload."""
        return {
            "message": str(self),
            "code": self.__class__.__name__,
            "context": self.context,
        }


class ExtensionConfigError(FolioError, ValueError):
    """Raised when an extension is declared with an invalid configuration."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        FolioError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class ExtensionResolutionError(FolioError, RuntimeError):
    """Raised when a resolution pass cannot complete (e.g. runaway nesting)."""

    def __init__(
        self,
        message: str,
        *,
        chain: Sequence[str] = (),
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        self.chain = tuple(chain)
        if self.chain:
            ctx["chain"] = list(self.chain)
        FolioError.__init__(self, message, context=ctx)
        RuntimeError.__init__(self, message)


class AttributeInstanceError(FolioError):
    """Base class for attribute instance-construction failures."""

    def __init__(
        self,
        message: str,
        *,
        type_name: str,
        attribute: str,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        ctx = dict(context or {})
        ctx["type"] = type_name
        ctx["attribute"] = attribute
        self.type_name = type_name
        self.attribute = attribute
        super().__init__(message, context=ctx)


class RequiredAttributeError(AttributeInstanceError, ValueError):
    """Raised when a required attribute has neither a default nor a value."""


class AttributeValidationError(AttributeInstanceError, ValueError):
    """Raised when an attribute validator rejects a value."""


class ConfigValidationError(FolioError, ValueError):
    """Raised when merged configuration fails schema validation."""

    def __init__(self, message: str = "", *, context: Mapping[str, Any] | None = None) -> None:
        FolioError.__init__(self, message, context=context)
        ValueError.__init__(self, message)


class CommandNotFoundError(FolioError, AttributeError):
    """Raised by attribute-style command access for unknown command names."""

    def __init__(self, name: str) -> None:
        FolioError.__init__(self, f"Unknown command '{name}'", context={"command": name})
        self.name = name


__all__ = [
    "FolioError",
    "ExtensionConfigError",
    "ExtensionResolutionError",
    "AttributeInstanceError",
    "RequiredAttributeError",
    "AttributeValidationError",
    "ConfigValidationError",
    "CommandNotFoundError",
]
