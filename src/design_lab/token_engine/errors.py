"""Exceptions raised by the token engine.

Catalog and color errors are contract violations by the caller and are
meant to propagate. ApplyError and DecodeFailure describe host-boundary
and share-link problems that callers recover from locally.
"""

from typing import Any, Iterable, Optional


class TokenEngineError(Exception):
    """Base exception for token engine operations."""
    pass


class UnknownIdentifier(TokenEngineError):
    """A theme, palette, font or other catalog name is not registered."""

    def __init__(self, kind: str, name: Any, known: Optional[Iterable[str]] = None):
        self.kind = kind
        self.name = name
        self.known = sorted(known) if known else []
        message = f"Unknown {kind}: {name!r}"
        if self.known:
            message += f" (expected one of: {', '.join(self.known)})"
        super().__init__(message)


class InvalidColor(TokenEngineError):
    """A color string is not a six digit hex color."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"Invalid hex color: {value!r}")


class ApplyError(TokenEngineError):
    """Applying tokens to the global style scope failed."""

    def __init__(self, message: str, key: Optional[str] = None):
        self.key = key
        super().__init__(message)


class UnsupportedFormat(TokenEngineError):
    """An export target is unknown or reserved but not implemented."""

    def __init__(self, target: Any):
        self.target = target
        super().__init__(f"Export format not supported: {target!r}")


class DecodeFailure(TokenEngineError):
    """A shared configuration string could not be decoded.

    Never raised to callers of the share codec; it is logged and an
    empty result is returned instead.
    """
    pass
