"""Style application sinks.

A StyleSink is the single host capability the engine needs to apply
tokens: an idempotent "set custom property" upsert into a global style
scope. Sinks never remove a property they are not given a new value for.
"""

import os
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union
import logging

from .errors import ApplyError
from .schema import ResolvedTokenSet

logger = logging.getLogger(__name__)

_PROPERTY_NAME = re.compile(r'^--[A-Za-z0-9_-]+$')
_FORBIDDEN_VALUE_CHARS = (';', '{', '}', '\n', '\r')
_DECLARATION = re.compile(r'^\s*(--[A-Za-z0-9_-]+)\s*:\s*(.*?)\s*;\s*$')


def validate_property(key: str, value: str) -> None:
    """Reject property names and values that cannot form a declaration.

    Raises:
        ApplyError: If the key or value is structurally invalid
    """
    if not isinstance(key, str) or not _PROPERTY_NAME.match(key):
        raise ApplyError(f"Invalid custom property name: {key!r}", key=key)
    if not isinstance(value, str):
        raise ApplyError(f"Value for {key} must be a string, got {type(value).__name__}", key=key)
    for char in _FORBIDDEN_VALUE_CHARS:
        if char in value:
            raise ApplyError(f"Value for {key} contains {char!r}", key=key)


class StyleSink(ABC):
    """Abstract global style scope"""

    @abstractmethod
    def set_property(self, key: str, value: str) -> None:
        """Upsert one custom property"""
        pass

    def flush(self) -> None:
        """Persist pending properties; called once per apply"""
        pass


class MemoryStyleSink(StyleSink):
    """In-process style scope that records every call."""

    def __init__(self):
        self.properties: Dict[str, str] = {}
        self.calls: List[tuple] = []

    def set_property(self, key: str, value: str) -> None:
        self.calls.append((key, value))
        self.properties[key] = value

    def get_property(self, key: str) -> Optional[str]:
        return self.properties.get(key)


class CSSFileStyleSink(StyleSink):
    """Keeps a ``:root { ... }`` block in a stylesheet file.

    Existing declarations in the file are loaded first so that applying
    a new token set only adds or replaces properties.
    """

    def __init__(self, path: Union[str, Path], selector: str = ':root'):
        self.path = Path(os.path.expanduser(str(path)))
        self.selector = selector
        self.properties: Dict[str, str] = self._read_existing()

    def _read_existing(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        properties = {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                for line in f:
                    match = _DECLARATION.match(line)
                    if match:
                        properties[match.group(1)] = match.group(2)
        except OSError as e:
            logger.warning(f"Could not read existing stylesheet {self.path}: {e}")
        return properties

    def set_property(self, key: str, value: str) -> None:
        self.properties[key] = value

    def render(self) -> str:
        lines = [f"{self.selector} {{"]
        lines.extend(f"  {key}: {value};" for key, value in self.properties.items())
        lines.append("}")
        return "\n".join(lines) + "\n"

    def flush(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                f.write(self.render())
        except OSError as e:
            raise ApplyError(f"Cannot write stylesheet {self.path}: {e}")


@dataclass
class ApplyResult:
    """Outcome of applying a token set"""
    applied: List[str] = field(default_factory=list)
    skipped: List[str] = field(default_factory=list)
    error: Optional[ApplyError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def apply_tokens(tokens: Union[ResolvedTokenSet, Mapping[str, Optional[str]]],
                 sink: StyleSink) -> ApplyResult:
    """Apply every non-empty token to the sink.

    Empty or missing values are skipped rather than cleared. Failures are
    returned in the result instead of raised so the caller can enter a
    degraded state and keep running.

    Args:
        tokens: Resolved token set or flat token mapping
        sink: Target style scope

    Returns:
        ApplyResult listing applied and skipped keys and any error
    """
    mapping = tokens.as_dict() if isinstance(tokens, ResolvedTokenSet) else dict(tokens)
    result = ApplyResult()

    try:
        pending = {}
        for key, value in mapping.items():
            if value is None or value == "":
                result.skipped.append(key)
                continue
            validate_property(key, value)
            pending[key] = value

        # Nothing reaches the sink unless the whole set is valid
        for key, value in pending.items():
            sink.set_property(key, value)
            result.applied.append(key)
        sink.flush()
    except ApplyError as e:
        logger.error(f"Error applying styles: {e}")
        result.error = e
    except Exception as e:
        logger.error(f"Error applying styles: {e}")
        result.error = ApplyError(f"Style sink failed: {e}")

    if result.ok:
        logger.debug(f"Applied {len(result.applied)} tokens ({len(result.skipped)} skipped)")
    return result
