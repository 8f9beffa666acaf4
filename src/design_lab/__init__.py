"""Design Lab - a design token engine with theme, palette and typography resolution."""

__version__ = "0.1.0"
__author__ = "Design Lab Team"

from .session import DesignSession
from .token_engine import (
    Selection,
    ResolvedTokenSet,
    TokenResolver,
    resolve,
)

__all__ = ["DesignSession", "Selection", "ResolvedTokenSet", "TokenResolver", "resolve", "__version__"]
