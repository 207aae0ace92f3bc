"""Hover glue between an editor-like host and the resolver."""

from typing import Optional

from .normalizer import token_at
from .resolver import Resolver, render


def hover_text(resolver: Resolver, line: str, column: int) -> Optional[str]:
    """Rendered entry for the word under column, or None to show nothing."""
    token = token_at(line, column)
    if token is None:
        return None
    result = resolver.resolve(token)
    if result is None:
        return None
    return render(result)
