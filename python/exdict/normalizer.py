"""Text normalization for exdict.

Handles two kinds of normalization:
    - Encoding names from config to a canonical Python codec name
    - Raw hover tokens to dictionary keys (quote stripping, trimming)
"""

import codecs
import re
from typing import Optional

# Common spellings -> canonical codec name
ENCODING_ALIASES: dict[str, str] = {
    # Shift-JIS family
    "sjis": "shift_jis",
    "shiftjis": "shift_jis",
    "shift-jis": "shift_jis",
    "shift_jis": "shift_jis",
    "x-sjis": "shift_jis",
    "ms_kanji": "shift_jis",
    "cp932": "cp932",
    "ms932": "cp932",
    "windows-31j": "cp932",
    # EUC-JP family
    "eucjp": "euc_jp",
    "euc-jp": "euc_jp",
    "euc_jp": "euc_jp",
    "ujis": "euc_jp",
    "x-euc-jp": "euc_jp",
    # UTF-8 family
    "utf8": "utf-8",
    "utf-8": "utf-8",
    "utf_8": "utf-8",
    "utf-8-sig": "utf-8",
    "utf8bom": "utf-8",
}

# ASCII, typographic, full-width and Japanese bracket quotes
QUOTE_CHARS = "'\"`‘’‚‛“”„‟＇＂｀「」『』〝〞〟"

_QUOTE_TABLE = str.maketrans("", "", QUOTE_CHARS)

TOKEN_PATTERN = re.compile(r"[A-Za-z0-9_]+")


def canonical_encoding(name: Optional[str]) -> Optional[str]:
    """Map an encoding name to a supported codec name.

    Args:
        name: Encoding name as written in config (any case).

    Returns:
        Canonical codec name, or None if Python has no such text encoding.
    """
    if not name:
        return "utf-8"
    key = name.strip().lower()
    canonical = ENCODING_ALIASES.get(key, key)
    try:
        info = codecs.lookup(canonical)
    except LookupError:
        return None
    # base64, hex, rot13 and friends are codecs but not text encodings
    if not getattr(info, "_is_text_encoding", True):
        return None
    return canonical


def strip_quotes(token: str) -> str:
    """Remove quote characters anywhere in the token, then trim."""
    return token.translate(_QUOTE_TABLE).strip()


def normalize_token(raw_token: str) -> Optional[str]:
    """Normalize a raw token, returning None if nothing is left."""
    normalized = strip_quotes(raw_token)
    return normalized or None


def token_at(line: str, column: int) -> Optional[str]:
    """Find the word touching a column.

    A word is a run of [A-Za-z0-9_]. The column may sit anywhere inside
    the word or directly after its last character.

    Args:
        line: Line of text.
        column: Zero-based character offset.

    Returns:
        The word, or None if the column is not on one.
    """
    for match in TOKEN_PATTERN.finditer(line):
        if match.start() <= column <= match.end():
            return match.group()
        if match.start() > column:
            break
    return None
