"""Data structures for exdict.

Core concept:
    - Each configured tabular file is a source (SourceDescriptor)
    - Rows become key -> composed value entries (DictionaryEntry)
    - All sources merge into one Dictionary, later sources win per key
    - The Dictionary is frozen after loading and only read afterwards

Example:
    orders.csv row  "ORD001,SELECT 1,daily orders"
    → key "ORD001", value "SELECT 1\\n\\n---\\n\\ndaily orders"
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterator, Optional, Union

# Placed between the content and its description text
DESCRIPTION_SEPARATOR = "\n\n---\n\n"

# Placed between multiple description columns
DESCRIPTION_JOINER = "\n\n"

DEFAULT_ENCODING = "utf-8"


def _cell(row: list[str], index: int) -> str:
    """Trimmed cell text, empty when the index is out of range."""
    if 0 <= index < len(row):
        return row[index].strip()
    return ""


@dataclass(frozen=True)
class SingleColumn:
    """Description taken from one column."""

    index: int

    def extract(self, row: list[str]) -> str:
        return _cell(row, self.index)


@dataclass(frozen=True)
class ColumnList:
    """Description joined from several columns, in the order given."""

    indices: tuple[int, ...]

    def extract(self, row: list[str]) -> str:
        parts = [_cell(row, i) for i in self.indices]
        return DESCRIPTION_JOINER.join(p for p in parts if p)


DescriptionColumns = Union[SingleColumn, ColumnList]


def description_columns_from(raw: Any) -> Optional[DescriptionColumns]:
    """Build the description variant from a config value.

    Args:
        raw: None, an int, or a list of ints.

    Returns:
        SingleColumn, ColumnList, or None.

    Raises:
        ValueError: If raw holds anything but non-negative integers.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise ValueError(f"Invalid description column: {raw!r}")
    if isinstance(raw, int):
        if raw < 0:
            raise ValueError(f"Negative description column: {raw}")
        return SingleColumn(raw)
    if isinstance(raw, (list, tuple)):
        for index in raw:
            if isinstance(index, bool) or not isinstance(index, int) or index < 0:
                raise ValueError(f"Invalid description column: {index!r}")
        return ColumnList(tuple(raw))
    raise ValueError(f"Invalid description columns: {raw!r}")


@dataclass(frozen=True)
class SourceDescriptor:
    """Configuration for one tabular file."""

    path: Path
    id_column: int
    value_column: int
    description_columns: Optional[DescriptionColumns] = None
    encoding: str = DEFAULT_ENCODING
    has_header: bool = True

    def __post_init__(self):
        """Validate column indices."""
        for name in ("id_column", "value_column"):
            index = getattr(self, name)
            if isinstance(index, bool) or not isinstance(index, int) or index < 0:
                raise ValueError(f"{name} must be a non-negative int, got {index!r}")
        object.__setattr__(self, "path", Path(self.path))

    @property
    def required_width(self) -> int:
        """Minimum field count a row needs to be eligible."""
        return max(self.id_column, self.value_column) + 1

    @classmethod
    def from_dict(
        cls,
        data: dict[str, Any],
        base_dir: Optional[Path] = None,
    ) -> "SourceDescriptor":
        """Create from a config record.

        Args:
            data: Record with path, id_column, value_column and optional
                description_columns, encoding, has_header.
            base_dir: Directory that relative paths resolve against.

        Raises:
            ValueError: If a required key is missing or invalid.
        """
        for key in ("path", "id_column", "value_column"):
            if key not in data:
                raise ValueError(f"Source record missing '{key}': {data!r}")

        path = Path(data["path"]).expanduser()
        if base_dir is not None and not path.is_absolute():
            path = Path(base_dir) / path

        return cls(
            path=path,
            id_column=data["id_column"],
            value_column=data["value_column"],
            description_columns=description_columns_from(
                data.get("description_columns")
            ),
            encoding=data.get("encoding") or DEFAULT_ENCODING,
            has_header=bool(data.get("has_header", True)),
        )


@dataclass(frozen=True)
class DictionaryEntry:
    """One key -> composed value mapping."""

    key: str
    value: str

    @classmethod
    def compose(cls, key: str, content: str, description: str = "") -> "DictionaryEntry":
        """Build an entry, appending the description when there is one."""
        key = key.strip()
        content = content.strip()
        description = description.strip()
        if description:
            return cls(key, f"{content}{DESCRIPTION_SEPARATOR}{description}")
        return cls(key, content)


class Dictionary:
    """Key -> composed value mapping shared by the loader and the resolver.

    Written only while loading. Once frozen, inserts raise and the
    object is safe to share between readers.
    """

    def __init__(self):
        self._entries: dict[str, str] = {}
        self._frozen = False
        self.overwrites = 0

    def insert(self, entry: DictionaryEntry) -> None:
        """Insert or replace the value for entry.key."""
        if self._frozen:
            raise RuntimeError("Dictionary is frozen; rebuild it to reload")
        if entry.key in self._entries:
            self.overwrites += 1
        self._entries[entry.key] = entry.value

    def freeze(self) -> "Dictionary":
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, key: str) -> Optional[str]:
        return self._entries.get(key)

    def keys(self) -> list[str]:
        return list(self._entries)

    def items(self) -> Iterator[tuple[str, str]]:
        return iter(self._entries.items())

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        state = "frozen" if self._frozen else "loading"
        return f"Dictionary({len(self._entries)} entries, {state})"


@dataclass(frozen=True)
class LookupResult:
    """Outcome of a successful resolution."""

    used_key: str
    value: str
    matched_exactly: bool
    requested_key: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "used_key": self.used_key,
            "value": self.value,
            "matched_exactly": self.matched_exactly,
            "requested_key": self.requested_key,
        }
