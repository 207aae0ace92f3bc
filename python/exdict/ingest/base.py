"""Base ingestor interface for dictionary sources.

All ingestors inherit from Ingestor and implement parse().
This provides a consistent API for turning any source format into
DictionaryEntry objects, and for merging them into a Dictionary.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional

from ..normalizer import canonical_encoding
from ..schema import DEFAULT_ENCODING, Dictionary, DictionaryEntry, SourceDescriptor

logger = logging.getLogger(__name__)


class SourceUnavailable(Exception):
    """Source file is missing or unreadable."""


class MalformedRow(ValueError):
    """Row lacks the columns a source needs."""


@dataclass
class IngestResult:
    """Result of ingesting one source."""

    entries: list[DictionaryEntry]
    source_path: str
    encoding_used: str = DEFAULT_ENCODING
    delimiter: str = ","
    total_rows: int = 0         # Data rows seen (header excluded)
    total_registered: int = 0   # Rows that produced an entry
    total_skipped: int = 0      # Rows dropped as malformed or empty
    available: bool = True      # False when the file could not be read
    errors: list[str] = field(default_factory=list)

    def __repr__(self) -> str:
        return (
            f"IngestResult({Path(self.source_path).name}: "
            f"{self.total_registered}/{self.total_rows} registered, "
            f"{self.total_skipped} skipped)"
        )


class Ingestor(ABC):
    """Base class for source ingestors.

    Subclasses must implement:
        - parse(descriptor, text, errors) -> Iterator of (row_number, fields) tuples

    ingest() handles reading, decoding, row extraction and error capture.
    """

    def __init__(self, log: Optional[logging.Logger] = None):
        """Initialize ingestor.

        Args:
            log: Diagnostic sink. Defaults to this module's logger.
        """
        self.log = log or logger

    @abstractmethod
    def parse(
        self, descriptor: SourceDescriptor, text: str, errors: list[str]
    ) -> Iterator[tuple[int, list[str]]]:
        """Parse decoded text into rows.

        Args:
            descriptor: Source being parsed.
            text: Decoded file contents.
            errors: List to append row-level parse problems to.

        Yields:
            Tuples of (row_number, trimmed_fields), header included.
        """
        pass

    def delimiter_for(self, path: Path) -> str:
        return ","

    def read_bytes(self, path: Path) -> bytes:
        """Read raw bytes, raising SourceUnavailable on any OS error."""
        try:
            return path.read_bytes()
        except OSError as e:
            raise SourceUnavailable(f"{path}: {e.strerror or e}") from e

    def decode(self, data: bytes, encoding: str, errors: list[str]) -> tuple[str, str]:
        """Decode bytes, falling back to UTF-8 for unknown encodings.

        Returns:
            Tuple of (text, encoding actually used).
        """
        canonical = canonical_encoding(encoding)
        if canonical is None:
            message = f"Unsupported encoding '{encoding}', decoding as {DEFAULT_ENCODING}"
            self.log.warning(message)
            errors.append(message)
            canonical = DEFAULT_ENCODING

        # utf-8-sig drops a leading byte order mark
        codec = "utf-8-sig" if canonical == DEFAULT_ENCODING else canonical
        try:
            return data.decode(codec, errors="replace"), canonical
        except LookupError as e:
            message = f"Cannot decode with '{encoding}' ({e}), decoding as {DEFAULT_ENCODING}"
            self.log.warning(message)
            errors.append(message)
            return data.decode("utf-8-sig", errors="replace"), DEFAULT_ENCODING

    def extract(self, descriptor: SourceDescriptor, row: list[str]) -> Optional[DictionaryEntry]:
        """Build an entry from one row.

        Returns:
            The entry, or None when the id or value cell is empty.

        Raises:
            MalformedRow: If the row is too short for the id/value columns.
        """
        if len(row) < descriptor.required_width:
            raise MalformedRow(
                f"expected at least {descriptor.required_width} fields, got {len(row)}"
            )

        key = row[descriptor.id_column].strip()
        content = row[descriptor.value_column].strip()
        if not key or not content:
            return None

        description = ""
        if descriptor.description_columns is not None:
            description = descriptor.description_columns.extract(row)

        return DictionaryEntry.compose(key, content, description)

    def ingest(self, descriptor: SourceDescriptor) -> IngestResult:
        """Ingest one source into a list of entries.

        Never raises for data problems: a missing file, an unknown
        encoding or a bad row is logged and recorded in result.errors.

        Args:
            descriptor: Source to load.

        Returns:
            IngestResult with entries and statistics.
        """
        path = descriptor.path
        result = IngestResult(
            entries=[],
            source_path=str(path),
            delimiter=self.delimiter_for(path),
        )

        self.log.info("Loading %s", path)
        try:
            data = self.read_bytes(path)
        except SourceUnavailable as e:
            self.log.error("Source unavailable: %s", e)
            result.errors.append(str(e))
            result.available = False
            return result

        text, result.encoding_used = self.decode(data, descriptor.encoding, result.errors)

        skip_header = descriptor.has_header
        for row_num, row in self.parse(descriptor, text, result.errors):
            if skip_header:
                skip_header = False
                continue

            result.total_rows += 1
            try:
                entry = self.extract(descriptor, row)
            except Exception as e:
                message = f"{path.name} row {row_num}: {e}"
                self.log.warning("Malformed row skipped: %s", message)
                result.errors.append(message)
                result.total_skipped += 1
                continue

            if entry is None:
                self.log.debug("%s row %d: no id/value, skipped", path.name, row_num)
                result.total_skipped += 1
                continue

            self.log.debug("%s row %d: registered %s", path.name, row_num, entry.key)
            result.entries.append(entry)
            result.total_registered += 1

        self.log.info(
            "Loaded %s: %d entries (%d skipped, %s)",
            path.name,
            result.total_registered,
            result.total_skipped,
            result.encoding_used,
        )
        return result

    def load(self, descriptor: SourceDescriptor, dictionary: Dictionary) -> IngestResult:
        """Ingest a source and insert its entries into dictionary, in row order."""
        result = self.ingest(descriptor)
        for entry in result.entries:
            dictionary.insert(entry)
        return result
