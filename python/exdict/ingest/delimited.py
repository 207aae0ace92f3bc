"""Delimited table ingestor (CSV / TSV).

Format:
    id,content,description     # Optional header row
    ORD001,"SELECT *
    FROM orders",Daily orders  # Quoted fields may span lines

The delimiter follows the file extension: .tsv is tab separated,
everything else is comma separated.
"""

import csv
import io
import logging
from pathlib import Path
from typing import Iterator, Optional

from ..schema import Dictionary, SourceDescriptor, description_columns_from
from .base import Ingestor, IngestResult

QUOTE = '"'


class DelimitedIngestor(Ingestor):
    """Ingestor for CSV and TSV tables."""

    def delimiter_for(self, path: Path) -> str:
        """Tab for .tsv files, comma for anything else."""
        return "\t" if path.suffix.lower() == ".tsv" else ","

    def parse(
        self, descriptor: SourceDescriptor, text: str, errors: list[str]
    ) -> Iterator[tuple[int, list[str]]]:
        """Parse delimited text.

        A record starts on one line and takes following lines only while
        a quoted field is still open. If the quote never closes, the
        starting line is reported and parsing resumes on the next line.

        Args:
            descriptor: Source being parsed.
            text: Decoded file contents.
            errors: List to append parse problems to.

        Yields:
            Tuples of (line_number, trimmed_fields). Blank lines are skipped.
        """
        # Values are opaque blobs; a field may be as large as the file
        if len(text) > csv.field_size_limit():
            csv.field_size_limit(len(text))

        delimiter = self.delimiter_for(descriptor.path)
        lines = list(io.StringIO(text, newline=""))
        start = 0
        while start < len(lines):
            end = start
            quotes = lines[start].count(QUOTE)
            rows = None
            error = None
            while True:
                # An odd quote count means a quoted field is still open,
                # unless the quote is a literal inside an unquoted field
                if quotes % 2 == 0 or end == start:
                    try:
                        rows = list(
                            csv.reader(lines[start:end + 1], delimiter=delimiter, strict=True)
                        )
                        break
                    except csv.Error as e:
                        error = e
                if quotes % 2 == 0 or end + 1 == len(lines):
                    break
                end += 1
                quotes += lines[end].count(QUOTE)

            if rows is None:
                message = f"{descriptor.path.name} line {start + 1}: {error}"
                self.log.warning("Malformed row skipped: %s", message)
                errors.append(message)
                start += 1
                continue

            for row in rows:
                fields = [cell.strip() for cell in row]
                if any(fields):
                    yield start + 1, fields
            start = end + 1


def ingest(
    filepath: Path | str,
    id_column: int = 0,
    value_column: int = 1,
    description_columns: Optional[int | list[int]] = None,
    encoding: str = "utf-8",
    has_header: bool = True,
) -> IngestResult:
    """Convenience function to ingest one CSV/TSV file.

    Args:
        filepath: Path to the table.
        id_column: Column holding the key.
        value_column: Column holding the content.
        description_columns: One column index, a list of them, or None.
        encoding: Encoding name, aliases accepted.
        has_header: Skip the first row.

    Returns:
        IngestResult with entries.
    """
    descriptor = SourceDescriptor(
        path=Path(filepath),
        id_column=id_column,
        value_column=value_column,
        description_columns=description_columns_from(description_columns),
        encoding=encoding,
        has_header=has_header,
    )
    return DelimitedIngestor().ingest(descriptor)


def load_source(
    descriptor: SourceDescriptor,
    dictionary: Dictionary,
    log: Optional[logging.Logger] = None,
) -> IngestResult:
    """Load one source into dictionary, overwriting existing keys.

    Args:
        descriptor: Source to load.
        dictionary: Dictionary being built.
        log: Optional logger used as the diagnostic sink.

    Returns:
        IngestResult for the source.
    """
    return DelimitedIngestor(log=log).load(descriptor, dictionary)
