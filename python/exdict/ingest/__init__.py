"""Source ingestion module.

Provides pluggable ingestors for tabular dictionary sources:
- CSV tables (comma separated)
- TSV tables (tab separated)

Usage:
    from exdict.ingest import delimited

    result = delimited.ingest("path/to/tables.csv", id_column=0, value_column=1)
    delimited.load_source(descriptor, dictionary)
"""

from .base import Ingestor, IngestResult, MalformedRow, SourceUnavailable
from . import delimited

# Ingestors by name
INGESTORS: dict[str, type[Ingestor]] = {
    "delimited": delimited.DelimitedIngestor,
}


def get_ingestor(name: str) -> type[Ingestor]:
    """Look up an ingestor class by its registered name."""
    if name not in INGESTORS:
        raise ValueError(f"Unknown ingestor: {name}. Available: {list(INGESTORS.keys())}")
    return INGESTORS[name]


__all__ = [
    "Ingestor",
    "IngestResult",
    "MalformedRow",
    "SourceUnavailable",
    "delimited",
    "get_ingestor",
    "INGESTORS",
]
