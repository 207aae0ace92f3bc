"""Dictionary builder for the lookup table.

Loads every configured source in order into one Dictionary:

    sources = [orders.csv, overrides.tsv]
    → orders.csv rows inserted first
    → overrides.tsv rows replace any keys they share
    → Dictionary frozen, ready for the resolver
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, Optional

from ..ingest import get_ingestor
from ..ingest.base import Ingestor, IngestResult
from ..schema import Dictionary, SourceDescriptor

logger = logging.getLogger(__name__)


@dataclass
class BuildStats:
    """Statistics from a build operation."""

    total_keys: int = 0
    total_registered: int = 0
    overwritten: int = 0
    by_source: dict[str, int] = field(default_factory=dict)
    unavailable: list[str] = field(default_factory=list)
    results: list[IngestResult] = field(default_factory=list)


class DictionaryBuilder:
    """Builds a frozen Dictionary from source descriptors."""

    def __init__(
        self,
        ingestor: Optional[Ingestor] = None,
        log: Optional[logging.Logger] = None,
    ):
        """Initialize builder.

        Args:
            ingestor: Ingestor used for every source. Defaults to the
                delimited (CSV/TSV) ingestor.
            log: Diagnostic sink shared with the ingestor.
        """
        self.log = log or logger
        self.ingestor = ingestor or get_ingestor("delimited")(log=self.log)
        self.stats = BuildStats()

    def add_source(self, dictionary: Dictionary, descriptor: SourceDescriptor) -> IngestResult:
        """Load one source into dictionary and record its stats."""
        result = self.ingestor.load(descriptor, dictionary)

        self.stats.results.append(result)
        self.stats.total_registered += result.total_registered
        self.stats.by_source[result.source_path] = result.total_registered
        if not result.available:
            self.stats.unavailable.append(result.source_path)
        return result

    def build(self, descriptors: Iterable[SourceDescriptor]) -> Dictionary:
        """Build a new Dictionary from all sources.

        Sources are processed strictly in the order given. A key set
        by a later source replaces the value set by an earlier one.

        Args:
            descriptors: Sources to load.

        Returns:
            Frozen Dictionary.
        """
        self.stats = BuildStats()
        dictionary = Dictionary()

        for descriptor in descriptors:
            self.add_source(dictionary, descriptor)

        self.stats.total_keys = len(dictionary)
        self.stats.overwritten = dictionary.overwrites
        self.log.info(
            "Dictionary built: %d keys from %d sources (%d overwritten)",
            self.stats.total_keys,
            len(self.stats.results),
            self.stats.overwritten,
        )
        return dictionary.freeze()


def build_dictionary(
    descriptors: Iterable[SourceDescriptor],
    log: Optional[logging.Logger] = None,
) -> Dictionary:
    """Convenience function to build a Dictionary from descriptors."""
    return DictionaryBuilder(log=log).build(descriptors)
