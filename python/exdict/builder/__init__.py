"""Dictionary builder module.

Builds the in-memory lookup table:
- Sources loaded in configured order
- Later sources overwrite earlier keys
- Result frozen before it is handed to the resolver
"""

from .dictionary import BuildStats, DictionaryBuilder, build_dictionary

__all__ = [
    "BuildStats",
    "DictionaryBuilder",
    "build_dictionary",
]
