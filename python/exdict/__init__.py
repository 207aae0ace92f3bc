"""exdict - identifier dictionary lookups over CSV/TSV tables.

Builds an in-memory dictionary from one or more delimited files, keyed
by an identifier column, and resolves tokens against it.

Core concepts:
    - Each file is a source with its own column mapping and encoding
    - Sources merge in order, later sources win per key
    - Lookups try the exact key, then the key minus its last character

Example:
    orders.csv: ORD001,SELECT * FROM orders,Daily orders
    resolve("ORD001")  → exact match
    resolve("ORD0012") → fallback match on "ORD001"

Usage:
    from exdict import config
    from exdict.builder import DictionaryBuilder
    from exdict.resolver import Resolver, render

    descriptors = config.load_sources()
    dictionary = DictionaryBuilder().build(descriptors)

    resolver = Resolver(dictionary)
    result = resolver.resolve("'ORD0012'")
    if result is not None:
        print(render(result))
"""

__version__ = "0.1.0"
