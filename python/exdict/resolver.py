"""Dictionary lookups.

Resolution order for a raw token:
    1. Strip quote characters and surrounding whitespace
    2. Exact key match
    3. Key with the last character dropped (once, never repeated)

Example:
    dictionary has "ORD001"
    resolve("'ORD001'")  → ORD001, exact
    resolve("ORD0012")   → ORD001, fallback
    resolve("ORD00123")  → None
"""

import logging
from typing import Optional

from .normalizer import normalize_token
from .schema import DESCRIPTION_SEPARATOR, Dictionary, LookupResult

logger = logging.getLogger(__name__)


class Resolver:
    """Resolves tokens against a frozen Dictionary."""

    def __init__(self, dictionary: Dictionary, log: Optional[logging.Logger] = None):
        """Initialize resolver.

        Args:
            dictionary: Dictionary to read from.
            log: Diagnostic sink. Defaults to this module's logger.
        """
        self.dictionary = dictionary
        self.log = log or logger

    def reload(self, dictionary: Dictionary) -> None:
        """Swap in a rebuilt dictionary.

        A single attribute assignment, so concurrent readers see either
        the old or the new dictionary, never a partial one.
        """
        if not dictionary.frozen:
            raise ValueError("Only a frozen Dictionary can be swapped in")
        self.dictionary = dictionary

    def resolve(self, raw_token: str) -> Optional[LookupResult]:
        """Find the entry for a raw token.

        Args:
            raw_token: Token as taken from the caller, quotes allowed.

        Returns:
            LookupResult, or None if no candidate key exists.
        """
        dictionary = self.dictionary
        token = normalize_token(raw_token)
        if token is None:
            self.log.debug("No candidate: empty token %r", raw_token)
            return None

        value = dictionary.get(token)
        if value is not None:
            return LookupResult(token, value, matched_exactly=True, requested_key=token)

        if len(token) > 1:
            truncated = token[:-1]
            value = dictionary.get(truncated)
            if value is not None:
                self.log.info("Fallback match: '%s' used for '%s'", truncated, token)
                return LookupResult(
                    truncated, value, matched_exactly=False, requested_key=token
                )

        self.log.debug("No candidate for '%s'", token)
        return None


def render(result: LookupResult) -> str:
    """Text to show for a lookup result.

    A fallback match is prefixed with a notice naming both the key that
    was used and the token that was asked for.
    """
    if result.matched_exactly:
        return result.value
    notice = (
        f"No entry for `{result.requested_key}`; "
        f"showing closest key `{result.used_key}`"
    )
    return f"{notice}{DESCRIPTION_SEPARATOR}{result.value}"
