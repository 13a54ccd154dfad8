"""
Coupon Code Generator

Produces random human-readable codes. Codes are not unique by construction;
callers check collisions against their store (see generate_unique).
"""

import logging
import secrets
from typing import Callable, Optional

from ..errors import CouponCodeExhausted

logger = logging.getLogger(__name__)


class CouponCodeGenerator:
    """Generates codes from [A-Z0-9], optionally as PREFIX-XXXX."""

    ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
    DEFAULT_LENGTH = 8
    MIN_SUFFIX_LENGTH = 4

    def __init__(self, randbelow: Callable[[int], int] = secrets.randbelow):
        # randbelow(n) must return an int in [0, n)
        self._randbelow = randbelow

    def generate(self, prefix: Optional[str] = None, length: int = DEFAULT_LENGTH) -> str:
        """
        Generate a code.

        With a prefix the result is PREFIX- followed by
        max(4, length - len(prefix) - 1) random characters.
        """
        head = ""
        if prefix:
            head = prefix.upper() + "-"
            length = max(self.MIN_SUFFIX_LENGTH, length - len(prefix) - 1)

        return head + "".join(self._random_char() for _ in range(length))

    def generate_unique(
        self,
        is_taken: Callable[[str], bool],
        prefix: Optional[str] = None,
        length: int = DEFAULT_LENGTH,
        max_attempts: int = 10,
    ) -> str:
        """Retry generation until is_taken(code) is False."""
        for attempt in range(1, max_attempts + 1):
            code = self.generate(prefix, length)
            if not is_taken(code):
                return code
            logger.debug(f"Coupon code collision on attempt {attempt}: {code}")

        raise CouponCodeExhausted(f"Could not generate a unique coupon code after {max_attempts} attempts")

    def _random_char(self) -> str:
        return self.ALPHABET[self._randbelow(len(self.ALPHABET))]
