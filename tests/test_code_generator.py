"""
Unit Tests for Coupon Code Generator

A deterministic randbelow is injected so exact codes can be asserted.
"""

import itertools
import re

import pytest

from pricing.calculators.codes import CouponCodeGenerator
from pricing.errors import CouponCodeExhausted


def sequence(*indexes):
    """randbelow stand-in that replays indexes forever."""
    values = itertools.cycle(indexes)
    return lambda n: next(values) % n


class TestGenerate:

    def test_default_length_is_8(self):
        code = CouponCodeGenerator().generate()
        assert len(code) == 8
        assert re.fullmatch(r"[A-Z0-9]{8}", code)

    def test_deterministic_source(self):
        generator = CouponCodeGenerator(randbelow=sequence(0, 1, 2, 25, 26, 35))
        assert generator.generate(length=6) == "ABCZ09"

    def test_custom_length(self):
        generator = CouponCodeGenerator(randbelow=sequence(0))
        assert generator.generate(length=12) == "A" * 12

    def test_prefix_is_uppercased(self):
        generator = CouponCodeGenerator(randbelow=sequence(1))
        assert generator.generate("promo", 12) == "PROMO-BBBBBB"

    def test_prefix_suffix_has_at_least_4_chars(self):
        """length 6 with a 5-char prefix: max(4, 6 - 5 - 1) = 4"""
        code = CouponCodeGenerator().generate("promo", 6)
        assert re.fullmatch(r"PROMO-[A-Z0-9]{4}", code)

    def test_prefix_with_default_length(self):
        """length 8 with a 3-char prefix: max(4, 8 - 3 - 1) = 4"""
        code = CouponCodeGenerator().generate("sun")
        assert re.fullmatch(r"SUN-[A-Z0-9]{4}", code)

    def test_empty_prefix_is_ignored(self):
        generator = CouponCodeGenerator(randbelow=sequence(2))
        assert generator.generate("", 5) == "CCCCC"

    def test_only_alphabet_characters(self):
        generator = CouponCodeGenerator()
        codes = [generator.generate(length=20) for _ in range(50)]
        assert all(set(code) <= set(CouponCodeGenerator.ALPHABET) for code in codes)


class TestGenerateUnique:

    def test_returns_first_free_code(self):
        generator = CouponCodeGenerator(randbelow=sequence(0))
        assert generator.generate_unique(lambda code: False) == "AAAAAAAA"

    def test_retries_on_collision(self):
        # First 8 draws build AAAAAAAA, next 8 build BBBBBBBB
        generator = CouponCodeGenerator(randbelow=sequence(*([0] * 8 + [1] * 8)))
        taken = {"AAAAAAAA"}

        assert generator.generate_unique(taken.__contains__) == "BBBBBBBB"

    def test_retry_with_prefix(self):
        generator = CouponCodeGenerator(randbelow=sequence(*([0] * 4 + [2] * 4)))
        taken = {"VIP-AAAA"}

        assert generator.generate_unique(taken.__contains__, prefix="vip") == "VIP-CCCC"

    def test_raises_after_max_attempts(self):
        generator = CouponCodeGenerator(randbelow=sequence(0))
        attempts = []

        def is_taken(code):
            attempts.append(code)
            return True

        with pytest.raises(CouponCodeExhausted, match="after 3 attempts"):
            generator.generate_unique(is_taken, max_attempts=3)

        assert len(attempts) == 3
