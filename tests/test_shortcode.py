"""Tests for short code generation."""

import random

from lib.shortcode import ShortCodeGenerator


class TestShortCodeGenerator:
    """Test short code generation."""

    def test_alphabet(self):
        """Alphabet is exactly a-zA-Z0-9."""
        assert len(ShortCodeGenerator.BASE62_CHARS) == 62
        assert len(set(ShortCodeGenerator.BASE62_CHARS)) == 62

    def test_generate_random(self):
        """Test random code generation."""
        generator = ShortCodeGenerator(default_length=6)

        for _ in range(200):
            code = generator.generate_random()
            assert len(code) == 6
            assert generator.is_valid_format(code)

    def test_generate_random_custom_length(self):
        """Test random code with custom length."""
        generator = ShortCodeGenerator(default_length=6)

        code = generator.generate_random(length=10)
        assert len(code) == 10
        assert generator.is_valid_format(code)

    def test_generate_random_uses_module_random(self):
        """Seeding the pseudo-random source makes codes reproducible."""
        generator = ShortCodeGenerator()

        random.seed(1234)
        first = generator.generate_random()
        random.seed(1234)
        second = generator.generate_random()

        assert first == second

    def test_generate_from_uuid(self):
        """Test UUID-based generation."""
        generator = ShortCodeGenerator(default_length=6)

        code = generator.generate_from_uuid(length=8)
        assert len(code) == 8
        assert generator.is_valid_format(code)

    def test_int_to_base62(self):
        generator = ShortCodeGenerator()

        assert generator._int_to_base62(0) == "a"
        assert generator._int_to_base62(61) == "9"
        assert generator._int_to_base62(62) == "ba"

    def test_is_valid_format(self):
        """Test format validation."""
        assert ShortCodeGenerator.is_valid_format("abc123")
        assert ShortCodeGenerator.is_valid_format("ABCxyz")

        assert not ShortCodeGenerator.is_valid_format("")
        assert not ShortCodeGenerator.is_valid_format("abc 123")
        assert not ShortCodeGenerator.is_valid_format("test-code")
        assert not ShortCodeGenerator.is_valid_format("abc_123")
