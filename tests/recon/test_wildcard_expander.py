"""
Unit tests for wildcard expansion.
"""

import pytest

from domain_recon.recon.wildcard_expander import expand, load_words


class TestExpand:
    """Test suite for expand()."""

    def test_expansion_example(self):
        wildcards = {"*.example.com", "*.here.com"}
        fqdns = {"example.com", "there.com"}
        words = {"a", "b", "c"}

        result = expand(wildcards, fqdns, words)

        assert result == {
            "a.example.com", "b.example.com", "c.example.com",
            "a.here.com", "b.here.com", "c.here.com",
        }
        assert "example.com" not in result
        assert "there.com" not in result

    def test_known_fqdns_excluded(self):
        wildcards = {"*.example.com"}
        fqdns = {"www.example.com", "mail.example.com"}
        words = ["www", "mail", "api"]

        result = expand(wildcards, fqdns, words)

        assert result == {"api.example.com"}
        assert result.isdisjoint(fqdns)

    def test_only_first_star_replaced(self):
        result = expand({"*.*.example.com"}, set(), ["a"])
        assert result == {"a.*.example.com"}

    def test_deterministic(self, sample_wildcards, sample_fqdns):
        words = ["www", "api", "dev", "www"]
        first = expand(sample_wildcards, sample_fqdns, words)
        second = expand(set(sample_wildcards), set(sample_fqdns), list(reversed(words)))
        assert first == second

    def test_duplicate_words_harmless(self):
        result = expand({"*.example.com"}, set(), ["a", "a", "a"])
        assert result == {"a.example.com"}

    def test_empty_inputs(self, sample_fqdns):
        assert expand(set(), sample_fqdns, ["a", "b"]) == set()
        assert expand({"*.example.com"}, sample_fqdns, []) == set()


class TestLoadWords:
    """Test suite for load_words()."""

    def test_trims_and_skips_blank_lines(self, tmp_path):
        path = tmp_path / "words.txt"
        path.write_text("www\n  api  \n\nmail\r\nwww\n")

        assert load_words(str(path)) == {"www", "api", "mail"}

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            load_words(str(tmp_path / "missing.txt"))

    def test_directory_raises(self, tmp_path):
        with pytest.raises(OSError):
            load_words(str(tmp_path))

    def test_invalid_utf8_raises_oserror(self, tmp_path):
        path = tmp_path / "words.txt"
        path.write_bytes(b"www\n\xff\xfeapi\n")

        with pytest.raises(OSError) as exc_info:
            load_words(str(path))
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)
