"""Tests for the content-addressed parse cache."""

import pytest

from stepmark import Markdown, parse
from stepmark.cache import DictParseCache, hash_config, hash_content
from stepmark.config import ParseConfig, parse_config_context
from stepmark.utils.hashing import hash_str


class TestHashing:
    def test_hash_content_is_sha256(self) -> None:
        assert hash_content("# A") == hash_str("# A")
        assert len(hash_content("# A")) == 64

    def test_hash_str_truncate(self) -> None:
        assert hash_str("hello", truncate=16) == "2cf24dba5fb0a30e"

    def test_config_hash_depends_on_em_dash(self) -> None:
        assert hash_config(ParseConfig()) != hash_config(ParseConfig(em_dash=False))

    def test_transformer_disables_caching(self) -> None:
        assert hash_config(ParseConfig(text_transformer=str.upper)) == ""


class TestDictParseCache:
    def test_get_missing(self) -> None:
        assert DictParseCache().get("a", "b") is None

    def test_put_get(self) -> None:
        cache = DictParseCache()
        doc = parse("# A")
        cache.put("a", "b", doc)
        assert cache.get("a", "b") is doc
        assert len(cache) == 1

    def test_bounded_cache_evicts_oldest(self) -> None:
        cache = DictParseCache(max_entries=2)
        doc = parse("# A")
        cache.put("a", "c", doc)
        cache.put("b", "c", doc)
        cache.put("a", "c", doc)
        cache.put("d", "c", doc)
        assert len(cache) == 2
        assert cache.get("a", "c") is None
        assert cache.get("b", "c") is doc
        assert cache.get("d", "c") is doc

    def test_invalid_bound(self) -> None:
        with pytest.raises(ValueError, match="max_entries"):
            DictParseCache(max_entries=0)

    def test_clear(self) -> None:
        cache = DictParseCache()
        cache.put("a", "b", parse("x"))
        cache.clear()
        assert len(cache) == 0


class TestParseWithCache:
    """parse() consults the cache."""

    def test_hit_returns_same_document(self) -> None:
        cache = DictParseCache()
        first = parse("# Hello", cache=cache)
        second = parse("# Hello", cache=cache)
        assert second is first
        assert len(cache) == 1

    def test_different_content_misses(self) -> None:
        cache = DictParseCache()
        parse("# A", cache=cache)
        parse("# B", cache=cache)
        assert len(cache) == 2

    def test_config_is_part_of_key(self) -> None:
        cache = DictParseCache()
        with_dash = parse("a -- b", cache=cache)
        with parse_config_context(ParseConfig(em_dash=False)):
            without_dash = parse("a -- b", cache=cache)
        assert with_dash != without_dash
        assert len(cache) == 2

    def test_transformer_bypasses_cache(self) -> None:
        cache = DictParseCache()
        md = Markdown(text_transformer=str.upper)
        md.parse("hello", cache=cache)
        assert len(cache) == 0

    def test_parse_many_shares_cache(self) -> None:
        cache = DictParseCache()
        docs = Markdown().parse_many(["# A", "# B", "# A"], cache=cache)
        assert len(docs) == 3
        assert docs[0] is docs[2]
        assert len(cache) == 2
