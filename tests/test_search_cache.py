"""
Tests for the search result cache
"""

import pytest

from backend_api.services.search_cache import SearchCache
from tests.conftest import FakeClock


class TestSearchCache:
    """Tests for TTL behaviour"""

    def setup_method(self):
        """Setup test fixtures"""
        self.clock = FakeClock()
        self.cache = SearchCache(ttl=120, clock=self.clock)

    def test_lookup_missing_key(self):
        assert self.cache.lookup("cse:nothing") is None

    def test_lookup_within_ttl(self):
        """Test stored payload is returned before the TTL elapses"""
        payload = {"results": [{"title": "a"}]}
        self.cache.store("cse:india", payload)
        self.clock.advance(119.9)

        entry = self.cache.lookup("cse:india")

        assert entry is not None
        assert entry.payload == payload
        assert entry.key == "cse:india"

    def test_lookup_at_ttl_is_absent(self):
        """Test an entry exactly TTL old is treated as absent"""
        self.cache.store("cse:india", {"results": []})
        self.clock.advance(120)

        assert self.cache.lookup("cse:india") is None

    def test_stale_entry_is_overwritten(self):
        """Test storing after expiry refreshes the timestamp"""
        self.cache.store("cse:india", {"results": ["old"]})
        self.clock.advance(200)
        self.cache.store("cse:india", {"results": ["new"]})
        self.clock.advance(60)

        entry = self.cache.lookup("cse:india")

        assert entry.payload == {"results": ["new"]}
        assert len(self.cache) == 1

    def test_last_write_wins(self):
        """Test two stores for a cold key keep the second payload"""
        self.cache.store("cse:q", {"n": 1})
        self.cache.store("cse:q", {"n": 2})

        assert self.cache.lookup("cse:q").payload == {"n": 2}

    def test_keys_are_independent(self):
        self.cache.store("cse:a", 1)
        self.clock.advance(100)
        self.cache.store("cse:b", 2)
        self.clock.advance(30)

        assert self.cache.lookup("cse:a") is None
        assert self.cache.lookup("cse:b").payload == 2

    def test_make_key(self):
        assert SearchCache.make_key("India emissions") == "cse:India emissions"

    def test_clear(self):
        self.cache.store("cse:a", 1)
        self.cache.clear()

        assert len(self.cache) == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
