"""End-to-end flow against the real clock and filesystem."""

import json
import time

from file_cache import FileCacheService


def test_store_get_expire_delete(tmp_path):
    service = FileCacheService(tmp_path / "root", "integration")

    service.store("users", "jerry", {"login": "Jerry"}, 1)
    service.store("users", "forever", {"login": "Gerry"}, 0)
    assert service.get("users", "jerry") == {"login": "Jerry"}

    time.sleep(1.1)

    assert service.get("users", "jerry") is None
    assert service.get("users", "forever") == {"login": "Gerry"}

    metadata = json.loads(
        (tmp_path / "root" / "integration" / "users" / "jerry-cache-metadata.json").read_text(encoding="utf-8")
    )
    assert set(metadata) == {"ttl_secs", "created_unixtime"}
    assert metadata["ttl_secs"] == 1

    service.delete("users", "jerry")
    assert not (tmp_path / "root" / "integration" / "users" / "jerry-cache.json").exists()
    assert service.get("users", "forever") == {"login": "Gerry"}
