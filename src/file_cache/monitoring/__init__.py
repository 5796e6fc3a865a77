from .metrics import Counter, file_cache_lookups_total, file_cache_writes_total

__all__ = ["Counter", "file_cache_lookups_total", "file_cache_writes_total"]
