"""Retry-history stores.

JsonHistoryStore keeps the whole history in one flat JSON object on disk
(``subtitlehistory.json`` under the cache path).  The file is small, is
read once per run and written at most once per run, so a single atomic
file replace is all the durability it needs.
"""

from src.providers.history.json_history_store import JsonHistoryStore

__all__ = ["JsonHistoryStore"]
