"""Public interface definitions for all collaborators of the subtitle sweep.

Everything the scheduler does not own (the catalog, the subtitle sites,
metadata re-scans, option storage, history persistence) is reached only
through the abstract base classes in this package.  Concrete adapters are
injected at construction time, so tests can swap in fakes and a host
application can plug in its own library and provider integrations.

CONCRETE PROVIDER MAP:
    Interface                  →  Concrete implementations
    ─────────────────────────────────────────────────────────────────────
    ICatalogProvider           →  supplied by the host media server
    ISubtitleProvider          →  supplied by the host (one per site)
    ISubtitleDownloader        →  SubtitleDownloader (src/services/)
    IMetadataRefresher         →  supplied by the host media server
    IOptionsProvider           →  YamlOptionsProvider (src/providers/options/)
    IHistoryStore              →  JsonHistoryStore (src/providers/history/)
"""

from src.interfaces.catalog_provider import ICatalogProvider
from src.interfaces.history_store import IHistoryStore
from src.interfaces.metadata_refresher import IMetadataRefresher
from src.interfaces.options_provider import IOptionsProvider
from src.interfaces.subtitle_downloader import ISubtitleDownloader
from src.interfaces.subtitle_provider import ISubtitleProvider

__all__ = [
    "ICatalogProvider",
    "IHistoryStore",
    "IMetadataRefresher",
    "IOptionsProvider",
    "ISubtitleDownloader",
    "ISubtitleProvider",
]
