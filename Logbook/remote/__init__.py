from .transport import LogbookApiClient, RemoteResult
from .sync import SyncManager

__all__ = ["LogbookApiClient", "RemoteResult", "SyncManager"]
