from beancounter.db.store import Store

__all__ = ["Store"]
