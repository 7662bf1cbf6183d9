from cardvault.store.sql import SqlItemCatalog, SqlRecordStore

__all__ = ["SqlItemCatalog", "SqlRecordStore"]
