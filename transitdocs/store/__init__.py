from transitdocs.store.record_store import COLLECTIONS, RecordStore
from transitdocs.store.seed import load_seed_data

__all__ = ["COLLECTIONS", "RecordStore", "load_seed_data"]
