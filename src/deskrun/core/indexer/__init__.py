from .main import Catalog, CatalogBuilder
from .dedup import Deduplicator, merge
from .scanner import Scanner

__all__ = ["Catalog", "CatalogBuilder", "Deduplicator", "merge", "Scanner"]
