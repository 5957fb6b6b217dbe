# src/catalog_domain/domain/repositories/catalog_repository.py
"""Catalog repository interface."""
from abc import ABC, abstractmethod

from src.catalog_domain.domain.entity_store import EntityStore


class ICatalogRepository(ABC):

    @abstractmethod
    def save_store(self, store: EntityStore) -> None:
        """Persists every entity kind, transactions and id counters."""
        pass

    @abstractmethod
    def load_store(self, store: EntityStore) -> None:
        """Clears the store and fills it from persistence."""
        pass

    @abstractmethod
    def has_saved_data(self) -> bool:
        """Whether anything has been persisted yet."""
        pass
