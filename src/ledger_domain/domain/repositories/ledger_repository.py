# src/ledger_domain/domain/repositories/ledger_repository.py
"""Ledger repository interface."""
from abc import ABC, abstractmethod

from src.ledger_domain.domain.entities.block import Block


class ILedgerRepository(ABC):

    @abstractmethod
    def save_blocks(self, blocks: list[Block]) -> None:
        """Persists the full chain, replacing whatever was stored before."""
        pass

    @abstractmethod
    def load_blocks(self) -> list[Block]:
        """Loads the stored chain in order. Returns an empty list when nothing is stored."""
        pass
