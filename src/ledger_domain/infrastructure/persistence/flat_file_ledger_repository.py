# src/ledger_domain/infrastructure/persistence/flat_file_ledger_repository.py
"""Flat-file implementation of the Ledger repository."""

import logging
import os

from src.common.config.settings import settings
from src.common.utils.flat_file_utils import read_records, write_records
from src.ledger_domain.domain.entities.block import Block
from src.ledger_domain.domain.repositories.ledger_repository import ILedgerRepository

logger = logging.getLogger(__name__)

BLOCKCHAIN_FILE = "blockchain.dat"


class FlatFileLedgerRepository(ILedgerRepository):
    """Stores blocks as seq|token|predecessorToken|timestamp|payload lines."""

    def __init__(self, data_dir: str | None = None) -> None:
        self.data_dir = data_dir or settings.DATA_DIR
        self.path = os.path.join(self.data_dir, BLOCKCHAIN_FILE)

    def save_blocks(self, blocks: list[Block]) -> None:
        count = write_records(self.path, (block.to_record() for block in blocks))
        logger.info(f"Saved {count} ledger blocks to {self.path}")

    def load_blocks(self) -> list[Block]:
        blocks = read_records(self.path, Block.from_record, "block")
        logger.info(f"Loaded {len(blocks)} ledger blocks from {self.path}")
        return blocks
