# src/ledger_domain/application/ledger_service.py
"""Application service for recording, auditing and persisting the ledger."""

import logging

from src.common.exceptions.custom_exceptions import LedgerIntegrityError
from src.ledger_domain.domain.entities.block import Block
from src.ledger_domain.domain.entities.ledger import Ledger, find_chain_defect
from src.ledger_domain.domain.repositories.ledger_repository import ILedgerRepository

logger = logging.getLogger(__name__)


class LedgerApplicationService:
    """Wraps the in-memory ledger with audit and persistence."""

    def __init__(self, ledger: Ledger, ledger_repo: ILedgerRepository) -> None:
        self.ledger = ledger
        self.ledger_repo = ledger_repo

    def record(self, payload: str) -> Block:
        block = self.ledger.append(payload)
        logger.debug(f"Recorded block {block.number}: {payload}")
        return block

    def get_blocks(self) -> list[Block]:
        return list(self.ledger)

    def verify_integrity(self) -> bool:
        """Checks linkage and logs the verdict."""
        broken_index = self.ledger.first_broken_link()
        if broken_index is None:
            logger.info(f"Ledger integrity: VALID ({len(self.ledger)} blocks)")
            return True
        logger.error(f"Ledger integrity: COMPROMISED at block {broken_index}")
        return False

    def audit(self) -> None:
        """Raises when linkage is broken; a broken chain is never patched silently."""
        broken_index = self.ledger.first_broken_link()
        if broken_index is not None:
            raise LedgerIntegrityError("Predecessor token mismatch", broken_index=broken_index)
        logger.info(f"Ledger audit passed for {len(self.ledger)} blocks")

    def chain_summary(self) -> dict:
        return {
            "block_count": len(self.ledger),
            "latest_block": self.ledger.latest.number,
            "is_valid": self.ledger.verify(),
        }

    def persist(self) -> None:
        self.ledger_repo.save_blocks(self.get_blocks())

    def restore(self) -> None:
        """
        Loads the stored chain. An empty store yields a fresh genesis block.

        The stored blocks are checked before they replace the live chain: it must
        start at genesis, number consecutively and link each block to its
        predecessor, otherwise LedgerIntegrityError is raised and the live chain
        is left as it was.
        """
        blocks = self.ledger_repo.load_blocks()
        if not blocks:
            self.ledger.restore([])
            logger.warning("No stored ledger blocks found, started a new chain")
            return
        defect = find_chain_defect(blocks)
        if defect is not None:
            broken_index, reason = defect
            raise LedgerIntegrityError(f"Stored chain rejected: {reason}", broken_index=broken_index)
        self.ledger.restore(blocks)
        logger.info(f"Restored ledger with {len(self.ledger)} blocks")
