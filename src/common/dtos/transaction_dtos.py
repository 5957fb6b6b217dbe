"""Data Transfer Objects for transaction pipeline results."""

from dataclasses import dataclass

from src.transaction_domain.domain.entities.transaction import Transaction, TransactionStatus


@dataclass(frozen=True)
class TransactionOutcomeDTO:
    """
    Result of a pipeline run that got far enough to build a Transaction.

    Failed outcomes (policy or credit) are expected business results and are
    already stored and recorded in the ledger.
    """

    transaction_id: int
    status: TransactionStatus
    transaction: Transaction
    reason: str = ""

    @property
    def succeeded(self) -> bool:
        return self.status == TransactionStatus.COMPLETED
