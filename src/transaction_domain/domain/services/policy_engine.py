# src/transaction_domain/domain/services/policy_engine.py
"""Pluggable commit policies for costed transactions."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from src.common.config.settings import settings
from src.transaction_domain.domain.entities.transaction import Transaction


@dataclass(frozen=True)
class PolicyDecision:
    approved: bool
    policy_name: Optional[str] = None
    reason: str = ""


class ITransactionPolicy(ABC):
    """A pure predicate over a fully costed transaction. Must not mutate anything."""

    @property
    @abstractmethod
    def description(self) -> str:
        pass

    @abstractmethod
    def approves(self, transaction: Transaction) -> bool:
        pass


class PriceThresholdPolicy(ITransactionPolicy):
    """Rejects transactions whose total cost exceeds a ceiling."""

    def __init__(self, threshold: float) -> None:
        self.threshold = threshold

    @property
    def description(self) -> str:
        return f"Price Threshold Contract: Maximum allowed cost is RM{self.threshold:.2f}"

    def approves(self, transaction: Transaction) -> bool:
        return transaction.total_cost <= self.threshold


class PolicyEngine:
    """Evaluates policies in registration order and stops at the first rejection."""

    def __init__(self, policies: Optional[dict[str, ITransactionPolicy]] = None) -> None:
        self._policies: dict[str, ITransactionPolicy] = {}
        for name, policy in (policies or {}).items():
            self.register(name, policy)

    @classmethod
    def default(cls) -> "PolicyEngine":
        return cls({"price_threshold": PriceThresholdPolicy(settings.PRICE_THRESHOLD)})

    @property
    def policy_names(self) -> list[str]:
        return list(self._policies)

    def register(self, name: str, policy: ITransactionPolicy) -> None:
        if name in self._policies:
            raise ValueError(f"Policy '{name}' is already registered.")
        self._policies[name] = policy

    def evaluate(self, transaction: Transaction) -> PolicyDecision:
        for name, policy in self._policies.items():
            if not policy.approves(transaction):
                return PolicyDecision(approved=False, policy_name=name, reason=policy.description)
        return PolicyDecision(approved=True)
