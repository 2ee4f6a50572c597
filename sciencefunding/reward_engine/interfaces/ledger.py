"""Ledger interfaces credited with converted rewards."""

from abc import ABC, abstractmethod


class FundsLedger(ABC):
    """Receives funds granted for science. Absent outside career games."""

    @abstractmethod
    def credit_funds(self, amount: float) -> None:
        pass


class ReputationLedger(ABC):
    """Receives reputation granted for science. Absent in sandbox games."""

    @abstractmethod
    def credit_reputation(self, amount: float) -> None:
        pass
