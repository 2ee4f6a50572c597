"""In-memory ledgers used by the replay tooling and tests."""

from typing import List

from sciencefunding.reward_engine.interfaces.ledger import FundsLedger, ReputationLedger


class InMemoryFundsLedger(FundsLedger):
    """Keeps a running funds balance and every credit made."""

    def __init__(self, balance: float = 0.0):
        self.balance = balance
        self.credits: List[float] = []

    def credit_funds(self, amount: float) -> None:
        self.credits.append(amount)
        self.balance += amount


class InMemoryReputationLedger(ReputationLedger):
    """Keeps a running reputation total and every credit made."""

    def __init__(self, reputation: float = 0.0):
        self.reputation = reputation
        self.credits: List[float] = []

    def credit_reputation(self, amount: float) -> None:
        self.credits.append(amount)
        self.reputation += amount
