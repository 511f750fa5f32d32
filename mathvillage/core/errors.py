from __future__ import annotations


class MathVillageError(Exception):
    """Base class for caller mistakes caught at the orchestration layer."""


class VariantResting(MathVillageError):
    def __init__(self, variant) -> None:
        super().__init__(f"{variant.value} is resting; play another game to wake it up")
        self.variant = variant


class InsufficientFunds(MathVillageError):
    def __init__(self, item_key: str, price: int, balance: int) -> None:
        super().__init__(f"{item_key} costs {price} but only {balance} available")
        self.item_key = item_key
        self.price = price
        self.balance = balance


class UnknownItem(MathVillageError, KeyError):
    pass
