from __future__ import annotations

from dataclasses import dataclass

CURRENCY_SYMBOL = "R$"


@dataclass(frozen=True)
class Money:
    """
    Денежная сумма в минимальных единицах (центы/сентаво).
    Иммутабельна: сложение и умножение возвращают новый Money.
    """

    amount: int = 0

    @staticmethod
    def zero() -> "Money":
        return Money(0)

    def get_amount(self) -> int:
        return self.amount

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return Money(self.amount + other.amount)

    def multiply(self, quantity: int) -> "Money":
        return Money(self.amount * quantity)

    def __mul__(self, quantity: int) -> "Money":
        if not isinstance(quantity, int):
            return NotImplemented
        return self.multiply(quantity)

    __rmul__ = __mul__

    def format(self) -> str:
        """302556 -> 'R$3,025.56'"""
        sign = "-" if self.amount < 0 else ""
        units, cents = divmod(abs(self.amount), 100)
        return f"{CURRENCY_SYMBOL}{sign}{units:,}.{cents:02d}"

    def __str__(self) -> str:
        return self.format()
