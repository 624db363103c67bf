from dataclasses import dataclass
from typing import Optional, Tuple

from .conditions import Condition, Percentage, QuantityPairing, best_discount, item_total
from .money import Money

__all__ = ["Condition", "Item", "Percentage", "Product", "QuantityPairing"]


@dataclass(frozen=True)
class Product:
    title: str  # ключ товара в корзине
    price: int  # центы

    @property
    def key(self) -> str:
        return self.title


@dataclass(frozen=True)
class Item:
    product: Product
    quantity: int
    conditions: Tuple[Condition, ...] = ()

    @property
    def key(self) -> str:
        return self.product.key

    def full_total(self) -> Money:
        """Сумма без скидок"""
        return Money(self.product.price).multiply(self.quantity)

    def compute_total(self) -> Money:
        """Сумма с лучшей из доступных скидок"""
        return Money(item_total(self.product.price, self.quantity, self.conditions))

    def applied_condition(self) -> Optional[Condition]:
        """Условие, давшее итоговую цену (None если скидка не помогла)"""
        condition, _ = best_discount(
            self.product.price, self.quantity, self.conditions
        )
        return condition
