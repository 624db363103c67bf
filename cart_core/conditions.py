from dataclasses import dataclass
from functools import reduce
from typing import Optional, Sequence, Tuple, Union


@dataclass(frozen=True)
class Percentage:
    """Скидка percentage% если куплено строго больше minimum штук"""

    percentage: int
    minimum: int = 0


@dataclass(frozen=True)
class QuantityPairing:
    """Из каждой группы group_size штук оплачивается половина"""

    group_size: int = 2


Condition = Union[Percentage, QuantityPairing]


# ============ Вычисление одного условия ============


def apply_percentage(price: int, quantity: int, rule: Percentage) -> int:
    """
    Процентная скидка, только если quantity > minimum (строго)
    Округление half-up до целого цента: 74314.8 -> 74315
    """
    full = price * quantity
    if quantity <= rule.minimum:
        return full

    # целочисленно, без ограничения точности
    return (full * (100 - rule.percentage) + 50) // 100


def apply_pairing(price: int, quantity: int, rule: QuantityPairing) -> int:
    """
    В каждой полной группе оплачивается group_size / 2 штук,
    остаток оплачивается полностью
    """
    groups, remainder = divmod(quantity, rule.group_size)
    payable_units = groups * (rule.group_size // 2) + remainder
    return price * payable_units


def evaluate(price: int, quantity: int, condition: Condition) -> int:
    """Итог по одному условию (в центах)"""
    if isinstance(condition, Percentage):
        return apply_percentage(price, quantity, condition)
    if isinstance(condition, QuantityPairing):
        return apply_pairing(price, quantity, condition)
    raise TypeError(f"Unknown condition type: {type(condition).__name__}")


# ============ Выбор лучшей скидки ============


def best_discount(
    price: int, quantity: int, conditions: Sequence[Condition]
) -> Tuple[Optional[Condition], int]:
    """
    Возвращает (условие, итог) с минимальной ценой для покупателя.
    Кандидаты: полная цена (None), затем условия в порядке списка;
    при равенстве побеждает первый.
    """
    full = price * quantity

    def pick(
        best: Tuple[Optional[Condition], int], condition: Condition
    ) -> Tuple[Optional[Condition], int]:
        candidate = evaluate(price, quantity, condition)
        return (condition, candidate) if candidate < best[1] else best

    return reduce(pick, conditions, (None, full))


def item_total(price: int, quantity: int, conditions: Sequence[Condition]) -> int:
    _, total = best_discount(price, quantity, conditions)
    return total
