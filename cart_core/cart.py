import logging
from enum import Enum
from functools import reduce
from typing import Any, Dict, Tuple

from .domain import Item
from .errors import ValidationError
from .money import Money
from .transforms import parse_item, product_key

logger = logging.getLogger(__name__)


class CartState(Enum):
    EMPTY = "empty"
    POPULATED = "populated"


class Cart:
    """
    Корзина одной сессии: уникальные по ключу товара позиции в порядке добавления.
    Не потокобезопасна; на каждую сессию - свой экземпляр.
    """

    def __init__(self) -> None:
        self._items: Dict[str, Item] = {}

    # ============ Состояние ============

    @property
    def items(self) -> Tuple[Item, ...]:
        return tuple(self._items.values())

    @property
    def state(self) -> CartState:
        return CartState.POPULATED if self._items else CartState.EMPTY

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, key: str) -> bool:
        return key in self._items

    # ============ Изменение ============

    def add(self, item: Any) -> Item:
        """
        Добавляет позицию (Item или словарь). Существующий ключ заменяется
        целиком: количество и условия не суммируются.
        """
        parsed = parse_item(item).get_or_raise(ValidationError)

        replaced = self._items.pop(parsed.key, None)
        self._items[parsed.key] = parsed

        logger.debug(
            "%s '%s' x%d (%d conditions)",
            "Replaced" if replaced else "Added",
            parsed.key,
            parsed.quantity,
            len(parsed.conditions),
        )
        return parsed

    def remove(self, product: Any) -> None:
        """Удаляет товар; отсутствующий ключ - не ошибка"""
        key = product_key(product).get_or_raise(ValidationError)
        if self._items.pop(key, None) is None:
            logger.debug("Remove ignored, '%s' is not in the cart", key)
        else:
            logger.debug("Removed '%s'", key)

    def clear(self) -> None:
        self._items = {}

    # ============ Итоги ============

    def get_total(self) -> Money:
        return reduce(
            lambda acc, item: acc + item.compute_total(), self._items.values(), Money.zero()
        )

    def summary(self) -> dict:
        """Снимок корзины без изменения состояния"""
        total = self.get_total()
        return {
            "total": total.get_amount(),
            "formatted": total.format(),
            "items": self.items,
        }

    def checkout(self) -> dict:
        """Снимок + очистка корзины"""
        snapshot = self.summary()
        self.clear()
        logger.info(
            "Checkout: %d items, total %s", len(snapshot["items"]), snapshot["formatted"]
        )
        return snapshot
