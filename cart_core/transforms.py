import json
import logging
from collections.abc import Mapping
from typing import Any, Tuple

from .domain import Condition, Item, Percentage, Product, QuantityPairing
from .errors import ValidationError
from .ftypes import Either, Maybe, sequence

logger = logging.getLogger(__name__)

CatalogEntry = Tuple[Product, Tuple[Condition, ...]]


def _is_int(value: Any) -> bool:
    # bool - подкласс int, но количеством/ценой быть не может
    return isinstance(value, int) and not isinstance(value, bool)


# ============ Товар ============


def validate_product(product: Product) -> Either[str, Product]:
    if not isinstance(product.title, str) or not product.title:
        return Either.left("product title must be a non-empty string")
    if not _is_int(product.price) or product.price < 0:
        return Either.left(
            f"price of '{product.title}' must be a non-negative integer, got {product.price!r}"
        )
    return Either.right(product)


def parse_product(raw: Any) -> Either[str, Product]:
    """Product или словарь {title, price} -> Either[error, Product]"""
    if isinstance(raw, Product):
        return validate_product(raw)
    if not isinstance(raw, Mapping):
        return Either.left(f"product must be a mapping, got {type(raw).__name__}")
    if "title" not in raw or "price" not in raw:
        return Either.left("product requires 'title' and 'price'")
    return validate_product(Product(title=raw["title"], price=raw["price"]))


def product_key(raw: Any) -> Either[str, str]:
    """Ключ товара для remove(): Product, словарь или сама строка-название"""
    if isinstance(raw, str):
        return Either.right(raw) if raw else Either.left("product key is empty")
    if isinstance(raw, Product):
        return Either.right(raw.key)
    if isinstance(raw, Mapping) and isinstance(raw.get("title"), str):
        return Either.right(raw["title"])
    return Either.left(f"cannot derive product key from {raw!r}")


# ============ Условия скидок ============


def validate_condition(condition: Any) -> Either[str, Condition]:
    if isinstance(condition, Percentage):
        if not _is_int(condition.percentage) or not 0 <= condition.percentage <= 100:
            return Either.left(
                f"percentage must be an integer in [0, 100], got {condition.percentage!r}"
            )
        if not _is_int(condition.minimum) or condition.minimum < 0:
            return Either.left(
                f"minimum must be a non-negative integer, got {condition.minimum!r}"
            )
        return Either.right(condition)

    if isinstance(condition, QuantityPairing):
        size = condition.group_size
        if not _is_int(size) or size < 2 or size % 2:
            return Either.left(
                f"group size must be an even integer >= 2, got {size!r}"
            )
        return Either.right(condition)

    return Either.left(f"unknown condition: {condition!r}")


def parse_condition(raw: Any) -> Either[str, Condition]:
    """
    Тип условия определяется один раз, по набору ключей:
      {percentage, minimum?}      -> Percentage
      {quantity} | {group_size}   -> QuantityPairing
    """
    if isinstance(raw, (Percentage, QuantityPairing)):
        return validate_condition(raw)
    if not isinstance(raw, Mapping):
        return Either.left(f"condition must be a mapping, got {type(raw).__name__}")

    if "percentage" in raw:
        return validate_condition(
            Percentage(percentage=raw["percentage"], minimum=raw.get("minimum", 0))
        )
    if "group_size" in raw or "quantity" in raw:
        size = raw["group_size"] if "group_size" in raw else raw["quantity"]
        return validate_condition(QuantityPairing(group_size=size))

    return Either.left(f"unrecognised condition keys: {sorted(raw)}")


def normalize_conditions(raw: Any) -> Tuple[Any, ...]:
    """Одно условие, список или None -> всегда кортеж"""
    if raw is None:
        return ()
    if isinstance(raw, (list, tuple)):
        return tuple(raw)
    return (raw,)


def parse_conditions(raw: Any) -> Either[str, Tuple[Condition, ...]]:
    return sequence(map(parse_condition, normalize_conditions(raw)))


# ============ Позиция корзины ============


def _validate_quantity(quantity: Any) -> Either[str, int]:
    if not _is_int(quantity) or quantity < 1:
        return Either.left(f"quantity must be a positive integer, got {quantity!r}")
    return Either.right(quantity)


def validate_item(item: Item) -> Either[str, Item]:
    return parse_product(item.product).bind(
        lambda product: _validate_quantity(item.quantity).bind(
            lambda quantity: parse_conditions(item.conditions).map(
                lambda conditions: Item(product, quantity, conditions)
            )
        )
    )


def parse_item(raw: Any) -> Either[str, Item]:
    """
    Item или словарь {product, quantity, condition|conditions} -> Either[error, Item]
    """
    if isinstance(raw, Item):
        return validate_item(raw)
    if not isinstance(raw, Mapping):
        return Either.left(f"item must be a mapping, got {type(raw).__name__}")
    if "product" not in raw:
        return Either.left("item requires 'product'")

    # в исходном формате ключ "condition": объект или список объектов
    raw_conditions = raw.get("conditions")
    if raw_conditions is None:
        raw_conditions = raw.get("condition")
    return validate_item(Item(raw["product"], raw.get("quantity"), raw_conditions))


# ============ Каталог для витрины ============


def load_catalog(path: str) -> Tuple[CatalogEntry, ...]:
    """
    Загружает JSON вида {"products": [{"title", "price", "offers": [...]}]}
    Возвращает кортеж (Product, условия)
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    def _to_entry(index: int, raw: Mapping) -> CatalogEntry:
        result = parse_product(raw).bind(
            lambda product: parse_conditions(raw.get("offers")).map(
                lambda offers: (product, offers)
            )
        )
        return result.get_or_raise(
            lambda error: ValidationError(f"catalog product #{index}: {error}")
        )

    catalog = tuple(
        _to_entry(i, raw) for i, raw in enumerate(data.get("products", []))
    )
    logger.debug("Loaded %d catalog products from %s", len(catalog), path)
    return catalog


def find_product(catalog: Tuple[CatalogEntry, ...], title: str) -> Maybe[CatalogEntry]:
    """Безопасный поиск товара по названию"""
    found = next((entry for entry in catalog if entry[0].title == title), None)
    return Maybe.some(found) if found is not None else Maybe.nothing()
