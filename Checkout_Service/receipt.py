from typing import Dict, List, Optional, Tuple
from functools import reduce
from cart_core.domain import Condition, Item, Percentage, QuantityPairing
from cart_core.money import Money


# ============ Описание условий ============


def describe_condition(condition: Optional[Condition]) -> Optional[str]:
    """Человекочитаемое описание скидки для чека"""
    if condition is None:
        return None
    if isinstance(condition, Percentage):
        if condition.minimum:
            return f"{condition.percentage}% off above {condition.minimum} units"
        return f"{condition.percentage}% off"
    if isinstance(condition, QuantityPairing):
        return f"pay {condition.group_size // 2} of every {condition.group_size}"
    return repr(condition)


# ============ Строки чека ============


def receipt_line(item: Item) -> dict:
    full = item.full_total().get_amount()
    total = item.compute_total().get_amount()
    return {
        "title": item.product.title,
        "quantity": item.quantity,
        "unit_price": item.product.price,
        "full_total": full,
        "total": total,
        "savings": full - total,
        "applied": describe_condition(item.applied_condition()),
    }


def receipt_lines(items: Tuple[Item, ...]) -> List[dict]:
    return [receipt_line(item) for item in items]


# ============ Сводка ============


def receipt_summary(snapshot: dict) -> Dict:
    """
    Чек по снимку summary()/checkout():
    gross (без скидок) - savings == total
    """
    lines = receipt_lines(snapshot["items"])

    def accumulate(acc: Tuple[int, int], line: dict) -> Tuple[int, int]:
        gross, savings = acc
        return (gross + line["full_total"], savings + line["savings"])

    gross, savings = reduce(accumulate, lines, (0, 0))

    return {
        "items": len(lines),
        "lines": lines,
        "gross": gross,
        "savings": savings,
        "total": snapshot["total"],
        "formatted": snapshot["formatted"],
        "savings_formatted": Money(savings).format(),
    }
