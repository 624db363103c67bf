# cart_core/ftypes.py
# Maybe и Either для проверки входных данных на границе корзины

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Generic, Iterable, Optional, Tuple, TypeVar, Union

T = TypeVar("T")
U = TypeVar("U")
L = TypeVar("L")
R = TypeVar("R")


@dataclass(frozen=True)
class Maybe(Generic[T]):
    """
    Опциональное значение: Maybe.some(value) / Maybe.nothing().
    Используется для поиска товара в каталоге.
    """

    value: Optional[T]

    @staticmethod
    def some(value: T) -> "Maybe[T]":
        return Maybe(value)

    @staticmethod
    def nothing() -> "Maybe[None]":
        return Maybe(None)

    def is_some(self) -> bool:
        return self.value is not None

    def is_none(self) -> bool:
        return self.value is None

    def map(self, fn: Callable[[T], U]) -> "Maybe[U]":
        return Maybe.some(fn(self.value)) if self.is_some() else Maybe.nothing()

    def get_or_else(self, default: U) -> T | U:
        return self.value if self.is_some() else default

    def to_either(self, error: L) -> "Either[L, T]":
        return Either.right(self.value) if self.is_some() else Either.left(error)

    def __repr__(self) -> str:
        return f"Some({self.value})" if self.is_some() else "Nothing"


@dataclass(frozen=True)
class Either(Generic[L, R]):
    """
    Left - сообщение об ошибке валидации, Right - готовое значение.
    Цепочки проверок строятся через bind, ошибка пробрасывается как есть.
    """

    is_left: bool
    value: Union[L, R]

    @staticmethod
    def left(value: L) -> "Either[L, R]":
        return Either(True, value)

    @staticmethod
    def right(value: R) -> "Either[L, R]":
        return Either(False, value)

    @property
    def is_right(self) -> bool:
        return not self.is_left

    def map(self, fn: Callable[[R], U]) -> "Either[L, U]":
        return Either.right(fn(self.value)) if self.is_right else self  # type: ignore[return-value]

    def bind(self, fn: Callable[[R], "Either[L, U]"]) -> "Either[L, U]":
        return fn(self.value) if self.is_right else self  # type: ignore[return-value]

    def get_or_else(self, default: U) -> R | U:
        return self.value if self.is_right else default  # type: ignore[return-value]

    def get_or_raise(self, exc_type: Callable[[L], Exception]) -> R:
        """Right -> значение, Left -> исключение exc_type(ошибка)"""
        if self.is_left:
            raise exc_type(self.value)  # type: ignore[arg-type]
        return self.value  # type: ignore[return-value]

    def __repr__(self) -> str:
        return f"Left({self.value})" if self.is_left else f"Right({self.value})"


def sequence(results: Iterable[Either[L, R]]) -> Either[L, Tuple[R, ...]]:
    """Список Either -> Either кортежа; первая ошибка прерывает сбор"""
    collected: Tuple[R, ...] = ()
    for result in results:
        if result.is_left:
            return result  # type: ignore[return-value]
        collected = collected + (result.value,)  # type: ignore[operator]
    return Either.right(collected)
