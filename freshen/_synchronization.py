from __future__ import annotations

import types
import typing as tp
from threading import Lock as T_LOCK

T = tp.TypeVar("T")


class Lock:
    def __init__(self) -> None:
        self._lock = T_LOCK()

    def __enter__(self) -> None:
        self._lock.acquire()

    def __exit__(
        self,
        exc_type: type[BaseException] | None = None,
        exc_value: BaseException | None = None,
        traceback: types.TracebackType | None = None,
    ) -> None:
        self._lock.release()


_class_attribute_lock = Lock()


def set_class_attribute_once(owner: type, name: str, factory: tp.Callable[[], T]) -> T:
    """
    Construct a class attribute at most once.

    The attribute is looked up in ``owner.__dict__`` only, so a value set on a
    parent class does not count as set for its subclasses. When several threads
    race on the first call, ``factory`` runs exactly once and every caller
    receives the same object.
    """
    existing = owner.__dict__.get(name)
    if existing is not None:
        return tp.cast(T, existing)

    with _class_attribute_lock:
        existing = owner.__dict__.get(name)
        if existing is not None:
            return tp.cast(T, existing)
        value = factory()
        setattr(owner, name, value)
        return value
