"""
Build-once cache used by the registry, field catalog and share buttons.
"""
import threading
from typing import Any, Callable, Generic, TypeVar

T = TypeVar('T')

# Marks an empty cache; a built value of None is still a value
_NOT_BUILT: Any = object()


class BuildOnceCache(Generic[T]):
    """
    Holds a value built at most once until explicitly invalidated.

    Construction is single-flight: concurrent callers block on the lock
    while the first caller builds, then all receive the same value. The
    state is a single attribute, so a reader racing ``invalidate`` sees
    either the old value or an empty cache, never a half-reset one.
    """

    def __init__(self, name: str = 'cache'):
        self.name = name
        self._lock = threading.Lock()
        self._value: Any = _NOT_BUILT

    @property
    def is_built(self) -> bool:
        return self._value is not _NOT_BUILT

    def get_or_build(self, builder: Callable[[], T]) -> T:
        value = self._value
        if value is not _NOT_BUILT:
            return value

        with self._lock:
            if self._value is _NOT_BUILT:
                self._value = builder()
            return self._value

    def invalidate(self) -> None:
        with self._lock:
            self._value = _NOT_BUILT
