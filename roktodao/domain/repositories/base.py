"""
Shared repository contract: primary-key lookup, insert and count.
"""

from typing import Any, Optional, Protocol, TypeVar

T = TypeVar("T")


class BaseRepository(Protocol[T]):
    def get_by_id(self, id: Any) -> Optional[T]:
        ...

    def create(self, obj_in: Any) -> T:
        """Insert a model instance, pydantic model or dict and return the stored row."""
        ...

    def count(self) -> int:
        ...
