"""Generic repository interface (Dependency Inversion Principle).

Provides ``IRepository[T]``, the base abstract class that all
domain-specific repository interfaces extend.  Service-layer code
depends on this abstraction, never on Django ORM directly.

Repositories only ever see active records through their read methods;
an absent or soft-deleted record is reported as ``None``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Generic, List, Optional, TypeVar

if TYPE_CHECKING:
    from modules.core.dtos import DeletionAuditDTO

T = TypeVar("T")


class IRepository(ABC, Generic[T]):
    """Base generic repository contract.

    Type parameter ``T`` represents the domain entity managed by the
    repository (e.g. ``Category``, ``Product``).
    """

    @abstractmethod
    def get_by_id(self, id: int) -> Optional[T]:
        """Retrieve an active entity by its primary key."""

    @abstractmethod
    def list_active(self) -> List[T]:
        """List active entities ordered by name."""

    @abstractmethod
    def delete(self, id: int, audit: Optional[DeletionAuditDTO] = None) -> bool:
        """Soft-delete an active entity, optionally recording an audit.

        Returns ``False`` when no active entity matches ``id``.
        """
