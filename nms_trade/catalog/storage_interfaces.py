# nms_trade/catalog/storage_interfaces.py
from abc import ABC, abstractmethod
from typing import Generic, List, Optional, TypeVar

from .models import Item, ItemCreate, ItemUpdate, Station, StationCreate, StationUpdate

EntityT = TypeVar("EntityT")
CreateT = TypeVar("CreateT")
UpdateT = TypeVar("UpdateT")


class AbstractCatalogStore(ABC, Generic[EntityT, CreateT, UpdateT]):
    """
    Interface for a tenant-scoped store of id/name entities (items, stations).

    Every operation takes the tenant key first; implementations must never
    read or write rows of another tenant.
    """

    @abstractmethod
    async def list(self, tenant: str) -> List[EntityT]:
        """Return all entities of the tenant in no particular order."""
        pass

    @abstractmethod
    async def get(self, tenant: str, entity_id: int) -> Optional[EntityT]:
        """Return the entity with ``entity_id`` in the tenant, or None."""
        pass

    @abstractmethod
    async def upsert(self, tenant: str, data: CreateT) -> EntityT:
        """
        Create an entity or replace the existing one with the same key.

        Args:
            tenant: The caller's tenant key
            data: Creation data; without an id the store assigns one

        Returns:
            The entity exactly as persisted
        """
        pass

    @abstractmethod
    async def update(self, tenant: str, entity_id: int, patch: UpdateT) -> Optional[EntityT]:
        """
        Write only the fields supplied in ``patch``.

        Returns:
            The refreshed entity, or None if no entity has that id in the tenant

        Raises:
            NoFieldsProvidedError: If ``patch`` supplies no field
        """
        pass

    @abstractmethod
    async def delete(self, tenant: str, entity_id: int) -> bool:
        """
        Delete the entity and, through the cascade, its demand rows.

        Returns:
            True if a row was removed, False if none matched
        """
        pass


class AbstractItemStore(AbstractCatalogStore[Item, ItemCreate, ItemUpdate]):
    pass


class AbstractStationStore(AbstractCatalogStore[Station, StationCreate, StationUpdate]):
    pass
