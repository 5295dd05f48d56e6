# nms_trade/demands/storage_interfaces.py
from abc import ABC, abstractmethod
from typing import List, Optional

from .models import Demand, DemandKey


class AbstractDemandStore(ABC):
    """
    Interface for the tenant-scoped Station x Item demand relation.

    Referential integrity against stations and items is left to the
    storage engine; implementations do not re-check it.
    """

    @abstractmethod
    async def list(self, tenant: str) -> List[Demand]:
        """Return all demand rows of the tenant in no particular order."""
        pass

    @abstractmethod
    async def get(self, tenant: str, key: DemandKey) -> Optional[Demand]:
        pass

    @abstractmethod
    async def upsert(self, tenant: str, station_id: int, item_id: int, demand_level: float) -> Demand:
        """
        Create or replace the demand row keyed by (station_id, item_id, tenant).

        Raises:
            ReferentialViolationError: If the station or item does not exist for the tenant
        """
        pass

    @abstractmethod
    async def update(self, tenant: str, key: DemandKey, demand_level: float) -> Optional[Demand]:
        """
        Set the demand level of an existing row.

        Returns:
            The refreshed row, or None if the tenant has no such row
        """
        pass

    @abstractmethod
    async def delete(self, tenant: str, key: DemandKey) -> bool:
        """
        Remove the demand row.

        Returns:
            True if a row was removed, False if none matched
        """
        pass
