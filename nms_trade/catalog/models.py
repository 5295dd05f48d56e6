# nms_trade/catalog/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, List


class ItemBase(BaseModel):
    """Fields shared by item creation requests and stored items."""
    name: str
    value: float


class ItemCreate(ItemBase):
    """Create-or-replace request. ``id`` is only sent by bulk imports."""
    id: Optional[int] = Field(
        default=None,
        description="Tenant-scoped id. Omit to let the store assign one."
    )


class ItemUpdate(BaseModel):
    """Partial update - only supplied fields are written."""
    name: Optional[str] = None
    value: Optional[float] = None


class Item(ItemBase):
    """An item as persisted for one tenant."""
    id: int

    model_config = ConfigDict(from_attributes=True)


class ItemReference(BaseModel):
    id: int


class StationItemDemand(BaseModel):
    """Demand entry nested in the bulk station shape: ``{item: {id}, demand}``."""
    item: ItemReference
    demand: float


class StationBase(BaseModel):
    name: str


class StationCreate(StationBase):
    """
    Create-or-replace request for a station.

    The bulk shape also carries the station's id and its per-item demand
    entries, which are written after the station itself.
    """
    id: Optional[int] = None
    items: Optional[List[StationItemDemand]] = None


class StationUpdate(BaseModel):
    name: Optional[str] = None


class Station(StationBase):
    id: int

    model_config = ConfigDict(from_attributes=True)
