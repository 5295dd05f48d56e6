# nms_trade/demands/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class Demand(BaseModel):
    """Demand level of one item at one station, for one tenant."""
    station_id: int = Field(alias="stationId")
    item_id: int = Field(alias="itemId")
    demand_level: float = Field(alias="demandLevel")

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class DemandCreate(BaseModel):
    """
    Create-or-replace request for a demand row.

    Fields are optional at the model level so a missing field is reported
    as missing demand data rather than as a generic schema error.
    """
    station_id: Optional[int] = Field(default=None, alias="stationId")
    item_id: Optional[int] = Field(default=None, alias="itemId")
    demand_level: Optional[float] = Field(default=None, alias="demandLevel")

    model_config = ConfigDict(populate_by_name=True)


class DemandUpdate(BaseModel):
    demand_level: Optional[float] = Field(default=None, alias="demandLevel")

    model_config = ConfigDict(populate_by_name=True)


class DemandKey(BaseModel):
    """Parsed (stationId, itemId) pair addressing one demand row."""
    station_id: int
    item_id: int
