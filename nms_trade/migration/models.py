# nms_trade/migration/models.py
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

from ..catalog.models import ItemCreate, StationCreate


class MigrationRequest(BaseModel):
    """
    Whole-dataset import for one tenant.

    The tenant may be sent in the body as ``userToken`` (legacy shape)
    instead of a bearer header.
    """
    user_token: Optional[str] = Field(default=None, alias="userToken")
    items: List[ItemCreate] = Field(default_factory=list)
    stations: List[StationCreate] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)


class MigrationResult(BaseModel):
    success: bool = True
    items: int = 0
    stations: int = 0
    demands: int = 0
