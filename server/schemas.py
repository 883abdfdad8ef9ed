"""Pydantic models shared across the API routers."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from catalog.models import Nation


class NationOut(BaseModel):
    """Read-only nation entry."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    full_name: str = Field(..., alias="fullName")
    flag: str

    @classmethod
    def from_nation(cls, nation: Nation) -> "NationOut":
        return cls.model_validate(nation.to_dict())


class NationVehicles(BaseModel):
    """A nation's records for every group and category."""

    nation: str
    vehicles: Dict[str, Dict[str, List[Dict[str, Any]]]]


class ErrorBody(BaseModel):
    message: str
    details: Optional[Union[str, List[Any], Dict[str, Any]]] = None


class ErrorEnvelope(BaseModel):
    """Uniform error response."""

    error: ErrorBody
