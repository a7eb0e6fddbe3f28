"""
Pydantic models for the service catalogue.

Services created through this API store ``price`` and ``duration`` as
display strings (``"$65.00"``, ``"60 min"``).  Records seeded by the
earlier deployment hold plain numbers instead, so the read models
accept both and return whatever is stored.
"""

from datetime import datetime
from typing import Optional, Union

from pydantic import BaseModel, Field

from .common import DocumentModel, ObjectIdStr

Price = Union[int, float, str]
Duration = Union[int, float, str]


class ServiceCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100, examples=["Haircut"])
    description: str = Field(..., min_length=1, examples=["Wash, cut and style"])
    duration: str = Field(..., min_length=1, examples=["60 min"])
    price: float = Field(..., gt=0, examples=[65])
    category: Optional[str] = None


class ServiceUpdate(BaseModel):
    """Partial update; omitted fields keep their stored value."""

    name: Optional[str] = Field(None, max_length=100)
    description: Optional[str] = None
    duration: Optional[Duration] = Field(None, examples=[45, "45 min"])
    price: Optional[Price] = Field(None, examples=[70, "$70.00"])
    category: Optional[str] = None


class ServiceRead(DocumentModel):
    id: ObjectIdStr = Field(..., alias="_id")
    name: str
    description: Optional[str] = None
    price: Price
    duration: Duration
    category: Optional[str] = None
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")


class ServiceSummary(DocumentModel):
    """The fields of a service embedded in a customer's booking history."""

    id: ObjectIdStr = Field(..., alias="_id")
    name: Optional[str] = None
    description: Optional[str] = None
    duration: Optional[Duration] = None
    price: Optional[Price] = None
