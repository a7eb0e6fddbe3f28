"""Types shared by the document-backed schemas."""

from typing import Annotated, Any

from bson import ObjectId
from pydantic import BaseModel, BeforeValidator, ConfigDict


def _stringify_object_id(value: Any) -> Any:
    if isinstance(value, ObjectId):
        return str(value)
    return value


# ObjectId rendered as its 24-character hex string.
ObjectIdStr = Annotated[str, BeforeValidator(_stringify_object_id)]

EMAIL_PATTERN = r"^\S+@\S+\.\S+$"
PHONE_PATTERN = r"^\+?\d{10,15}$"
DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"
TIME_PATTERN = r"^([01]?\d|2[0-3]):[0-5]\d$"


class DocumentModel(BaseModel):
    """Base for models built from MongoDB documents."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class MessageResponse(BaseModel):
    message: str


class TokenResponse(BaseModel):
    token: str
