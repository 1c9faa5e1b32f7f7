"""Upvote membership Pydantic schemas."""

from pydantic import BaseModel, ConfigDict


class UpvoteCreate(BaseModel):
    """Schema for inserting an upvote membership row."""

    user_id: str
    interpretation_id: str


class UpvoteResponse(BaseModel):
    """Upvote membership row as stored by the data API."""

    user_id: str
    interpretation_id: str

    model_config = ConfigDict(from_attributes=True)
