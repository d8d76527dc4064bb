from datetime import datetime

from pydantic import BaseModel, Field


class SubscriberCreate(BaseModel):
    email: str = Field(..., min_length=3, max_length=255, examples=["reader@example.com"])


class SubscriberResponse(BaseModel):
    id: int
    email: str
    created_at: datetime

    model_config = {"from_attributes": True}
