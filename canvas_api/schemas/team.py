# canvas_api/schemas/team.py
from pydantic import BaseModel
from typing import Optional, Dict
from canvas_api.schemas.base import BaseSchema, TimestampMixin


class SlackTeamCreate(BaseModel):
    """
    A Slack team as reported by a Slack sign-in.

    Icon URLs arrive as extra ``image_*`` fields and are kept for the images map.
    """
    domain: Optional[str] = None
    name: Optional[str] = None
    slack_id: Optional[str] = None

    class Config:
        extra = "allow"


class TeamUpdate(BaseModel):
    domain: Optional[str] = None


class Team(TimestampMixin, BaseSchema):
    id: int
    domain: Optional[str] = None
    name: Optional[str] = None
    slack_id: Optional[str] = None
    images: Dict[str, str] = {}
    is_personal: bool = False
