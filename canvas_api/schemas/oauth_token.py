# canvas_api/schemas/oauth_token.py
from typing import Any, Dict, Optional
from canvas_api.schemas.base import BaseSchema, TimestampMixin


class OAuthToken(TimestampMixin, BaseSchema):
    # The token value itself is never serialized
    id: int
    provider: str
    team_id: int
    account_id: Optional[int] = None
    meta: Dict[str, Any] = {}
