# canvas_api/db/base.py
from canvas_api.db.session import Base

# Import all models so they are registered on Base.metadata
from canvas_api.models.account import Account
from canvas_api.models.team import Team
from canvas_api.models.user import User
from canvas_api.models.canvas import Canvas
from canvas_api.models.oauth_token import OAuthToken
from canvas_api.models.api_key import ApiKey

__all__ = ["Base", "Account", "Team", "User", "Canvas", "OAuthToken", "ApiKey"]
