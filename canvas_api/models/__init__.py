# canvas_api/models/__init__.py
# Import models here so they can be imported from canvas_api.models
from canvas_api.models.account import Account
from canvas_api.models.team import Team
from canvas_api.models.user import User
from canvas_api.models.canvas import Canvas
from canvas_api.models.oauth_token import OAuthToken
from canvas_api.models.api_key import ApiKey
