from canvas_api.schemas.team import Team, SlackTeamCreate, TeamUpdate
from canvas_api.schemas.oauth_token import OAuthToken
from canvas_api.schemas.error import ErrorResponse, FieldErrorDetail
