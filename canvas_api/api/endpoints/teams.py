# canvas_api/api/endpoints/teams.py
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session
from typing import List, Optional

from canvas_api.db.changeset import Changeset
from canvas_api.db.session import get_db
from canvas_api.middleware.auth import get_current_account
from canvas_api.models.account import Account
from canvas_api.models.team import Team
from canvas_api.models.user import User
from canvas_api.schemas.error import ErrorResponse
from canvas_api.schemas.oauth_token import OAuthToken as OAuthTokenSchema
from canvas_api.schemas.team import Team as TeamSchema, SlackTeamCreate, TeamUpdate
from canvas_api.services import team_service

router = APIRouter()


def changeset_error_response(changeset: Changeset) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"errors": [error.to_dict() for error in changeset.errors]},
    )


def get_account_team(db: Session, account: Account, team_id: int) -> Team:
    team = (
        db.query(Team)
        .join(User, User.team_id == Team.id)
        .filter(Team.id == team_id, User.account_id == account.id)
        .first()
    )
    if not team:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Team not found"
        )
    return team


@router.get("/", response_model=List[TeamSchema])
def get_teams(
    db: Session = Depends(get_db),
    current_account: Account = Depends(get_current_account),
    domain: Optional[str] = None,
):
    """
    List the current account's teams, optionally filtered by domain
    """
    query = (
        db.query(Team)
        .join(User, User.team_id == Team.id)
        .filter(User.account_id == current_account.id)
    )
    if domain is not None:
        query = query.filter(Team.domain == domain)
    return query.order_by(Team.id).all()


@router.post(
    "/",
    response_model=TeamSchema,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
)
def create_slack_team(
    team_in: SlackTeamCreate,
    db: Session = Depends(get_db),
    current_account: Account = Depends(get_current_account),
):
    """
    Find or create a Slack team and join the current account to it
    """
    params = team_in.model_dump(exclude_unset=True)
    changeset = team_service.find_or_create_slack_team(db, params)
    if not changeset.valid:
        return changeset_error_response(changeset)

    team = changeset.data
    team_service.join_team(db, current_account, team)
    return team


@router.post("/personal", response_model=TeamSchema)
def create_personal_team(
    db: Session = Depends(get_db),
    current_account: Account = Depends(get_current_account),
):
    """
    Get the current account's personal team, creating it on first use
    """
    return team_service.create_personal_team(db, current_account)


@router.get("/{team_id}", response_model=TeamSchema)
def get_team(
    team_id: int,
    db: Session = Depends(get_db),
    current_account: Account = Depends(get_current_account),
):
    """
    Get one of the current account's teams
    """
    return get_account_team(db, current_account, team_id)


@router.patch(
    "/{team_id}",
    response_model=TeamSchema,
    responses={422: {"model": ErrorResponse}},
)
def update_team(
    team_id: int,
    team_in: TeamUpdate,
    db: Session = Depends(get_db),
    current_account: Account = Depends(get_current_account),
):
    """
    Update a team's domain (personal teams only)
    """
    team = get_account_team(db, current_account, team_id)

    changeset = team_service.update_changeset(team, team_in.model_dump(exclude_unset=True))
    changeset = team_service.update_team(db, changeset)
    if not changeset.valid:
        return changeset_error_response(changeset)

    return changeset.data


@router.get("/{team_id}/oauth-tokens/{provider}", response_model=OAuthTokenSchema)
def get_oauth_token(
    team_id: int,
    provider: str,
    db: Session = Depends(get_db),
    current_account: Account = Depends(get_current_account),
):
    """
    Get the team's OAuth token metadata for a provider
    """
    team = get_account_team(db, current_account, team_id)

    token = team_service.get_token(db, team, provider)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Token not found"
        )
    return token
