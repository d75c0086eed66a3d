# canvas_api/services/team_service.py
"""
Changesets and persistence helpers for teams.

Teams come in two flavours: Slack teams, created from a Slack sign-in and
identified by ``slack_id``, and personal teams, single-user spaces named
"Notes". A Slack team's domain is owned by Slack and can never be changed
here. A personal team picks its own domain, stored with a ``~`` prefix so it
can never collide with a Slack domain.
"""
import re
from enum import Enum
from typing import Any, Dict, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from canvas_api.core.logging import logger
from canvas_api.db.changeset import Changeset, ErrorReason
from canvas_api.models.account import Account
from canvas_api.models.oauth_token import OAuthToken
from canvas_api.models.team import Team
from canvas_api.models.user import User
from canvas_api.services.image_map import image_map

PERSONAL_TEAM_NAME = "Notes"
DOMAIN_CONSTRAINT = "teams_domain_index"

DOMAIN_FORMAT = re.compile(r"[a-z0-9][a-z0-9-]{0,34}[a-z0-9]")
DOMAIN_FORMAT_MESSAGE = (
    "must be between 2 and 36 characters, contain only letters, "
    "numbers, and dashes, and begin and end with a letter or number"
)
DOMAIN_IMMUTABLE_MESSAGE = "can not be changed for Slack teams"
DOMAIN_TAKEN_MESSAGE = "has already been taken"


class TeamType(str, Enum):
    SLACK = "slack"
    PERSONAL = "personal"


def create_changeset(team: Team, params: Dict[str, Any], type: TeamType = TeamType.SLACK) -> Changeset:
    """Build a creation changeset for a Slack team or a personal team."""
    changeset = Changeset(team)

    if type == TeamType.PERSONAL:
        return changeset.put_change("name", PERSONAL_TEAM_NAME)

    changeset.cast(params, ["domain", "name", "slack_id"])
    changeset.validate_required(["domain", "name", "slack_id"])
    prevent_domain_change(changeset)
    changeset.unique_constraint("domain", DOMAIN_CONSTRAINT)
    return changeset.put_change("images", image_map(params))


def update_changeset(team: Team, params: Dict[str, Any]) -> Changeset:
    """Build an update changeset. Only the domain of a personal team may change."""
    changeset = Changeset(team).cast(params, ["domain"])

    if is_slack_team(changeset):
        prevent_domain_change(changeset)

    changeset.validate_change_required("domain")
    _lowercase_domain(changeset)
    changeset.validate_format("domain", DOMAIN_FORMAT, message=DOMAIN_FORMAT_MESSAGE)
    _prefix_domain(changeset)
    return changeset.unique_constraint("domain", DOMAIN_CONSTRAINT)


def is_slack_team(changeset: Changeset) -> bool:
    return bool(changeset.data.slack_id or changeset.get_change("slack_id"))


def prevent_domain_change(changeset: Changeset) -> Changeset:
    if changeset.data.slack_id:
        changeset.add_error("domain", DOMAIN_IMMUTABLE_MESSAGE, ErrorReason.IMMUTABLE)
    return changeset


def _lowercase_domain(changeset: Changeset) -> None:
    domain = changeset.get_change("domain")
    if isinstance(domain, str) and domain:
        changeset.put_change("domain", domain.lower())


def _prefix_domain(changeset: Changeset) -> None:
    domain = changeset.get_change("domain")
    if domain is not None:
        changeset.put_change("domain", f"~{domain}")


def get_token(db: Session, team: Team, provider: str) -> Optional[OAuthToken]:
    """
    Fetch the team's OAuth token for a provider, or None if there is none.

    When a team holds several tokens for the same provider the most recently
    created one wins.
    """
    return (
        db.query(OAuthToken)
        .filter(OAuthToken.team_id == team.id, OAuthToken.provider == provider)
        .order_by(OAuthToken.created_at.desc(), OAuthToken.id.desc())
        .first()
    )


def insert_team(db: Session, changeset: Changeset) -> Changeset:
    """Insert the team behind a valid changeset. Invalid changesets are returned as is."""
    if not changeset.valid:
        return changeset

    team = changeset.apply()
    db.add(team)
    if _commit(db, changeset):
        db.refresh(team)
        logger.info(f"Created team {team.id}", team_id=team.id, slack_id=team.slack_id)
    return changeset


def update_team(db: Session, changeset: Changeset) -> Changeset:
    """Persist a valid update changeset. Invalid changesets are returned as is."""
    if not changeset.valid:
        return changeset

    team = changeset.apply()
    if _commit(db, changeset):
        db.refresh(team)
        logger.info(f"Updated team {team.id}", team_id=team.id, changes=sorted(changeset.changes))
    return changeset


def _commit(db: Session, changeset: Changeset) -> bool:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        key = changeset.constraint_field(str(e.orig))
        if key is None:
            raise
        logger.warning(f"Unique constraint violated on {key}", value=changeset.get_change(key))
        changeset.add_error(key, DOMAIN_TAKEN_MESSAGE, ErrorReason.UNIQUENESS)
        return False
    return True


def find_or_create_slack_team(db: Session, params: Dict[str, Any]) -> Changeset:
    """Return a changeset over the team with the given slack_id, inserting it if new."""
    slack_id = params.get("slack_id")
    if slack_id:
        team = db.query(Team).filter(Team.slack_id == slack_id).first()
        if team:
            return Changeset(team)

    return insert_team(db, create_changeset(Team(), params, type=TeamType.SLACK))


def find_personal_team(db: Session, account: Account) -> Optional[Team]:
    return (
        db.query(Team)
        .join(User, User.team_id == Team.id)
        .filter(User.account_id == account.id, Team.slack_id.is_(None))
        .first()
    )


def create_personal_team(db: Session, account: Account) -> Team:
    """Return the account's personal team, creating it on first use."""
    team = find_personal_team(db, account)
    if team:
        return team

    changeset = insert_team(db, create_changeset(Team(), {}, type=TeamType.PERSONAL))
    team = changeset.data
    join_team(db, account, team)
    return team


def join_team(db: Session, account: Account, team: Team, params: Optional[Dict[str, Any]] = None) -> User:
    """Make the account a member of the team, if it is not one already."""
    user = (
        db.query(User)
        .filter(User.account_id == account.id, User.team_id == team.id)
        .first()
    )
    if user:
        return user

    params = params or {}
    user = User(
        account_id=account.id,
        team_id=team.id,
        email=params.get("email"),
        name=params.get("name"),
        slack_id=params.get("slack_id"),
        images=image_map(params),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Account {account.id} joined team {team.id}", account_id=account.id, team_id=team.id)
    return user
