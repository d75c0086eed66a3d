# tests/test_api/test_teams.py
import unittest

from fastapi.testclient import TestClient

from canvas_api.core.config import settings
from canvas_api.db.session import get_db
from canvas_api.main import app
from canvas_api.models.oauth_token import OAuthToken
from canvas_api.models.team import Team
from canvas_api.services import team_service
from tests.utils import make_session, create_account

TEAMS_URL = f"{settings.API_V1_STR}/teams"


class TeamsApiTestCase(unittest.TestCase):
    def setUp(self):
        self.engine, self.db = make_session()

        def override_get_db():
            yield self.db

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

        self.account = create_account(self.db, key="canvas_testkey")
        self.headers = {"X-API-Key": "canvas_testkey"}

    def tearDown(self):
        app.dependency_overrides.clear()
        self.db.close()
        self.engine.dispose()

    def create_slack_team(self, **data):
        payload = {"domain": "acme", "name": "Acme", "slack_id": "T123"}
        payload.update(data)
        return self.client.post(f"{TEAMS_URL}/", json=payload, headers=self.headers)

    def test_missing_api_key(self):
        response = self.client.get(f"{TEAMS_URL}/")
        self.assertEqual(response.status_code, 401)

    def test_invalid_api_key(self):
        response = self.client.get(f"{TEAMS_URL}/", headers={"X-API-Key": "nope"})
        self.assertEqual(response.status_code, 401)

    def test_create_slack_team(self):
        response = self.create_slack_team(image_34="https://example.com/34.png", image_default=True)
        self.assertEqual(response.status_code, 201)
        body = response.json()
        self.assertEqual(body["domain"], "acme")
        self.assertEqual(body["images"], {"image_34": "https://example.com/34.png"})
        self.assertFalse(body["is_personal"])

        response = self.client.get(f"{TEAMS_URL}/", headers=self.headers)
        self.assertEqual([team["id"] for team in response.json()], [body["id"]])

    def test_create_slack_team_missing_fields(self):
        response = self.client.post(f"{TEAMS_URL}/", json={"name": "Acme"}, headers=self.headers)
        self.assertEqual(response.status_code, 422)
        errors = response.json()["errors"]
        self.assertEqual(sorted(error["field"] for error in errors), ["domain", "slack_id"])
        self.assertTrue(all(error["reason"] == "required" for error in errors))

    def test_create_personal_team(self):
        response = self.client.post(f"{TEAMS_URL}/personal", headers=self.headers)
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["name"], "Notes")
        self.assertTrue(body["is_personal"])

        again = self.client.post(f"{TEAMS_URL}/personal", headers=self.headers)
        self.assertEqual(again.json()["id"], body["id"])

    def test_update_personal_domain(self):
        team_id = self.client.post(f"{TEAMS_URL}/personal", headers=self.headers).json()["id"]
        response = self.client.patch(f"{TEAMS_URL}/{team_id}", json={"domain": "MyTeam"}, headers=self.headers)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["domain"], "~myteam")

        response = self.client.get(f"{TEAMS_URL}/", params={"domain": "~myteam"}, headers=self.headers)
        self.assertEqual([team["id"] for team in response.json()], [team_id])

    def test_update_personal_domain_with_bad_format(self):
        team_id = self.client.post(f"{TEAMS_URL}/personal", headers=self.headers).json()["id"]
        response = self.client.patch(f"{TEAMS_URL}/{team_id}", json={"domain": "-abc"}, headers=self.headers)
        self.assertEqual(response.status_code, 422)
        self.assertEqual(response.json()["errors"][0]["reason"], "format")

    def test_update_to_taken_domain(self):
        team_id = self.client.post(f"{TEAMS_URL}/personal", headers=self.headers).json()["id"]
        other = create_account(self.db, key="canvas_otherkey")
        other_team = team_service.create_personal_team(self.db, other)
        team_service.update_team(self.db, team_service.update_changeset(other_team, {"domain": "taken"}))

        response = self.client.patch(f"{TEAMS_URL}/{team_id}", json={"domain": "taken"}, headers=self.headers)
        self.assertEqual(response.status_code, 422)
        self.assertEqual(
            response.json()["errors"],
            [{"field": "domain", "reason": "uniqueness", "detail": "has already been taken"}],
        )

    def test_update_slack_team_domain(self):
        team_id = self.create_slack_team().json()["id"]
        response = self.client.patch(f"{TEAMS_URL}/{team_id}", json={"domain": "newacme"}, headers=self.headers)
        self.assertEqual(response.status_code, 422)
        self.assertIn("immutable", [error["reason"] for error in response.json()["errors"]])

        response = self.client.get(f"{TEAMS_URL}/{team_id}", headers=self.headers)
        self.assertEqual(response.json()["domain"], "acme")

    def test_other_accounts_team_is_not_found(self):
        other = create_account(self.db, key="canvas_otherkey")
        other_team = team_service.create_personal_team(self.db, other)
        response = self.client.get(f"{TEAMS_URL}/{other_team.id}", headers=self.headers)
        self.assertEqual(response.status_code, 404)

    def test_get_oauth_token(self):
        team_id = self.create_slack_team().json()["id"]
        self.db.add(OAuthToken(team_id=team_id, account_id=self.account.id, provider="slack", token="xoxb-secret"))
        self.db.commit()

        response = self.client.get(f"{TEAMS_URL}/{team_id}/oauth-tokens/slack", headers=self.headers)
        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertEqual(body["provider"], "slack")
        self.assertNotIn("token", body)

        response = self.client.get(f"{TEAMS_URL}/{team_id}/oauth-tokens/github", headers=self.headers)
        self.assertEqual(response.status_code, 404)

    def test_health(self):
        self.assertEqual(self.client.get("/health").json(), {"status": "healthy"})


if __name__ == '__main__':
    unittest.main()
