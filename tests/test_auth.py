"""
Integration Tests for Authentication

Verifies that the main application correctly integrates:
- JWT verification dependency
- Protected route denial (401)
- Protected route access (200) w/ valid token
"""

from app.api.dependencies import get_recommendation_service
from app.domain.services import RecommendationService


class TestAuthIntegration:

    def test_protected_route_no_auth(self, client):
        """Requesting recommendations without auth should return 401."""
        response = client.post(
            "/api/recommendations/scholarships", json={"subjectId": "student-1"}
        )
        assert response.status_code == 401
        assert response.json()["detail"] == "Missing authorization token"

    def test_protected_route_invalid_token(self, client):
        """Requesting with an invalid token should return 401."""
        response = client.post(
            "/api/recommendations/scholarships",
            json={"subjectId": "student-1"},
            headers={"Authorization": "Bearer invalid.token.here"},
        )
        assert response.status_code == 401

    def test_expired_token(self, client, token_factory, mock_user_id):
        """Expired tokens are rejected even when correctly signed."""
        token = token_factory(mock_user_id, expires_in=-60)
        response = client.post(
            "/api/recommendations/scholarships",
            json={"subjectId": mock_user_id},
            headers={"Authorization": f"Bearer {token}"},
        )
        assert response.status_code == 401

    def test_protected_route_valid_auth(self, client, auth_headers, app, mock_user_id, mock_repository):
        """A valid token reaches the service (mocked repo)."""
        mock_repository.get_profile.return_value = None  # Simulate no profile yet

        app.dependency_overrides[get_recommendation_service] = (
            lambda: RecommendationService(mock_repository)
        )

        response = client.post(
            "/api/recommendations/scholarships",
            json={"subjectId": mock_user_id},
            headers=auth_headers,
        )

        # Should be 404 because repo returned None
        assert response.status_code == 404
        mock_repository.get_profile.assert_awaited_once_with(mock_user_id)
