"""
Tests for the Supabase auth wrapper.
"""

from unittest.mock import Mock, patch

import pytest

from services.auth_service import AuthError, AuthService

class TestAuthService:
    """Test AuthService delegation and error wrapping."""

    @pytest.fixture
    def client(self):
        return Mock()

    def test_sign_in_returns_user(self, client):
        user = Mock(email="analyst@example.com")
        client.auth.sign_in_with_password.return_value = Mock(user=user)

        assert AuthService(client).sign_in("analyst@example.com", "secret") is user
        client.auth.sign_in_with_password.assert_called_once_with(
            {"email": "analyst@example.com", "password": "secret"}
        )

    def test_sign_in_failure(self, client):
        client.auth.sign_in_with_password.side_effect = RuntimeError("Invalid login credentials")

        with pytest.raises(AuthError, match="Invalid login credentials"):
            AuthService(client).sign_in("analyst@example.com", "wrong")

    def test_sign_in_without_user(self, client):
        client.auth.sign_in_with_password.return_value = Mock(user=None)

        with pytest.raises(AuthError):
            AuthService(client).sign_in("analyst@example.com", "secret")

    def test_sign_out_failure(self, client):
        client.auth.sign_out.side_effect = RuntimeError("network down")

        with pytest.raises(AuthError, match="network down"):
            AuthService(client).sign_out()

    def test_current_user_none_on_error(self, client):
        client.auth.get_user.side_effect = RuntimeError("no session")
        assert AuthService(client).get_current_user() is None

    def test_from_config_requires_credentials(self):
        config = Mock()
        config.get_supabase_url.return_value = None
        config.get_supabase_key.return_value = None

        with pytest.raises(AuthError):
            AuthService.from_config(config)

    def test_from_config_creates_client(self):
        config = Mock()
        config.get_supabase_url.return_value = "https://project.supabase.co"
        config.get_supabase_key.return_value = "anon-key"

        with patch("supabase.create_client") as create_client:
            service = AuthService.from_config(config)

        create_client.assert_called_once_with("https://project.supabase.co", "anon-key")
        assert service.client is create_client.return_value
