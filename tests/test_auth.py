# tests/test_auth.py
from pagecraft.core.settings import settings
from pagecraft.security.jwt import create_refresh_token
from pagecraft.services import invitation_service

API = settings.API_V1_STR


def _login(client, email, password):
    return client.post(f"{API}/auth/login", json={"email": email, "password": password})


def test_login_and_me(client, editor, user_password):
    r = _login(client, "Editor@Example.com", user_password)
    assert r.status_code == 200
    tokens = r.json()
    assert tokens["token_type"] == "bearer"

    me = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {tokens['access_token']}"})
    assert me.status_code == 200
    assert me.json() == {
        "id": editor.id,
        "email": "editor@example.com",
        "full_name": "Editor",
        "roles": ["editor"],
    }


def test_bad_credentials(client, editor, user_password):
    assert _login(client, "editor@example.com", "wrong-password").status_code == 401
    r = _login(client, "ghost@example.com", user_password)
    assert r.status_code == 401 and r.json()["detail"] == "Invalid credentials"


def test_inactive_user(client, make_user, user_password):
    make_user("gone@example.com", is_active=False)
    r = _login(client, "gone@example.com", user_password)
    assert r.status_code == 403 and r.json()["detail"] == "User inactive"


def test_refresh(client, editor, user_password):
    tokens = _login(client, "editor@example.com", user_password).json()
    r = client.post(f"{API}/auth/refresh", json={"refresh_token": tokens["refresh_token"]})
    assert r.status_code == 200 and r.json()["access_token"]

    # an access token is not a refresh token
    r = client.post(f"{API}/auth/refresh", json={"refresh_token": tokens["access_token"]})
    assert r.status_code == 401
    r = client.post(f"{API}/auth/refresh", json={"refresh_token": create_refresh_token(9999)})
    assert r.status_code == 401 and r.json()["detail"] == "Invalid refresh token"


def test_refresh_token_cannot_authenticate(client, editor, user_password):
    tokens = _login(client, "editor@example.com", user_password).json()
    r = client.get(f"{API}/auth/me", headers={"Authorization": f"Bearer {tokens['refresh_token']}"})
    assert r.status_code == 401


def test_me_requires_token(client):
    r = client.get(f"{API}/auth/me")
    assert r.status_code == 401 and r.json()["detail"] == "Authentication required"
    r = client.get(f"{API}/auth/me", headers={"Authorization": "Bearer garbage"})
    assert r.status_code == 401 and r.json()["detail"] == "Invalid token"


def test_logout(client):
    assert client.post(f"{API}/auth/logout").status_code == 204


def test_accept_invitation_endpoint(client, db, admin):
    inv = invitation_service.invite_user(db, inviter=admin, email="fresh@example.com", role="editor")
    r = client.post(
        f"{API}/auth/accept-invitation",
        json={"token": inv.token, "password": "a-good-password", "full_name": "Fresh Face"},
    )
    assert r.status_code == 200
    assert _login(client, "fresh@example.com", "a-good-password").status_code == 200

    r = client.post(f"{API}/auth/accept-invitation", json={"token": inv.token, "password": "a-good-password"})
    assert r.status_code == 404

    other = invitation_service.invite_user(db, inviter=admin, email="short@example.com", role="editor")
    r = client.post(f"{API}/auth/accept-invitation", json={"token": other.token, "password": "short"})
    assert r.status_code == 400
    assert r.json()["detail"] == "Password must be at least 8 characters"
