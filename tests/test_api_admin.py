from __future__ import annotations

import pytest
from django.test import Client

from conftest import post_json


@pytest.mark.django_db
def test_status_without_session_is_not_admin(client: Client):
    resp = client.get("/api/admin/status/")
    assert resp.status_code == 200
    assert resp.json() == {"isAdmin": False}


@pytest.mark.django_db
def test_login_wrong_password(client: Client):
    resp = post_json(client, "/api/admin/login/", {"password": "nope"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid admin password"}
    assert client.get("/api/admin/status/").json() == {"isAdmin": False}


@pytest.mark.django_db
def test_login_without_password_field(client: Client):
    resp = post_json(client, "/api/admin/login/", {})
    assert resp.status_code == 401


@pytest.mark.django_db
def test_login_is_visible_immediately(client: Client, settings):
    resp = post_json(client, "/api/admin/login/", {"password": settings.ADMIN_PASSWORD})

    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert resp.json()["isAdmin"] is True
    assert client.get("/api/admin/status/").json() == {"isAdmin": True}


@pytest.mark.django_db
def test_login_issues_new_session_id(client: Client, settings):
    old_key = client.session.session_key

    post_json(client, "/api/admin/login/", {"password": settings.ADMIN_PASSWORD})

    new_key = client.cookies[settings.SESSION_COOKIE_NAME].value
    assert new_key and new_key != old_key


@pytest.mark.django_db
def test_session_cookie_is_http_only(client: Client, settings):
    post_json(client, "/api/admin/login/", {"password": settings.ADMIN_PASSWORD})
    cookie = client.cookies[settings.SESSION_COOKIE_NAME]
    assert cookie["httponly"]
    assert cookie["samesite"] == "Lax"


@pytest.mark.django_db
def test_login_without_server_secret(client: Client, settings):
    settings.ADMIN_PASSWORD = None
    resp = post_json(client, "/api/admin/login/", {"password": "anything"})
    assert resp.status_code == 500
    assert resp.json() == {"error": "Server configuration error"}


@pytest.mark.django_db
def test_logout_flow(admin_client: Client):
    resp = admin_client.post("/api/admin/logout/")
    assert resp.status_code == 200
    assert resp.json()["success"] is True
    assert admin_client.get("/api/admin/status/").json() == {"isAdmin": False}


@pytest.mark.django_db
def test_logout_when_anonymous_succeeds(client: Client):
    resp = client.post("/api/admin/logout/")
    assert resp.status_code == 200
    assert resp.json()["success"] is True
