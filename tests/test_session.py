"""Tests for CyberVidya authentication and requests."""

from unittest.mock import MagicMock

import pytest
import requests

from attendance_bot.auth.cybervidya_session import (
    CyberVidyaAuthError,
    CyberVidyaError,
    CyberVidyaSession,
    SessionExpiredError,
)
from attendance_bot.scrapers.courses import CourseScraper


def response(status_code=200, payload=None) -> MagicMock:
    resp = MagicMock(status_code=status_code)
    resp.json.return_value = payload if payload is not None else {}
    return resp


@pytest.fixture
def portal(settings) -> CyberVidyaSession:
    session = CyberVidyaSession(settings)
    session.session = MagicMock()
    session.session.headers = {}
    return session


def login_ok(portal: CyberVidyaSession) -> None:
    portal.session.post.return_value = response(
        payload={"data": {"auth_pref": "GlobalEducation ", "token": "tok123"}}
    )
    portal.login()


class TestLogin:
    """Tests for CyberVidyaSession.login."""

    def test_login_sets_authorization(self, portal):
        login_ok(portal)

        assert portal.is_authenticated
        assert portal.session.headers["Authorization"] == "GlobalEducation tok123"
        call = portal.session.post.call_args
        assert call.args[0] == "https://portal.example.test/api/auth/login"
        assert call.kwargs["json"] == {"userName": "2100290100001", "password": "secret"}

    def test_login_network_failure(self, portal):
        portal.session.post.side_effect = requests.exceptions.ConnectionError("down")

        with pytest.raises(CyberVidyaAuthError):
            portal.login()
        assert not portal.is_authenticated

    def test_login_without_token(self, portal):
        portal.session.post.return_value = response(payload={"data": None, "message": "Invalid"})

        with pytest.raises(CyberVidyaAuthError):
            portal.login()

    def test_context_manager_logs_in_and_out(self, portal):
        portal.session.post.return_value = response(
            payload={"data": {"auth_pref": "Bearer ", "token": "t"}}
        )

        with portal as active:
            assert active.is_authenticated

        assert not portal.is_authenticated
        assert "Authorization" not in portal.session.headers


class TestGetJson:
    """Tests for CyberVidyaSession.get_json."""

    def test_requires_login(self, portal):
        with pytest.raises(CyberVidyaAuthError):
            portal.get_json("/api/student/dashboard/registered-courses")

    def test_returns_payload(self, portal):
        login_ok(portal)
        portal.session.get.return_value = response(payload={"data": []})

        assert portal.get_json("/api/student/dashboard/registered-courses") == {"data": []}
        url = portal.session.get.call_args.args[0]
        assert url == "https://portal.example.test/api/student/dashboard/registered-courses"

    def test_unauthorized_is_session_expired(self, portal):
        login_ok(portal)
        portal.session.get.return_value = response(status_code=401)

        with pytest.raises(SessionExpiredError):
            portal.get_json("/api/student/dashboard/registered-courses")

    def test_request_failure(self, portal):
        login_ok(portal)
        portal.session.get.side_effect = requests.exceptions.Timeout()

        with pytest.raises(CyberVidyaError):
            portal.get_json("/api/student/dashboard/registered-courses")


class TestSubPathPortal:
    """Portals served below a path prefix."""

    def test_login_and_fetch_keep_the_prefix(self, settings):
        prefixed = settings.model_copy(
            update={"cybervidya_base_url": "https://erp.example.test/kiet"}
        )
        portal = CyberVidyaSession(prefixed)
        portal.session = MagicMock()
        portal.session.headers = {}
        login_ok(portal)
        portal.session.get.return_value = response(payload={"data": []})

        CourseScraper(portal).scrape()

        assert portal.session.post.call_args.args[0] == (
            "https://erp.example.test/kiet/api/auth/login"
        )
        assert portal.session.get.call_args.args[0] == (
            "https://erp.example.test/kiet/api/student/dashboard/registered-courses"
        )
