# tests/conftest.py

"""
pytest 설정 및 공통 fixture.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest

# 프로젝트 루트를 PYTHONPATH에 추가
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


def _key(method: str, url: str) -> Tuple[str, str]:
    return method.upper(), url.split("?")[0].rstrip("/")


class FakeOpenStack:
    """httpx.MockTransport 용 가짜 OpenStack. 등록되지 않은 URL 은 404."""

    def __init__(self):
        self.routes: Dict[Tuple[str, str], Any] = {}
        self.requests: List[httpx.Request] = []

    def add(
        self,
        method: str,
        url: str,
        *,
        status: int = 200,
        json: Any = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self.routes[_key(method, url)] = (status, json, headers)

    def fail(self, method: str, url: str, exc: Exception) -> None:
        self.routes[_key(method, url)] = exc

    def calls(self, method: str, url: str) -> List[httpx.Request]:
        key = _key(method, url)
        return [r for r in self.requests if _key(r.method, str(r.url)) == key]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(_key(request.method, str(request.url)))
        if route is None:
            return httpx.Response(404, json={"error": "not found"})
        if isinstance(route, Exception):
            raise route
        status, body, headers = route
        return httpx.Response(status, json=body, headers=headers)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handle))


@pytest.fixture
def fake_api() -> FakeOpenStack:
    return FakeOpenStack()


AUTH_URL = "https://keystone.example.com:5000"
TOKEN_URL = f"{AUTH_URL}/v3/auth/tokens"


@pytest.fixture
def clouds_config() -> Dict[str, Any]:
    """네 가지 auth_type 을 모두 가진 clouds.yaml 내용."""
    return {
        "clouds": {
            "openstack": {
                "auth_type": "v3applicationcredential",
                "identity_api_version": 3,
                "auth": {
                    "auth_url": AUTH_URL,
                    "application_credential_id": "app-id",
                    "application_credential_secret": "app-secret",
                    "username": "should-not-be-read",
                },
            },
            "with-password": {
                "auth_type": "v3password",
                "identity_api_version": "3",
                "auth": {
                    "auth_url": AUTH_URL,
                    "project_name": "demo",
                    "project_domain_name": "Default",
                    "user_domain_name": "Default",
                    "username": "alice",
                    "password": "s3cret",
                    "application_credential_secret": "should-not-be-read",
                },
            },
            "with-token": {
                "auth_type": "v3token",
                "identity_api_version": 3,
                "auth": {
                    "auth_url": AUTH_URL,
                    "project_name": "demo",
                    "project_domain_name": "Default",
                    "token": "gAAAA-existing",
                },
            },
            "with-totp": {
                "auth_type": "V3TOTP",
                "identity_api_version": 3,
                "auth": {
                    "auth_url": AUTH_URL,
                    "project_name": "demo",
                    "username": "alice",
                    "passcode": "123456",
                },
            },
        }
    }


def make_catalog(**urls: str) -> Dict[str, Any]:
    """service type -> public url 로 Keystone 토큰 응답 body 를 만든다."""
    catalog = []
    for service_type, url in urls.items():
        catalog.append(
            {
                "type": service_type,
                "endpoints": [
                    {"id": f"{service_type}-int", "interface": "internal", "region_id": "RegionOne",
                     "url": "http://10.0.0.1/internal", "region": "RegionOne"},
                    {"id": f"{service_type}-pub", "interface": "public", "region_id": "RegionOne",
                     "url": url, "region": "RegionOne"},
                ],
            }
        )
    return {
        "token": {
            "catalog": catalog,
            "application_credential": {"id": "app-id", "name": "gateway", "restricted": True},
        }
    }


def make_versions(*versions: Tuple[str, str, str]) -> Dict[str, Any]:
    """(id, status, self href) 튜플들로 버전 디스커버리 응답을 만든다."""
    return {
        "versions": [
            {"id": vid, "status": status, "links": [{"rel": "self", "href": href}]}
            for vid, status, href in versions
        ]
    }


@pytest.fixture
def catalog_factory():
    return make_catalog


@pytest.fixture
def versions_factory():
    return make_versions


@pytest.fixture
def token_url() -> str:
    return TOKEN_URL
