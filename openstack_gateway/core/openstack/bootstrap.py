"""
Session bootstrapper module.

역할:
- CredentialResolver -> Keystone 토큰 발급 -> ServiceCatalogResolver 순서로
  사용 가능한 Session(토큰 + 서비스별 base URL)을 만든다.

상태 전이:
    UNAUTHENTICATED -> AUTHENTICATING -> AUTHENTICATED | FAILED
    UNAUTHENTICATED -> FAILED                       (설정 오류)

- 설정 오류면 네트워크 호출 없이 바로 FAILED (ConfigurationError).
- Keystone 응답이 201 + X-Subject-Token 이 아니면 FAILED (AuthenticationError).
- FAILED / AUTHENTICATED 는 종료 상태. 재시도나 토큰 갱신은 하지 않는다.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional

import httpx

from openstack_gateway.core.errors import AuthenticationError, ConfigurationError, GatewayError
from openstack_gateway.core.openstack.catalog import ServiceCatalogResolver
from openstack_gateway.core.openstack.credentials import resolve_credential
from openstack_gateway.core.openstack.invoker import GenericInvoker, report_schema_drift
from openstack_gateway.core.schema import Schema
from openstack_gateway.models.clouds import ApplicationCredential, BaseCredential
from openstack_gateway.models.identity import (
    ApplicationCredentialSecret,
    AuthIdentity,
    AuthRequest,
    AuthResponse,
    AuthScope,
)
from openstack_gateway.models.session import Session

logger = logging.getLogger(__name__)

SUBJECT_TOKEN_HEADER = "X-Subject-Token"
TOKEN_CREATED_STATUS = 201

AUTH_RESPONSE_SCHEMA: Schema[AuthResponse] = Schema(AuthResponse)


class BootstrapState(str, enum.Enum):
    UNAUTHENTICATED = "unauthenticated"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"
    FAILED = "failed"


@dataclass(frozen=True)
class BootstrapResult:
    state: BootstrapState
    session: Session = field(default_factory=Session.unauthenticated)
    error: Optional[GatewayError] = None

    @property
    def ok(self) -> bool:
        return self.state is BootstrapState.AUTHENTICATED

    def raise_for_failure(self) -> Session:
        if self.error is not None:
            raise self.error
        return self.session


def build_auth_request(credential: BaseCredential) -> AuthRequest:
    """Keystone 인증 요청 body.

    현재는 application_credential 방식만 보낸다. 다른 auth_type 이면 id/secret 이
    빈 문자열로 나가고 Keystone 이 401 을 돌려준다.
    """
    if isinstance(credential, ApplicationCredential):
        secret = ApplicationCredentialSecret(
            id=credential.application_credential_id,
            secret=credential.application_credential_secret,
        )
    else:
        secret = ApplicationCredentialSecret(id="", secret="")

    return AuthRequest(
        auth=AuthScope(
            identity=AuthIdentity(methods=["application_credential"], application_credential=secret)
        )
    )


def token_url(credential: BaseCredential) -> str:
    return f"{credential.auth_url}/{credential.identity_api_version}/auth/tokens"


def _safe_json(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text


class SessionBootstrapper:
    def __init__(self, invoker: GenericInvoker):
        self.invoker = invoker
        self.catalog_resolver = ServiceCatalogResolver(invoker)
        self.state = BootstrapState.UNAUTHENTICATED

    def _fail(self, error: GatewayError) -> BootstrapResult:
        self.state = BootstrapState.FAILED
        logger.error("Bootstrap failed: %s", error)
        return BootstrapResult(state=self.state, error=error)

    async def bootstrap(self, raw_config: Mapping[str, Any], cloud_name: str) -> BootstrapResult:
        """토큰을 발급받고 서비스 URL 을 해석한다. 오류는 raise 하지 않고 결과에 담는다."""
        try:
            credential = resolve_credential(raw_config, cloud_name)
        except ConfigurationError as e:
            return self._fail(e)
        self.state = BootstrapState.AUTHENTICATING
        logger.info("Configuration successfully loaded (cloud=%s, auth_type=%s)", cloud_name, credential.auth_type)

        url = token_url(credential)
        body = build_auth_request(credential).model_dump(exclude_none=True)
        try:
            response = await self.invoker.http.post(url, json=body)
        except httpx.HTTPError as e:
            return self._fail(AuthenticationError(f"Error generating token: {e}"))

        token = response.headers.get(SUBJECT_TOKEN_HEADER)
        auth_body = _safe_json(response)
        if response.status_code != TOKEN_CREATED_STATUS or not token:
            return self._fail(
                AuthenticationError(
                    f"Error generating token: HTTP {response.status_code}"
                    + ("" if token else " (no X-Subject-Token header)"),
                    status_code=response.status_code,
                    body=auth_body,
                )
            )
        logger.info("Token successfully generated")

        report_schema_drift(AUTH_RESPONSE_SCHEMA, auth_body, url)
        service_urls = await self.catalog_resolver.resolve(auth_body, token)
        logger.info("Public URLs: %s", {k.value: v for k, v in service_urls.items()})

        self.state = BootstrapState.AUTHENTICATED
        return BootstrapResult(state=self.state, session=Session.authenticated(token, service_urls))
