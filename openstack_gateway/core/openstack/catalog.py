"""
Service catalog resolver module.

역할:
- Keystone 토큰 응답의 catalog 에서 서비스별 public endpoint 를 찾아
  바로 호출 가능한 base URL(API 버전 경로 포함)로 만든다.
- URL 에 버전 경로(/v2.1 등)가 없으면 그 URL 로 버전 디스커버리 GET 을 보내
  status == CURRENT 인 버전의 self 링크를 사용한다.

핵심 개념:
- 서비스별 해석은 서로 독립적이며 asyncio.gather 로 동시에 실행한다.
- 한 서비스의 실패(카탈로그 누락, 디스커버리 오류, CURRENT 없음)는 그 서비스만 None 이 된다.
- CURRENT 가 여러 개면 업스트림이 준 순서대로 첫 번째를 쓴다 (재정렬하지 않음).
"""

from __future__ import annotations

import asyncio
import logging
import re
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import urlparse

from pydantic import ValidationError

from openstack_gateway.core.errors import GatewayError
from openstack_gateway.core.openstack.invoker import GenericInvoker, HTTPMethod, remove_trailing_slash
from openstack_gateway.core.schema import Schema
from openstack_gateway.models.identity import CatalogEndpoint, ServiceCatalogEntry, VersionsResponse
from openstack_gateway.models.session import ServiceName

logger = logging.getLogger(__name__)

# 경로 어딘가에 /v2, /v2.1, /v3.0/ 같은 세그먼트가 있는지
VERSION_PATH_RE = re.compile(r"/v\d+(?:\.\d+)*(?:/|$)")

VERSIONS_SCHEMA: Schema[VersionsResponse] = Schema(VersionsResponse)


def has_version_path(url: str) -> bool:
    return bool(VERSION_PATH_RE.search(urlparse(url).path))


def parse_catalog(auth_body: Any) -> List[ServiceCatalogEntry]:
    """토큰 응답 body 에서 catalog 만 뽑아낸다. 잘못된 endpoint 는 건너뛴다."""
    try:
        raw_catalog = auth_body["token"]["catalog"]
    except (KeyError, TypeError):
        logger.warning("Token response has no catalog")
        return []
    if not isinstance(raw_catalog, list):
        return []

    entries: List[ServiceCatalogEntry] = []
    for raw_entry in raw_catalog:
        if not isinstance(raw_entry, Mapping) or not isinstance(raw_entry.get("type"), str):
            continue
        endpoints: List[CatalogEndpoint] = []
        for raw_endpoint in raw_entry.get("endpoints") or []:
            try:
                endpoints.append(CatalogEndpoint.model_validate(raw_endpoint))
            except ValidationError:
                logger.debug("Skipping malformed endpoint in %s catalog entry", raw_entry["type"])
        entries.append(ServiceCatalogEntry(type=raw_entry["type"], endpoints=endpoints))
    return entries


def find_public_url(catalog: List[ServiceCatalogEntry], service: ServiceName) -> Optional[str]:
    entry = next((c for c in catalog if c.type == service.value), None)
    if entry is None:
        return None
    endpoint = next((e for e in entry.endpoints if e.interface == "public"), None)
    return endpoint.url if endpoint else None


def select_current_href(versions_body: Any) -> Optional[str]:
    """버전 목록에서 첫 번째 CURRENT 버전의 self 링크를 고른다."""
    if not isinstance(versions_body, Mapping):
        return None
    versions = versions_body.get("versions")
    if not isinstance(versions, list):
        return None

    current = next(
        (v for v in versions if isinstance(v, Mapping) and v.get("status") == "CURRENT"),
        None,
    )
    if current is None:
        return None
    for link in current.get("links") or []:
        if isinstance(link, Mapping) and link.get("rel") == "self" and link.get("href"):
            return str(link["href"])
    return None


class ServiceCatalogResolver:
    def __init__(self, invoker: GenericInvoker):
        self.invoker = invoker

    async def resolve(self, auth_body: Any, token: Optional[str]) -> Dict[ServiceName, Optional[str]]:
        """모든 ServiceName 에 대해 base URL 을 동시에 해석한다."""
        catalog = parse_catalog(auth_body)
        services = list(ServiceName)
        results = await asyncio.gather(
            *(self._resolve_one(catalog, service, token) for service in services),
            return_exceptions=True,
        )

        urls: Dict[ServiceName, Optional[str]] = {}
        for service, result in zip(services, results):
            if isinstance(result, BaseException):
                logger.error("Resolving %s endpoint failed: %r", service.value, result)
                urls[service] = None
            else:
                urls[service] = result
        return urls

    async def _resolve_one(
        self,
        catalog: List[ServiceCatalogEntry],
        service: ServiceName,
        token: Optional[str],
    ) -> Optional[str]:
        url = find_public_url(catalog, service)
        if not url:
            logger.info("No public %s endpoint in catalog", service.value)
            return None

        if has_version_path(url):
            return remove_trailing_slash(url)

        # 버전 경로가 없으면 디스커버리 호출로 CURRENT 버전 URL 을 알아낸다
        try:
            body = await self.invoker.invoke(
                HTTPMethod.GET,
                url,
                token=token,
                response_schema=VERSIONS_SCHEMA,
            )
        except GatewayError as e:
            logger.warning("Version discovery failed for %s (%s): %s", service.value, url, e)
            return None

        href = select_current_href(body)
        if href is None:
            logger.warning("No CURRENT version with a self link for %s (%s)", service.value, url)
            return None
        return remove_trailing_slash(href)
