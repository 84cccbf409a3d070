# openstack_gateway/core/openstack/client.py
"""
OpenStack service client.

부트스트랩된 Session 과 GenericInvoker 로 서비스별 조회 API 를 제공한다.
base URL 이나 토큰이 없으면 예외 대신 None 을 돌려준다.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import httpx

from openstack_gateway.config.clouds import load_clouds_config
from openstack_gateway.core.errors import ConfigurationError
from openstack_gateway.core.openstack.bootstrap import BootstrapResult, BootstrapState, SessionBootstrapper
from openstack_gateway.core.openstack.invoker import GenericInvoker, HTTPMethod
from openstack_gateway.core.schema import Schema
from openstack_gateway.models.compute import (
    LimitResponse,
    ServerResponse,
    ServersResponse,
    TenantUsageRequest,
    TenantUsageResponse,
)
from openstack_gateway.models.image import ImagesResponse
from openstack_gateway.models.metric import (
    MetricMeasureResponse,
    MetricResponse,
    MetricsResponse,
)
from openstack_gateway.models.session import ServiceName, Session

logger = logging.getLogger(__name__)

SERVERS = Schema(ServersResponse)
SERVER = Schema(ServerResponse)
IMAGES = Schema(ImagesResponse)
METRICS = Schema(MetricsResponse, name="MetricsResponse")
METRIC = Schema(MetricResponse)
METRIC_MEASURE = Schema(MetricMeasureResponse, name="MetricMeasureResponse")
LIMITS = Schema(LimitResponse)
TENANT_USAGE_REQUEST = Schema(TenantUsageRequest)
TENANT_USAGE = Schema(TenantUsageResponse)


class OpenStackClient:
    """Usage:
        client = await create_client("clouds.yaml", "openstack", http)
        servers = await client.get_servers()
    """

    def __init__(self, session: Session, invoker: GenericInvoker):
        self.session = session
        self.invoker = invoker

    def is_connected(self) -> bool:
        return self.session.is_authenticated

    def _base_url(self, service: ServiceName) -> Optional[str]:
        url = self.session.url_for(service)
        if not url:
            logger.error("No public %s url set", service.value)
            return None
        if not self.session.token:
            logger.error("No token set")
            return None
        return url

    async def _get(self, url: str, schema: Schema[Any], **kwargs: Any) -> Any:
        return await self.invoker.invoke(
            HTTPMethod.GET,
            url,
            token=self.session.token,
            response_schema=schema,
            **kwargs,
        )

    async def get_servers(self) -> Optional[Dict[str, Any]]:
        """Config 파일의 project / user 범위 서버 목록."""
        base = self._base_url(ServiceName.COMPUTE)
        if base is None:
            return None
        return await self._get(f"{base}/servers", SERVERS)

    async def get_server(self, server_id: str) -> Optional[Dict[str, Any]]:
        base = self._base_url(ServiceName.COMPUTE)
        if base is None:
            return None
        return await self._get(f"{base}/servers/{server_id}", SERVER)

    async def get_images(self) -> Optional[Dict[str, Any]]:
        base = self._base_url(ServiceName.IMAGE)
        if base is None:
            return None
        return await self._get(f"{base}/images", IMAGES)

    async def get_metrics(self, limit: Optional[int] = None, start: Optional[int] = None) -> Optional[Any]:
        base = self._base_url(ServiceName.TELEMETRY)
        if base is None:
            return None
        query = {k: v for k, v in (("start", start), ("limit", limit)) if v is not None}
        return await self._get(f"{base}/metric", METRICS, payload=query or None)

    async def get_metric(self, metric_id: str) -> Optional[Dict[str, Any]]:
        base = self._base_url(ServiceName.TELEMETRY)
        if base is None:
            return None
        return await self._get(f"{base}/metric/{metric_id}", METRIC)

    # See the documentation: https://gnocchi.osci.io/rest.html#filter
    async def get_metric_measure(
        self,
        metric_id: str,
        granularity: Optional[int] = None,
        resample: Optional[int] = None,
        aggregation: Optional[str] = None,
    ) -> Optional[Any]:
        base = self._base_url(ServiceName.TELEMETRY)
        if base is None:
            return None
        query = {
            k: v
            for k, v in (("granularity", granularity), ("resample", resample), ("aggregation", aggregation))
            if v is not None
        }
        return await self._get(f"{base}/metric/{metric_id}/measures", METRIC_MEASURE, payload=query or None)

    async def get_limits(self) -> Optional[Dict[str, Any]]:
        base = self._base_url(ServiceName.COMPUTE)
        if base is None:
            return None
        return await self._get(f"{base}/limits", LIMITS)

    # https://docs.openstack.org/api-ref/compute/#list-tenant-usage-statistics-for-all-tenants
    async def get_tenant_usage(
        self, request: Union[TenantUsageRequest, Dict[str, Any], None] = None
    ) -> Optional[Dict[str, Any]]:
        base = self._base_url(ServiceName.COMPUTE)
        if base is None:
            return None
        if isinstance(request, TenantUsageRequest):
            request = request.model_dump(exclude_none=True)
        return await self._get(
            f"{base}/os-simple-tenant-usage",
            TENANT_USAGE,
            request_schema=TENANT_USAGE_REQUEST,
            payload=request or {},
        )


async def bootstrap_from_file(
    clouds_path: Union[str, Path], cloud_name: str, invoker: GenericInvoker
) -> BootstrapResult:
    """clouds.yaml 을 읽어서 부트스트랩까지 수행한다. 파일 오류도 FAILED 결과로 돌려준다."""
    try:
        raw_config = load_clouds_config(clouds_path)
    except ConfigurationError as e:
        logger.error("Error reading or parsing %s: %s", clouds_path, e)
        return BootstrapResult(state=BootstrapState.FAILED, error=e)
    return await SessionBootstrapper(invoker).bootstrap(raw_config, cloud_name)


async def create_client(
    clouds_path: Union[str, Path], cloud_name: str, http: httpx.AsyncClient
) -> Optional[OpenStackClient]:
    """clouds.yaml 로 인증까지 마친 클라이언트. 연결에 실패하면 None."""
    invoker = GenericInvoker(http)
    result = await bootstrap_from_file(clouds_path, cloud_name, invoker)
    client = OpenStackClient(result.session, invoker)
    if not client.is_connected():
        return None
    return client
