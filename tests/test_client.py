# tests/test_client.py

"""
OpenStackClient (서비스별 조회 API) 테스트.
"""

import pytest

from openstack_gateway.core.errors import RequestValidationError, UpstreamError
from openstack_gateway.core.openstack.client import OpenStackClient, create_client
from openstack_gateway.core.openstack.invoker import GenericInvoker
from openstack_gateway.models.compute import TenantUsageRequest
from openstack_gateway.models.session import ServiceName, Session

COMPUTE = "https://compute.example.com/v2.1"
IMAGE = "https://image.example.com/v2"
METRIC = "https://metric.example.com/v1"

CLOUDS_YAML = """
clouds:
  openstack:
    auth_type: v3applicationcredential
    identity_api_version: 3
    auth:
      auth_url: https://keystone.example.com:5000
      application_credential_id: app-id
      application_credential_secret: app-secret
"""


@pytest.fixture
def session():
    return Session.authenticated(
        "tok",
        {ServiceName.COMPUTE: COMPUTE, ServiceName.IMAGE: IMAGE, ServiceName.TELEMETRY: METRIC},
    )


@pytest.fixture
def client(fake_api, session):
    return OpenStackClient(session, GenericInvoker(fake_api.client()))


@pytest.mark.asyncio
async def test_get_servers(fake_api, client):
    servers = {"servers": [{"id": "s1", "name": "web-1", "links": []}]}
    fake_api.add("GET", f"{COMPUTE}/servers", json=servers)

    result = await client.get_servers()

    assert result == servers
    (request,) = fake_api.requests
    assert request.headers["X-Auth-Token"] == "tok"


@pytest.mark.asyncio
async def test_get_servers_without_compute_url_returns_none(fake_api):
    client = OpenStackClient(Session.authenticated("tok", {}), GenericInvoker(fake_api.client()))

    assert await client.get_servers() is None
    assert await client.get_limits() is None
    assert fake_api.requests == []


@pytest.mark.asyncio
async def test_unauthenticated_session_returns_none(fake_api):
    client = OpenStackClient(Session.unauthenticated(), GenericInvoker(fake_api.client()))

    assert not client.is_connected()
    assert await client.get_servers() is None
    assert await client.get_server("s1") is None
    assert await client.get_images() is None
    assert await client.get_metrics() is None
    assert await client.get_metric("m1") is None
    assert await client.get_metric_measure("m1") is None
    assert await client.get_limits() is None
    assert await client.get_tenant_usage() is None
    assert fake_api.requests == []


@pytest.mark.asyncio
async def test_no_rating_url_does_not_affect_others(client):
    assert client.session.url_for(ServiceName.METERING) is None
    assert client.is_connected()


@pytest.mark.asyncio
async def test_get_server(fake_api, client):
    fake_api.add("GET", f"{COMPUTE}/servers/s1", json={"server": {"id": "s1"}})

    result = await client.get_server("s1")

    # 스키마와 다르지만 body 는 그대로 돌려준다
    assert result == {"server": {"id": "s1"}}


@pytest.mark.asyncio
async def test_get_images(fake_api, client):
    fake_api.add("GET", f"{IMAGE}/images", json={"images": []})

    assert await client.get_images() == {"images": []}


@pytest.mark.asyncio
async def test_get_metrics_with_paging(fake_api, client):
    fake_api.add("GET", f"{METRIC}/metric", json=[])

    assert await client.get_metrics(limit=10, start=20) == []

    (request,) = fake_api.requests
    assert request.url.params["limit"] == "10"
    assert request.url.params["start"] == "20"


@pytest.mark.asyncio
async def test_get_metrics_without_paging(fake_api, client):
    fake_api.add("GET", f"{METRIC}/metric", json=[])

    await client.get_metrics()

    (request,) = fake_api.requests
    assert not request.url.params


@pytest.mark.asyncio
async def test_get_metric(fake_api, client):
    fake_api.add("GET", f"{METRIC}/metric/m1", json={"id": "m1"})

    assert await client.get_metric("m1") == {"id": "m1"}


@pytest.mark.asyncio
async def test_get_metric_measure_filters(fake_api, client):
    measures = [["2024-01-01T00:00:00+00:00", 300.0, 0.5]]
    fake_api.add("GET", f"{METRIC}/metric/m1/measures", json=measures)

    result = await client.get_metric_measure("m1", granularity=300, aggregation="mean")

    assert result == measures
    (request,) = fake_api.requests
    assert request.url.params["granularity"] == "300"
    assert request.url.params["aggregation"] == "mean"
    assert "resample" not in request.url.params


@pytest.mark.asyncio
async def test_get_limits(fake_api, client):
    limits = {"limits": {"rate": [], "absolute": {"maxTotalInstances": 10}}}
    fake_api.add("GET", f"{COMPUTE}/limits", json=limits)

    assert await client.get_limits() == limits


@pytest.mark.asyncio
async def test_get_tenant_usage_sends_query(fake_api, client):
    fake_api.add("GET", f"{COMPUTE}/os-simple-tenant-usage", json={"tenant_usages": []})

    result = await client.get_tenant_usage(TenantUsageRequest(detailed=1, limit=5))

    assert result == {"tenant_usages": []}
    (request,) = fake_api.requests
    assert request.url.params["detailed"] == "1"
    assert request.url.params["limit"] == "5"
    assert "marker" not in request.url.params


@pytest.mark.asyncio
async def test_get_tenant_usage_invalid_request(fake_api, client):
    with pytest.raises(RequestValidationError):
        await client.get_tenant_usage({"limit": "lots"})

    assert fake_api.requests == []


@pytest.mark.asyncio
async def test_upstream_error_propagates(fake_api, client):
    fake_api.add("GET", f"{COMPUTE}/servers/missing", status=404, json={"itemNotFound": {}})

    with pytest.raises(UpstreamError) as exc_info:
        await client.get_server("missing")

    assert exc_info.value.status_code == 404
    # 세션은 그대로 사용 가능
    assert client.is_connected()


@pytest.mark.asyncio
async def test_create_client(tmp_path, fake_api, token_url, catalog_factory):
    path = tmp_path / "clouds.yaml"
    path.write_text(CLOUDS_YAML, encoding="utf-8")
    fake_api.add(
        "POST", token_url, status=201,
        json=catalog_factory(compute=f"{COMPUTE}/"), headers={"X-Subject-Token": "T"},
    )

    client = await create_client(path, "openstack", fake_api.client())

    assert client is not None
    assert client.session.token == "T"
    assert client.session.url_for(ServiceName.COMPUTE) == COMPUTE


@pytest.mark.asyncio
async def test_create_client_missing_file(tmp_path, fake_api):
    client = await create_client(tmp_path / "nope.yaml", "openstack", fake_api.client())

    assert client is None
    assert fake_api.requests == []


@pytest.mark.asyncio
async def test_create_client_auth_failure(tmp_path, fake_api, token_url):
    path = tmp_path / "clouds.yaml"
    path.write_text(CLOUDS_YAML, encoding="utf-8")
    fake_api.add("POST", token_url, status=401, json={"error": "unauthorized"})

    assert await create_client(path, "openstack", fake_api.client()) is None


@pytest.mark.asyncio
async def test_get_tenant_usage_accepts_query_dict(fake_api, client):
    fake_api.add("GET", f"{COMPUTE}/os-simple-tenant-usage", json={"tenant_usages": []})

    await client.get_tenant_usage({"detailed": 1, "start": "2024-01-01T00:00:00"})

    (request,) = fake_api.requests
    assert request.url.params["detailed"] == "1"
    assert request.url.params["start"] == "2024-01-01T00:00:00"
