# openstack_gateway/core/exporter.py
"""
InfluxDB exporter.

역할:
- 실행 중인 게이트웨이(OS_URL)에서 /limits, /tenants 를 읽어
  vcpu / ram / disk 사용량 point 를 InfluxDB 버킷에 쓴다.
- 같은 measurement 들을 버킷에서 지우는 정리 작업도 제공한다.

point 형태:
    vcpu,max=<maxTotalCores> value=<totalCoresUsed>i
    ram,max=<maxTotalRAMSize> value=<totalRAMUsed>i
    disk value=<실행 중 서버 local_gb 합>i      (Nova 에 디스크 한도가 없어 max 태그 없음)

Usage:
    python -m openstack_gateway.core.exporter write
    python -m openstack_gateway.core.exporter delete
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from typing import Any, List, Mapping, Optional, Sequence, Tuple

import httpx
from influxdb_client import InfluxDBClient, Point, WritePrecision
from influxdb_client.client.write_api import SYNCHRONOUS
from influxdb_client.rest import ApiException

from openstack_gateway.core.errors import ExportError, TransportError, UpstreamError

logger = logging.getLogger(__name__)

MEASUREMENTS = ("vcpu", "ram", "disk")

# 버킷 전체 기간
DELETE_START = "1970-01-01T00:00:00Z"
DELETE_STOP = "2040-10-30T00:00:00Z"


def _point(measurement: str, value: Any, maximum: Any = None) -> Optional[Point]:
    if value is None:
        return None
    point = Point(measurement).field("value", int(value))
    if maximum is not None:
        point = point.tag("max", str(maximum))
    return point


def running_disk_gb(tenant_usage: Any) -> Optional[int]:
    """아직 끝나지 않은(ended_at 없음) 서버들의 local_gb 합."""
    if not isinstance(tenant_usage, Mapping):
        return None
    usages = tenant_usage.get("tenant_usages")
    if not isinstance(usages, list):
        return None
    total = 0.0
    for usage in usages:
        for server in (usage or {}).get("server_usages") or []:
            if not server.get("ended_at"):
                total += float(server.get("local_gb") or 0)
    return int(total)


def usage_points(limits: Any, tenant_usage: Any) -> List[Point]:
    absolute = {}
    if isinstance(limits, Mapping):
        absolute = (limits.get("limits") or {}).get("absolute") or {}

    points = [
        _point("vcpu", absolute.get("totalCoresUsed"), absolute.get("maxTotalCores")),
        _point("ram", absolute.get("totalRAMUsed"), absolute.get("maxTotalRAMSize")),
        _point("disk", running_disk_gb(tenant_usage)),
    ]
    return [p for p in points if p is not None]


class InfluxExporter:
    def __init__(
        self,
        influx: InfluxDBClient,
        http: httpx.AsyncClient,
        gateway_url: str,
        bucket: str,
        org: str,
    ):
        self.influx = influx
        self.http = http
        self.gateway_url = gateway_url.rstrip("/")
        self.bucket = bucket
        self.org = org

    async def _get_json(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        url = f"{self.gateway_url}{path}"
        try:
            response = await self.http.get(url, params=params)
        except httpx.HTTPError as e:
            raise TransportError(f"GET {url} failed: {e}") from e
        if response.status_code >= 300:
            raise UpstreamError(response.status_code, response.text)
        return response.json()

    async def fetch_usage(self) -> Tuple[Any, Any]:
        limits, tenant_usage = await asyncio.gather(
            self._get_json("/limits"),
            self._get_json("/tenants", params={"detailed": 1}),
        )
        return limits, tenant_usage

    async def write_metrics(self) -> int:
        """게이트웨이에서 사용량을 읽어 InfluxDB 에 쓴다. 쓴 point 수를 반환."""
        limits, tenant_usage = await self.fetch_usage()
        points = usage_points(limits, tenant_usage)
        if not points:
            logger.warning("No usage data from %s, nothing written", self.gateway_url)
            return 0

        try:
            write_api = self.influx.write_api(write_options=SYNCHRONOUS)
            write_api.write(bucket=self.bucket, org=self.org, record=points, write_precision=WritePrecision.NS)
        except ApiException as e:
            raise ExportError(f"Writing to bucket '{self.bucket}' failed: {e.reason}", status_code=e.status) from e
        logger.info("Wrote %d points to bucket '%s'", len(points), self.bucket)
        return len(points)

    def delete_measurements(self, measurements: Sequence[str] = MEASUREMENTS) -> None:
        delete_api = self.influx.delete_api()
        for measurement in measurements:
            try:
                delete_api.delete(
                    start=DELETE_START,
                    stop=DELETE_STOP,
                    predicate=f'_measurement="{measurement}"',
                    bucket=self.bucket,
                    org=self.org,
                )
            except ApiException as e:
                raise ExportError(
                    f"Deleting '{measurement}' from bucket '{self.bucket}' failed: {e.reason}",
                    status_code=e.status,
                ) from e
        logger.info("Deleted %s from bucket '%s'", ", ".join(measurements), self.bucket)


async def _run(command: str) -> None:
    from openstack_gateway.config.settings import settings

    with InfluxDBClient(url=settings.INFLUXDB_URL, token=settings.INFLUXDB_TOKEN, org=settings.INFLUXDB_ORG) as influx:
        async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS) as http:
            exporter = InfluxExporter(influx, http, settings.OS_URL, settings.INFLUXDB_BUCKET, settings.INFLUXDB_ORG)
            if command == "write":
                await exporter.write_metrics()
            else:
                exporter.delete_measurements()


def main() -> None:
    ap = argparse.ArgumentParser(description="Export OpenStack usage to InfluxDB")
    ap.add_argument("command", choices=["write", "delete"])
    args = ap.parse_args()

    logging.basicConfig(level=logging.INFO)
    asyncio.run(_run(args.command))


if __name__ == "__main__":  # pragma: no cover
    main()
