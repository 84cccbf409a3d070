# openstack_gateway/routes/metrics.py
from typing import Any, Optional

from fastapi import APIRouter, Depends

from openstack_gateway.core.openstack.client import OpenStackClient
from openstack_gateway.routes.deps import get_openstack_client

router = APIRouter()

DEFAULT_LIMIT = 100
DEFAULT_START = 0


def _safe_int(value: Any, default: Optional[int]) -> Optional[int]:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


@router.get("")
async def list_metrics(
    limit: Optional[str] = None,
    start: Optional[str] = None,
    client: OpenStackClient = Depends(get_openstack_client),
):
    """숫자가 아닌 limit / start 는 기본값(100 / 0)으로 대체한다."""
    return await client.get_metrics(
        limit=_safe_int(limit, DEFAULT_LIMIT),
        start=_safe_int(start, DEFAULT_START),
    )


@router.get("/{metric_id}")
async def get_metric(metric_id: str, client: OpenStackClient = Depends(get_openstack_client)):
    return await client.get_metric(metric_id)


@router.get("/{metric_id}/measure")
async def get_metric_measure(
    metric_id: str,
    granularity: Optional[str] = None,
    resample: Optional[str] = None,
    aggregation: Optional[str] = None,
    client: OpenStackClient = Depends(get_openstack_client),
):
    # 필터는 사용자가 준 값만 Gnocchi 로 넘긴다
    return await client.get_metric_measure(
        metric_id,
        granularity=_safe_int(granularity, None),
        resample=_safe_int(resample, None),
        aggregation=aggregation or None,
    )
