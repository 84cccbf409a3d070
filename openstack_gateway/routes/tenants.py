# openstack_gateway/routes/tenants.py
from typing import Optional

from fastapi import APIRouter, Depends

from openstack_gateway.core.openstack.client import OpenStackClient
from openstack_gateway.routes.deps import get_openstack_client

router = APIRouter()


@router.get("")
async def tenant_usage(
    detailed: Optional[int] = None,
    start: Optional[str] = None,
    end: Optional[str] = None,
    limit: Optional[int] = None,
    marker: Optional[str] = None,
    client: OpenStackClient = Depends(get_openstack_client),
):
    """프로젝트 tenant 사용량 (os-simple-tenant-usage). 검증은 invoker 의 request schema 가 한다."""
    query = {"detailed": detailed, "start": start, "end": end, "limit": limit, "marker": marker}
    return await client.get_tenant_usage({k: v for k, v in query.items() if v is not None})
