from fastapi import APIRouter, Depends

from openstack_gateway.core.openstack.client import OpenStackClient
from openstack_gateway.routes.deps import get_openstack_client

router = APIRouter()


@router.get("")
async def get_limits(client: OpenStackClient = Depends(get_openstack_client)):
    """프로젝트의 compute limits."""
    return await client.get_limits()
