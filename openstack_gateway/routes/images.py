from fastapi import APIRouter, Depends

from openstack_gateway.core.openstack.client import OpenStackClient
from openstack_gateway.routes.deps import get_openstack_client

router = APIRouter()


@router.get("")
async def list_images(client: OpenStackClient = Depends(get_openstack_client)):
    return await client.get_images()
