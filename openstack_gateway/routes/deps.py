from fastapi import Request

from openstack_gateway.core.openstack.client import OpenStackClient


def get_openstack_client(request: Request) -> OpenStackClient:
    """startup 에서 만들어 둔 클라이언트 (app.state.openstack_client)."""
    return request.app.state.openstack_client
