# openstack_gateway/routes/servers.py
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException

from openstack_gateway.core.openstack.client import OpenStackClient
from openstack_gateway.routes.deps import get_openstack_client

router = APIRouter()


@router.get("")
async def list_servers(client: OpenStackClient = Depends(get_openstack_client)) -> List[Dict[str, Any]]:
    """서버 목록 (id, name 만)."""
    response = await client.get_servers()
    if not response:
        raise HTTPException(status_code=500, detail="Internal Server Error")
    return [{"id": s.get("id"), "name": s.get("name")} for s in response.get("servers", [])]


@router.get("/{server_id}")
async def get_server(server_id: str, client: OpenStackClient = Depends(get_openstack_client)) -> Dict[str, Any]:
    response = await client.get_server(server_id)
    if not response:
        raise HTTPException(status_code=500, detail="Internal Server Error")
    return response
