# Nova(compute) API 응답 스키마

from __future__ import annotations

from pydantic import BaseModel
from typing import Any, Dict, List, Literal, Optional
from datetime import datetime


class ServerLink(BaseModel):
    rel: Literal["self", "bookmark"]
    href: str


class ServerSummary(BaseModel):
    id: str
    name: str
    links: List[ServerLink] = []


class ServersResponse(BaseModel):
    servers: List[ServerSummary]


class ServerDetail(BaseModel):
    id: str
    name: str
    status: str
    tenant_id: str
    user_id: str
    image: Any  # 볼륨 부팅이면 "" , 아니면 {"id": ..., "links": [...]}
    flavor: Dict[str, Any]
    created: datetime
    updated: datetime


class ServerResponse(BaseModel):
    server: ServerDetail


class AbsoluteLimits(BaseModel):
    maxTotalInstances: Optional[int] = None
    maxTotalCores: Optional[int] = None
    maxTotalRAMSize: Optional[int] = None
    maxServerMeta: Optional[int] = None
    maxImageMeta: Optional[int] = None
    maxPersonality: Optional[int] = None
    maxPersonalitySize: Optional[int] = None
    maxTotalKeypairs: Optional[int] = None
    maxServerGroups: Optional[int] = None
    maxServerGroupMembers: Optional[int] = None
    maxTotalFloatingIps: Optional[int] = None
    maxSecurityGroups: Optional[int] = None
    maxSecurityGroupRules: Optional[int] = None
    totalRAMUsed: Optional[int] = None
    totalCoresUsed: Optional[int] = None
    totalInstancesUsed: Optional[int] = None
    totalFloatingIpsUsed: Optional[int] = None
    totalSecurityGroupsUsed: Optional[int] = None
    totalServerGroupsUsed: Optional[int] = None


class Limits(BaseModel):
    rate: List[Any] = []
    absolute: AbsoluteLimits


class LimitResponse(BaseModel):
    limits: Limits


# https://docs.openstack.org/api-ref/compute/#list-tenant-usage-statistics-for-all-tenants
class TenantUsageRequest(BaseModel):
    detailed: Optional[int] = None
    start: Optional[str] = None
    end: Optional[str] = None
    limit: Optional[int] = None
    marker: Optional[str] = None


class ServerUsage(BaseModel):
    ended_at: Optional[str] = None
    flavor: str
    hours: float
    instance_id: str
    local_gb: float
    memory_mb: float
    name: str
    started_at: str
    state: str
    tenant_id: str
    uptime: float
    vcpus: float


class TenantUsage(BaseModel):
    start: str
    stop: str
    tenant_id: str
    total_hours: float
    total_local_gb_usage: float
    total_memory_mb_usage: float
    total_vcpus_usage: float
    server_usages: Optional[List[ServerUsage]] = None


class TenantUsageLink(BaseModel):
    href: str
    rel: str


class TenantUsageResponse(BaseModel):
    tenant_usages: List[TenantUsage]
    tenant_usages_links: List[TenantUsageLink] = []
