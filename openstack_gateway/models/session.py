from __future__ import annotations

import enum
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional


class ServiceName(str, enum.Enum):
    """Keystone 카탈로그의 service type 값."""

    COMPUTE = "compute"
    IMAGE = "image"
    METERING = "rating"  # CloudKitty (사용량 과금)
    TELEMETRY = "metric"  # Gnocchi


def _empty_urls() -> Mapping[ServiceName, Optional[str]]:
    return MappingProxyType({name: None for name in ServiceName})


@dataclass(frozen=True)
class Session:
    """토큰 + 서비스별 base URL. 부트스트랩 이후에는 읽기 전용."""

    token: Optional[str] = None
    service_urls: Mapping[ServiceName, Optional[str]] = field(default_factory=_empty_urls)

    @classmethod
    def unauthenticated(cls) -> "Session":
        return cls()

    @classmethod
    def authenticated(cls, token: str, service_urls: Mapping[ServiceName, Optional[str]]) -> "Session":
        urls = {name: service_urls.get(name) for name in ServiceName}
        return cls(token=token, service_urls=MappingProxyType(urls))

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    def url_for(self, service: ServiceName) -> Optional[str]:
        return self.service_urls.get(service)
