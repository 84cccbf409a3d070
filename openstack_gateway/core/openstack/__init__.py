"""
OpenStack core package.
인증 부트스트랩, 서비스 카탈로그 해석, 스키마 검증 호출기
"""

from .bootstrap import BootstrapResult, BootstrapState, SessionBootstrapper
from .catalog import ServiceCatalogResolver
from .client import OpenStackClient, create_client
from .credentials import resolve_credential
from .invoker import GenericInvoker, HTTPMethod

__all__ = [
    "BootstrapResult",
    "BootstrapState",
    "SessionBootstrapper",
    "ServiceCatalogResolver",
    "OpenStackClient",
    "create_client",
    "resolve_credential",
    "GenericInvoker",
    "HTTPMethod",
]
