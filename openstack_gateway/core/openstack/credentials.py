"""
Credential resolver module.

역할:
- clouds.yaml 에서 읽은 raw dict 중 cloud_name 항목을 골라
  auth_type 별 CloudCredential(불변 모델) 하나로 변환한다.
- 선택된 auth_type 의 필드만 읽고, 다른 방식의 필드는 건드리지 않는다.
- 선택된 방식 안의 선택 필드가 비어 있으면 "" 로 채운다 (설정 로딩을 막지 않음).

실패는 세 가지로 구분된다:
    CloudNotFoundError / MissingAuthTypeError / UnsupportedAuthTypeError
    (모두 ConfigurationError 하위 클래스)
"""

import logging
from typing import Any, Dict, Mapping, Type

from pydantic import ValidationError

from openstack_gateway.core.errors import (
    CloudNotFoundError,
    ConfigurationError,
    MissingAuthTypeError,
    UnsupportedAuthTypeError,
)
from openstack_gateway.models.clouds import (
    ApplicationCredential,
    BaseCredential,
    CloudCredential,
    PasswordCredential,
    RawCloud,
    TokenCredential,
    TotpCredential,
)

logger = logging.getLogger(__name__)

_VARIANTS: Dict[str, Type[BaseCredential]] = {
    "v3totp": TotpCredential,
    "v3token": TokenCredential,
    "v3applicationcredential": ApplicationCredential,
    "v3password": PasswordCredential,
}

_COMMON_FIELDS = {"auth_type", "auth_url", "identity_api_version"}


def normalize_identity_version(raw_version: Any) -> str:
    """3 / "3" / 3.0 / "v3" -> "v3"."""
    version = str(raw_version).strip()
    if version.lower().startswith("v"):
        version = version[1:]
    if version.endswith(".0"):
        version = version[:-2]
    return f"v{version}"


def resolve_credential(raw_config: Mapping[str, Any], cloud_name: str) -> CloudCredential:
    """clouds.yaml dict 에서 cloud_name 항목을 CloudCredential 로 변환한다.

    Raises
    ------
    CloudNotFoundError
        clouds 아래에 cloud_name 항목이 없을 때
    MissingAuthTypeError
        항목은 있지만 auth_type 이 비어 있을 때
    UnsupportedAuthTypeError
        지원하지 않는 auth_type 일 때
    """
    clouds = raw_config.get("clouds") if isinstance(raw_config, Mapping) else None
    if not isinstance(clouds, Mapping) or not isinstance(clouds.get(cloud_name), Mapping):
        raise CloudNotFoundError(cloud_name)

    entry = clouds[cloud_name]
    if not entry.get("auth_type"):
        raise MissingAuthTypeError(cloud_name)

    auth_type = str(entry["auth_type"]).lower()
    variant = _VARIANTS.get(auth_type)
    if variant is None:
        raise UnsupportedAuthTypeError(auth_type)

    # 선택된 방식에 선언된 필드만 검증한다 (다른 방식의 필드는 읽지 않음)
    own_fields = [name for name in variant.model_fields if name not in _COMMON_FIELDS]
    auth = entry.get("auth")
    if isinstance(auth, Mapping):
        auth = {k: v for k, v in auth.items() if k == "auth_url" or k in own_fields}

    try:
        raw = RawCloud.model_validate({**entry, "auth": auth})
    except ValidationError as e:
        raise ConfigurationError(f"Invalid cloud configuration '{cloud_name}': {e}")

    fields = {name: getattr(raw.auth, name) or "" for name in own_fields}
    credential = variant(
        auth_url=raw.auth.auth_url.rstrip("/"),
        identity_api_version=normalize_identity_version(raw.identity_api_version),
        **fields,
    )
    logger.debug("Resolved %s credential for cloud '%s'", auth_type, cloud_name)
    return credential
