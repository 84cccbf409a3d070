from typing import Any, Optional


class GatewayError(RuntimeError):
    """Base error for the gateway core."""
    pass


class ConfigurationError(GatewayError, ValueError):
    """clouds.yaml 설정이 잘못된 경우."""
    pass


class CloudNotFoundError(ConfigurationError):
    """Requested cloud entry is absent from clouds.yaml."""

    def __init__(self, cloud_name: str):
        self.cloud_name = cloud_name
        super().__init__(f"Cloud configuration '{cloud_name}' not found")


class MissingAuthTypeError(ConfigurationError):
    def __init__(self, cloud_name: str):
        self.cloud_name = cloud_name
        super().__init__(f"Cloud configuration '{cloud_name}' is missing auth_type")


class UnsupportedAuthTypeError(ConfigurationError):
    def __init__(self, auth_type: str):
        self.auth_type = auth_type
        super().__init__(f"Unsupported auth_type: {auth_type}")


class AuthenticationError(GatewayError):
    """Keystone 토큰 발급 실패 (non-201, 토큰 헤더 없음, 전송 오류)."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class RequestValidationError(GatewayError, ValueError):
    """Outbound payload does not match its request schema. Nothing was sent."""
    pass


class UpstreamError(GatewayError):
    """OpenStack API 가 300 초과 상태 코드를 돌려준 경우."""

    def __init__(self, status_code: int, body: Any = None):
        self.status_code = status_code
        self.body = body
        super().__init__(f"Upstream returned HTTP {status_code}")


class TransportError(GatewayError):
    """Network-level failure (connection refused, timeout, ...)."""
    pass


class ResponseSchemaWarning(UserWarning):
    """응답 스키마 불일치. 로그로만 남기고 호출은 실패시키지 않는다."""
    pass


class ExportError(GatewayError):
    """InfluxDB 쓰기 / 삭제 실패."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)
