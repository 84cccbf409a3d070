"""
Generic invoker module.

역할:
- 모든 OpenStack API 호출이 지나가는 단일 관문.
- 요청 payload 는 보내기 전에 검증하고(실패 시 RequestValidationError, 네트워크 호출 없음),
  응답 body 는 받은 뒤 검증한다(실패해도 호출은 성공, 경고 로그만 남김).

핵심 개념:
- 상태 코드 300 까지는 성공으로 본다. 버전 목록 API(GET /) 가 300 Multiple Choices 로
  응답하기 때문이다. 300 초과는 UpstreamError.
- 응답 스키마 불일치는 업스트림 API 변경 때문일 수 있으므로 호출자를 죽이지 않는다.
"""

from __future__ import annotations

import enum
import logging
from typing import Any, Optional

import httpx

from openstack_gateway.core.errors import (
    RequestValidationError,
    ResponseSchemaWarning,
    TransportError,
    UpstreamError,
)
from openstack_gateway.core.schema import Schema

logger = logging.getLogger(__name__)
schema_logger = logging.getLogger("openstack_gateway.schema")

AUTH_TOKEN_HEADER = "X-Auth-Token"
MAX_SUCCESS_STATUS = 300


class HTTPMethod(str, enum.Enum):
    GET = "GET"
    POST = "POST"


def remove_trailing_slash(url: str) -> str:
    return url[:-1] if url.endswith("/") else url


def _decode_body(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class GenericInvoker:
    """인증 토큰을 붙여 한 번의 HTTP 호출을 수행한다.

    Usage:
        async with httpx.AsyncClient() as http:
            invoker = GenericInvoker(http)
            body = await invoker.invoke(
                HTTPMethod.GET, f"{compute_url}/servers",
                token=token, response_schema=Schema(ServersResponse),
            )
    """

    def __init__(self, http: httpx.AsyncClient):
        self.http = http

    async def invoke(
        self,
        method: HTTPMethod,
        url: str,
        *,
        response_schema: Schema[Any],
        token: Optional[str] = None,
        request_schema: Optional[Schema[Any]] = None,
        payload: Any = None,
    ) -> Any:
        method = HTTPMethod(method)

        # 1) 요청 검증 (네트워크 호출 전)
        if request_schema is not None:
            result = request_schema.validate(payload)
            if not result.ok:
                raise RequestValidationError(
                    f"Invalid request for {method.value} {url} ({request_schema.name}): {result.error}"
                )
            payload = request_schema.dump(result.value)

        headers = {AUTH_TOKEN_HEADER: token} if token else {}
        kwargs: dict = {"headers": headers}
        if payload is not None:
            kwargs["params" if method is HTTPMethod.GET else "json"] = payload

        # 2) 실제 호출은 정확히 한 번
        try:
            response = await self.http.request(method.value, url, **kwargs)
        except httpx.HTTPError as e:
            raise TransportError(f"{method.value} {url} failed: {e}") from e

        body = _decode_body(response)

        # 3) 300 까지는 성공
        if response.status_code > MAX_SUCCESS_STATUS:
            raise UpstreamError(response.status_code, body)

        # 4) 응답 검증은 로그로만 보고한다
        report_schema_drift(response_schema, body, url)
        return body


def report_schema_drift(schema: Schema[Any], body: Any, url: str) -> bool:
    """응답 body 를 검증하고, 불일치하면 WARNING 로그를 남긴다. 일치 여부를 반환."""
    result = schema.validate(body)
    if result.ok:
        return True
    schema_logger.warning(
        "Wrong data received from %s (%s): %s",
        url,
        schema.name,
        result.error,
        extra={"category": ResponseSchemaWarning, "body": body},
    )
    return False
