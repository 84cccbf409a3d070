"""
Schema validation module.

역할:
- 네트워크 경계(요청/응답)에서 payload 모양을 런타임에 검증한다.
- pydantic TypeAdapter 를 감싸서 예외 대신 ValidationResult 를 돌려준다.
- 검증 실패를 어떻게 처리할지(raise / 로그)는 호출하는 쪽(invoker)이 결정한다.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, Optional, TypeVar

from pydantic import TypeAdapter, ValidationError

T = TypeVar("T")


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    ok: bool
    value: Optional[T] = None
    error: Optional[ValidationError] = None


class Schema(Generic[T]):
    """하나의 타입(pydantic 모델, list[...] 등)에 대한 검증기."""

    def __init__(self, type_: Any, name: Optional[str] = None):
        self._adapter: TypeAdapter[T] = TypeAdapter(type_)
        self.name = name or getattr(type_, "__name__", repr(type_))

    def validate(self, raw: Any) -> ValidationResult[T]:
        try:
            return ValidationResult(ok=True, value=self._adapter.validate_python(raw))
        except ValidationError as e:
            return ValidationResult(ok=False, error=e)

    def dump(self, value: Any) -> Any:
        """검증된 값을 JSON 호환 구조로 되돌린다 (None 필드 제외)."""
        return self._adapter.dump_python(value, mode="json", exclude_none=True)

    def __repr__(self) -> str:
        return f"Schema({self.name})"


# 요청 본문이 없는 호출용 (GET 목록 조회 등)
VOID: Schema[None] = Schema(type(None), name="void")
