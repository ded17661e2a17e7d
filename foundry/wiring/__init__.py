"""
Middleware auto-wiring

엔트리 파일(main.go)을 텍스트로 분석해 라우터 패턴을 감지하고,
미들웨어 import와 등록 호출을 안전한 위치에 추가합니다.
"""

from foundry.wiring.autowirer import AutoWirer, wire_middleware
from foundry.wiring.catalog import MIDDLEWARE_CATALOG, get_spec, manual_wiring_instructions, supported_kinds
from foundry.wiring.errors import (
    AlreadyWiredError,
    EntryFileNotFoundError,
    NoInsertionPointError,
    RejectedByUserError,
    UnsupportedKindError,
    WireError,
    WireIOError,
)
from foundry.wiring.preview import AutoApprover, ChangePreviewer, ConsoleApprover
from foundry.wiring.routes import RouteWirer
from foundry.wiring.types import MiddlewarePosition, RouterIdiom, WireRequest, WireResult, WireState

__all__ = [
    "AutoWirer",
    "wire_middleware",
    "RouteWirer",
    "MIDDLEWARE_CATALOG",
    "get_spec",
    "supported_kinds",
    "manual_wiring_instructions",
    "AutoApprover",
    "ConsoleApprover",
    "ChangePreviewer",
    "WireError",
    "UnsupportedKindError",
    "EntryFileNotFoundError",
    "AlreadyWiredError",
    "NoInsertionPointError",
    "RejectedByUserError",
    "WireIOError",
    "MiddlewarePosition",
    "RouterIdiom",
    "WireRequest",
    "WireResult",
    "WireState",
]
