"""
Wiring 오류 계층

모든 오류는 WireError를 상속하며, code 속성으로 CLI 계층이 분기할 수 있는
안정적인 이름을 제공합니다.
"""

from pathlib import Path
from typing import Iterable, Optional


class WireError(Exception):
    """
    자동 연결 중 발생하는 오류의 기본 클래스.

    Attributes:
        code: 오류 분류 이름 (예: "AlreadyWired")
        kind: 대상 미들웨어 종류 (알 수 없으면 None)
        original_error: 원본 예외 (있는 경우)
    """

    code = "WireError"

    def __init__(
        self,
        message: str,
        kind: Optional[str] = None,
        original_error: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.original_error = original_error

    def __str__(self) -> str:
        return f"[{self.code}] {super().__str__()}"


class UnsupportedKindError(WireError):
    """카탈로그에 없는 미들웨어 종류."""

    code = "UnsupportedKind"

    def __init__(self, kind: str, supported: Iterable[str]):
        self.supported = sorted(supported)
        super().__init__(
            f"지원하지 않는 미들웨어 종류 '{kind}'. 사용 가능: {', '.join(self.supported)}",
            kind=kind,
        )


class EntryFileNotFoundError(WireError):
    code = "EntryFileNotFound"

    def __init__(self, project_root: Path, candidates: Iterable[str]):
        self.project_root = project_root
        self.candidates = list(candidates)
        super().__init__(
            f"엔트리 파일을 찾을 수 없습니다: {project_root} (후보: {', '.join(self.candidates)})"
        )


class AlreadyWiredError(WireError):
    code = "AlreadyWired"

    def __init__(self, kind: str, symbol: str, path: Optional[Path] = None):
        self.symbol = symbol
        self.path = path
        location = f" ({path})" if path else ""
        super().__init__(f"미들웨어 {kind}은(는) 이미 연결되어 있습니다: {symbol}{location}", kind=kind)


class NoInsertionPointError(WireError):
    code = "NoInsertionPoint"

    def __init__(self, kind: str, idiom_name: str):
        self.idiom_name = idiom_name
        super().__init__(
            f"{idiom_name} 라우터에서 {kind} 미들웨어를 추가할 위치를 찾지 못했습니다", kind=kind
        )


class RejectedByUserError(WireError):
    code = "RejectedByUser"

    def __init__(self, kind: str):
        super().__init__(f"사용자가 {kind} 연결을 취소했습니다", kind=kind)


class WireIOError(WireError):
    code = "IOError"

    def __init__(self, path: Path, original_error: Exception, kind: Optional[str] = None):
        self.path = path
        super().__init__(f"파일 입출력 실패: {path}: {original_error}", kind=kind, original_error=original_error)
