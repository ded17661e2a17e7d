"""
Wiring 도메인 타입

자동 연결(auto-wiring) 한 번의 실행 동안만 존재하는 값 객체들을 정의합니다.
어떤 타입도 디스크나 캐시에 저장되지 않습니다.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from pathlib import Path
from typing import List, Optional, Tuple


class RouterIdiom(str, Enum):
    """엔트리 파일에서 감지된 라우터 사용 패턴."""

    CHI = "chi"
    GIN = "gin"
    GORILLA = "gorilla"
    PLAIN_HTTP = "http"


class MiddlewarePosition(IntEnum):
    """미들웨어 순서 구간. 숫자 우선순위가 아니라 세 개의 버킷이다."""

    EARLY = 0
    MIDDLE = 1
    LATE = 2


class WireState(str, Enum):
    """WireMiddleware 상태 머신의 상태."""

    START = "start"
    SCANNED = "scanned"
    GUARDED = "guarded"
    DETECTED = "detected"
    RESOLVED = "resolved"
    PREVIEWED = "previewed"
    COMMITTED = "committed"
    ABORTED = "aborted"


class Placement(str, Enum):
    """앵커 라인 기준 삽입 방향."""

    BEFORE = "before"
    AFTER = "after"


@dataclass(frozen=True)
class WireRequest:
    """CLI 호출 한 번에 대응하는 연결 요청."""

    middleware_kind: str
    dry_run: bool
    project_root: Path
    module_name: str


@dataclass(frozen=True)
class InsertionPoint:
    """
    한 줄을 끼워 넣을 위치.

    Attributes:
        index: 앵커 라인의 0-based 인덱스
        placement: 앵커의 앞/뒤
        text: 삽입할 라인 (들여쓰기 포함)
    """

    index: int
    placement: Placement
    text: str


@dataclass(frozen=True)
class InsertionPlan:
    """Resolver가 계산한 import/등록 삽입 위치 묶음."""

    registration: InsertionPoint
    imports: Tuple[InsertionPoint, ...] = ()

    @property
    def import_skipped(self) -> bool:
        return not self.imports


@dataclass
class FileRevision:
    """감지부터 쓰기 확정까지 잠시 존재하는 파일 수정안."""

    path: Path
    original_content: str
    proposed_content: str

    @property
    def changed(self) -> bool:
        return self.original_content != self.proposed_content


@dataclass
class WireResult:
    """
    WireMiddleware 실행 결과.

    오류는 예외(WireError)로 전달되고, 이 객체는 정상 종료(COMMITTED)와
    dry-run 종료(ABORTED, applied=False)만 표현한다.
    """

    kind: str
    state: WireState
    idiom: Optional[RouterIdiom] = None
    revision: Optional[FileRevision] = None
    added_lines: List[str] = field(default_factory=list)
    dry_run: bool = False

    @property
    def applied(self) -> bool:
        return self.state == WireState.COMMITTED
