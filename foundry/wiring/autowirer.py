"""
미들웨어 자동 연결 오케스트레이터

상태 머신:
    START -> SCANNED -> GUARDED -> DETECTED -> RESOLVED -> PREVIEWED -> {COMMITTED | ABORTED}

엔트리 파일은 한 번만 읽고, 승인 이후에만 한 번 씁니다. 실패는 모두 WireError
하위 예외로 호출자에게 전달되며 그 시점까지 디스크는 변경되지 않습니다.
"""

from pathlib import Path
from typing import Optional

from foundry.utils.logger import log_wire, log_wire_debug
from foundry.wiring.catalog import get_spec
from foundry.wiring.detector import detect_router_idiom
from foundry.wiring.errors import AlreadyWiredError, RejectedByUserError, WireError, WireIOError
from foundry.wiring.guard import is_already_wired
from foundry.wiring.preview import ChangeApprover, ChangePreviewer
from foundry.wiring.rewriter import rewrite_content
from foundry.wiring.scanner import EntryFileScanner
from foundry.wiring.types import FileRevision, WireRequest, WireResult, WireState


def read_source_file(path: Path, kind: str) -> str:
    try:
        # 줄바꿈 문자를 그대로 유지하기 위해 newline="" 사용
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise WireIOError(path, e, kind=kind) from e


def write_source_file(path: Path, content: str, kind: str) -> None:
    try:
        with open(path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
    except OSError as e:
        raise WireIOError(path, e, kind=kind) from e


class AutoWirer:
    """
    프로젝트 하나에 대한 미들웨어 자동 연결기.

    Args:
        project_root: 프로젝트 루트 디렉토리
        module_name: go.mod 모듈 이름
        project_name: 프로젝트 이름 (cmd/<name>/main.go 탐색용)
        approver: 변경 승인자 (ConsoleApprover, AutoApprover 등)
        previewer: 미리보기 출력기 (기본: 새 콘솔로 출력)
    """

    def __init__(
        self,
        project_root: Path,
        module_name: str,
        project_name: str,
        approver: ChangeApprover,
        previewer: Optional[ChangePreviewer] = None,
    ):
        self.project_root = Path(project_root)
        self.module_name = module_name
        self.project_name = project_name
        self.approver = approver
        self.previewer = previewer or ChangePreviewer()

    def wire(self, kind: str, dry_run: bool = False) -> WireResult:
        """
        kind 미들웨어를 엔트리 파일에 연결한다.

        Args:
            kind: 미들웨어 종류
            dry_run: True면 미리보기만 출력하고 쓰지 않음

        Returns:
            COMMITTED 또는 (dry-run) ABORTED 상태의 WireResult

        Raises:
            WireError: UnsupportedKind, EntryFileNotFound, AlreadyWired,
                NoInsertionPoint, RejectedByUser, IOError
        """
        try:
            return self._run(kind, dry_run)
        except WireError as e:
            log_wire_debug(f"{e.code}: {e}", WireState.ABORTED.name)
            raise

    def _run(self, kind: str, dry_run: bool) -> WireResult:
        log_wire_debug(f"kind={kind}, dry_run={dry_run}, root={self.project_root}", WireState.START.name)
        spec = get_spec(kind)

        entry_file = EntryFileScanner(self.project_root, self.project_name).locate()
        original = read_source_file(entry_file, kind)
        log_wire_debug(f"{entry_file} ({len(original)} bytes)", WireState.SCANNED.name)

        if is_already_wired(original, kind):
            raise AlreadyWiredError(kind, spec.symbol, entry_file)
        log_wire_debug(f"{spec.symbol} 미등록 확인", WireState.GUARDED.name)

        idiom = detect_router_idiom(original)
        log_wire_debug(f"idiom={idiom.value}", WireState.DETECTED.name)

        proposed = rewrite_content(original, idiom, kind, self.module_name)
        revision = FileRevision(path=entry_file, original_content=original, proposed_content=proposed)
        log_wire_debug(f"tier={spec.position.name}", WireState.RESOLVED.name)

        description = f"Wire {kind} middleware into {entry_file.name}"
        added_lines = self.previewer.show(entry_file, original, proposed, description)
        log_wire_debug(f"{len(added_lines)} line(s) added", WireState.PREVIEWED.name)

        if dry_run:
            log_wire_debug("dry-run: 파일을 쓰지 않습니다", WireState.ABORTED.name)
            return WireResult(
                kind=kind,
                state=WireState.ABORTED,
                idiom=idiom,
                revision=revision,
                added_lines=added_lines,
                dry_run=True,
            )

        if not self.approver.approve(description):
            raise RejectedByUserError(kind)

        write_source_file(entry_file, proposed, kind)
        log_wire(f"{spec.symbol} -> {entry_file}", WireState.COMMITTED.name)
        return WireResult(
            kind=kind,
            state=WireState.COMMITTED,
            idiom=idiom,
            revision=revision,
            added_lines=added_lines,
        )


def wire_middleware(
    request: WireRequest,
    approver: ChangeApprover,
    project_name: Optional[str] = None,
    previewer: Optional[ChangePreviewer] = None,
) -> WireResult:
    """
    WireRequest 하나를 실행하는 진입점.

    project_name이 없으면 프로젝트 루트 디렉토리 이름을 사용한다.
    """
    wirer = AutoWirer(
        project_root=request.project_root,
        module_name=request.module_name,
        project_name=project_name or Path(request.project_root).resolve().name,
        approver=approver,
        previewer=previewer,
    )
    return wirer.wire(request.middleware_kind, dry_run=request.dry_run)
