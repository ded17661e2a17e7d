"""
핸들러 라우트 연결

internal/routes/routes.go의 RegisterAPIRoutes 함수 안에 핸들러 생성과
Mount 등록을 추가합니다. 미리보기/승인/쓰기 흐름은 미들웨어 연결과 같습니다.
"""

import re
from pathlib import Path
from typing import List, Optional, Tuple

from foundry.utils.logger import log_wire, log_wire_debug
from foundry.utils.naming import pluralize, to_camel, to_pascal, to_snake
from foundry.wiring.autowirer import read_source_file, write_source_file
from foundry.wiring.errors import (
    AlreadyWiredError,
    EntryFileNotFoundError,
    NoInsertionPointError,
    RejectedByUserError,
)
from foundry.wiring.preview import ChangeApprover, ChangePreviewer
from foundry.wiring.resolver import resolve_import_points
from foundry.wiring.rewriter import detect_newline, splice_lines
from foundry.wiring.types import FileRevision, InsertionPoint, Placement, WireResult, WireState

ROUTES_FILE = Path("internal") / "routes" / "routes.go"
REGISTER_FUNC = "func RegisterAPIRoutes"

_ROUTER_PARAM_RE = re.compile(r"func RegisterAPIRoutes\(\s*(\w+)")


def handler_registration_lines(handler_name: str, router_var: str = "r") -> List[str]:
    """RegisterAPIRoutes에 추가할 라인 목록"""
    pascal = to_pascal(handler_name)
    variable = f"{to_camel(handler_name)}Handler"
    path = pluralize(to_snake(handler_name).replace("_", "-"))
    return [
        f"\t// {pascal} routes",
        f"\t{variable} := handlers.New{pascal}Handler()",
        f'\t{router_var}.Mount("/{path}", {variable}.Routes())',
    ]


def _find_function_body(lines: List[str]) -> Optional[Tuple[int, int]]:
    """RegisterAPIRoutes의 (시작 라인, 닫는 중괄호 라인) 인덱스"""
    for start, line in enumerate(lines):
        if REGISTER_FUNC not in line:
            continue
        depth = 0
        for index in range(start, len(lines)):
            depth += lines[index].count("{") - lines[index].count("}")
            if depth == 0 and "}" in lines[index]:
                return start, index
        return None
    return None


def add_handler_route(content: str, handler_name: str, module_name: str) -> str:
    """
    routes.go 내용에 핸들러 등록을 추가한 텍스트를 반환한다.

    등록 라인은 RegisterAPIRoutes 본문의 마지막 return 앞에, return이 없으면
    닫는 중괄호 앞에 들어간다.

    Raises:
        AlreadyWiredError: 핸들러 생성자가 이미 호출되고 있는 경우
        NoInsertionPointError: RegisterAPIRoutes 함수를 찾지 못한 경우
    """
    constructor = f"handlers.New{to_pascal(handler_name)}Handler()"
    if constructor in content:
        raise AlreadyWiredError(handler_name, constructor)

    newline = detect_newline(content)
    lines = content.split(newline)

    body = _find_function_body(lines)
    if body is None:
        raise NoInsertionPointError(handler_name, "routes")
    start, end = body

    anchor = end
    for index in range(end - 1, start, -1):
        if lines[index].strip().startswith("return"):
            anchor = index
            break

    match = _ROUTER_PARAM_RE.search(lines[start])
    router_var = match.group(1) if match else "r"

    points = [
        InsertionPoint(anchor, Placement.BEFORE, text)
        for text in handler_registration_lines(handler_name, router_var)
    ]
    import_path = f'"{module_name}/internal/handlers"'
    if import_path not in content:
        points = list(resolve_import_points(lines, [import_path])) + points

    return newline.join(splice_lines(lines, points))


class RouteWirer:
    """
    핸들러를 routes.go에 연결한다.

    Args:
        project_root: 프로젝트 루트
        module_name: go.mod 모듈 이름
        approver: 변경 승인자
        previewer: 미리보기 출력기
    """

    def __init__(
        self,
        project_root: Path,
        module_name: str,
        approver: ChangeApprover,
        previewer: Optional[ChangePreviewer] = None,
    ):
        self.project_root = Path(project_root)
        self.module_name = module_name
        self.approver = approver
        self.previewer = previewer or ChangePreviewer()

    @property
    def routes_path(self) -> Path:
        return self.project_root / ROUTES_FILE

    def wire(self, handler_name: str, dry_run: bool = False) -> WireResult:
        path = self.routes_path
        if not path.is_file():
            raise EntryFileNotFoundError(self.project_root, [str(ROUTES_FILE)])

        original = read_source_file(path, handler_name)
        proposed = add_handler_route(original, handler_name, self.module_name)
        revision = FileRevision(path=path, original_content=original, proposed_content=proposed)
        log_wire_debug(f"handler={handler_name}", WireState.RESOLVED.name)

        description = f"Add the {handler_name} handler to your routes"
        added_lines = self.previewer.show(path, original, proposed, description)

        if dry_run:
            return WireResult(
                kind=handler_name,
                state=WireState.ABORTED,
                revision=revision,
                added_lines=added_lines,
                dry_run=True,
            )

        if not self.approver.approve(description):
            raise RejectedByUserError(handler_name)

        write_source_file(path, proposed, handler_name)
        log_wire(f"handler {handler_name} -> {path}", WireState.COMMITTED.name)
        return WireResult(kind=handler_name, state=WireState.COMMITTED, revision=revision, added_lines=added_lines)
