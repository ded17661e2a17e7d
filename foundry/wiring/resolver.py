"""
삽입 위치 결정기

엔트리 파일 라인 목록에서 (1) 미들웨어 패키지 import를 넣을 위치와
(2) 라우터 등록 호출을 넣을 위치를 찾습니다. 라우터 패턴별 앵커 규칙은
IDIOM_ANCHORS 테이블에 모여 있습니다.

등록 위치 규칙:
    - 라우터 생성 라인: EARLY일 때만 바로 뒤에 삽입
    - 기존 Use 라인:
        EARLY  -> 첫 Use 라인 앞 (생성 라인이 없을 때)
        MIDDLE -> late 키워드만 가진 라인이 아닌 첫 Use 라인 뒤,
                  모두 late 라인이면 첫 Use 라인 앞
        LATE   -> 마지막 Use 라인 뒤
    - Use 라인이 없으면 라우트 정의/서버 생성 라인 앞 (패턴·구간별 우선순위)
    - 그것도 없으면 라우터 생성 라인 뒤 (모든 구간)
"""

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping, Optional, Sequence, Tuple

from foundry.utils.logger import log_wire_debug
from foundry.wiring.catalog import EARLY_KEYWORDS, LATE_KEYWORDS, MiddlewareSpec
from foundry.wiring.errors import NoInsertionPointError
from foundry.wiring.types import (
    InsertionPlan,
    InsertionPoint,
    MiddlewarePosition,
    Placement,
    RouterIdiom,
)


@dataclass(frozen=True)
class AnchorRules:
    """
    라우터 패턴 하나의 앵커 판정 규칙.

    Attributes:
        construction: 라우터 생성 라인 특징 문자열
        use: 미들웨어 등록(Use) 라인 특징 문자열. 비어 있으면 Use 개념이 없는 패턴.
        routes: 라우트 정의 라인 특징 문자열
        server: 서버 생성/실행 라인 특징 문자열
        default_router_var: 변수 이름을 찾지 못했을 때 쓰는 라우터 변수
        late_prefers_server: LATE 구간 fallback에서 서버 라인을 라우트 라인보다 먼저 찾을지 여부
    """

    construction: Tuple[str, ...]
    use: Tuple[str, ...]
    routes: Tuple[str, ...]
    server: Tuple[str, ...]
    default_router_var: str
    late_prefers_server: bool = False


_SERVER_MARKERS = ("&http.Server{", "http.ListenAndServe(", "http.ListenAndServeTLS(")

IDIOM_ANCHORS: Mapping[RouterIdiom, AnchorRules] = MappingProxyType(
    {
        RouterIdiom.CHI: AnchorRules(
            construction=("chi.NewRouter()",),
            use=(".Use(",),
            routes=(".Route(", ".Get(", ".Post(", ".Put(", ".Patch(", ".Delete(", ".Mount(", ".Group(",
                    ".Handle(", ".HandleFunc("),
            server=_SERVER_MARKERS,
            default_router_var="r",
        ),
        RouterIdiom.GIN: AnchorRules(
            construction=("gin.Default()", "gin.New()"),
            use=(".Use(",),
            routes=(".GET(", ".POST(", ".PUT(", ".PATCH(", ".DELETE(", ".Group(", ".Any(", ".Handle("),
            server=(".Run(",) + _SERVER_MARKERS,
            default_router_var="r",
        ),
        RouterIdiom.GORILLA: AnchorRules(
            construction=("mux.NewRouter()",),
            use=(".Use(",),
            routes=(".HandleFunc(", ".Handle(", ".PathPrefix(", "setupRoutes("),
            server=_SERVER_MARKERS,
            default_router_var="router",
            late_prefers_server=True,
        ),
        RouterIdiom.PLAIN_HTTP: AnchorRules(
            construction=("http.NewServeMux()",),
            use=(),
            routes=("http.HandleFunc(", "http.Handle(", ".HandleFunc(", ".Handle("),
            server=_SERVER_MARKERS,
            default_router_var="mux",
        ),
    }
)

_ASSIGNMENT_RE = re.compile(r"^\s*(?:var\s+)?(\w+)\s*:?=")
_RECEIVER_RE = re.compile(r"^\s*(\w+)\.")
_IMPORT_BLOCK_RE = re.compile(r"^import\s*\(")
_SINGLE_IMPORT_RE = re.compile(r'^\s*import\s+(?:[\w.]+\s+)?"[^"]*"')


def _is_comment(line: str) -> bool:
    return line.strip().startswith("//")


def _contains_any(line: str, markers: Sequence[str]) -> bool:
    return any(marker in line for marker in markers)


def _indent_of(line: str) -> str:
    indent = line[: len(line) - len(line.lstrip())]
    return indent or "\t"


def _is_late_only(line: str) -> bool:
    lowered = line.lower()
    has_early = any(keyword in lowered for keyword in EARLY_KEYWORDS)
    has_late = any(keyword in lowered for keyword in LATE_KEYWORDS)
    return has_late and not has_early


def resolve_import_points(lines: List[str], import_paths: List[str]) -> Tuple[InsertionPoint, ...]:
    """
    import 블록의 닫는 괄호 앞, 또는 한 줄짜리 import 바로 뒤에 삽입한다.

    Args:
        lines: 파일 라인 목록
        import_paths: 따옴표를 포함한 import 경로 목록 (예: '"time"')

    Returns:
        InsertionPoint 튜플. 인식 가능한 import 섹션이 없으면 빈 튜플.
    """
    if not import_paths:
        return ()

    block_start: Optional[int] = None
    for index, line in enumerate(lines):
        stripped = line.strip()
        if block_start is None:
            block = _IMPORT_BLOCK_RE.match(stripped)
            if block and ")" not in stripped[block.end():]:
                block_start = index
                continue
            if _SINGLE_IMPORT_RE.match(line):
                return tuple(InsertionPoint(index, Placement.AFTER, f"import {path}") for path in import_paths)
        elif stripped == ")":
            return tuple(InsertionPoint(index, Placement.BEFORE, f"\t{path}") for path in import_paths)

    return ()


class InsertionPointResolver:
    """
    라우터 패턴과 순서 구간을 기준으로 삽입 위치를 계산한다.

    Args:
        idiom: 감지된 라우터 패턴
        module_name: go.mod 모듈 이름 (미들웨어 import 경로 생성용)
    """

    def __init__(self, idiom: RouterIdiom, module_name: str):
        self.idiom = idiom
        self.module_name = module_name
        self.rules = IDIOM_ANCHORS[idiom]

    @property
    def middleware_import(self) -> str:
        return f'"{self.module_name}/internal/middleware"'

    def resolve(self, lines: List[str], spec: MiddlewareSpec) -> InsertionPlan:
        """
        import와 등록 호출의 삽입 위치를 계산한다.

        Raises:
            NoInsertionPointError: 등록 호출의 앵커를 찾지 못한 경우
        """
        registration = self.resolve_registration(lines, spec)
        if not self.rules.use:
            # 등록이 주석뿐이므로 import를 넣으면 "imported and not used" 빌드 오류가 난다
            return InsertionPlan(registration=registration, imports=())
        imports = self.resolve_imports(lines, self.required_imports(lines, spec))
        if not imports:
            log_wire_debug("import 섹션을 인식하지 못해 import 삽입을 건너뜁니다", "RESOLVE")
        return InsertionPlan(registration=registration, imports=imports)

    # -- import ---------------------------------------------------------------

    def required_imports(self, lines: List[str], spec: MiddlewareSpec) -> List[str]:
        """파일에 아직 없는 import 경로 목록"""
        content = "\n".join(lines)
        wanted = [self.middleware_import]
        if spec.requires_time:
            wanted.append('"time"')
        return [path for path in wanted if path not in content]

    def resolve_imports(self, lines: List[str], import_paths: List[str]) -> Tuple[InsertionPoint, ...]:
        return resolve_import_points(lines, import_paths)

    # -- registration ---------------------------------------------------------

    def resolve_registration(self, lines: List[str], spec: MiddlewareSpec) -> InsertionPoint:
        position = spec.position
        construction = self._find_construction(lines)
        use_lines = self._find_use_lines(lines)

        anchor: Optional[Tuple[int, Placement]] = None

        if position == MiddlewarePosition.EARLY and construction is not None:
            anchor = (construction, Placement.AFTER)
        elif use_lines:
            if position == MiddlewarePosition.EARLY:
                anchor = (use_lines[0], Placement.BEFORE)
            elif position == MiddlewarePosition.MIDDLE:
                qualifying = [index for index in use_lines if not _is_late_only(lines[index])]
                if qualifying:
                    anchor = (qualifying[0], Placement.AFTER)
                else:
                    anchor = (use_lines[0], Placement.BEFORE)
            else:
                anchor = (use_lines[-1], Placement.AFTER)

        if anchor is None:
            fallback = self._find_fallback(lines, position, construction)
            if fallback is not None:
                anchor = (fallback, Placement.BEFORE)
            elif construction is not None:
                anchor = (construction, Placement.AFTER)

        if anchor is None:
            raise NoInsertionPointError(spec.kind, self.idiom.value)

        index, placement = anchor
        text = self._registration_line(lines, index, spec)
        log_wire_debug(
            f"등록 앵커: line {index + 1} ({placement.value}) -> {text.strip()}", "RESOLVE"
        )
        return InsertionPoint(index, placement, text)

    def _find_construction(self, lines: List[str]) -> Optional[int]:
        for index, line in enumerate(lines):
            if not _is_comment(line) and _contains_any(line, self.rules.construction):
                return index
        return None

    def _find_use_lines(self, lines: List[str]) -> List[int]:
        if not self.rules.use:
            return []
        return [
            index
            for index, line in enumerate(lines)
            if not _is_comment(line) and _contains_any(line, self.rules.use)
        ]

    def _find_fallback(
        self, lines: List[str], position: MiddlewarePosition, construction: Optional[int]
    ) -> Optional[int]:
        groups = [self.rules.routes, self.rules.server]
        if position == MiddlewarePosition.LATE and self.rules.late_prefers_server:
            groups.reverse()

        start = construction + 1 if construction is not None else 0
        for markers in groups:
            for index in range(start, len(lines)):
                line = lines[index]
                if not _is_comment(line) and _contains_any(line, markers):
                    return index
        return None

    def _router_var(self, lines: List[str], anchor_index: int) -> str:
        anchor_line = lines[anchor_index]
        if self.rules.use and _contains_any(anchor_line, self.rules.use):
            match = _RECEIVER_RE.match(anchor_line)
            if match:
                return match.group(1)

        construction = self._find_construction(lines)
        if construction is not None:
            match = _ASSIGNMENT_RE.match(lines[construction])
            if match:
                return match.group(1)

        for index in self._find_use_lines(lines):
            match = _RECEIVER_RE.match(lines[index])
            if match:
                return match.group(1)

        return self.rules.default_router_var

    def _registration_line(self, lines: List[str], anchor_index: int, spec: MiddlewareSpec) -> str:
        indent = _indent_of(lines[anchor_index])
        if self.idiom == RouterIdiom.PLAIN_HTTP:
            # net/http에는 라우터 수준 Use가 없어서 핸들러 체인 안내만 남긴다
            return f"{indent}// Add {spec.expression} to your handler chain"
        return f"{indent}{self._router_var(lines, anchor_index)}.Use({spec.expression})"
