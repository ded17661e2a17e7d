"""
내용 재작성기

원본 텍스트와 InsertionPlan으로 새 텍스트를 만드는 순수 함수 모음입니다.
디스크에는 절대 쓰지 않습니다.
"""

from typing import Dict, List

from foundry.wiring.catalog import get_spec
from foundry.wiring.resolver import InsertionPointResolver
from foundry.wiring.types import InsertionPlan, InsertionPoint, Placement, RouterIdiom


def detect_newline(content: str) -> str:
    return "\r\n" if "\r\n" in content else "\n"


def splice_lines(lines: List[str], points: List[InsertionPoint]) -> List[str]:
    """
    한 번의 순방향 패스로 삽입 라인을 끼워 넣는다.

    같은 앵커에 여러 줄이 걸리면 points에 들어 있는 순서를 유지한다.
    """
    before: Dict[int, List[str]] = {}
    after: Dict[int, List[str]] = {}
    for point in points:
        bucket = before if point.placement == Placement.BEFORE else after
        bucket.setdefault(point.index, []).append(point.text)

    output: List[str] = []
    for index, line in enumerate(lines):
        output.extend(before.get(index, []))
        output.append(line)
        output.extend(after.get(index, []))
    return output


def apply_plan(content: str, plan: InsertionPlan) -> str:
    newline = detect_newline(content)
    lines = content.split(newline)
    points = list(plan.imports) + [plan.registration]
    return newline.join(splice_lines(lines, points))


def rewrite_content(content: str, idiom: RouterIdiom, kind: str, module_name: str) -> str:
    """
    원본 content에 kind 미들웨어의 import와 등록 호출을 추가한 텍스트를 반환한다.

    Args:
        content: 엔트리 파일 원본
        idiom: 감지된 라우터 패턴
        kind: 미들웨어 종류
        module_name: go.mod 모듈 이름

    Raises:
        UnsupportedKindError: 카탈로그에 없는 종류
        NoInsertionPointError: 등록 앵커를 찾지 못함
    """
    spec = get_spec(kind)
    lines = content.split(detect_newline(content))
    plan = InsertionPointResolver(idiom, module_name).resolve(lines, spec)
    return apply_plan(content, plan)
