"""
변경 미리보기 / 승인

추가된 라인은 진짜 순서 diff(LCS)가 아니라 원본 라인 집합과의 차집합으로
계산합니다. 원본에 이미 같은 텍스트의 라인이 있으면 추가로 표시되지 않고,
내용 변화 없이 순서만 바뀐 라인은 추가로 잘못 표시될 수 있습니다.
미리보기 출력 형식을 바꾸지 않기 위해 이 근사 방식을 유지합니다.
"""

from pathlib import Path
from typing import List, Optional, Protocol

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm
from rich.text import Text


def compute_added_lines(original: str, proposed: str) -> List[str]:
    """proposed에는 있고 original 라인 집합에는 없는 라인 목록 (proposed 등장 순서)."""
    original_lines = set(original.splitlines())
    return [line for line in proposed.splitlines() if line not in original_lines]


def render_change_list(added_lines: List[str]) -> List[str]:
    return [f"+ {line}" for line in added_lines]


class ChangeApprover(Protocol):
    """미리보기 후 변경 적용 여부를 결정하는 주체."""

    def approve(self, description: str) -> bool:
        ...


class AutoApprover:
    """항상 같은 답을 내는 승인자 (--yes 옵션, 테스트용)."""

    def __init__(self, answer: bool = True):
        self.answer = answer
        self.calls: List[str] = []

    def approve(self, description: str) -> bool:
        self.calls.append(description)
        return self.answer


class ConsoleApprover:
    """터미널에서 y/N을 물어보는 승인자."""

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def approve(self, description: str) -> bool:
        try:
            return Confirm.ask(f"{description}?", default=False, console=self.console)
        except EOFError:
            # 입력 스트림이 닫힌 경우 취소로 처리
            return False


class ChangePreviewer:
    """
    파일 변경 미리보기 출력기.

    Args:
        console: 출력 대상 Rich 콘솔 (테스트에서는 StringIO 기반 콘솔 주입)
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    def show(self, path: Path, original: str, proposed: str, description: str) -> List[str]:
        """
        변경 내용을 출력하고 추가된 라인 목록을 반환한다.

        Args:
            path: 대상 파일 경로
            original: 원본 내용
            proposed: 변경 후 내용
            description: 사람이 읽을 작업 설명

        Returns:
            추가된 라인 목록 (접두사 없음)
        """
        added = compute_added_lines(original, proposed)

        self.console.print(Panel(Text(f"{description}\n{path}"), title="Preview", border_style="cyan"))
        if not added:
            self.console.print(Text("  (no changes)", style="dim"))
        for rendered in render_change_list(added):
            # Go 코드의 대괄호가 Rich 마크업으로 해석되지 않도록 Text로 출력
            self.console.print(Text(f"  {rendered}", style="green"))
        self.console.print()
        return added
