"""
Interactive UI Components for Foundry CLI

Rich 기반 확인 프롬프트, 메시지, 표/패널 출력.
"""

from typing import Callable, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.prompt import Confirm, Prompt
from rich.table import Table


class InteractiveUI:
    """Rich 라이브러리 기반 대화형 UI 컴포넌트."""

    def __init__(self, console: Optional[Console] = None):
        """InteractiveUI 초기화.

        Args:
            console: 출력 콘솔 (테스트에서 주입 가능)
        """
        self.console = console or Console()

    def confirm(self, message: str, default: bool = False, show_default: bool = True) -> bool:
        """Y/N 확인 프롬프트.

        Args:
            message: 확인 메시지
            default: 기본값 (Enter 키만 누를 때)
            show_default: 기본값 표시 여부

        Returns:
            사용자 확인 결과 (True/False)
        """
        return Confirm.ask(message, default=default, show_default=show_default, console=self.console)

    def text_input(
        self,
        prompt: str,
        default: Optional[str] = None,
        validator: Optional[Callable[[str], bool]] = None,
    ) -> str:
        """텍스트 입력 프롬프트. validator가 False를 반환하면 다시 묻는다."""
        while True:
            result = Prompt.ask(prompt, default=default, show_default=default is not None, console=self.console)
            if validator is None or validator(result):
                return result
            self.console.print("[red]올바르지 않은 입력입니다. 다시 시도해주세요.[/red]")

    def show_table(self, title: str, headers: List[str], rows: List[List[str]]) -> None:
        """테이블 형식으로 데이터 표시."""
        table = Table(title=title, show_header=True, header_style="bold magenta")
        for header in headers:
            table.add_column(header)
        for row in rows:
            table.add_row(*[escape(cell) for cell in row])
        self.console.print(table)

    def show_panel(self, content: str, title: Optional[str] = None, style: str = "cyan") -> None:
        """패널 형식으로 내용 표시. content는 마크업으로 해석하지 않는다."""
        self.console.print(Panel(escape(content), title=title, border_style=style))

    def show_success(self, message: str) -> None:
        self.console.print(f"✅ [bold green]{escape(message)}[/bold green]")

    def show_error(self, message: str) -> None:
        self.console.print(f"❌ [bold red]{escape(message)}[/bold red]")

    def show_warning(self, message: str) -> None:
        self.console.print(f"⚠️ [bold yellow]{escape(message)}[/bold yellow]")

    def show_info(self, message: str) -> None:
        self.console.print(f"ℹ️ [bold blue]{escape(message)}[/bold blue]")
