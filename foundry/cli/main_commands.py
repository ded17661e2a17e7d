"""
Foundry CLI - Main Commands Router
단순 라우팅만 담당하는 메인 CLI 진입점
"""

from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

# Command imports - 모든 로직은 별도 모듈에서 구현
from foundry.cli.commands.add_command import (
    add_database_command,
    add_handler_command,
    add_middleware_command,
    add_model_command,
)
from foundry.cli.commands.init_command import init_command
from foundry.cli.commands.layout_command import layout_info_command, layout_list_command
from foundry.cli.commands.new_command import new_command
from foundry.cli.commands.wire_command import wire_handler_command, wire_middleware_command
from foundry.cli.utils.header import __version__
from foundry.utils.logger import setup_logging

# Main CLI App
app = typer.Typer(
    help="🔨 Foundry - Go 프로젝트 스캐폴딩 및 미들웨어 자동 연결 CLI",
    context_settings={"help_option_names": ["-h", "--help"]},
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def version_callback(value: bool) -> None:
    """
    Callback function for --version option.

    Raises:
        typer.Exit: Always exits after displaying version
    """
    if value:
        typer.echo(f"foundry {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool, typer.Option("--version", callback=version_callback, is_eager=True, help="Show version")
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="디버그 로그 출력")] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="요약 로그만 출력")] = False,
    log_file: Annotated[Optional[Path], typer.Option("--log-file", help="로그 파일 경로")] = None,
) -> None:
    """
    Foundry CLI - 레이아웃 기반 Go 프로젝트 생성과 컴포넌트 추가/연결.

    Args:
        version: Show version information and exit
        verbose: DEBUG 레벨 로그
        quiet: CLI 레벨 이상만 출력
        log_file: 로그를 파일에도 기록
    """
    setup_logging(verbose=verbose, quiet=quiet, log_file=log_file)


# ═══════════════════════════════════════════════════
# Project Commands
# ═══════════════════════════════════════════════════

app.command("new", help="새 디렉토리에 Go 프로젝트 생성")(new_command)
app.command("init", help="현재 디렉토리를 Go 프로젝트로 초기화")(init_command)


# ═══════════════════════════════════════════════════
# Add Commands Group
# ═══════════════════════════════════════════════════

add_app = typer.Typer(help="현재 프로젝트에 컴포넌트를 추가합니다.", no_args_is_help=True)

add_app.command("handler", help="REST 핸들러 추가")(add_handler_command)
add_app.command("model", help="데이터 모델 추가")(add_model_command)
add_app.command("middleware", help="미들웨어 추가")(add_middleware_command)
add_app.command("db", help="데이터베이스 연결 코드 추가")(add_database_command)

app.add_typer(add_app, name="add")


# ═══════════════════════════════════════════════════
# Wire Commands Group
# ═══════════════════════════════════════════════════

wire_app = typer.Typer(help="생성된 컴포넌트를 기존 코드에 연결합니다.", no_args_is_help=True)

wire_app.command("middleware", help="미들웨어를 main.go 라우터에 연결")(wire_middleware_command)
wire_app.command("handler", help="핸들러를 routes.go에 연결")(wire_handler_command)

app.add_typer(wire_app, name="wire")


# ═══════════════════════════════════════════════════
# Layout Commands Group
# ═══════════════════════════════════════════════════

layout_app = typer.Typer(help="프로젝트 레이아웃을 조회합니다.", no_args_is_help=True)

layout_app.command("list", help="사용 가능한 레이아웃 목록")(layout_list_command)
layout_app.command("info", help="레이아웃 상세 정보")(layout_info_command)

app.add_typer(layout_app, name="layout")


if __name__ == "__main__":
    app()
