"""
Init Command Implementation

현재 디렉토리에 Go 프로젝트를 생성합니다.
"""

from pathlib import Path
from typing import Optional

import typer

from foundry.cli.commands.new_command import build_project_data, generate_into, show_completion
from foundry.cli.utils.header import print_command_header, print_divider
from foundry.cli.utils.interactive_ui import InteractiveUI
from foundry.cli.utils.validation import validate_name
from foundry.project.errors import ProjectError
from foundry.project.layouts import LayoutRegistry

# 비어 있는지 판단할 때 무시하는 항목
IGNORED_ENTRIES = {".git", ".DS_Store"}


def is_effectively_empty(directory: Path) -> bool:
    return all(entry.name in IGNORED_ENTRIES for entry in directory.iterdir())


def init_command(
    name: Optional[str] = typer.Argument(None, help="프로젝트 이름 (기본: 현재 디렉토리 이름)"),
    module: Optional[str] = typer.Option(None, "--module", "-m", help="Go 모듈 경로"),
    layout: str = typer.Option("standard", "--layout", "-l", help="사용할 레이아웃"),
    author: str = typer.Option("", "--author", "-a", help="작성자"),
    license_name: str = typer.Option("MIT", "--license", help="라이선스"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="프로젝트 설명"),
    github: str = typer.Option("", "--github", "-g", help="GitHub 사용자 이름"),
    custom_vars: str = typer.Option("", "--vars", help="사용자 템플릿 변수 (key=value,key2=value2)"),
    force: bool = typer.Option(False, "--force", "-f", help="비어 있지 않은 디렉토리에서도 생성"),
    no_git: bool = typer.Option(False, "--no-git", help="git 저장소 초기화 생략"),
) -> None:
    """
    현재 디렉토리를 Go 프로젝트로 초기화합니다.

    디렉토리가 비어 있어야 합니다 (.git, .DS_Store 제외). --force로 무시할 수 있으며
    이 경우 기존 파일을 덮어씁니다.

    Examples:
        foundry init
        foundry init myapp --layout minimal
    """
    ui = InteractiveUI()
    project_dir = Path.cwd()
    name = name or project_dir.name

    try:
        print_command_header("Init Project", name)
        validate_name(name)
        LayoutRegistry.get(layout)

        if not force and not is_effectively_empty(project_dir):
            ui.show_error(f"디렉토리가 비어 있지 않습니다: {project_dir} (계속하려면 --force 사용)")
            raise typer.Exit(1)

        data = build_project_data(name, module, layout, author, license_name, description, github, custom_vars)
        entry_file = generate_into(project_dir, layout, data, overwrite=force, no_git=no_git, ui=ui)
        show_completion(project_dir, data, entry_file, layout, cd_hint=False)
        print_divider()

    except typer.Exit:
        raise
    except KeyboardInterrupt:
        ui.show_error("취소되었습니다")
        raise typer.Exit(1)
    except ProjectError as e:
        ui.show_error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        ui.show_error(f"프로젝트 초기화 중 오류 발생: {e}")
        raise typer.Exit(1)
