"""
New Command Implementation

레이아웃으로 ./NAME 아래에 새 Go 프로젝트를 생성합니다.
init 명령어도 이 모듈의 헬퍼를 공유합니다.
"""

import shutil
from pathlib import Path
from typing import Optional

import typer

from foundry.cli.utils.header import print_block, print_command_header, print_divider, print_item, print_section
from foundry.cli.utils.interactive_ui import InteractiveUI
from foundry.cli.utils.validation import validate_name
from foundry.project.config import ProjectData, parse_custom_vars
from foundry.project.errors import ProjectError
from foundry.project.generator import ProjectGenerator, init_git_repo
from foundry.project.layouts import LayoutRegistry
from foundry.utils.logger import log_cli


def build_project_data(
    name: str,
    module: Optional[str],
    layout: str,
    author: str,
    license_name: str,
    description: Optional[str],
    github: str,
    custom_vars: str,
) -> ProjectData:
    """
    명령행 옵션으로 렌더링 컨텍스트를 만든다.

    Args:
        name: 프로젝트 이름
        module: Go 모듈 경로 (없으면 github.com/<github>/<name> 또는 name)
        layout: 레이아웃 이름 (설명 기본값에 사용)
        author: 작성자
        license_name: 라이선스
        description: 프로젝트 설명
        github: GitHub 사용자 이름
        custom_vars: "k=v,k2=v2" 형식 사용자 변수

    Returns:
        ProjectData

    Raises:
        ProjectError: --vars 형식 오류
    """
    if not module:
        module = f"github.com/{github}/{name}" if github else name

    return ProjectData(
        project_name=name,
        module_name=module,
        author=author,
        license=license_name,
        description=description or f"A Go project created with Foundry using the {layout} layout",
        github_username=github,
        custom_variables=parse_custom_vars(custom_vars),
    )


def show_layouts(ui: InteractiveUI) -> None:
    rows = [[m.name, m.description, m.entry_file] for m in LayoutRegistry.list_layouts()]
    ui.show_table("Available Layouts", ["Name", "Description", "Entry"], rows)


def show_completion(project_dir: Path, data: ProjectData, entry_file: str, layout: str, cd_hint: bool) -> None:
    """생성 완료 요약과 다음 단계 출력"""
    print_section("OK", f"'{data.project_name}' 프로젝트 생성 완료", style="green")
    print_item("PATH", str(project_dir))
    print_item("MODULE", data.module_name)
    print_item("LAYOUT", layout)

    steps = []
    if cd_hint:
        steps.append(f"cd {data.project_name}")
    steps.extend(["go mod tidy", f"go run ./{Path(entry_file).parent.as_posix()}"])

    print_section("NEXT", "다음 단계", style="blue")
    print_block("\n".join(f"  {i}. {step}" for i, step in enumerate(steps, 1)))
    print_block(
        "\n  컴포넌트 추가:\n"
        "    foundry add handler user --auto-wire\n"
        "    foundry add middleware recovery --auto-wire"
    )


def generate_into(
    project_dir: Path,
    layout: str,
    data: ProjectData,
    overwrite: bool,
    no_git: bool,
    ui: InteractiveUI,
) -> str:
    """
    프로젝트 파일 생성 후 git 저장소를 초기화한다.

    Returns:
        렌더링된 엔트리 파일 상대 경로
    """
    generator = ProjectGenerator()
    written = generator.generate(project_dir, layout, data, overwrite=overwrite)
    log_cli(f"[NEW] {len(written)}개 파일 생성 -> {project_dir}")

    if not no_git and not init_git_repo(project_dir):
        ui.show_warning("git 저장소를 초기화하지 못했습니다. 직접 'git init'을 실행하세요.")

    return generator.entry_file(layout, data)


def new_command(
    name: Optional[str] = typer.Argument(None, help="프로젝트 이름 (디렉토리 이름)"),
    module: Optional[str] = typer.Option(None, "--module", "-m", help="Go 모듈 경로"),
    layout: str = typer.Option("standard", "--layout", "-l", help="사용할 레이아웃"),
    author: str = typer.Option("", "--author", "-a", help="작성자"),
    license_name: str = typer.Option("MIT", "--license", help="라이선스"),
    description: Optional[str] = typer.Option(None, "--description", "-d", help="프로젝트 설명"),
    github: str = typer.Option("", "--github", "-g", help="GitHub 사용자 이름"),
    custom_vars: str = typer.Option("", "--vars", help="사용자 템플릿 변수 (key=value,key2=value2)"),
    force: bool = typer.Option(False, "--force", "-f", help="기존 디렉토리를 삭제하고 생성"),
    no_git: bool = typer.Option(False, "--no-git", help="git 저장소 초기화 생략"),
    list_layouts: bool = typer.Option(False, "--list-layouts", help="사용 가능한 레이아웃 목록 출력"),
) -> None:
    """
    새 Go 프로젝트를 생성합니다.

    Examples:
        foundry new myapp
        foundry new myapp --layout minimal --github octocat
        foundry new myapp --vars "port=9090,db=postgres"
    """
    ui = InteractiveUI()

    if list_layouts:
        show_layouts(ui)
        return

    if not name:
        ui.show_error("프로젝트 이름이 필요합니다 (foundry new NAME)")
        raise typer.Exit(1)

    project_dir = Path.cwd() / name
    created = False

    try:
        print_command_header("New Project", name)
        validate_name(name)
        LayoutRegistry.get(layout)

        if project_dir.exists():
            if not force:
                ui.show_error(f"디렉토리가 이미 존재합니다: {project_dir} (덮어쓰려면 --force 사용)")
                raise typer.Exit(1)
            shutil.rmtree(project_dir)
            ui.show_info(f"기존 디렉토리 삭제: {project_dir}")

        data = build_project_data(name, module, layout, author, license_name, description, github, custom_vars)

        created = True
        entry_file = generate_into(project_dir, layout, data, overwrite=False, no_git=no_git, ui=ui)
        show_completion(project_dir, data, entry_file, layout, cd_hint=True)
        print_divider()

    except typer.Exit:
        raise
    except KeyboardInterrupt:
        ui.show_error("취소되었습니다")
        _cleanup(project_dir, created)
        raise typer.Exit(1)
    except ProjectError as e:
        ui.show_error(str(e))
        _cleanup(project_dir, created)
        raise typer.Exit(1)
    except Exception as e:
        ui.show_error(f"프로젝트 생성 중 오류 발생: {e}")
        _cleanup(project_dir, created)
        raise typer.Exit(1)


def _cleanup(project_dir: Path, created: bool) -> None:
    # 생성 도중 실패하면 만든 디렉토리만 제거
    if created and project_dir.exists():
        shutil.rmtree(project_dir, ignore_errors=True)
