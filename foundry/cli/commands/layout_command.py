"""
Layout Commands Implementation

등록된 프로젝트 레이아웃 조회.
"""

import typer

from foundry.cli.utils.header import print_item, print_section
from foundry.cli.utils.interactive_ui import InteractiveUI
from foundry.project.errors import ProjectError
from foundry.project.layouts import LayoutRegistry
from foundry.wiring.catalog import MIDDLEWARE_CATALOG


def layout_list_command() -> None:
    """사용 가능한 레이아웃 목록"""
    ui = InteractiveUI()
    try:
        layouts = LayoutRegistry.list_layouts()
    except ProjectError as e:
        ui.show_error(str(e))
        raise typer.Exit(1)

    if not layouts:
        ui.show_warning("등록된 레이아웃이 없습니다")
        return

    rows = [[m.name, m.version, m.description, ", ".join(sorted(m.components))] for m in layouts]
    ui.show_table("Available Layouts", ["Name", "Version", "Description", "Components"], rows)


def layout_info_command(
    name: str = typer.Argument(..., help="레이아웃 이름"),
) -> None:
    """
    레이아웃 상세 정보: 설명, 디렉토리, 파일, 컴포넌트.
    middleware 컴포넌트가 있으면 지원하는 미들웨어 종류도 함께 보여준다.
    """
    ui = InteractiveUI()
    try:
        manifest = LayoutRegistry.get(name)
    except ProjectError as e:
        ui.show_error(str(e))
        raise typer.Exit(1)

    print_section("LAYOUT", f"{manifest.name} (v{manifest.version})", newline=False)
    if manifest.description:
        print_item("DESC", manifest.description)
    print_item("ENTRY", manifest.entry_file)

    print_section("DIRS", "디렉토리")
    for directory in manifest.directories:
        print_item("DIR", directory)

    print_section("FILES", "파일")
    for file_spec in manifest.files:
        print_item("FILE", f"{file_spec.target}  <-  {file_spec.template}")

    print_section("COMPONENTS", "add 명령으로 추가 가능한 컴포넌트")
    for component, spec in sorted(manifest.components.items()):
        print_item(component.upper(), f"{spec.target_dir}/")

    if "middleware" in manifest.components:
        rows = [[spec.kind, spec.position.name.title(), spec.description] for spec in MIDDLEWARE_CATALOG.values()]
        ui.show_table("Middleware", ["Kind", "Position", "Description"], rows)
