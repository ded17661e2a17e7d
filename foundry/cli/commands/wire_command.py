"""
Wire Command Implementation

기존 컴포넌트를 엔트리 파일 / 라우트 파일에 연결합니다.
연결에 실패하거나 사용자가 취소하면 수동 연결 절차를 출력합니다.
"""

from pathlib import Path
from typing import Optional

import typer

from foundry.cli.utils.header import print_block, print_command_header, print_divider, print_item, print_section
from foundry.cli.utils.interactive_ui import InteractiveUI
from foundry.project.errors import ProjectError
from foundry.project.generator import ComponentGenerator
from foundry.project.inspector import ProjectInspector
from foundry.utils.logger import log_cli, log_error
from foundry.utils.naming import pluralize, to_snake
from foundry.wiring.autowirer import AutoWirer
from foundry.wiring.catalog import get_spec, manual_wiring_instructions
from foundry.wiring.errors import RejectedByUserError, UnsupportedKindError, WireError
from foundry.wiring.preview import AutoApprover, ChangePreviewer, ConsoleApprover
from foundry.wiring.routes import ROUTES_FILE, RouteWirer, handler_registration_lines
from foundry.wiring.types import WireResult


def run_middleware_wiring(
    ui: InteractiveUI,
    kind: str,
    dry_run: bool = False,
    assume_yes: bool = False,
    project_root: Optional[Path] = None,
) -> Optional[WireResult]:
    """
    미들웨어 자동 연결 실행 후 결과를 출력한다.

    사용자가 취소하면 수동 연결 절차를 출력하고 None을 반환한다.
    그 밖의 WireError는 수동 연결 절차를 출력한 뒤 typer.Exit(1)로 종료한다.
    UnsupportedKindError는 호출자가 먼저 걸러야 한다.
    """
    inspector = ProjectInspector(project_root)
    module_name = inspector.current_module_name()
    approver = AutoApprover(True) if assume_yes else ConsoleApprover(ui.console)
    wirer = AutoWirer(
        project_root=inspector.root,
        module_name=module_name,
        project_name=inspector.current_project_name(),
        approver=approver,
        previewer=ChangePreviewer(ui.console),
    )

    try:
        result = wirer.wire(kind, dry_run=dry_run)
    except RejectedByUserError:
        ui.show_info("연결이 취소되었습니다. 직접 연결하려면 아래 절차를 따르세요.")
        _show_manual_instructions(kind, module_name)
        return None
    except WireError as e:
        log_error(str(e), "WIRE")
        ui.show_warning(f"자동 연결 실패: {e}")
        _show_manual_instructions(kind, module_name)
        raise typer.Exit(1)

    if result.dry_run:
        print_section("DRY-RUN", "변경 사항을 적용하지 않았습니다", style="yellow")
        return result

    print_section("OK", f"{kind} 미들웨어 연결 완료", style="green")
    print_item("FILE", str(result.revision.path))
    print_item("IDIOM", result.idiom.value)
    _show_usage_tips(kind)
    return result


def _show_manual_instructions(kind: str, module_name: str) -> None:
    print_section("MANUAL", "수동 연결 절차", style="yellow")
    print_block(manual_wiring_instructions(kind, module_name))


def _show_usage_tips(kind: str) -> None:
    print_section("TIPS", f"{kind} 미들웨어 사용 안내", style="blue")
    print_block(get_spec(kind).usage)


def wire_middleware_command(
    kind: str = typer.Argument(..., help="미들웨어 종류 (recovery, cors, logging, compression, auth, ratelimit, timeout)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="변경 미리보기만 출력"),
    yes: bool = typer.Option(False, "--yes", "-y", help="확인 없이 적용"),
) -> None:
    """
    생성된 미들웨어를 엔트리 파일(main.go)의 라우터에 연결합니다.

    Examples:
        foundry wire middleware recovery
        foundry wire middleware ratelimit --dry-run
    """
    ui = InteractiveUI()

    try:
        print_command_header("Wire Middleware", kind)
        get_spec(kind)

        inspector = ProjectInspector()
        inspector.require_go_project()

        generator = ComponentGenerator(inspector.root, inspector.current_module_name(), inspector.detected_layout())
        middleware_file = generator.middleware_path(kind)
        if not middleware_file.is_file():
            ui.show_error(f"미들웨어 파일이 없습니다: {middleware_file}")
            ui.show_info(f"먼저 실행하세요: foundry add middleware {kind}")
            raise typer.Exit(1)

        log_cli(f"[WIRE] {kind} -> {inspector.root}")
        run_middleware_wiring(ui, kind, dry_run=dry_run, assume_yes=yes)
        print_divider()

    except typer.Exit:
        raise
    except KeyboardInterrupt:
        ui.show_error("취소되었습니다")
        raise typer.Exit(1)
    except UnsupportedKindError as e:
        ui.show_error(str(e))
        raise typer.Exit(1)
    except ProjectError as e:
        ui.show_error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        ui.show_error(f"연결 중 오류 발생: {e}")
        raise typer.Exit(1)


def run_handler_wiring(
    ui: InteractiveUI,
    name: str,
    dry_run: bool = False,
    assume_yes: bool = False,
    project_root: Optional[Path] = None,
) -> Optional[WireResult]:
    """핸들러 라우트 연결. 취소 시 None, 실패 시 안내 출력 후 typer.Exit(1)."""
    inspector = ProjectInspector(project_root)
    module_name = inspector.current_module_name()
    approver = AutoApprover(True) if assume_yes else ConsoleApprover(ui.console)
    wirer = RouteWirer(inspector.root, module_name, approver, previewer=ChangePreviewer(ui.console))

    try:
        result = wirer.wire(name, dry_run=dry_run)
    except RejectedByUserError:
        ui.show_info("연결이 취소되었습니다")
        return None
    except WireError as e:
        log_error(str(e), "WIRE")
        ui.show_warning(f"라우트 연결 실패: {e}")
        manual = "\n".join(handler_registration_lines(name))
        print_section("MANUAL", f"{ROUTES_FILE.as_posix()}의 RegisterAPIRoutes에 추가하세요", style="yellow")
        print_block(f"   import \"{module_name}/internal/handlers\"\n\n{manual}")
        raise typer.Exit(1)

    if result.dry_run:
        print_section("DRY-RUN", "변경 사항을 적용하지 않았습니다", style="yellow")
        return result

    resource_path = pluralize(to_snake(name).replace("_", "-"))
    print_section("OK", f"{name} 핸들러 연결 완료", style="green")
    print_item("FILE", str(result.revision.path))
    print_section("NEXT", "사용 가능한 엔드포인트", style="blue")
    print_block(
        f"  GET    /api/v1/{resource_path}\n"
        f"  POST   /api/v1/{resource_path}\n"
        f"  GET    /api/v1/{resource_path}/{{id}}\n"
        f"  PUT    /api/v1/{resource_path}/{{id}}\n"
        f"  DELETE /api/v1/{resource_path}/{{id}}"
    )
    return result


def wire_handler_command(
    name: str = typer.Argument(..., help="핸들러 이름"),
    dry_run: bool = typer.Option(False, "--dry-run", help="변경 미리보기만 출력"),
    yes: bool = typer.Option(False, "--yes", "-y", help="확인 없이 적용"),
) -> None:
    """
    생성된 핸들러를 internal/routes/routes.go에 연결합니다.

    Examples:
        foundry wire handler user
    """
    ui = InteractiveUI()

    try:
        print_command_header("Wire Handler", name)

        inspector = ProjectInspector()
        inspector.require_go_project()

        handler_file = inspector.root / "internal" / "handlers" / f"{to_snake(name)}.go"
        if not handler_file.is_file():
            ui.show_error(f"핸들러 파일이 없습니다: {handler_file}")
            ui.show_info(f"먼저 실행하세요: foundry add handler {name}")
            raise typer.Exit(1)

        run_handler_wiring(ui, name, dry_run=dry_run, assume_yes=yes)
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
        ui.show_error(f"연결 중 오류 발생: {e}")
        raise typer.Exit(1)
