"""
Add Command Implementation

현재 프로젝트에 handler / model / middleware / database 파일을 추가합니다.
"""

import typer

from foundry.cli.commands.wire_command import run_handler_wiring, run_middleware_wiring
from foundry.cli.utils.header import print_block, print_command_header, print_divider, print_item, print_section
from foundry.cli.utils.interactive_ui import InteractiveUI
from foundry.cli.utils.validation import validate_name
from foundry.project.databases import get_database, setup_steps
from foundry.project.errors import ProjectError
from foundry.project.generator import ComponentGenerator
from foundry.project.inspector import ProjectInspector
from foundry.project.writer import FileWriter
from foundry.wiring.catalog import get_spec
from foundry.wiring.errors import UnsupportedKindError


def _component_generator(dry_run: bool) -> ComponentGenerator:
    inspector = ProjectInspector()
    inspector.require_go_project()
    return ComponentGenerator(
        project_root=inspector.root,
        module_name=inspector.current_module_name(),
        layout_name=inspector.detected_layout(),
        writer=FileWriter(dry_run=dry_run),
    )


def _show_plan(generator: ComponentGenerator) -> None:
    print_section("DRY-RUN", "생성 예정 파일", style="yellow")
    for path in generator.writer.planned:
        print_item("FILE", str(path))


def add_handler_command(
    name: str = typer.Argument(..., help="핸들러 이름 (예: user)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="파일을 만들지 않고 계획만 출력"),
    auto_wire: bool = typer.Option(False, "--auto-wire", help="생성 후 routes.go에 자동 연결"),
    force: bool = typer.Option(False, "--force", "-f", help="기존 파일 덮어쓰기"),
    yes: bool = typer.Option(False, "--yes", "-y", help="연결 확인 없이 적용"),
) -> None:
    """
    REST 핸들러를 internal/handlers/<name>.go로 생성합니다.

    Examples:
        foundry add handler user
        foundry add handler product --auto-wire
    """
    ui = InteractiveUI()

    try:
        print_command_header("Add Handler", name)
        validate_name(name)

        generator = _component_generator(dry_run)
        path = generator.generate_handler(name, overwrite=force)

        if dry_run:
            _show_plan(generator)
            return

        print_section("OK", f"{name} 핸들러 생성 완료", style="green", newline=False)
        print_item("FILE", str(path))

        if auto_wire:
            run_handler_wiring(ui, name, assume_yes=yes, project_root=generator.project_root)
        else:
            print_section("NEXT", "라우트에 연결하기", style="blue")
            print_block(f"  foundry wire handler {name}")
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
        ui.show_error(f"핸들러 생성 중 오류 발생: {e}")
        raise typer.Exit(1)


def add_model_command(
    name: str = typer.Argument(..., help="모델 이름 (예: product)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="파일을 만들지 않고 계획만 출력"),
    force: bool = typer.Option(False, "--force", "-f", help="기존 파일 덮어쓰기"),
) -> None:
    """
    데이터 모델을 internal/models/<name>.go로 생성합니다.
    """
    ui = InteractiveUI()

    try:
        print_command_header("Add Model", name)
        validate_name(name)

        generator = _component_generator(dry_run)
        path = generator.generate_model(name, overwrite=force)

        if dry_run:
            _show_plan(generator)
            return

        print_section("OK", f"{name} 모델 생성 완료", style="green", newline=False)
        print_item("FILE", str(path))
        print_divider()

    except KeyboardInterrupt:
        ui.show_error("취소되었습니다")
        raise typer.Exit(1)
    except ProjectError as e:
        ui.show_error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        ui.show_error(f"모델 생성 중 오류 발생: {e}")
        raise typer.Exit(1)


def add_middleware_command(
    kind: str = typer.Argument(..., help="미들웨어 종류 (foundry layout info 참고)"),
    dry_run: bool = typer.Option(False, "--dry-run", help="파일을 만들지 않고 계획만 출력"),
    auto_wire: bool = typer.Option(False, "--auto-wire", help="생성 후 main.go에 자동 연결"),
    force: bool = typer.Option(False, "--force", "-f", help="기존 파일 덮어쓰기"),
    yes: bool = typer.Option(False, "--yes", "-y", help="연결 확인 없이 적용"),
) -> None:
    """
    미들웨어를 internal/middleware/<kind>.go로 생성합니다.

    지원 종류: recovery, cors, logging, compression, auth, ratelimit, timeout

    Examples:
        foundry add middleware recovery
        foundry add middleware auth --auto-wire
    """
    ui = InteractiveUI()

    try:
        print_command_header("Add Middleware", kind)
        spec = get_spec(kind)

        generator = _component_generator(dry_run)
        path = generator.generate_middleware(kind, overwrite=force)

        if dry_run:
            _show_plan(generator)
            return

        print_section("OK", f"{spec.description} 생성 완료", style="green", newline=False)
        print_item("FILE", str(path))

        if auto_wire:
            run_middleware_wiring(ui, kind, assume_yes=yes, project_root=generator.project_root)
        else:
            print_section("TIPS", "사용 안내", style="blue")
            print_block(spec.usage)
            print_section("NEXT", "라우터에 연결하기", style="blue")
            print_block(f"  foundry wire middleware {kind}")
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
        ui.show_error(f"미들웨어 생성 중 오류 발생: {e}")
        raise typer.Exit(1)


def add_database_command(
    db_type: str = typer.Argument(..., help="데이터베이스 종류 (postgres, mysql, sqlite, mongodb)"),
    with_migrations: bool = typer.Option(False, "--with-migrations", help="migrations/ 디렉토리와 초기 스키마 생성"),
    with_docker: bool = typer.Option(False, "--with-docker", help="docker-compose.yml 생성"),
    dry_run: bool = typer.Option(False, "--dry-run", help="파일을 만들지 않고 계획만 출력"),
    force: bool = typer.Option(False, "--force", "-f", help="기존 파일 덮어쓰기"),
) -> None:
    """
    데이터베이스 연결 코드를 internal/database/에 생성합니다.

    Examples:
        foundry add db postgres
        foundry add db mysql --with-migrations --with-docker
    """
    ui = InteractiveUI()

    try:
        print_command_header("Add Database", db_type)
        spec = get_database(db_type)

        generator = _component_generator(dry_run)
        files = generator.generate_database(
            spec.db_type, with_migrations=with_migrations, with_docker=with_docker, overwrite=force
        )

        if with_migrations and not spec.supports_migrations:
            ui.show_warning(f"{spec.title}은(는) SQL 마이그레이션을 지원하지 않아 건너뜁니다")
        if with_docker and not spec.supports_docker:
            ui.show_warning(f"{spec.title}은(는) 별도 컨테이너가 필요 없어 Docker 설정을 건너뜁니다")
        for path in files.skipped:
            ui.show_warning(f"기존 파일 유지: {path}")

        if dry_run:
            _show_plan(generator)
            return

        print_section("OK", f"{spec.title} 지원 추가 완료", style="green", newline=False)
        for path in files.written:
            print_item("FILE", str(path))
        print_item("DRIVER", spec.driver)

        print_section("NEXT", "설정 절차", style="blue")
        print_block(setup_steps(spec, generator.module_name))
        print_divider()

    except KeyboardInterrupt:
        ui.show_error("취소되었습니다")
        raise typer.Exit(1)
    except ProjectError as e:
        ui.show_error(str(e))
        raise typer.Exit(1)
    except Exception as e:
        ui.show_error(f"데이터베이스 설정 생성 중 오류 발생: {e}")
        raise typer.Exit(1)
