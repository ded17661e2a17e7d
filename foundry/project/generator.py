"""
프로젝트 / 컴포넌트 생성기

레이아웃 매니페스트에 적힌 디렉토리와 파일을 TemplateEngine으로 렌더링해
FileWriter로 씁니다.
"""

import subprocess
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from foundry.cli.utils.template_engine import TemplateEngine
from foundry.project.config import PROJECT_CONFIG_FILE, ProjectConfig, ProjectData, dump_project_config
from foundry.project.databases import (
    DATABASE_DIR,
    DOCKER_COMPOSE_FILE,
    DatabaseSpec,
    ENV_BLOCK_MARKER,
    ENV_EXAMPLE_FILE,
    ENV_FIELDS,
    MIGRATIONS_DIR,
    env_block,
    get_database,
)
from foundry.project.errors import FileExistsConflictError, ProjectError
from foundry.project.layouts import LayoutRegistry
from foundry.project.writer import FileWriter
from foundry.utils.logger import log_gen, log_gen_debug, log_sys, logger
from foundry.utils.naming import to_snake
from foundry.wiring.catalog import get_spec

DEFAULT_MIDDLEWARE_DIR = "internal/middleware"


class ProjectGenerator:
    """
    레이아웃으로 새 프로젝트를 만든다.

    Args:
        engine: 템플릿 엔진 (기본: 패키지 내장 템플릿)
        writer: 파일 작성기
    """

    def __init__(self, engine: Optional[TemplateEngine] = None, writer: Optional[FileWriter] = None):
        self.engine = engine or TemplateEngine()
        self.writer = writer or FileWriter()

    def generate(
        self,
        target_dir: Path,
        layout_name: str,
        data: ProjectData,
        overwrite: bool = False,
    ) -> List[Path]:
        """
        target_dir 아래에 레이아웃의 디렉토리와 파일을 생성한다.

        Args:
            target_dir: 프로젝트 루트 (없으면 생성)
            layout_name: 레이아웃 이름
            data: 렌더링 컨텍스트
            overwrite: 기존 파일 덮어쓰기 허용

        Returns:
            작성한 파일 경로 목록

        Raises:
            LayoutNotFoundError, TemplateRenderError, FileExistsConflictError, ProjectError
        """
        manifest = LayoutRegistry.get(layout_name)
        context = data.to_context()
        context["layout"] = manifest.name

        log_gen(f"'{data.project_name}' 생성 (layout={manifest.name}) -> {target_dir}", "PROJECT")
        self.writer.ensure_dir(target_dir)

        for directory in manifest.directories:
            path = target_dir / self.engine.render_string(directory, context)
            self.writer.ensure_dir(path)
            log_gen_debug(f"디렉토리: {path}", "PROJECT")

        written: List[Path] = []
        for file_spec in manifest.files:
            target = target_dir / self.engine.render_string(file_spec.target, context)
            content = self.engine.render_template(
                LayoutRegistry.template_path(manifest.name, file_spec.template), context
            )
            written.append(self.writer.write(target, content, overwrite=overwrite))

        config = ProjectConfig(name=data.project_name, module=data.module_name, layout=manifest.name)
        written.append(
            self.writer.write(target_dir / PROJECT_CONFIG_FILE, dump_project_config(config), overwrite=overwrite)
        )
        return written

    def entry_file(self, layout_name: str, data: ProjectData) -> str:
        """렌더링된 엔트리 파일 상대 경로 (예: cmd/myapp/main.go)"""
        manifest = LayoutRegistry.get(layout_name)
        return self.engine.render_string(manifest.entry_file, data.to_context())


def init_git_repo(target_dir: Path) -> bool:
    """
    git init 실행. git이 없거나 실패하면 경고만 남기고 False.
    """
    cmd = ["git", "init"]
    try:
        result = subprocess.run(cmd, cwd=str(target_dir), capture_output=True, text=True)
    except FileNotFoundError:
        logger.warning("git을 찾을 수 없어 저장소 초기화를 건너뜁니다")
        return False

    if result.returncode != 0:
        logger.warning(f"git init 실패: {result.stderr.strip()}")
        return False

    log_sys(f"git 저장소 초기화: {target_dir}")
    return True


@dataclass
class DatabaseFiles:
    """add db 결과. skipped는 이미 있어서 건드리지 않은 파일."""

    written: List[Path] = field(default_factory=list)
    skipped: List[Path] = field(default_factory=list)


class ComponentGenerator:
    """
    기존 프로젝트에 handler / model / middleware / database 파일을 추가한다.

    Args:
        project_root: 프로젝트 루트
        module_name: go.mod 모듈 이름
        layout_name: 프로젝트 레이아웃 (.foundry.yaml 기준)
        engine: 템플릿 엔진
        writer: 파일 작성기 (dry-run이면 계획만 기록)
    """

    def __init__(
        self,
        project_root: Path,
        module_name: str,
        layout_name: str,
        engine: Optional[TemplateEngine] = None,
        writer: Optional[FileWriter] = None,
    ):
        self.project_root = Path(project_root)
        self.module_name = module_name
        self.layout_name = layout_name
        self.engine = engine or TemplateEngine()
        self.writer = writer or FileWriter()

    def _context(self, name: str) -> Dict[str, Any]:
        return {"name": name, "module_name": self.module_name, "project_name": self.project_root.name}

    def _generate(self, component: str, name: str, overwrite: bool) -> Path:
        manifest = LayoutRegistry.get(self.layout_name)
        spec = manifest.components.get(component)
        if spec is None:
            raise ProjectError(f"'{self.layout_name}' 레이아웃은 {component} 컴포넌트를 지원하지 않습니다")

        target = self.project_root / spec.target_dir / f"{to_snake(name)}.go"
        content = self.engine.render_template(spec.template, self._context(name))
        path = self.writer.write(target, content, overwrite=overwrite)
        log_gen(f"{component} '{name}' -> {target}", component.upper())
        return path

    def generate_handler(self, name: str, overwrite: bool = False) -> Path:
        return self._generate("handler", name, overwrite)

    def generate_model(self, name: str, overwrite: bool = False) -> Path:
        return self._generate("model", name, overwrite)

    def middleware_path(self, kind: str) -> Path:
        manifest = LayoutRegistry.get(self.layout_name)
        component = manifest.components.get("middleware")
        target_dir = component.target_dir if component else DEFAULT_MIDDLEWARE_DIR
        return self.project_root / target_dir / f"{kind}.go"

    def generate_middleware(self, kind: str, overwrite: bool = False) -> Path:
        """
        레이아웃의 middleware 컴포넌트 템플릿 경로({{ kind }} 포함)를 우선 사용하고,
        없으면 카탈로그 기본 경로를 쓴다.

        Raises:
            UnsupportedKindError: 카탈로그에 없는 종류
        """
        spec = get_spec(kind)
        component = LayoutRegistry.get(self.layout_name).components.get("middleware")
        template_name = (
            self.engine.render_string(component.template, {"kind": kind}) if component else spec.template_name
        )
        target = self.middleware_path(kind)
        content = self.engine.render_template(template_name, self._context(kind))
        path = self.writer.write(target, content, overwrite=overwrite)
        log_gen(f"middleware '{kind}' -> {target}", "MIDDLEWARE")
        return path

    def generate_database(
        self,
        db_type: str,
        with_migrations: bool = False,
        with_docker: bool = False,
        overwrite: bool = False,
    ) -> DatabaseFiles:
        """
        internal/database 패키지와 부가 파일을 생성한다.

        database.go / config.go는 이미 있으면 실패한다 (overwrite 제외).
        마이그레이션과 docker-compose.yml은 이미 있으면 건너뛰고 skipped에 기록한다.
        .env.example은 데이터베이스 블록이 없을 때만 뒤에 덧붙인다.

        Args:
            db_type: postgres, mysql, sqlite, mongodb
            with_migrations: migrations/ 디렉토리 생성 (mongodb 제외)
            with_docker: docker-compose.yml 생성 (sqlite 제외)
            overwrite: 기존 파일 덮어쓰기 허용

        Raises:
            UnsupportedDatabaseError: 카탈로그에 없는 종류
            FileExistsConflictError: database.go 또는 config.go가 이미 있음
        """
        spec = get_database(db_type)
        context = self._context(spec.db_type)
        context.update({"db": spec, "env_fields": ENV_FIELDS})

        package_dir = self.project_root / DATABASE_DIR
        core_files = [
            (package_dir / "database.go", spec.template_name),
            (package_dir / "config.go", "database/config.go.j2"),
        ]
        # 둘 중 하나라도 있으면 아무것도 쓰지 않는다
        for target, _ in core_files:
            if target.exists() and not overwrite:
                raise FileExistsConflictError(target)

        result = DatabaseFiles()
        for target, template_name in core_files:
            content = self.engine.render_template(template_name, context)
            result.written.append(self.writer.write(target, content, overwrite=overwrite))

        self._append_env_block(spec, result)

        optional_files = []
        if with_migrations and spec.supports_migrations:
            migrations_dir = self.project_root / MIGRATIONS_DIR
            optional_files.append((migrations_dir / "README.md", "database/migrations_readme.md.j2"))
            optional_files.append((migrations_dir / "001_initial_schema.sql", "database/initial_schema.sql.j2"))
        if with_docker and spec.supports_docker:
            optional_files.append((self.project_root / DOCKER_COMPOSE_FILE, "database/docker-compose.yml.j2"))

        for target, template_name in optional_files:
            if target.exists() and not overwrite:
                logger.warning(f"이미 존재하여 건너뜁니다: {target}")
                result.skipped.append(target)
                continue
            content = self.engine.render_template(template_name, context)
            result.written.append(self.writer.write(target, content, overwrite=overwrite))

        log_gen(f"database '{spec.db_type}' -> {package_dir}", "DATABASE")
        return result

    def _append_env_block(self, spec: DatabaseSpec, result: DatabaseFiles) -> None:
        env_path = self.project_root / ENV_EXAMPLE_FILE
        existing = ""
        if env_path.is_file():
            try:
                existing = env_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                raise ProjectError(f"파일 읽기 실패: {env_path}: {e}", original_error=e) from e

        if ENV_BLOCK_MARKER in existing:
            log_gen_debug(f"{env_path}에 데이터베이스 설정이 이미 있습니다", "DATABASE")
            result.skipped.append(env_path)
            return

        # 기존 내용과 빈 줄 하나로 구분
        if existing and not existing.endswith("\n"):
            existing += "\n"
        if existing:
            existing += "\n"
        result.written.append(self.writer.write(env_path, existing + env_block(spec), overwrite=True))
