"""
Template Engine for Foundry CLI

Jinja2 기반 템플릿 렌더링. 레이아웃 파일, 컴포넌트, 미들웨어 템플릿이
모두 foundry/cli/templates 아래에 있습니다.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from jinja2 import Environment, FileSystemLoader, TemplateError, TemplateNotFound

from foundry.project.errors import FileExistsConflictError, TemplateRenderError
from foundry.utils.naming import pluralize, to_camel, to_pascal, to_snake

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"


class TemplateEngine:
    """Jinja2 기반 템플릿 렌더링 엔진.

    pascal / camel / snake / plural 필터를 등록해 Go 식별자를 만든다.
    """

    def __init__(self, template_dir: Path = TEMPLATES_DIR):
        """템플릿 엔진 초기화.

        Args:
            template_dir: 템플릿 파일이 위치한 디렉토리 경로

        Raises:
            FileNotFoundError: 템플릿 디렉토리가 존재하지 않을 경우
        """
        if not template_dir.exists():
            raise FileNotFoundError(f"Template directory not found: {template_dir}")

        self.template_dir = template_dir
        self.env = Environment(
            loader=FileSystemLoader(str(template_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["pascal"] = to_pascal
        self.env.filters["camel"] = to_camel
        self.env.filters["snake"] = to_snake
        self.env.filters["plural"] = pluralize

    def has_template(self, template_name: str) -> bool:
        return (self.template_dir / template_name).is_file()

    def render_template(self, template_name: str, context: Dict[str, Any]) -> str:
        """템플릿 파일을 렌더링하여 문자열로 반환.

        Args:
            template_name: 렌더링할 템플릿 파일 이름 (상대 경로)
            context: 템플릿에 전달할 변수 딕셔너리

        Raises:
            TemplateRenderError: 템플릿이 없거나 렌더링에 실패한 경우
        """
        try:
            template = self.env.get_template(template_name)
            return template.render(**context)
        except TemplateNotFound as e:
            logger.error(f"Template을 찾을 수 없습니다: {template_name}")
            raise TemplateRenderError(template_name, e) from e
        except TemplateError as e:
            raise TemplateRenderError(template_name, e) from e

    def render_string(self, source: str, context: Dict[str, Any]) -> str:
        """경로 등 짧은 문자열 템플릿 렌더링"""
        try:
            return self.env.from_string(source).render(**context)
        except TemplateError as e:
            raise TemplateRenderError(source, e) from e

    def write_rendered_file(
        self,
        template_name: str,
        output_path: Path,
        context: Dict[str, Any],
        overwrite: bool = False,
    ) -> None:
        """렌더링된 템플릿을 파일로 저장.

        Raises:
            FileExistsConflictError: 파일이 있고 overwrite=False
            TemplateRenderError: 렌더링 실패
        """
        if output_path.exists() and not overwrite:
            raise FileExistsConflictError(output_path)

        rendered_content = self.render_template(template_name, context)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(rendered_content, encoding="utf-8")

    def list_templates(self, pattern: Optional[str] = None) -> List[str]:
        """사용 가능한 템플릿 파일 목록 반환.

        Args:
            pattern: 파일 패턴 (예: "middleware/*.j2")
        """
        if pattern:
            template_paths = self.template_dir.glob(pattern)
        else:
            template_paths = self.template_dir.rglob("*")

        templates = [
            path.relative_to(self.template_dir).as_posix() for path in template_paths if path.is_file()
        ]
        return sorted(templates)
