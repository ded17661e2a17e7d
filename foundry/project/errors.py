"""프로젝트 생성/조회 오류 계층"""

from pathlib import Path
from typing import Iterable, Optional


class ProjectError(Exception):
    """
    프로젝트 수준 오류의 기본 클래스.

    Attributes:
        original_error: 원본 예외 (있는 경우)
    """

    def __init__(self, message: str, original_error: Optional[Exception] = None):
        super().__init__(message)
        self.original_error = original_error


class LayoutNotFoundError(ProjectError):
    def __init__(self, name: str, available: Iterable[str]):
        self.name = name
        self.available = sorted(available)
        super().__init__(f"알 수 없는 레이아웃: '{name}'. 사용 가능: {', '.join(self.available)}")


class FileExistsConflictError(ProjectError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"파일이 이미 존재합니다: {path} (덮어쓰려면 --force 사용)")


class InvalidNameError(ProjectError):
    def __init__(self, name: str, reason: str):
        self.name = name
        self.reason = reason
        super().__init__(f"잘못된 이름 '{name}': {reason}")


class NotAProjectError(ProjectError):
    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Go 프로젝트가 아닙니다 (go.mod 없음): {path}")


class TemplateRenderError(ProjectError):
    """Jinja2 템플릿 조회/렌더링 실패."""

    def __init__(self, template_name: str, original_error: Exception):
        self.template_name = template_name
        super().__init__(f"템플릿 렌더링 실패: {template_name}: {original_error}", original_error=original_error)


class UnsupportedDatabaseError(ProjectError):
    def __init__(self, db_type: str, supported: Iterable[str]):
        self.db_type = db_type
        self.supported = list(supported)
        super().__init__(f"지원하지 않는 데이터베이스 '{db_type}'. 사용 가능: {', '.join(self.supported)}")
