"""
Project / Layout 설정 스키마

- ProjectConfig: 생성된 프로젝트 루트의 .foundry.yaml
- LayoutManifest: 패키지 템플릿의 layouts/<name>/layout.yaml
- ProjectData: 프로젝트 템플릿 렌더링 컨텍스트
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from foundry.project.errors import ProjectError
from foundry.utils.logger import log_config

PROJECT_CONFIG_FILE = ".foundry.yaml"
DEFAULT_GO_VERSION = "1.22"


class ProjectConfig(BaseModel):
    """프로젝트별 설정 (.foundry.yaml)"""

    name: str = Field(..., description="프로젝트 이름")
    module: str = Field(..., description="Go 모듈 경로")
    layout: str = Field("standard", description="생성에 사용한 레이아웃 이름")
    version: str = Field("1", description="설정 파일 형식 버전")


class FileSpec(BaseModel):
    """레이아웃이 생성하는 파일 하나. template/target 모두 Jinja 렌더링 대상."""

    template: str
    target: str


class ComponentTemplate(BaseModel):
    """add 명령으로 추가할 수 있는 컴포넌트 템플릿"""

    template: str
    target_dir: str


class LayoutManifest(BaseModel):
    """레이아웃 매니페스트 (layout.yaml)"""

    name: str = Field(..., description="레이아웃 이름")
    description: str = Field("", description="한 줄 설명")
    version: str = Field("1.0.0", description="레이아웃 버전")
    entry_file: str = Field(..., description="엔트리 파일 경로 (Jinja 렌더링 대상)")
    directories: List[str] = Field(default_factory=list, description="생성할 디렉토리")
    files: List[FileSpec] = Field(default_factory=list, description="생성할 파일")
    components: Dict[str, ComponentTemplate] = Field(default_factory=dict, description="컴포넌트 템플릿")

    @field_validator("name")
    def validate_name(cls, v):
        if not v.strip():
            raise ValueError("레이아웃 이름이 비어 있습니다")
        return v.strip()


class ProjectData(BaseModel):
    """프로젝트 템플릿 렌더링 컨텍스트"""

    project_name: str
    module_name: str
    author: str = ""
    license: str = "MIT"
    description: str = ""
    github_username: str = ""
    go_version: str = DEFAULT_GO_VERSION
    year: int = Field(default_factory=lambda: datetime.now().year)
    custom_variables: Dict[str, str] = Field(default_factory=dict)

    def to_context(self) -> Dict[str, Any]:
        """템플릿 컨텍스트. 사용자 변수는 최상위에도 펼치되 기본 필드를 덮어쓰지 않는다."""
        context = dict(self.custom_variables)
        context.update(self.model_dump())
        context["vars"] = dict(self.custom_variables)
        return context


def parse_custom_vars(raw: str) -> Dict[str, str]:
    """
    --vars 옵션 문자열 파싱.

    Args:
        raw: "key=value,key2=value2" 형식

    Raises:
        ProjectError: key=value 형식이 아닌 항목이 있는 경우
    """
    result: Dict[str, str] = {}
    if not raw:
        return result
    for pair in raw.split(","):
        pair = pair.strip()
        if not pair:
            continue
        key, sep, value = pair.partition("=")
        if not sep or not key.strip():
            raise ProjectError(f"잘못된 변수 형식: '{pair}' (key=value 형식이어야 합니다)")
        result[key.strip()] = value.strip()
    return result


def _load_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ProjectError(f"YAML 파싱 실패 ({path}): {e}", original_error=e) from e
    except OSError as e:
        raise ProjectError(f"파일 읽기 실패 ({path}): {e}", original_error=e) from e

    if not isinstance(data, dict):
        raise ProjectError(f"YAML 최상위가 매핑이 아닙니다: {path}")
    return data


def load_layout_manifest(path: Path) -> LayoutManifest:
    """layout.yaml 로드 및 검증"""
    data = _load_yaml(path)
    try:
        manifest = LayoutManifest(**data)
    except ValidationError as e:
        raise ProjectError(f"레이아웃 매니페스트 검증 실패 ({path}): {e}", original_error=e) from e
    log_config(f"레이아웃 매니페스트 로드: {manifest.name} ({path})")
    return manifest


def load_project_config(path: Path) -> ProjectConfig:
    """.foundry.yaml 로드 및 검증"""
    data = _load_yaml(path)
    try:
        config = ProjectConfig(**data)
    except ValidationError as e:
        raise ProjectError(f"프로젝트 설정 검증 실패 ({path}): {e}", original_error=e) from e
    log_config(f"프로젝트 설정 로드: {config.name} (layout={config.layout})")
    return config


def dump_project_config(config: ProjectConfig) -> str:
    return yaml.safe_dump(config.model_dump(), sort_keys=False, allow_unicode=True)
