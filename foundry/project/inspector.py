"""현재 작업 디렉토리의 Go 프로젝트 정보 조회"""

from pathlib import Path
from typing import Optional

from foundry.project.config import PROJECT_CONFIG_FILE, load_project_config
from foundry.project.errors import NotAProjectError, ProjectError
from foundry.utils.logger import log_config

DEFAULT_MODULE_NAME = "myapp"
DEFAULT_LAYOUT = "standard"


class ProjectInspector:
    """
    프로젝트 루트에서 go.mod / .foundry.yaml을 읽는다.

    Args:
        root: 프로젝트 루트 (기본: 현재 작업 디렉토리)
    """

    def __init__(self, root: Optional[Path] = None):
        self.root = Path(root) if root is not None else Path.cwd()

    @property
    def go_mod_path(self) -> Path:
        return self.root / "go.mod"

    def is_go_project(self) -> bool:
        return self.go_mod_path.is_file()

    def require_go_project(self) -> None:
        """
        Raises:
            NotAProjectError: go.mod가 없는 경우
        """
        if not self.is_go_project():
            raise NotAProjectError(self.root)

    def current_module_name(self) -> str:
        """go.mod의 첫 module 선언. 없으면 'myapp'."""
        if not self.is_go_project():
            return DEFAULT_MODULE_NAME

        with open(self.go_mod_path, "r", encoding="utf-8") as f:
            for line in f:
                parts = line.strip().split()
                if len(parts) >= 2 and parts[0] == "module":
                    return parts[1]
        return DEFAULT_MODULE_NAME

    def current_project_name(self) -> str:
        """디렉토리 이름 -> 모듈 경로 마지막 세그먼트 -> 'myapp' 순으로 결정"""
        name = self.root.resolve().name
        if name and name not in (".", "/"):
            return name

        module = self.current_module_name()
        last = module.rstrip("/").split("/")[-1]
        return last or DEFAULT_MODULE_NAME

    def detected_layout(self) -> str:
        """.foundry.yaml의 layout. 없거나 읽을 수 없으면 'standard'."""
        config_path = self.root / PROJECT_CONFIG_FILE
        if not config_path.is_file():
            return DEFAULT_LAYOUT
        try:
            return load_project_config(config_path).layout
        except ProjectError as e:
            log_config(f"{PROJECT_CONFIG_FILE} 무시: {e}")
            return DEFAULT_LAYOUT
