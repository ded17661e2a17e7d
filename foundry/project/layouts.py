"""
LayoutRegistry - 레이아웃 매니페스트 레지스트리

패키지에 포함된 templates/layouts/<name>/layout.yaml을 읽어 등록한다.

사용 예시:
    LayoutRegistry.load_builtin()
    manifest = LayoutRegistry.get("standard")
"""

from pathlib import Path
from typing import Dict, List, Optional

from foundry.cli.utils.template_engine import TEMPLATES_DIR
from foundry.project.config import LayoutManifest, load_layout_manifest
from foundry.project.errors import LayoutNotFoundError
from foundry.utils.logger import log_config

LAYOUTS_DIR = TEMPLATES_DIR / "layouts"
MANIFEST_FILE = "layout.yaml"


class LayoutRegistry:
    """
    레이아웃 이름 -> LayoutManifest 레지스트리.

    Attributes:
        _registry: 등록된 매니페스트
    """

    _registry: Dict[str, LayoutManifest] = {}

    @classmethod
    def register(cls, manifest: LayoutManifest) -> None:
        cls._registry[manifest.name] = manifest

    @classmethod
    def get(cls, name: str) -> LayoutManifest:
        """
        Raises:
            LayoutNotFoundError: 등록되지 않은 이름
        """
        cls.load_builtin()
        if name not in cls._registry:
            raise LayoutNotFoundError(name, cls.list_keys())
        return cls._registry[name]

    @classmethod
    def list_keys(cls) -> List[str]:
        cls.load_builtin()
        return sorted(cls._registry.keys())

    @classmethod
    def list_layouts(cls) -> List[LayoutManifest]:
        return [cls._registry[key] for key in cls.list_keys()]

    @classmethod
    def load_builtin(cls, layouts_dir: Optional[Path] = None) -> None:
        """내장 레이아웃을 한 번만 로드 (이미 등록되어 있으면 생략)"""
        if cls._registry:
            return
        layouts_dir = layouts_dir or LAYOUTS_DIR
        for manifest_path in sorted(layouts_dir.glob(f"*/{MANIFEST_FILE}")):
            cls.register(load_layout_manifest(manifest_path))
        log_config(f"내장 레이아웃 {len(cls._registry)}개 로드")

    @classmethod
    def template_path(cls, layout_name: str, template: str) -> str:
        """TemplateEngine 기준 상대 경로 (layouts/<name>/<template>)"""
        return f"layouts/{layout_name}/{template}"

    @classmethod
    def clear(cls) -> None:
        """테스트용: 등록된 항목 모두 제거"""
        cls._registry.clear()
