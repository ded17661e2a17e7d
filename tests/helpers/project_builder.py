from pathlib import Path
from typing import Optional

from .go_sources import CHI_MAIN, GO_MOD, ROUTES_GO


class GoProjectBuilder:
    @staticmethod
    def create_project(root: Path, main_go: Optional[str] = CHI_MAIN, entry: str = "main.go") -> Path:
        root.mkdir(parents=True, exist_ok=True)
        (root / "go.mod").write_text(GO_MOD, encoding="utf-8")
        if main_go is not None:
            path = root / entry
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(main_go, encoding="utf-8")
        return root

    @staticmethod
    def create_routes_file(root: Path, content: str = ROUTES_GO) -> Path:
        path = root / "internal" / "routes" / "routes.go"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
        return path

    @staticmethod
    def create_middleware_file(root: Path, kind: str) -> Path:
        path = root / "internal" / "middleware" / f"{kind}.go"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("package middleware\n", encoding="utf-8")
        return path

    @staticmethod
    def create_handler_file(root: Path, name: str) -> Path:
        path = root / "internal" / "handlers" / f"{name}.go"
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("package handlers\n", encoding="utf-8")
        return path

    @staticmethod
    def read_text(path: Path) -> str:
        with open(path, "r", encoding="utf-8", newline="") as f:
            return f.read()
