"""
Foundry - Core Test Fixtures
실제 파일 시스템(tmp_path)과 합성 Go 엔트리 파일로 테스트합니다.
"""

import io

import pytest
from rich.console import Console

from foundry.project.layouts import LayoutRegistry
from helpers import GoProjectBuilder


@pytest.fixture
def isolated_working_directory(tmp_path, monkeypatch):
    """임시 디렉토리를 작업 디렉토리로 사용"""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def go_project(tmp_path):
    """go.mod와 루트 main.go(chi)를 가진 최소 Go 프로젝트 루트"""
    return GoProjectBuilder.create_project(tmp_path / "shop")


@pytest.fixture
def string_console():
    """출력을 StringIO로 받는 Rich 콘솔"""
    return Console(file=io.StringIO(), width=120, color_system=None)


@pytest.fixture
def fresh_layout_registry():
    """레지스트리를 비운 뒤 테스트 종료 시 내장 레이아웃을 다시 로드"""
    LayoutRegistry.clear()
    yield LayoutRegistry
    LayoutRegistry.clear()
    LayoutRegistry.load_builtin()
