"""엔트리 파일 탐색기"""

from pathlib import Path
from typing import List

from foundry.utils.logger import log_wire_debug
from foundry.wiring.errors import EntryFileNotFoundError

ENTRY_FILE_NAME = "main.go"


class EntryFileScanner:
    """
    관례적인 위치에서 프로젝트 엔트리 파일(main.go)을 찾는다.

    탐색 순서:
        1. <root>/main.go
        2. <root>/cmd/<project_name>/main.go
        3. <root>/cmd/main.go
    """

    def __init__(self, project_root: Path, project_name: str):
        self.project_root = Path(project_root)
        self.project_name = project_name

    def candidates(self) -> List[str]:
        """상대 경로 후보 목록 (우선순위 순)"""
        return [
            ENTRY_FILE_NAME,
            f"cmd/{self.project_name}/{ENTRY_FILE_NAME}",
            f"cmd/{ENTRY_FILE_NAME}",
        ]

    def locate(self) -> Path:
        """
        첫 번째로 존재하는 후보 경로를 반환한다.

        Raises:
            EntryFileNotFoundError: 어떤 후보도 존재하지 않는 경우
        """
        for candidate in self.candidates():
            path = self.project_root / candidate
            if path.is_file():
                log_wire_debug(f"엔트리 파일 발견: {path}", "SCAN")
                return path
            log_wire_debug(f"후보 없음: {path}", "SCAN")

        raise EntryFileNotFoundError(self.project_root, self.candidates())
