"""파일 쓰기 (dry-run 지원)"""

from pathlib import Path
from typing import List

from foundry.project.errors import FileExistsConflictError, ProjectError
from foundry.utils.logger import log_gen_debug


class FileWriter:
    """
    상위 디렉토리를 만들고 파일을 쓴다.

    Args:
        dry_run: True면 디스크를 건드리지 않고 planned에 경로만 기록
    """

    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run
        self.planned: List[Path] = []
        self.written: List[Path] = []

    def write(self, path: Path, content: str, overwrite: bool = False) -> Path:
        """
        Raises:
            FileExistsConflictError: 파일이 있고 overwrite=False
            ProjectError: 디렉토리 생성/쓰기 실패
        """
        path = Path(path)
        if path.exists() and not overwrite:
            raise FileExistsConflictError(path)

        self.planned.append(path)
        if self.dry_run:
            log_gen_debug(f"(dry-run) {path}", "WRITE")
            return path

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise ProjectError(f"파일 작성 실패: {path}: {e}", original_error=e) from e

        self.written.append(path)
        log_gen_debug(f"작성: {path}", "WRITE")
        return path

    def ensure_dir(self, path: Path) -> Path:
        path = Path(path)
        if self.dry_run:
            return path
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ProjectError(f"디렉토리 생성 실패: {path}: {e}", original_error=e) from e
        return path
