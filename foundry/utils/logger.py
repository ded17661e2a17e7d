import logging
import sys
from pathlib import Path
from typing import Optional

# CLI 전용 로그 레벨 정의 (INFO=20, WARNING=30 사이)
# 기본: CLI_LEVEL 이상만 출력, -v 옵션 시 DEBUG까지 출력
CLI_LEVEL = 25
logging.addLevelName(CLI_LEVEL, "CLI")

# 전역 로거 객체
logger = logging.getLogger("foundry")

# 현재 세션의 로그 파일 경로
_current_log_file: Optional[Path] = None


class TerminalFormatter(logging.Formatter):
    """터미널용 포맷터: 레벨이 WARNING 이상일 때만 레벨명을 붙인다."""

    def format(self, record: logging.LogRecord) -> str:
        message = record.getMessage()
        if record.levelno >= logging.WARNING:
            return f"[{record.levelname}] {message}"
        return message


class FileFormatter(logging.Formatter):
    """파일용 포맷터: 타임스탬프 및 레벨 포함"""

    def __init__(self):
        super().__init__(
            fmt="%(asctime)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )


def get_current_log_file() -> Optional[Path]:
    """현재 세션의 로그 파일 경로 반환"""
    return _current_log_file


def setup_log_level(level: int) -> None:
    """
    런타임 로그 레벨 변경 (-v, -q 옵션 지원).
    핸들러가 없으면 기본 콘솔 핸들러를 추가하여 즉시 출력 가능하게 함.
    """
    logger.setLevel(level)

    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(level)
        console_handler.setFormatter(TerminalFormatter())
        logger.addHandler(console_handler)
    else:
        for handler in logger.handlers:
            if not isinstance(handler, logging.FileHandler):
                handler.setLevel(level)


def setup_logging(verbose: bool = False, quiet: bool = False, log_file: Optional[Path] = None) -> None:
    """
    CLI 실행 단위로 foundry 로거를 설정합니다.

    Args:
        verbose: True면 DEBUG 레벨까지 터미널에 출력 (-v 옵션)
        quiet: True면 WARNING 이상만 출력 (-q 옵션). verbose가 우선한다.
        log_file: 지정 시 DEBUG 이상 모든 로그를 파일에도 기록
    """
    global _current_log_file

    # 핸들러 중복 등록 방지
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    if verbose:
        console_level = logging.DEBUG
    elif quiet:
        console_level = logging.WARNING
    else:
        console_level = CLI_LEVEL

    setup_log_level(console_level)
    logger.propagate = False

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(FileFormatter())
        logger.addHandler(file_handler)
        # 파일에는 항상 DEBUG까지 남긴다
        logger.setLevel(logging.DEBUG)
        _current_log_file = log_file
    else:
        _current_log_file = None


# 표준화된 카테고리별 로깅 함수
# 카테고리: WIRE(자동 연결), GEN(프로젝트/컴포넌트 생성), CONFIG(설정), SYS(시스템)


def log_wire(message: str, state: str = None) -> None:
    """자동 연결(wiring) 단계 로그"""
    if state:
        logger.info(f"[WIRE:{state}] {message}")
    else:
        logger.info(f"[WIRE] {message}")


def log_wire_debug(message: str, state: str = None) -> None:
    """자동 연결 상세 로그 (DEBUG)"""
    if state:
        logger.debug(f"[WIRE:{state}] {message}")
    else:
        logger.debug(f"[WIRE] {message}")


def log_gen(message: str, component: str = None) -> None:
    """프로젝트/컴포넌트 생성 로그"""
    if component:
        logger.info(f"[GEN:{component}] {message}")
    else:
        logger.info(f"[GEN] {message}")


def log_gen_debug(message: str, component: str = None) -> None:
    """생성 상세 로그 (DEBUG)"""
    if component:
        logger.debug(f"[GEN:{component}] {message}")
    else:
        logger.debug(f"[GEN] {message}")


def log_config(message: str) -> None:
    """설정 로드 관련 로그 (.foundry.yaml, layout.yaml 로드 시 사용)"""
    logger.debug(f"[CONFIG] {message}")


def log_sys(message: str) -> None:
    """시스템/환경 로그"""
    logger.info(f"[SYS] {message}")


def log_cli(message: str) -> None:
    """CLI 단계 로그 (기본 모드에서 터미널에 항상 출력)"""
    logger.log(CLI_LEVEL, message)


def log_error(message: str, category: str = None) -> None:
    """에러 로그 (기본 모드에서도 [ERROR] 접두사와 함께 출력)"""
    if category:
        logger.error(f"[{category}] {message}")
    else:
        logger.error(message)
