"""컴포넌트 / 프로젝트 이름 검증"""

import re

from foundry.project.errors import InvalidNameError

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 50

GO_KEYWORDS = frozenset(
    {
        "break", "case", "chan", "const", "continue", "default", "defer", "else",
        "fallthrough", "for", "func", "go", "goto", "if", "import", "interface",
        "map", "package", "range", "return", "select", "struct", "switch", "type", "var",
    }
)

# 이름으로 쓰면 생성 코드와 충돌하는 내장 식별자
GO_RESERVED_NAMES = {
    "test": "Go testing과 충돌",
    "main": "main 패키지와 충돌",
    "init": "init 함수와 충돌",
    "new": "내장 함수 new와 충돌",
    "make": "내장 함수 make와 충돌",
    "len": "내장 함수 len과 충돌",
    "cap": "내장 함수 cap과 충돌",
    "append": "내장 함수 append와 충돌",
    "copy": "내장 함수 copy와 충돌",
    "delete": "내장 함수 delete와 충돌",
    "close": "내장 함수 close와 충돌",
    "panic": "내장 함수 panic과 충돌",
    "recover": "내장 함수 recover와 충돌",
    "print": "내장 함수 print와 충돌",
    "println": "내장 함수 println과 충돌",
    "error": "내장 타입 error와 충돌",
    "string": "내장 타입 string과 충돌",
    "int": "내장 타입 int와 충돌",
    "float64": "내장 타입 float64와 충돌",
    "bool": "내장 타입 bool과 충돌",
    "byte": "내장 타입 byte와 충돌",
    "rune": "내장 타입 rune과 충돌",
}

# (패턴, 실패 사유) - 순서대로 검사
_INVALID_PATTERNS = (
    (re.compile(r"^\d"), "숫자로 시작할 수 없습니다"),
    (re.compile(r"[^a-zA-Z0-9_-]"), "영문자, 숫자, '_', '-'만 사용할 수 있습니다"),
    (re.compile(r"--+"), "'-'를 연속으로 쓸 수 없습니다"),
    (re.compile(r"__+"), "'_'를 연속으로 쓸 수 없습니다"),
    (re.compile(r"^[-_]"), "'-' 또는 '_'로 시작할 수 없습니다"),
    (re.compile(r"[-_]$"), "'-' 또는 '_'로 끝날 수 없습니다"),
)


def validate_name(name: str) -> str:
    """
    handler / model / 프로젝트 이름 검증.

    Args:
        name: 검증할 이름

    Returns:
        검증된 이름 (그대로)

    Raises:
        InvalidNameError: 규칙 위반
    """
    if not name:
        raise InvalidNameError(name, "이름이 비어 있습니다")
    if len(name) < MIN_NAME_LENGTH:
        raise InvalidNameError(name, f"최소 {MIN_NAME_LENGTH}자 이상이어야 합니다")
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidNameError(name, f"최대 {MAX_NAME_LENGTH}자까지 가능합니다")
    if any(ch.isspace() for ch in name):
        raise InvalidNameError(name, "공백을 포함할 수 없습니다")

    lowered = name.lower()
    if lowered in GO_KEYWORDS:
        raise InvalidNameError(name, "Go 예약어입니다")

    for pattern, reason in _INVALID_PATTERNS:
        if pattern.search(name):
            raise InvalidNameError(name, reason)

    if lowered in GO_RESERVED_NAMES:
        raise InvalidNameError(name, GO_RESERVED_NAMES[lowered])

    return name


def is_valid_name(name: str) -> bool:
    try:
        validate_name(name)
    except InvalidNameError:
        return False
    return True
