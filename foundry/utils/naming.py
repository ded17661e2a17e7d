"""이름 변환 헬퍼 (템플릿 필터와 라우트 연결에서 공용)"""

import re
from typing import List

_WORD_RE = re.compile(r"[A-Z]+(?=[A-Z][a-z])|[A-Z]?[a-z]+|[A-Z]+|\d+")


def split_words(name: str) -> List[str]:
    """'user_profile', 'user-profile', 'UserProfile' -> ['user', 'profile']"""
    return [word.lower() for word in _WORD_RE.findall(name)]


def to_pascal(name: str) -> str:
    return "".join(word.capitalize() for word in split_words(name))


def to_camel(name: str) -> str:
    pascal = to_pascal(name)
    return pascal[:1].lower() + pascal[1:]


def to_snake(name: str) -> str:
    return "_".join(split_words(name))


def pluralize(word: str) -> str:
    # 단순 규칙: 영어 불규칙 복수형은 다루지 않는다
    return word + "s"
