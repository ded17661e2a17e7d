"""중복 연결 방지 검사"""

from foundry.wiring.catalog import get_spec, title_symbol


def is_already_wired(content: str, kind: str) -> bool:
    """
    content에 미들웨어 심볼이 이미 등장하는지 확인한다.

    Title(kind) + "Middleware" 관례 이름을 대소문자 구분 없이 비교하므로
    RateLimitMiddleware, CORSMiddleware처럼 관례와 대소문자만 다른 심볼도 잡힌다.
    """
    lowered = content.lower()
    if title_symbol(kind).lower() in lowered:
        return True
    return get_spec(kind).symbol.lower() in lowered
