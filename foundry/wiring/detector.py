"""
라우터 패턴 감지기

파서를 쓰지 않고 특징 문자열의 포함 여부만 세어서 라우터 사용 패턴을
분류합니다. 스캐폴딩으로 생성된 엔트리 파일은 작고 형태가 정해져 있어서
이 정도 휴리스틱으로 충분하며, 오판은 수동 연결 안내로 이어집니다.
"""

from types import MappingProxyType
from typing import Dict, Mapping, Tuple

from foundry.utils.logger import log_wire_debug
from foundry.wiring.types import RouterIdiom

# 판정 우선순위: 여러 패턴이 임계값을 넘으면 이 순서의 첫 번째가 선택된다
DETECTION_ORDER: Tuple[RouterIdiom, ...] = (
    RouterIdiom.CHI,
    RouterIdiom.GIN,
    RouterIdiom.GORILLA,
    RouterIdiom.PLAIN_HTTP,
)

IDIOM_INDICATORS: Mapping[RouterIdiom, Tuple[str, ...]] = MappingProxyType(
    {
        RouterIdiom.CHI: ("github.com/go-chi/chi", "chi.NewRouter", ".Use("),
        RouterIdiom.GIN: ("github.com/gin-gonic/gin", "gin.Default", "gin.New"),
        RouterIdiom.GORILLA: ("github.com/gorilla/mux", "mux.NewRouter"),
        RouterIdiom.PLAIN_HTTP: ("net/http", "http.HandleFunc", "http.ListenAndServe"),
    }
)

DEFAULT_IDIOM = RouterIdiom.CHI


def _threshold(idiom: RouterIdiom) -> int:
    # net/http는 구별되는 토큰이 적어서 하나만 있어도 채택
    return 1 if idiom == RouterIdiom.PLAIN_HTTP else 2


def count_indicators(content: str) -> Dict[RouterIdiom, int]:
    """패턴별로 content에 포함된 특징 문자열 개수를 센다."""
    return {
        idiom: sum(1 for indicator in IDIOM_INDICATORS[idiom] if indicator in content)
        for idiom in DETECTION_ORDER
    }


def detect_router_idiom(content: str) -> RouterIdiom:
    """
    엔트리 파일 내용으로 라우터 패턴을 분류한다.

    Args:
        content: 엔트리 파일 전체 텍스트

    Returns:
        임계값을 넘은 첫 번째 패턴. 아무것도 없으면 DEFAULT_IDIOM(chi).
    """
    counts = count_indicators(content)
    for idiom in DETECTION_ORDER:
        if counts[idiom] >= _threshold(idiom):
            log_wire_debug(f"라우터 패턴 감지: {idiom.value} (indicators={counts})", "DETECT")
            return idiom

    log_wire_debug(f"라우터 패턴 불명확, 기본값 사용: {DEFAULT_IDIOM.value}", "DETECT")
    return DEFAULT_IDIOM
