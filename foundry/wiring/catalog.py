"""
미들웨어 카탈로그

지원하는 미들웨어 종류별 순서 구간, 등록 심볼, 등록 인자, 사용 안내를
모듈 수준의 불변 테이블로 제공합니다.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import List, Mapping

from foundry.wiring.errors import UnsupportedKindError
from foundry.wiring.types import MiddlewarePosition


@dataclass(frozen=True)
class MiddlewareSpec:
    """
    미들웨어 한 종류의 정적 정보.

    Attributes:
        kind: CLI에서 쓰는 종류 이름 (예: "ratelimit")
        description: 한 줄 설명
        position: 순서 구간
        symbol: 생성되는 Go 코드의 exported 심볼 이름
        call_args: 등록 시 심볼 뒤에 붙는 호출 인자 (없으면 빈 문자열)
        usage: 연결 후 출력할 사용 안내
    """

    kind: str
    description: str
    position: MiddlewarePosition
    symbol: str
    call_args: str = ""
    usage: str = ""

    @property
    def expression(self) -> str:
        """등록 호출에 들어갈 Go 표현식 (예: middleware.RateLimitMiddleware(100, time.Minute))"""
        return f"middleware.{self.symbol}{self.call_args}"

    @property
    def requires_time(self) -> bool:
        return "time." in self.call_args

    @property
    def template_name(self) -> str:
        return f"middleware/{self.kind}.go.j2"


_SPECS = (
    MiddlewareSpec(
        kind="recovery",
        description="Panic recovery middleware",
        position=MiddlewarePosition.EARLY,
        symbol="RecoveryMiddleware",
        usage=(
            "  - Should be the first middleware in your chain\n"
            "  - Catches panics and returns 500 Internal Server Error\n"
            "  - Check logs for panic details and stack traces"
        ),
    ),
    MiddlewareSpec(
        kind="cors",
        description="CORS middleware",
        position=MiddlewarePosition.EARLY,
        symbol="CORSMiddleware",
        usage=(
            "  - Default allows all origins (*) - change for production!\n"
            "  - Customize origins in internal/middleware/cors.go\n"
            '  - Test with: curl -H "Origin: https://yoursite.com" -X OPTIONS http://localhost:8080/api/v1/health'
        ),
    ),
    MiddlewareSpec(
        kind="logging",
        description="Request/response logging middleware",
        position=MiddlewarePosition.MIDDLE,
        symbol="LoggingMiddleware",
        usage=(
            "  - Logs all HTTP requests with method, path, status, duration\n"
            "  - Customize log format in internal/middleware/logging.go"
        ),
    ),
    MiddlewareSpec(
        kind="compression",
        description="Response compression middleware",
        position=MiddlewarePosition.MIDDLE,
        symbol="CompressionMiddleware",
        usage=(
            "  - Automatically compresses responses with gzip\n"
            "  - Only compresses if client sends Accept-Encoding: gzip\n"
            '  - Test with: curl -H "Accept-Encoding: gzip" http://localhost:8080/api/v1/health -v'
        ),
    ),
    MiddlewareSpec(
        kind="auth",
        description="Authentication middleware",
        position=MiddlewarePosition.LATE,
        symbol="AuthMiddleware",
        usage=(
            "  - Update validateToken() in internal/middleware/auth.go with your auth logic\n"
            '  - Access user info in handlers: userID := r.Context().Value(middleware.UserIDKey).(string)\n'
            '  - Test with: curl -H "Authorization: Bearer valid-token" http://localhost:8080/api/v1/health'
        ),
    ),
    MiddlewareSpec(
        kind="ratelimit",
        description="Rate limiting middleware",
        position=MiddlewarePosition.LATE,
        symbol="RateLimitMiddleware",
        call_args="(100, time.Minute)",
        usage=(
            "  - Default: 100 requests/minute per IP\n"
            "  - Customize limits in your middleware call: RateLimitMiddleware(50, time.Minute)\n"
            "  - Returns 429 Too Many Requests when limit exceeded"
        ),
    ),
    MiddlewareSpec(
        kind="timeout",
        description="Request timeout middleware",
        position=MiddlewarePosition.LATE,
        symbol="TimeoutMiddleware",
        call_args="(30 * time.Second)",
        usage=(
            "  - Default: 30 second timeout\n"
            "  - Customize: TimeoutMiddleware(60 * time.Second)\n"
            "  - Returns 408 Request Timeout for slow requests"
        ),
    ),
)

MIDDLEWARE_CATALOG: Mapping[str, MiddlewareSpec] = MappingProxyType({spec.kind: spec for spec in _SPECS})

# 이미 등록된 Use 라인을 분류할 때 쓰는 키워드
EARLY_KEYWORDS = ("recovery", "cors")
LATE_KEYWORDS = ("auth", "ratelimit")


def supported_kinds() -> List[str]:
    """카탈로그 순서대로 지원 종류 목록 반환"""
    return [spec.kind for spec in _SPECS]


def get_spec(kind: str) -> MiddlewareSpec:
    """
    종류 이름으로 MiddlewareSpec 조회.

    Raises:
        UnsupportedKindError: 카탈로그에 없는 종류인 경우
    """
    try:
        return MIDDLEWARE_CATALOG[kind]
    except KeyError:
        raise UnsupportedKindError(kind, MIDDLEWARE_CATALOG.keys()) from None


def position_for(kind: str) -> MiddlewarePosition:
    return get_spec(kind).position


def title_symbol(kind: str) -> str:
    """관례상 심볼 이름: 종류를 title case로 바꾸고 Middleware 접미사를 붙인다."""
    return kind.title() + "Middleware"


def manual_wiring_instructions(kind: str, module_name: str = "yourmodule") -> str:
    """
    자동 연결 실패 시 출력할 수동 연결 절차.

    Args:
        kind: 미들웨어 종류
        module_name: go.mod 모듈 이름

    Returns:
        여러 줄 안내 문자열
    """
    spec = get_spec(kind)
    time_import = '\n   import "time"' if spec.requires_time else ""
    order = supported_kinds()
    example_kinds = sorted(
        {"recovery", "logging", kind},
        key=lambda k: (MIDDLEWARE_CATALOG[k].position, order.index(k)),
    )
    example_uses = "\n".join(f"   r.Use({MIDDLEWARE_CATALOG[k].expression})" for k in example_kinds)
    return f"""Manual wiring steps for {kind} middleware:

1. Add import to your main.go:
   import "{module_name}/internal/middleware"{time_import}

2. Add middleware to your router:
   r.Use({spec.expression})

3. Make sure it's positioned correctly:
   - Recovery and CORS: First
   - Logging and compression: After recovery
   - Auth, rate limiting and timeout: Last, before routes

Example router setup:
   r := chi.NewRouter()
{example_uses}
   r.Route("/api/v1", routes.RegisterAPIRoutes)"""
