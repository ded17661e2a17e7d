"""
Insertion point resolver tests

- 4개 라우터 패턴 x 3개 순서 구간 조합에서 삽입 위치를 찾는지
- 기존 Use 라인 기준 구간별 배치 규칙
- import 블록 / 한 줄 import / import 없음 처리
"""

import pytest

from foundry.wiring.catalog import get_spec
from foundry.wiring.errors import NoInsertionPointError
from foundry.wiring.resolver import InsertionPointResolver, resolve_import_points
from foundry.wiring.types import Placement, RouterIdiom
from helpers import CHI_MAIN, GIN_MAIN, GORILLA_MAIN, HTTP_MAIN, MODULE_NAME

IDIOM_SOURCES = {
    RouterIdiom.CHI: CHI_MAIN,
    RouterIdiom.GIN: GIN_MAIN,
    RouterIdiom.GORILLA: GORILLA_MAIN,
    RouterIdiom.PLAIN_HTTP: HTTP_MAIN,
}

TIER_KINDS = ["recovery", "logging", "auth"]

# 미들웨어가 없는 파일에서 (패턴, 종류)별 기대 앵커 라인과 배치
EXPECTED_ANCHORS = {
    (RouterIdiom.CHI, "recovery"): ("chi.NewRouter()", Placement.AFTER),
    (RouterIdiom.CHI, "logging"): ("r.Route(", Placement.BEFORE),
    (RouterIdiom.CHI, "auth"): ("r.Route(", Placement.BEFORE),
    (RouterIdiom.GIN, "recovery"): ("gin.Default()", Placement.AFTER),
    (RouterIdiom.GIN, "logging"): ("app.GET(", Placement.BEFORE),
    (RouterIdiom.GIN, "auth"): ("app.GET(", Placement.BEFORE),
    (RouterIdiom.GORILLA, "recovery"): ("mux.NewRouter()", Placement.AFTER),
    (RouterIdiom.GORILLA, "logging"): ("router.HandleFunc(", Placement.BEFORE),
    (RouterIdiom.GORILLA, "auth"): ("http.ListenAndServe(", Placement.BEFORE),
    (RouterIdiom.PLAIN_HTTP, "recovery"): ("http.NewServeMux()", Placement.AFTER),
    (RouterIdiom.PLAIN_HTTP, "logging"): ("mux.HandleFunc(", Placement.BEFORE),
    (RouterIdiom.PLAIN_HTTP, "auth"): ("mux.HandleFunc(", Placement.BEFORE),
}


def _lines(content):
    return content.split("\n")


def _index_of(lines, needle):
    return next(i for i, line in enumerate(lines) if needle in line)


class TestIdiomTierCoverage:
    """미들웨어가 하나도 없는 파일에서 12개 조합 모두 정해진 앵커를 찾아야 한다."""

    @pytest.mark.parametrize("idiom, kind", list(EXPECTED_ANCHORS))
    def test_every_idiom_and_tier_resolves(self, idiom, kind):
        lines = _lines(IDIOM_SOURCES[idiom])
        resolver = InsertionPointResolver(idiom, MODULE_NAME)
        needle, placement = EXPECTED_ANCHORS[(idiom, kind)]

        plan = resolver.resolve(lines, get_spec(kind))

        assert plan.registration.index == _index_of(lines, needle)
        assert plan.registration.placement == placement
        assert get_spec(kind).symbol in plan.registration.text
        assert plan.import_skipped == (idiom == RouterIdiom.PLAIN_HTTP)


class TestRegistrationAnchors:

    def test_early_goes_right_after_construction(self):
        lines = _lines(CHI_MAIN)
        point = InsertionPointResolver(RouterIdiom.CHI, MODULE_NAME).resolve_registration(
            lines, get_spec("recovery")
        )

        assert point.index == _index_of(lines, "chi.NewRouter()")
        assert point.placement == Placement.AFTER
        assert point.text == "\tr.Use(middleware.RecoveryMiddleware)"

    def test_middle_without_use_lines_goes_before_route_definition(self):
        lines = _lines(CHI_MAIN)
        point = InsertionPointResolver(RouterIdiom.CHI, MODULE_NAME).resolve_registration(
            lines, get_spec("logging")
        )

        assert point.index == _index_of(lines, "r.Route(")
        assert point.placement == Placement.BEFORE

    def test_late_goes_after_last_use_line(self):
        content = CHI_MAIN.replace(
            "\tr := chi.NewRouter()\n",
            "\tr := chi.NewRouter()\n\tr.Use(middleware.RecoveryMiddleware)\n\tr.Use(middleware.AuthMiddleware)\n",
        )
        lines = _lines(content)
        point = InsertionPointResolver(RouterIdiom.CHI, MODULE_NAME).resolve_registration(
            lines, get_spec("ratelimit")
        )

        assert point.index == _index_of(lines, "AuthMiddleware")
        assert point.placement == Placement.AFTER
        assert point.text == "\tr.Use(middleware.RateLimitMiddleware(100, time.Minute))"

    def test_middle_goes_after_first_non_late_use_line(self):
        content = CHI_MAIN.replace(
            "\tr := chi.NewRouter()\n",
            "\tr := chi.NewRouter()\n\tr.Use(middleware.RecoveryMiddleware)\n\tr.Use(middleware.AuthMiddleware)\n",
        )
        lines = _lines(content)
        point = InsertionPointResolver(RouterIdiom.CHI, MODULE_NAME).resolve_registration(
            lines, get_spec("logging")
        )

        assert point.index == _index_of(lines, "RecoveryMiddleware")
        assert point.placement == Placement.AFTER

    def test_middle_with_only_late_use_lines_goes_before_them(self):
        content = CHI_MAIN.replace(
            "\tr := chi.NewRouter()\n",
            "\tr := chi.NewRouter()\n\tr.Use(middleware.AuthMiddleware)\n",
        )
        lines = _lines(content)
        point = InsertionPointResolver(RouterIdiom.CHI, MODULE_NAME).resolve_registration(
            lines, get_spec("compression")
        )

        assert point.index == _index_of(lines, "AuthMiddleware")
        assert point.placement == Placement.BEFORE

    def test_early_without_construction_goes_before_first_use_line(self):
        content = "\n".join(
            [
                "package routes",
                "",
                "func Setup(api chi.Router) {",
                "\tapi.Use(middleware.LoggingMiddleware)",
                '\tapi.Get("/health", health)',
                "}",
            ]
        )
        lines = _lines(content)
        point = InsertionPointResolver(RouterIdiom.CHI, MODULE_NAME).resolve_registration(
            lines, get_spec("cors")
        )

        assert point.index == 3
        assert point.placement == Placement.BEFORE
        assert point.text == "\tapi.Use(middleware.CORSMiddleware)"

    def test_construction_only_inserts_after_construction_for_every_tier(self):
        content = "package main\n\nfunc main() {\n\tr := chi.NewRouter()\n\t_ = r\n}\n"
        lines = _lines(content)
        resolver = InsertionPointResolver(RouterIdiom.CHI, MODULE_NAME)

        for kind in TIER_KINDS:
            point = resolver.resolve_registration(lines, get_spec(kind))
            assert (point.index, point.placement) == (3, Placement.AFTER)

    def test_gorilla_late_prefers_server_line(self):
        lines = _lines(GORILLA_MAIN)
        resolver = InsertionPointResolver(RouterIdiom.GORILLA, MODULE_NAME)

        late = resolver.resolve_registration(lines, get_spec("auth"))
        middle = resolver.resolve_registration(lines, get_spec("logging"))

        assert late.index == _index_of(lines, "ListenAndServe")
        assert middle.index == _index_of(lines, "router.HandleFunc")
        assert late.text == "\trouter.Use(middleware.AuthMiddleware)"

    def test_router_variable_is_reused(self):
        lines = _lines(GIN_MAIN)
        point = InsertionPointResolver(RouterIdiom.GIN, MODULE_NAME).resolve_registration(
            lines, get_spec("recovery")
        )
        assert point.text == "\tapp.Use(middleware.RecoveryMiddleware)"

    def test_plain_http_emits_guidance_comment(self):
        lines = _lines(HTTP_MAIN)
        point = InsertionPointResolver(RouterIdiom.PLAIN_HTTP, MODULE_NAME).resolve_registration(
            lines, get_spec("auth")
        )

        assert point.text == "\t// Add middleware.AuthMiddleware to your handler chain"
        assert point.index == _index_of(lines, "mux.HandleFunc")

    def test_commented_construction_is_ignored(self):
        content = "package main\n\nfunc main() {\n\t// r := chi.NewRouter()\n\tr := chi.NewRouter()\n}\n"
        lines = _lines(content)
        point = InsertionPointResolver(RouterIdiom.CHI, MODULE_NAME).resolve_registration(
            lines, get_spec("recovery")
        )
        assert point.index == 4

    def test_no_anchor_raises(self):
        lines = _lines("package main\n\nfunc main() {}\n")
        resolver = InsertionPointResolver(RouterIdiom.CHI, MODULE_NAME)

        with pytest.raises(NoInsertionPointError) as exc_info:
            resolver.resolve_registration(lines, get_spec("logging"))

        assert exc_info.value.code == "NoInsertionPoint"
        assert exc_info.value.kind == "logging"


class TestImportPoints:

    def test_block_import_goes_before_closing_paren(self):
        lines = _lines(CHI_MAIN)
        points = resolve_import_points(lines, ['"example.com/shop/internal/middleware"'])

        assert len(points) == 1
        assert points[0].index == lines.index(")")
        assert points[0].placement == Placement.BEFORE
        assert points[0].text == '\t"example.com/shop/internal/middleware"'

    def test_single_line_import_goes_after_it(self):
        lines = ['package main', '', 'import "github.com/go-chi/chi/v5"', '', 'func main() {}']
        points = resolve_import_points(lines, ['"a/internal/middleware"', '"time"'])

        assert [p.index for p in points] == [2, 2]
        assert all(p.placement == Placement.AFTER for p in points)
        assert [p.text for p in points] == ['import "a/internal/middleware"', 'import "time"']

    def test_missing_import_section_returns_empty(self):
        assert resolve_import_points(["package main", "func main() {}"], ['"x"']) == ()

    def test_time_import_added_only_when_needed(self):
        resolver = InsertionPointResolver(RouterIdiom.CHI, MODULE_NAME)
        lines = _lines(CHI_MAIN)

        assert resolver.required_imports(lines, get_spec("ratelimit")) == [
            '"example.com/shop/internal/middleware"',
            '"time"',
        ]
        assert resolver.required_imports(lines, get_spec("auth")) == ['"example.com/shop/internal/middleware"']

    def test_existing_imports_are_not_duplicated(self):
        content = CHI_MAIN.replace('\t"log"\n', '\t"log"\n\t"time"\n\t"example.com/shop/internal/middleware"\n')
        resolver = InsertionPointResolver(RouterIdiom.CHI, MODULE_NAME)

        plan = resolver.resolve(_lines(content), get_spec("timeout"))

        assert plan.import_skipped
