"""
Content rewriter tests
"""

import pytest

from foundry.wiring.rewriter import apply_plan, detect_newline, rewrite_content, splice_lines
from foundry.wiring.types import InsertionPlan, InsertionPoint, Placement, RouterIdiom
from helpers import CHI_MAIN, GIN_MAIN, HTTP_MAIN, MODULE_NAME


class TestSpliceLines:

    def test_before_and_after_on_same_anchor(self):
        lines = ["a", "b", "c"]
        points = [
            InsertionPoint(1, Placement.AFTER, "b2"),
            InsertionPoint(1, Placement.BEFORE, "b0"),
            InsertionPoint(2, Placement.AFTER, "c2"),
        ]
        assert splice_lines(lines, points) == ["a", "b0", "b", "b2", "c", "c2"]

    def test_points_at_same_anchor_keep_their_order(self):
        points = [InsertionPoint(0, Placement.AFTER, "x"), InsertionPoint(0, Placement.AFTER, "y")]
        assert splice_lines(["a"], points) == ["a", "x", "y"]

    def test_input_is_not_mutated(self):
        lines = ["a"]
        splice_lines(lines, [InsertionPoint(0, Placement.BEFORE, "z")])
        assert lines == ["a"]


class TestRewriteContent:

    def test_recovery_lands_right_after_router_construction(self):
        result = rewrite_content(CHI_MAIN, RouterIdiom.CHI, "recovery", MODULE_NAME)
        lines = result.split("\n")

        construction = lines.index("\tr := chi.NewRouter()")
        assert lines[construction + 1] == "\tr.Use(middleware.RecoveryMiddleware)"
        assert '\t"example.com/shop/internal/middleware"' in lines

    def test_ratelimit_goes_after_existing_auth(self):
        content = CHI_MAIN.replace(
            "\tr := chi.NewRouter()\n",
            "\tr := chi.NewRouter()\n\tr.Use(middleware.AuthMiddleware)\n",
        )
        result = rewrite_content(content, RouterIdiom.CHI, "ratelimit", MODULE_NAME)
        lines = result.split("\n")

        auth = lines.index("\tr.Use(middleware.AuthMiddleware)")
        assert lines[auth + 1] == "\tr.Use(middleware.RateLimitMiddleware(100, time.Minute))"
        assert '\t"time"' in lines

    def test_missing_import_block_still_registers(self):
        content = "package main\n\nfunc main() {\n\tr := chi.NewRouter()\n\tr.Route(\"/api\", nil)\n}\n"

        result = rewrite_content(content, RouterIdiom.CHI, "recovery", MODULE_NAME)

        assert "import" not in result
        assert result.split("\n")[4] == "\tr.Use(middleware.RecoveryMiddleware)"

    @pytest.mark.parametrize("kind", ["auth", "ratelimit", "timeout"])
    def test_plain_http_adds_only_guidance_comment(self, kind):
        # 주석만 추가되므로 사용되지 않는 import가 생기면 Go 빌드가 깨진다
        result = rewrite_content(HTTP_MAIN, RouterIdiom.PLAIN_HTTP, kind, MODULE_NAME)

        added = [line for line in result.split("\n") if line not in HTTP_MAIN.split("\n")]
        assert len(added) == 1
        assert added[0].strip().startswith("// Add middleware.")
        assert '"example.com/shop/internal/middleware"' not in result
        assert '"time"' not in result

    def test_import_block_without_space(self):
        content = CHI_MAIN.replace("import (", "import(")

        result = rewrite_content(content, RouterIdiom.CHI, "timeout", MODULE_NAME)
        lines = result.split("\n")

        closing = lines.index(")")
        assert lines[closing - 2:closing] == ['\t"example.com/shop/internal/middleware"', '\t"time"']

    def test_only_added_lines_differ(self):
        result = rewrite_content(GIN_MAIN, RouterIdiom.GIN, "cors", MODULE_NAME)

        original_lines = GIN_MAIN.split("\n")
        result_lines = result.split("\n")
        assert len(result_lines) == len(original_lines) + 2
        assert [line for line in result_lines if line not in original_lines] == [
            '\t"example.com/shop/internal/middleware"',
            "\tapp.Use(middleware.CORSMiddleware)",
        ]

    def test_crlf_is_preserved(self):
        content = CHI_MAIN.replace("\n", "\r\n")

        result = rewrite_content(content, RouterIdiom.CHI, "logging", MODULE_NAME)

        assert detect_newline(result) == "\r\n"
        assert result.count("\n") == result.count("\r\n")
        assert "\tr.Use(middleware.LoggingMiddleware)\r\n" in result


def test_apply_plan_with_no_imports():
    plan = InsertionPlan(registration=InsertionPoint(0, Placement.AFTER, "added"))
    assert apply_plan("first\nsecond\n", plan) == "first\nadded\nsecond\n"
