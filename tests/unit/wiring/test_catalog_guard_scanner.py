"""
Catalog, idempotency guard, entry file scanner tests
"""

import pytest

from foundry.wiring.catalog import (
    MIDDLEWARE_CATALOG,
    get_spec,
    manual_wiring_instructions,
    position_for,
    supported_kinds,
    title_symbol,
)
from foundry.wiring.errors import EntryFileNotFoundError, UnsupportedKindError
from foundry.wiring.guard import is_already_wired
from foundry.wiring.scanner import EntryFileScanner
from foundry.wiring.types import MiddlewarePosition


class TestCatalog:

    def test_supported_kinds_in_catalog_order(self):
        assert supported_kinds() == ["recovery", "cors", "logging", "compression", "auth", "ratelimit", "timeout"]

    @pytest.mark.parametrize(
        "kind, position",
        [
            ("recovery", MiddlewarePosition.EARLY),
            ("cors", MiddlewarePosition.EARLY),
            ("logging", MiddlewarePosition.MIDDLE),
            ("compression", MiddlewarePosition.MIDDLE),
            ("auth", MiddlewarePosition.LATE),
            ("ratelimit", MiddlewarePosition.LATE),
            ("timeout", MiddlewarePosition.LATE),
        ],
    )
    def test_positions(self, kind, position):
        assert position_for(kind) == position

    def test_expressions_with_arguments(self):
        assert get_spec("ratelimit").expression == "middleware.RateLimitMiddleware(100, time.Minute)"
        assert get_spec("timeout").requires_time
        assert not get_spec("auth").requires_time

    def test_catalog_is_read_only(self):
        with pytest.raises(TypeError):
            MIDDLEWARE_CATALOG["custom"] = get_spec("auth")

    def test_unknown_kind(self):
        with pytest.raises(UnsupportedKindError) as exc_info:
            get_spec("graphql")
        assert str(exc_info.value).startswith("[UnsupportedKind]")

    def test_title_symbol(self):
        assert title_symbol("ratelimit") == "RatelimitMiddleware"

    def test_manual_instructions_mention_import_and_registration(self):
        text = manual_wiring_instructions("ratelimit", "example.com/shop")

        assert 'import "example.com/shop/internal/middleware"' in text
        assert 'import "time"' in text
        assert "r.Use(middleware.RateLimitMiddleware(100, time.Minute))" in text
        example = text.split("Example router setup:")[1]
        assert example.index("RecoveryMiddleware)") < example.index("LoggingMiddleware)") < example.index(
            "RateLimitMiddleware(100"
        )


class TestGuard:

    def test_detects_catalog_symbol_case_insensitively(self):
        assert is_already_wired("\tr.Use(middleware.RateLimitMiddleware(100, time.Minute))", "ratelimit")
        assert is_already_wired("\tr.Use(middleware.CORSMiddleware)", "cors")
        assert is_already_wired("\tr.Use(middleware.Corsmiddleware)", "cors")

    def test_other_kinds_do_not_match(self):
        content = "\tr.Use(middleware.AuthMiddleware)"
        assert is_already_wired(content, "auth")
        assert not is_already_wired(content, "ratelimit")


class TestEntryFileScanner:

    def test_prefers_root_main(self, tmp_path):
        (tmp_path / "main.go").write_text("package main\n")
        (tmp_path / "cmd" / "api").mkdir(parents=True)
        (tmp_path / "cmd" / "api" / "main.go").write_text("package main\n")

        assert EntryFileScanner(tmp_path, "api").locate() == tmp_path / "main.go"

    def test_falls_back_to_cmd_main(self, tmp_path):
        (tmp_path / "cmd").mkdir()
        (tmp_path / "cmd" / "main.go").write_text("package main\n")

        assert EntryFileScanner(tmp_path, "api").locate() == tmp_path / "cmd" / "main.go"

    def test_nothing_found(self, tmp_path):
        with pytest.raises(EntryFileNotFoundError):
            EntryFileScanner(tmp_path, "api").locate()
