"""
AutoWirer orchestration tests

AutoApprover 스텁으로 확인 프롬프트 없이 상태 머신 전체를 검증합니다.
- 멱등성: 두 번째 실행은 AlreadyWired, 파일 불변
- dry-run 순수성: 파일 바이트 단위 불변
- 중복 등록 없음: 등록 심볼은 정확히 한 번
"""

import pytest

from foundry.wiring.autowirer import AutoWirer, read_source_file, wire_middleware, write_source_file
from foundry.wiring.catalog import get_spec, supported_kinds
from foundry.wiring.errors import (
    AlreadyWiredError,
    EntryFileNotFoundError,
    RejectedByUserError,
    UnsupportedKindError,
    WireIOError,
)
from foundry.wiring.preview import AutoApprover, ChangePreviewer
from foundry.wiring.types import RouterIdiom, WireRequest, WireState
from helpers import CHI_MAIN, GIN_MAIN, MODULE_NAME, GoProjectBuilder


def _wirer(root, console, answer=True):
    approver = AutoApprover(answer)
    wirer = AutoWirer(
        project_root=root,
        module_name=MODULE_NAME,
        project_name=root.name,
        approver=approver,
        previewer=ChangePreviewer(console),
    )
    return wirer, approver


class TestAutoWirer:

    def test_commit_writes_registration_once(self, go_project, string_console):
        wirer, approver = _wirer(go_project, string_console)

        result = wirer.wire("recovery")

        content = GoProjectBuilder.read_text(go_project / "main.go")
        assert result.state == WireState.COMMITTED
        assert result.applied
        assert result.idiom == RouterIdiom.CHI
        assert result.revision.changed
        assert content == result.revision.proposed_content
        assert content.count("RecoveryMiddleware") == 1
        assert approver.calls == ["Wire recovery middleware into main.go"]

    @pytest.mark.parametrize("kind", supported_kinds())
    def test_second_run_is_already_wired_and_file_is_unchanged(self, kind, go_project, string_console):
        wirer, _ = _wirer(go_project, string_console)
        entry = go_project / "main.go"

        wirer.wire(kind)
        after_first = GoProjectBuilder.read_text(entry)

        with pytest.raises(AlreadyWiredError) as exc_info:
            wirer.wire(kind)

        assert exc_info.value.code == "AlreadyWired"
        assert GoProjectBuilder.read_text(entry) == after_first
        assert after_first.count(get_spec(kind).symbol) == 1

    @pytest.mark.parametrize("answer", [True, False])
    def test_dry_run_never_touches_the_file(self, answer, go_project, string_console):
        wirer, approver = _wirer(go_project, string_console, answer=answer)
        entry = go_project / "main.go"
        before = entry.read_bytes()

        result = wirer.wire("auth", dry_run=True)

        assert entry.read_bytes() == before
        assert result.state == WireState.ABORTED
        assert result.dry_run and not result.applied
        assert "\tr.Use(middleware.AuthMiddleware)" in result.added_lines
        assert approver.calls == []

    def test_rejection_leaves_file_untouched(self, go_project, string_console):
        wirer, approver = _wirer(go_project, string_console, answer=False)
        entry = go_project / "main.go"
        before = entry.read_bytes()

        with pytest.raises(RejectedByUserError):
            wirer.wire("cors")

        assert entry.read_bytes() == before
        assert len(approver.calls) == 1

    def test_unsupported_kind_is_checked_before_scanning(self, tmp_path, string_console):
        wirer, _ = _wirer(tmp_path, string_console)

        with pytest.raises(UnsupportedKindError) as exc_info:
            wirer.wire("graphql")

        assert "recovery" in exc_info.value.supported

    def test_missing_entry_file(self, tmp_path, string_console):
        root = GoProjectBuilder.create_project(tmp_path / "api", main_go=None)
        wirer, _ = _wirer(root, string_console)

        with pytest.raises(EntryFileNotFoundError) as exc_info:
            wirer.wire("logging")

        assert exc_info.value.candidates == ["main.go", "cmd/api/main.go", "cmd/main.go"]

    def test_entry_file_under_cmd_project_directory(self, tmp_path, string_console):
        root = GoProjectBuilder.create_project(tmp_path / "api", entry="cmd/api/main.go")
        wirer, _ = _wirer(root, string_console)

        result = wirer.wire("logging")

        assert result.revision.path == root / "cmd" / "api" / "main.go"
        assert "LoggingMiddleware" in GoProjectBuilder.read_text(result.revision.path)

    def test_late_after_existing_auth(self, tmp_path, string_console):
        main_go = CHI_MAIN.replace(
            "\tr := chi.NewRouter()\n",
            "\tr := chi.NewRouter()\n\tr.Use(middleware.AuthMiddleware)\n",
        )
        root = GoProjectBuilder.create_project(tmp_path / "api", main_go=main_go)
        wirer, _ = _wirer(root, string_console)

        wirer.wire("ratelimit")

        lines = GoProjectBuilder.read_text(root / "main.go").split("\n")
        auth = lines.index("\tr.Use(middleware.AuthMiddleware)")
        assert lines[auth + 1] == "\tr.Use(middleware.RateLimitMiddleware(100, time.Minute))"

    def test_gin_project(self, tmp_path, string_console):
        root = GoProjectBuilder.create_project(tmp_path / "api", main_go=GIN_MAIN)
        wirer, _ = _wirer(root, string_console)

        result = wirer.wire("timeout")

        content = GoProjectBuilder.read_text(root / "main.go")
        assert result.idiom == RouterIdiom.GIN
        assert "\tapp.Use(middleware.TimeoutMiddleware(30 * time.Second))" in content
        assert '\t"time"' in content


class TestWireMiddlewareEntryPoint:

    def test_project_name_defaults_to_root_directory(self, tmp_path, string_console):
        root = GoProjectBuilder.create_project(tmp_path / "billing", entry="cmd/billing/main.go")
        request = WireRequest(middleware_kind="compression", dry_run=False, project_root=root, module_name=MODULE_NAME)

        result = wire_middleware(request, AutoApprover(True), previewer=ChangePreviewer(string_console))

        assert result.applied
        assert result.revision.path.parent.name == "billing"


class TestSourceFileIO:

    def test_read_missing_file_raises_wire_io_error(self, tmp_path):
        with pytest.raises(WireIOError) as exc_info:
            read_source_file(tmp_path / "missing.go", "auth")

        assert exc_info.value.code == "IOError"
        assert isinstance(exc_info.value.original_error, OSError)

    def test_write_into_missing_directory_raises_wire_io_error(self, tmp_path):
        with pytest.raises(WireIOError):
            write_source_file(tmp_path / "no" / "such" / "main.go", "package main\n", "auth")

    def test_crlf_round_trip(self, tmp_path):
        path = tmp_path / "main.go"
        write_source_file(path, "a\r\nb\r\n", "auth")
        assert read_source_file(path, "auth") == "a\r\nb\r\n"

    def test_non_utf8_entry_file_raises_wire_io_error(self, tmp_path, string_console):
        root = GoProjectBuilder.create_project(tmp_path / "api", main_go=None)
        (root / "main.go").write_bytes(b"package main\n\xff\xfe\n")
        wirer, approver = _wirer(root, string_console)

        with pytest.raises(WireIOError) as exc_info:
            wirer.wire("recovery")

        assert isinstance(exc_info.value.original_error, UnicodeDecodeError)
        assert approver.calls == []
