"""
Handler route wiring tests (internal/routes/routes.go)
"""

import pytest

from foundry.wiring.errors import AlreadyWiredError, EntryFileNotFoundError, NoInsertionPointError, RejectedByUserError
from foundry.wiring.preview import AutoApprover, ChangePreviewer
from foundry.wiring.routes import RouteWirer, add_handler_route, handler_registration_lines
from foundry.wiring.types import WireState
from helpers import MODULE_NAME, ROUTES_GO, GoProjectBuilder


class TestHandlerRegistrationLines:

    def test_single_word(self):
        assert handler_registration_lines("product") == [
            "\t// Product routes",
            "\tproductHandler := handlers.NewProductHandler()",
            '\tr.Mount("/products", productHandler.Routes())',
        ]

    def test_multi_word_name_uses_kebab_plural_path(self):
        lines = handler_registration_lines("order_item", router_var="api")

        assert lines[1] == "\torderItemHandler := handlers.NewOrderItemHandler()"
        assert lines[2] == '\tapi.Mount("/order-items", orderItemHandler.Routes())'


class TestAddHandlerRoute:

    def test_inserts_before_closing_brace(self):
        result = add_handler_route(ROUTES_GO, "product", MODULE_NAME)
        lines = result.split("\n")

        mount = lines.index('\tr.Mount("/products", productHandler.Routes())')
        assert lines[mount + 1] == "}"
        assert lines.index('\tr.Get("/health", handlers.Health)') < mount
        # handlers import는 이미 있으므로 추가하지 않는다
        assert result.count('"example.com/shop/internal/handlers"') == 1

    def test_inserts_before_return(self):
        content = ROUTES_GO.replace(
            '\tr.Get("/health", handlers.Health)\n',
            '\tr.Get("/health", handlers.Health)\n\treturn\n',
        )
        lines = add_handler_route(content, "product", MODULE_NAME).split("\n")

        mount = lines.index('\tr.Mount("/products", productHandler.Routes())')
        assert lines[mount + 1] == "\treturn"

    def test_adds_handlers_import_when_missing(self):
        content = ROUTES_GO.replace('\n\t"example.com/shop/internal/handlers"\n', "\n")

        result = add_handler_route(content, "product", MODULE_NAME)

        lines = result.split("\n")
        assert lines[lines.index(")") - 1] == '\t"example.com/shop/internal/handlers"'

    def test_uses_router_parameter_name(self):
        content = ROUTES_GO.replace("RegisterAPIRoutes(r chi.Router)", "RegisterAPIRoutes(api chi.Router)")
        assert '\tapi.Mount("/products"' in add_handler_route(content, "product", MODULE_NAME)

    def test_already_registered_handler(self):
        once = add_handler_route(ROUTES_GO, "product", MODULE_NAME)

        with pytest.raises(AlreadyWiredError):
            add_handler_route(once, "product", MODULE_NAME)

    def test_missing_register_function(self):
        with pytest.raises(NoInsertionPointError):
            add_handler_route("package routes\n", "product", MODULE_NAME)


class TestRouteWirer:

    def test_wire_commits(self, go_project, string_console):
        routes = GoProjectBuilder.create_routes_file(go_project)
        approver = AutoApprover(True)
        wirer = RouteWirer(go_project, MODULE_NAME, approver, previewer=ChangePreviewer(string_console))

        result = wirer.wire("product")

        assert result.state == WireState.COMMITTED
        assert "handlers.NewProductHandler()" in GoProjectBuilder.read_text(routes)
        assert approver.calls == ["Add the product handler to your routes"]

    def test_dry_run_and_rejection_do_not_write(self, go_project, string_console):
        routes = GoProjectBuilder.create_routes_file(go_project)
        before = routes.read_bytes()

        dry = RouteWirer(go_project, MODULE_NAME, AutoApprover(True), ChangePreviewer(string_console))
        assert dry.wire("product", dry_run=True).dry_run

        rejecting = RouteWirer(go_project, MODULE_NAME, AutoApprover(False), ChangePreviewer(string_console))
        with pytest.raises(RejectedByUserError):
            rejecting.wire("product")

        assert routes.read_bytes() == before

    def test_missing_routes_file(self, go_project, string_console):
        wirer = RouteWirer(go_project, MODULE_NAME, AutoApprover(True), ChangePreviewer(string_console))

        with pytest.raises(EntryFileNotFoundError):
            wirer.wire("product")
