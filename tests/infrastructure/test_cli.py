"""End-to-end tests through the click CLI against a temporary database."""

import json

import pytest
from click.testing import CliRunner

from backoffice.infrastructure import bootstrap
from backoffice.infrastructure.cli.main import cli
from backoffice.infrastructure.config import get_settings


def _clear_caches():
    get_settings.cache_clear()
    bootstrap.session_factory.cache_clear()
    bootstrap.engine.cache_clear()


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("BACKOFFICE_DATABASE_URL", f"sqlite:///{tmp_path / 'cli.db'}")
    monkeypatch.setenv("BACKOFFICE_LOG_LEVEL", "WARNING")
    monkeypatch.delenv("BACKOFFICE_USER", raising=False)
    monkeypatch.delenv("BACKOFFICE_ALLOW_GUEST_ORDERS", raising=False)
    _clear_caches()

    runner = CliRunner()
    result = runner.invoke(cli, ["db", "init"])
    assert result.exit_code == 0, result.output
    yield runner

    bootstrap.engine().dispose()
    _clear_caches()


def run(runner, *args):
    return runner.invoke(cli, list(args))


def run_json(runner, *args):
    result = runner.invoke(cli, ["--json", *args])
    assert result.exit_code == 0, result.output
    return json.loads(result.output)


def _seed(runner):
    run_json(
        runner, "--user", "99", "--admin",
        "product", "add", "--name", "Widget", "--sku", "WID-1", "--price", "20.00", "--stock", "10",
    )
    run_json(
        runner, "--user", "99", "--admin",
        "product", "add", "--name", "Gadget", "--sku", "GAD-1", "--price", "5.00", "--stock", "3",
    )


class TestOrderCommands:

    def test_create_add_update_scenario(self, runner):
        _seed(runner)

        order = run_json(runner, "--user", "1", "order", "create", "--items", "1:2")
        assert order["status"] == "pending"
        assert order["total"] == "54.00"

        order = run_json(
            runner, "--user", "1",
            "item", "add", "--order", str(order["id"]), "--product", "1", "--quantity", "3",
        )
        assert order["items"][0]["quantity"] == 5
        assert order["total"] == "120.00"

        order = run_json(
            runner, "--user", "1",
            "item", "update", "--order", str(order["id"]),
            "--item", order["items"][0]["id"], "--quantity", "1",
        )
        assert order["total"] == "32.00"

        products = run_json(runner, "--user", "1", "product", "list", "--search", "widget")
        assert products[0]["stock_quantity"] == 9

    def test_over_stock_rejected(self, runner):
        _seed(runner)
        result = run(runner, "--user", "1", "order", "create", "--items", "1:11")
        assert result.exit_code == 1
        assert "Insufficient stock for Widget" in result.output
        assert run_json(runner, "--user", "99", "--admin", "order", "list") == []

    def test_text_output(self, runner):
        _seed(runner)
        result = run(
            runner, "--user", "1", "order", "create", "--items", "1:1,2:2",
            "--ship-name", "Alice", "--ship-address", "1 Main St", "--ship-city", "Springfield",
            "--ship-state", "IL", "--ship-zip", "62701", "--ship-country", "US",
        )
        assert result.exit_code == 0, result.output
        assert "Order #1 created" in result.output
        assert "Ship to:  Alice, 1 Main St, Springfield 62701, US" in result.output
        assert "$43.00" in result.output

    def test_partial_shipping_rejected(self, runner):
        _seed(runner)
        result = run(
            runner, "--user", "1", "order", "create", "--items", "1:1", "--ship-name", "Alice"
        )
        assert result.exit_code == 2
        assert "--ship-address" in result.output

    def test_malformed_items_rejected(self, runner):
        result = run(runner, "--user", "1", "order", "create", "--items", "1-2")
        assert result.exit_code == 2
        assert "ProductID:Quantity" in result.output

    def test_guest_cannot_order_by_default(self, runner):
        _seed(runner)
        result = run(runner, "order", "create", "--items", "1:1")
        assert result.exit_code == 1
        assert "Guest is not allowed" in result.output

    def test_guest_order_when_enabled(self, runner, monkeypatch):
        _seed(runner)
        monkeypatch.setenv("BACKOFFICE_ALLOW_GUEST_ORDERS", "true")
        get_settings.cache_clear()
        order = run_json(runner, "order", "create", "--items", "2:1")
        assert order["owner_id"] is None

    def test_status_and_delete(self, runner):
        _seed(runner)
        first = run_json(runner, "--user", "1", "order", "create", "--items", "1:2")
        second = run_json(runner, "--user", "1", "order", "create", "--items", "1:3")

        result = run(runner, "--user", "1", "order", "status", "--id", str(first["id"]), "--to", "processing")
        assert result.exit_code == 1

        result = run(
            runner, "--user", "99", "--admin",
            "order", "status", "--id", str(first["id"]), "--to", "processing",
        )
        assert result.exit_code == 0
        assert "is now processing" in result.output

        result = run(runner, "--user", "1", "order", "delete", "--id", str(first["id"]))
        assert result.exit_code == 1

        result = run(runner, "--user", "1", "order", "delete", "--id", str(second["id"]))
        assert result.exit_code == 0
        assert "stock restored" in result.output

        products = run_json(runner, "--user", "1", "product", "list", "--search", "WID")
        assert products[0]["stock_quantity"] == 8

        listed = run_json(runner, "--user", "1", "order", "list", "--status", "processing")
        assert [o["id"] for o in listed] == [first["id"]]

    def test_other_customer_cannot_view(self, runner):
        _seed(runner)
        order = run_json(runner, "--user", "1", "order", "create", "--items", "1:1")
        result = run(runner, "--user", "2", "order", "show", "--id", str(order["id"]))
        assert result.exit_code == 1
        assert "not allowed" in result.output

    def test_admin_flag_requires_user(self, runner):
        result = run(runner, "--admin", "order", "list")
        assert result.exit_code == 2


class TestProductCommands:

    def test_customer_cannot_add(self, runner):
        result = run(
            runner, "--user", "1",
            "product", "add", "--name", "X", "--sku", "X-1", "--price", "1.00",
        )
        assert result.exit_code == 1
        assert "not allowed" in result.output

    def test_duplicate_sku(self, runner):
        _seed(runner)
        result = run(
            runner, "--user", "99", "--admin",
            "product", "add", "--name", "Again", "--sku", "wid-1", "--price", "1.00",
        )
        assert result.exit_code == 1
        assert "SKU 'WID-1' already exists" in result.output

    def test_update_and_delete(self, runner):
        _seed(runner)
        run_json(runner, "--user", "1", "order", "create", "--items", "1:1")

        updated = run_json(
            runner, "--user", "99", "--admin", "product", "update", "--id", "1", "--price", "25.00",
        )
        assert updated["price"] == "25.00"

        soft = run(runner, "--user", "99", "--admin", "product", "delete", "--id", "1")
        assert "deactivated because it exists in orders" in soft.output
        hard = run(runner, "--user", "99", "--admin", "product", "delete", "--id", "2")
        assert "Product #2 deleted." in hard.output

        inactive = run_json(runner, "--user", "1", "product", "list", "--inactive")
        assert [p["sku"] for p in inactive] == ["WID-1"]

    def test_empty_listing(self, runner):
        result = run(runner, "--user", "1", "product", "list")
        assert result.exit_code == 0
        assert "No products found." in result.output


class TestJsonOutput:

    def test_order_delete_reports_json(self, runner):
        _seed(runner)
        order = run_json(runner, "--user", "1", "order", "create", "--items", "1:2,2:1")

        result = run_json(runner, "--user", "1", "order", "delete", "--id", str(order["id"]))

        assert result == {
            "order_id": order["id"],
            "order_number": order["order_number"],
            "released_units": 3,
            "deleted": True,
        }

    def test_bad_price_leaves_catalogue_usable(self, runner):
        _seed(runner)
        result = run(
            runner, "--user", "99", "--admin",
            "product", "add", "--name", "Bad", "--sku", "BAD-1", "--price", "Infinity",
        )
        assert result.exit_code == 1
        assert "finite" in result.output

        products = run_json(runner, "--user", "1", "product", "list")
        assert [p["sku"] for p in products] == ["GAD-1", "WID-1"]

    def test_huge_quantity_is_reported_not_crashed(self, runner):
        _seed(runner)
        order = run_json(runner, "--user", "1", "order", "create", "--items", "1:1")
        result = run(
            runner, "--user", "1",
            "item", "add", "--order", str(order["id"]), "--product", "1",
            "--quantity", "100000000000000000000",
        )
        assert result.exit_code == 1
        assert "Quantity cannot exceed" in result.output


def test_unknown_log_level_does_not_break_commands(runner, monkeypatch):
    monkeypatch.setenv("BACKOFFICE_LOG_LEVEL", "verbose")
    get_settings.cache_clear()
    result = run(runner, "--user", "1", "product", "list")
    assert result.exit_code == 0, result.output
