"""End-to-end tests for the click command line, against a temporary data file."""

import logging

import pytest
from click.testing import CliRunner

from erp.infrastructure import bootstrap
from erp.infrastructure.cli.main import cli
from erp.infrastructure.settings import settings


@pytest.fixture(autouse=True)
def data_dir(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "DATA_DIR", tmp_path)
    bootstrap.document_store.cache_clear()
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield tmp_path
    root.handlers, root.level = handlers, level
    bootstrap.document_store.cache_clear()


@pytest.fixture
def run():
    runner = CliRunner()

    def invoke(*args: str):
        return runner.invoke(cli, ["--log-level", "WARNING", *args])

    return invoke


def _stock_widget(run):
    result = run(
        "product", "purchase", "--name", "Widget", "--price", "15.00",
        "--quantity", "3", "--unit-cost", "4.00",
    )
    assert result.exit_code == 0, result.output
    result = run("product", "purchase", "--id", "1", "--quantity", "10", "--unit-cost", "6.00")
    assert result.exit_code == 0, result.output


class TestProductCommands:

    def test_purchase_creates_data_file(self, run, data_dir):
        _stock_widget(run)
        assert (data_dir / "erp.json").exists()

    def test_purchase_reports_stock(self, run):
        result = run(
            "product", "purchase", "--name", "Widget", "--price", "15.00",
            "--quantity", "3", "--unit-cost", "4.00",
        )
        assert "Purchase recorded for product #1 'Widget'" in result.output
        assert "3 now on hand" in result.output

    def test_new_product_needs_price(self, run):
        result = run("product", "purchase", "--name", "Widget", "--quantity", "3", "--unit-cost", "4")
        assert result.exit_code == 1
        assert "list price is required" in result.output

    def test_list_update_delete(self, run):
        _stock_widget(run)
        assert "Widget" in run("product", "list").output

        result = run("product", "update", "--id", "1", "--price", "18.00")
        assert "at $18.00" in result.output

        assert run("product", "delete", "--id", "1").exit_code == 0
        assert "No products found." in run("product", "list").output
        assert "(deleted)" in run("product", "list", "--all").output


class TestSaleCommands:

    def test_settle_shows_fifo_cost(self, run):
        _stock_widget(run)
        result = run("sale", "settle", "--product", "1", "--quantity", "5")
        assert result.exit_code == 0, result.output
        assert "Sale #1" in result.output
        assert "$24.00" in result.output
        assert "$75.00" in result.output

    def test_settle_insufficient_stock(self, run):
        _stock_widget(run)
        result = run("sale", "settle", "--product", "1", "--quantity", "14")
        assert result.exit_code == 1
        assert "Only 13 units available (requested 14)" in result.output

    def test_settle_unknown_product(self, run):
        result = run("sale", "settle", "--product", "9", "--quantity", "1")
        assert result.exit_code == 1
        assert "not found" in result.output

    def test_order_list_and_status(self, run):
        _stock_widget(run)
        result = run(
            "sale", "order", "--product", "1", "--quantity", "2",
            "--name", "Alice", "--email", "alice@example.com",
        )
        assert "Order #1 placed for Alice" in result.output

        listed = run("sale", "list", "--email", "alice@example.com")
        assert "Widget" in listed.output

        result = run("sale", "status", "--id", "1", "--set", "cancelled", "--reason", "Changed mind")
        assert "Sale #1 is now cancelled." in result.output
        assert "No sales found." in run("sale", "list", "--status", "completed").output

    def test_terminal_status_rejected(self, run):
        _stock_widget(run)
        run("sale", "settle", "--product", "1", "--quantity", "1")
        run("sale", "status", "--id", "1", "--set", "refunded")
        result = run("sale", "status", "--id", "1", "--set", "completed")
        assert result.exit_code == 1


class TestInventoryCommands:

    def test_show_and_check(self, run):
        _stock_widget(run)
        run("sale", "settle", "--product", "1", "--quantity", "5")

        shown = run("inventory", "show")
        assert "Widget" in shown.output
        assert "MISMATCH" not in shown.output

        checked = run("inventory", "check")
        assert checked.exit_code == 0
        assert "All products consistent." in checked.output

    def test_check_flags_divergence(self, run):
        _stock_widget(run)
        repo = bootstrap.product_repository()
        product = repo.get_by_id("1")
        product.quantity = 99
        repo.save(product, product.version)

        result = run("inventory", "check")
        assert result.exit_code == 1
        assert "on hand 99, lots hold 13" in result.output


class TestFinanceCommands:

    def test_summary_and_monthly(self, run):
        _stock_widget(run)
        run("sale", "settle", "--product", "1", "--quantity", "5")
        run("expense", "add", "--category", "Rent", "--amount", "10.00")

        summary = run("finance", "summary", "--period", "all")
        assert summary.exit_code == 0, summary.output
        assert "75.00" in summary.output
        assert "24.00" in summary.output
        assert "41.00" in summary.output

        monthly = run("finance", "monthly")
        assert "51.00" in monthly.output

    def test_summary_rejects_period_with_dates(self, run):
        result = run("finance", "summary", "--period", "daily", "--from", "2024-01-01")
        assert result.exit_code == 1

    def test_generate_and_show_statement(self, run):
        result = run("finance", "generate", "--year", "2023", "--month", "6")
        assert "Income statement 2023-06 generated: net profit 0.00" in result.output

        shown = run("finance", "statement", "--month", "2023-06")
        assert shown.exit_code == 0
        assert "Revenue" in shown.output

    def test_missing_statement(self, run):
        result = run("finance", "statement", "--month", "2020-01")
        assert result.exit_code == 1

    def test_expense_list(self, run):
        run("expense", "add", "--category", "Rent", "--amount", "100")
        result = run("expense", "list")
        assert "Rent" in result.output
        assert "$100.00" in result.output


class TestQueryCommands:

    def test_submit_respond_and_stats(self, run):
        result = run(
            "query", "submit", "--name", "Alice", "--email", "alice@example.com",
            "--message", "Do you ship abroad?",
        )
        assert result.exit_code == 0, result.output
        assert "Query #1 received" in result.output

        assert "[pending]" in run("query", "list", "--pending").output

        result = run("query", "respond", "--id", "1", "--response", "Yes, within the EU.")
        assert "Query #1 answered." in result.output

        listed = run("query", "list", "--email", "alice@example.com")
        assert "A: Yes, within the EU." in listed.output
        assert "No queries found." in run("query", "list", "--pending").output

        stats = run("query", "stats").output
        assert "Completed       1" in stats

    def test_respond_to_unknown_query(self, run):
        result = run("query", "respond", "--id", "5", "--response", "Hi")
        assert result.exit_code == 1
        assert "Query #5 not found" in result.output
