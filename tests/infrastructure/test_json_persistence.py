"""Tests for the JSON document store and the repositories built on it."""

import json
import threading
from datetime import datetime, timezone
from decimal import Decimal

import pytest

from erp.application.settle_sale import SettleSaleHandler
from erp.domain.exceptions import ConcurrentModification
from erp.domain.model.client_query import ClientQuery, QueryStatus
from erp.domain.model.expense import Expense
from erp.domain.model.financials import IncomeStatement
from erp.domain.model.product import Product, PurchaseLot
from erp.domain.model.sale import CustomerInfo, Sale, SaleStatus
from erp.domain.model.value_objects import Money, Quantity
from erp.infrastructure.persistence.document_store import COLLECTIONS, JsonDocumentStore
from erp.infrastructure.persistence.json_expense_repository import (
    JsonExpenseRepository,
    JsonIncomeStatementRepository,
)
from erp.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)
from erp.infrastructure.persistence.json_query_repository import JsonQueryRepository
from erp.infrastructure.persistence.json_sale_repository import JsonSaleRepository
from erp.infrastructure.persistence.json_unit_of_work import JsonSaleUnitOfWork

UTC = timezone.utc


@pytest.fixture
def store(tmp_path):
    return JsonDocumentStore(tmp_path / "data" / "erp.json")


def _widget() -> Product:
    product = Product.register("1", "Widget", Money.of("15.00"), description="Blue")
    product.receive_lot(PurchaseLot.create(
        3, Money.of("4.10"), expenses=Money.of("1.25"), supplier="Acme",
        purchased_at=datetime(2024, 1, 1, tzinfo=UTC),
    ))
    product.receive_lot(PurchaseLot.create(
        10, Money.of("6.00"), purchased_at=datetime(2024, 2, 1, tzinfo=UTC),
    ))
    return product


def _sale(product: Product) -> Sale:
    return Sale.settled(
        product_id=product.id,
        product_name=product.name,
        quantity=Quantity(2),
        unit_price=product.price,
        total_cost=Money.of("8.20"),
        customer=None,
        sold_at=datetime(2024, 3, 1, tzinfo=UTC),
    )


class TestDocumentStore:

    def test_creates_empty_document(self, store):
        raw = json.loads(store.file_path.read_text())
        assert set(raw) == set(COLLECTIONS)
        assert all(raw[name] == [] for name in COLLECTIONS)

    def test_failed_transaction_is_not_persisted(self, store):
        with pytest.raises(RuntimeError):
            with store.transaction() as document:
                document["expenses"].append({"id": 1})
                raise RuntimeError("boom")
        assert store.read()["expenses"] == []

    def test_read_returns_private_copy(self, store):
        store.read()["products"].append({"id": "x"})
        assert store.read()["products"] == []

    def test_no_temporary_file_left_behind(self, store):
        with store.transaction() as document:
            document["expenses"].append({"id": 1})
        with pytest.raises(RuntimeError):
            with store.transaction() as document:
                raise RuntimeError("boom")
        assert not list(store.file_path.parent.glob("*.tmp"))

    def test_second_store_on_same_file_waits_for_open_transaction(self, tmp_path):
        path = tmp_path / "erp.json"
        first, second = JsonDocumentStore(path), JsonDocumentStore(path)
        order = []

        def write_from_second():
            with second.transaction() as document:
                order.append(len(document["expenses"]))
                document["expenses"].append({"id": 2})

        with first.transaction() as document:
            rival = threading.Thread(target=write_from_second)
            rival.start()
            rival.join(timeout=0.3)
            assert rival.is_alive()
            document["expenses"].append({"id": 1})
        rival.join(timeout=5)

        assert order == [1]
        assert [e["id"] for e in first.read()["expenses"]] == [1, 2]


class TestProductRepository:

    def test_round_trip(self, store):
        repo = JsonProductRepository(store)
        product = _widget()
        repo.save(product, 0)

        loaded = repo.get_by_id("1")
        assert loaded.name == "Widget"
        assert loaded.description == "Blue"
        assert loaded.price == Money.of("15.00")
        assert loaded.quantity == 13
        assert loaded.version == 1
        assert loaded.created_at == product.created_at
        first = loaded.lots[0]
        assert first.unit_cost.amount == Decimal("4.10")
        assert first.expenses == Money.of("1.25")
        assert first.supplier == "Acme"
        assert first.purchased_at == datetime(2024, 1, 1, tzinfo=UTC)
        assert [lot.remaining_quantity for lot in loaded.lots] == [3, 10]

    def test_lookup_by_name_ignores_case(self, store):
        repo = JsonProductRepository(store)
        repo.save(_widget(), 0)
        assert repo.get_by_name("WIDGET").id == "1"
        assert repo.get_by_name("Gadget") is None

    def test_lookup_by_name_skips_deleted_products(self, store):
        repo = JsonProductRepository(store)
        old = _widget()
        old.deactivate()
        repo.save(old, 0)
        assert repo.get_by_name("Widget") is None

        replacement = Product.register("2", "Widget", Money.of("16.00"))
        repo.save(replacement, 0)
        assert repo.get_by_name("widget").id == "2"

    def test_next_id(self, store):
        repo = JsonProductRepository(store)
        assert repo.next_id() == "1"
        repo.save(_widget(), 0)
        assert repo.next_id() == "2"

    def test_stale_version_rejected_and_file_unchanged(self, store):
        repo = JsonProductRepository(store)
        repo.save(_widget(), 0)
        before = store.file_path.read_text()

        stale = repo.get_by_id("1")
        stale.update_details(price=Money.of("1.00"))
        with pytest.raises(ConcurrentModification) as info:
            repo.save(stale, 0)

        assert info.value.actual_version == 1
        assert stale.version == 1
        assert store.file_path.read_text() == before


class TestSaleAndFinanceRepositories:

    def test_sale_round_trip_and_status_update(self, store):
        repo = JsonSaleRepository(store)
        sale = Sale.settled(
            product_id="1",
            product_name="Widget",
            quantity=Quantity(3),
            unit_price=Money.of("15.00"),
            total_cost=Money.of("13.33"),
            customer=None,
            sold_at=datetime(2024, 3, 1, 10, 30, tzinfo=UTC),
        )
        repo.save(sale)
        assert sale.id == 1

        loaded = repo.get_by_id(1)
        assert loaded.unit_cost == Decimal("13.33") / 3
        assert loaded.sold_at == sale.sold_at

        loaded.change_status(SaleStatus.CANCELLED, reason="Wrong item")
        repo.save(loaded)
        reloaded = repo.get_by_id(1)
        assert reloaded.status == SaleStatus.CANCELLED
        assert reloaded.rejection_reason == "Wrong item"
        assert len(repo.list_all()) == 1

    def test_expenses(self, store):
        repo = JsonExpenseRepository(store)
        repo.save(Expense.record("Rent", Money.of("100.00"), datetime(2024, 1, 1, tzinfo=UTC)))
        repo.save(Expense.record("Power", Money.of("20.00"), datetime(2024, 1, 2, tzinfo=UTC)))
        assert [e.id for e in repo.list_all()] == [1, 2]

    def test_income_statement_upsert(self, store):
        repo = JsonIncomeStatementRepository(store)
        now = datetime(2024, 2, 1, tzinfo=UTC)
        statement = IncomeStatement(
            month="2024-01", year=2024,
            total_revenue=Decimal("150"), cost_of_goods_sold=Decimal("80"),
            operating_expenses=Decimal("10"), created_at=now, updated_at=now,
        )
        repo.save(statement)
        statement.operating_expenses = Decimal("20")
        repo.save(statement)

        assert len(store.read()["income_statements"]) == 1
        assert repo.get_by_month("2024-01").net_profit == Decimal("50")
        assert repo.get_by_month("2024-02") is None


    def test_query_round_trip(self, store):
        repo = JsonQueryRepository(store)
        query = ClientQuery.submit(
            CustomerInfo("Alice", "alice@example.com"), "Hello?",
            datetime(2024, 1, 5, tzinfo=UTC),
        )
        repo.save(query)
        loaded = repo.get_by_id(query.id)
        loaded.respond("Hi Alice", datetime(2024, 1, 6, tzinfo=UTC))
        repo.save(loaded)

        stored = repo.get_by_id(1)
        assert stored.status == QueryStatus.COMPLETE
        assert stored.response == "Hi Alice"
        assert stored.responded_at == datetime(2024, 1, 6, tzinfo=UTC)
        assert len(repo.list_all()) == 1

    def test_document_without_queries_collection_still_loads(self, tmp_path):
        path = tmp_path / "erp.json"
        path.write_text(json.dumps({"products": [], "sales": []}))
        assert JsonQueryRepository(JsonDocumentStore(path)).list_all() == []


class TestSaleUnitOfWork:

    def test_commit_writes_product_and_sale_together(self, store):
        products = JsonProductRepository(store)
        products.save(_widget(), 0)
        product = products.get_by_id("1")
        product.quantity -= 2
        product.lots[0].draw(2)

        sale = _sale(product)
        JsonSaleUnitOfWork(store).commit_sale(product, 1, sale)

        assert sale.id == 1
        assert product.version == 2
        stored = products.get_by_id("1")
        assert stored.quantity == 11
        assert stored.lots[0].remaining_quantity == 1
        assert JsonSaleRepository(store).get_by_id(1) is not None

    def test_conflict_persists_neither_side(self, store):
        products = JsonProductRepository(store)
        products.save(_widget(), 0)
        before = store.file_path.read_text()

        product = products.get_by_id("1")
        product.quantity -= 2
        sale = _sale(product)
        with pytest.raises(ConcurrentModification):
            JsonSaleUnitOfWork(store).commit_sale(product, 0, sale)

        assert sale.id is None
        assert product.version == 1
        assert store.file_path.read_text() == before

    def test_settlement_end_to_end(self, store):
        products = JsonProductRepository(store)
        products.save(_widget(), 0)
        handler = SettleSaleHandler(products, JsonSaleUnitOfWork(store))

        dto = handler.handle("1", 5)

        assert dto.total_cost == "$24.30"
        stored = products.get_by_id("1")
        assert stored.quantity == 8
        assert stored.is_consistent
        assert JsonSaleRepository(store).get_by_id(dto.id).total_cost == Money.of("24.30")

    def test_concurrent_settlements_from_separate_stores_cannot_oversell(self, tmp_path):
        path = tmp_path / "erp.json"
        first, second = JsonDocumentStore(path), JsonDocumentStore(path)
        product = Product.register("1", "Widget", Money.of("15.00"))
        product.receive_lot(PurchaseLot.create(5, Money.of("4.00")))
        JsonProductRepository(first).save(product, 0)

        # Both sides read version 1 before either commits
        stale = JsonProductRepository(second).get_by_id("1")
        stale.lots[0].draw(5)
        stale.quantity -= 5
        outcome = []

        def settle_from_second():
            try:
                JsonSaleUnitOfWork(second).commit_sale(stale, 1, _sale(stale))
                outcome.append("committed")
            except ConcurrentModification:
                outcome.append("conflict")

        with first.transaction() as document:
            rival = threading.Thread(target=settle_from_second)
            rival.start()
            rival.join(timeout=0.3)
            assert rival.is_alive()
            fresh = JsonProductRepository.to_domain(document["products"][0])
            fresh.lots[0].draw(5)
            fresh.quantity -= 5
            JsonProductRepository.write(document, fresh, 1)
            JsonSaleRepository.write(document, _sale(fresh))
        rival.join(timeout=5)

        assert outcome == ["conflict"]
        assert len(JsonSaleRepository(first).list_all()) == 1
        stored = JsonProductRepository(first).get_by_id("1")
        assert stored.quantity == 0
        assert stored.version == 2
