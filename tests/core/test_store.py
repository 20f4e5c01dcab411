import pytest
from httpx import AsyncClient

from school_office.core.config import Settings
from school_office.core.exceptions import NotFoundError
from school_office.core.store import InMemoryStore, Record, Table, create_store


class Item(Record):
    name: str


class TestTable:
    def test_add_and_get(self):
        table: Table[Item] = Table("Item")
        table.add(Item(id="a", name="first"))

        assert len(table) == 1
        assert table.get("a").name == "first"
        assert table.find("missing") is None

    def test_get_unknown_raises_not_found(self):
        table: Table[Item] = Table("Item")
        with pytest.raises(NotFoundError) as exc:
            table.get("missing")
        assert exc.value.status_code == 404
        assert "Item" in exc.value.message

    def test_replace_swaps_record_in_place(self):
        table: Table[Item] = Table("Item")
        first = table.add(Item(id="a", name="first"))
        table.add(Item(id="b", name="second"))

        table.replace(first.model_copy(update={"name": "renamed"}))

        assert [row.name for row in table] == ["renamed", "second"]
        # Previously returned record is untouched
        assert first.name == "first"

    def test_replace_unknown_raises(self):
        table: Table[Item] = Table("Item")
        with pytest.raises(NotFoundError):
            table.replace(Item(id="x", name="ghost"))

    def test_records_are_frozen(self):
        item = Item(id="a", name="first")
        with pytest.raises(Exception):
            item.name = "changed"


class TestStore:
    def test_seeded_store_has_demo_data(self):
        store = create_store(seed=True)
        assert len(store.users) == 4
        assert len(store.students) == 3
        assert len(store.invoices) == 3
        assert len(store.fee_structures) == 3
        assert len(store.payment_schedules) == 3

    def test_unseeded_store_is_empty(self):
        store = create_store(seed=False)
        assert len(store.invoices) == 0

    def test_reset_clears_all_tables(self, store: InMemoryStore):
        store.reset()
        assert len(store.users) == 0
        assert len(store.invoices) == 0
        assert len(store.audit_logs) == 0


class TestSettings:
    def test_cors_origins_from_comma_separated_string(self):
        settings = Settings(cors_allowed_origins="http://a.test, http://b.test,")
        assert settings.cors_allowed_origins == ["http://a.test", "http://b.test"]

    def test_log_level_is_normalized(self):
        assert Settings(log_level=" debug ").log_level == "DEBUG"

    def test_is_production(self):
        assert Settings(app_env="production").is_production
        assert not Settings(app_env="development").is_production


class TestErrorEnvelope:
    async def test_not_found_uses_error_envelope(self, client: AsyncClient):
        res = await client.get("/api/v1/invoices/INV-0000-000000")
        assert res.status_code == 404
        body = res.json()
        assert body["success"] is False
        assert body["data"] is None
        assert "not found" in body["message"]

    async def test_request_validation_error_lists_fields(self, client: AsyncClient):
        res = await client.post("/api/v1/invoices", json={"student_id": "s1"})
        assert res.status_code == 422
        fields = {error["field"] for error in res.json()["errors"]}
        assert {"academic_year", "term", "due_date"} <= fields

    async def test_health(self, client: AsyncClient):
        res = await client.get("/health")
        assert res.status_code == 200
        assert res.json() == {"status": "healthy"}
