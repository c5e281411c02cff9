import json

import pytest

from order_ledger.errors import PersistenceWarning
from order_ledger.ledger import Ledger
from order_ledger.models import OrderStatus
from order_ledger.persistence import MemoryGateway, JsonFileGateway

from conftest import counter_ids, make_form


class TestMemoryGateway:

    def test_empty(self):
        assert MemoryGateway().load() is None

    def test_copies_snapshots(self):
        rows = [{"id": "a", "client_name": "A"}]
        gateway = MemoryGateway()
        gateway.save(rows)
        rows[0]["client_name"] = "changed"
        loaded = gateway.load()
        assert loaded == [{"id": "a", "client_name": "A"}]
        loaded.append({})
        assert len(gateway.load()) == 1


class TestJsonFileGateway:

    def test_missing_file(self, tmp_path):
        assert JsonFileGateway(str(tmp_path / "orders.json")).load() is None

    def test_round_trip(self, tmp_path):
        gateway = JsonFileGateway(str(tmp_path / "orders.json"))
        gateway.save([{"id": "a", "section": "Expedição"}])
        assert gateway.load() == [{"id": "a", "section": "Expedição"}]
        assert not (tmp_path / "orders.json.tmp").exists()

    def test_invalid_json_is_logged(self, tmp_path, caplog):
        path = tmp_path / "orders.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.warns(PersistenceWarning):
            assert JsonFileGateway(str(path)).load() is None
        assert "Failed to read orders" in caplog.text

    def test_non_list_is_ignored(self, tmp_path, caplog):
        path = tmp_path / "orders.json"
        path.write_text(json.dumps({"id": "a"}), encoding="utf-8")
        with pytest.warns(PersistenceWarning, match="expected a list"):
            assert JsonFileGateway(str(path)).load() is None
        assert "expected a list" in caplog.text

    def test_non_dict_rows_are_skipped(self, tmp_path):
        path = tmp_path / "orders.json"
        path.write_text(json.dumps([{"id": "a"}, "junk", 3]), encoding="utf-8")
        assert JsonFileGateway(str(path)).load() == [{"id": "a"}]

    def test_write_failure_is_swallowed(self, tmp_path, caplog):
        gateway = JsonFileGateway(str(tmp_path / "missing-dir" / "orders.json"))
        with pytest.warns(PersistenceWarning, match="Failed to save orders"):
            gateway.save([{"id": "a"}])
        assert "Failed to save orders" in caplog.text
        assert not (tmp_path / "missing-dir").exists()

    def test_unserializable_snapshot_leaves_no_partial_file(self, tmp_path, caplog):
        path = tmp_path / "orders.json"
        gateway = JsonFileGateway(str(path))
        gateway.save([{"id": "a"}])
        with pytest.warns(PersistenceWarning):
            gateway.save([{"id": "b", "bad": object()}])
        assert "Failed to save orders" in caplog.text
        assert not (tmp_path / "orders.json.tmp").exists()
        assert gateway.load() == [{"id": "a"}]


def test_ledger_survives_restart(tmp_path):
    path = str(tmp_path / "orders.json")
    ledger = Ledger(JsonFileGateway(path), id_factory=counter_ids())
    for client in ("A", "B", "C"):
        ledger.add(make_form(client=client, commercial_agent="Rui"))
    ledger.set_status(ledger.records[0].id, OrderStatus.IN_PROGRESS)
    ledger.remove(ledger.records[1].id)

    restarted = Ledger(JsonFileGateway(path))
    restarted.load()
    assert restarted.records == ledger.records
    assert [(r.client_name, r.sequence_number) for r in restarted.records] == [("C", 2), ("A", 1)]


def test_legacy_browser_export(tmp_path):
    """Rows saved by the first version of the app have no status or agent"""
    path = tmp_path / "orders.json"
    path.write_text(json.dumps([
        {"id": "u2", "date": "2025-12-01", "orderNumber": "2", "invoiceNumber": "", "item": "Fita",
         "quantity": "10", "client": "B", "section": "Calandra", "isOrganicRecycled": True},
        {"id": "u1", "date": "2025-11-20", "orderNumber": "1", "invoiceNumber": "FT 9", "item": "Cordão",
         "quantity": "", "client": "A", "section": "Cordão"},
    ]), encoding="utf-8")
    ledger = Ledger(JsonFileGateway(str(path)))
    ledger.load()
    assert [r.status for r in ledger.records] == [OrderStatus.PENDING] * 2
    assert [r.commercial_agent for r in ledger.records] == ["", ""]
    assert ledger.records[0].is_eco_flagged is True
    assert ledger.records[1].invoice_number == "FT 9"
