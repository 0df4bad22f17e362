import uuid

from procurement.core.hashing import hash_chain
from procurement.models.contract_ledger import ContractLedgerEntry
from procurement.services.ledger_service import LedgerService
from procurement.services.projects_service import ProjectsService


def create_project(db, name="Ledger Test"):
    return ProjectsService().create(db, name=name, buyer="Buyer1")


def test_genesis_entry_on_create(db):
    p = create_project(db)

    entries = LedgerService().list_entries(db, project_id=p.id)
    assert len(entries) == 1
    e = entries[0]
    assert e.seq == 1
    assert e.entry_type == "PROJECT_CREATED"
    assert e.prev_hash == LedgerService.GENESIS_HASH
    assert e.entry_hash == hash_chain(e.prev_hash, e.payload_json)
    assert e.payload_json["payload"] == {"name": "Ledger Test", "buyer": "Buyer1", "state": "OPEN"}


def test_append_links_entries(db):
    p = create_project(db)
    svc = LedgerService()

    second = svc.append_entry(db, project_id=p.id, entry_type="NOTE", payload={"n": 1})
    third = svc.append_entry(db, project_id=p.id, entry_type="NOTE", payload={"n": 2})
    db.commit()

    first = svc.list_entries(db, project_id=p.id)[0]
    assert (second.seq, third.seq) == (2, 3)
    assert second.prev_hash == first.entry_hash
    assert third.prev_hash == second.entry_hash
    assert svc.verify_chain(db, project_id=p.id) is True


def test_chains_are_per_project(db):
    a = create_project(db, name="A")
    b = create_project(db, name="B")
    svc = LedgerService()

    assert svc.list_entries(db, project_id=a.id)[0].seq == 1
    assert svc.list_entries(db, project_id=b.id)[0].seq == 1
    assert svc.list_entries(db, project_id=uuid.uuid4()) == []
    assert svc.verify_chain(db, project_id=uuid.uuid4()) is True


def test_tampered_payload_fails_verification(db):
    p = create_project(db)
    svc = LedgerService()
    svc.append_entry(db, project_id=p.id, entry_type="NOTE", payload={"amount": "100.00"})
    db.commit()

    row = (
        db.query(ContractLedgerEntry)
        .filter_by(project_id=p.id, seq=2)
        .one()
    )
    forged = dict(row.payload_json)
    forged["payload"] = {"amount": "1.00"}
    row.payload_json = forged
    db.commit()

    assert svc.verify_chain(db, project_id=p.id) is False


def test_relinked_entry_fails_verification(db):
    p = create_project(db)
    svc = LedgerService()
    svc.append_entry(db, project_id=p.id, entry_type="NOTE", payload={})
    db.commit()

    row = db.query(ContractLedgerEntry).filter_by(project_id=p.id, seq=2).one()
    row.prev_hash = LedgerService.GENESIS_HASH
    row.entry_hash = hash_chain(row.prev_hash, row.payload_json)
    db.commit()

    assert svc.verify_chain(db, project_id=p.id) is False
