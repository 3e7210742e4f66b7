"""Tests for the omzet and pengeluaran transaction endpoints."""

import json
from datetime import date, datetime, timedelta

import pytest

from pembukuan.models.transactions import Transaction
from pembukuan.seed import DEMO_EMAIL, DEMO_PASSWORD


def _insert(db_session, trx_id, transaction_date, created_at, transaction_type="Pemasukan", reference_no=None, status="active"):
    db_session.add(Transaction(
        id=trx_id,
        transaction_date=transaction_date,
        transaction_type=transaction_type,
        reference_no=reference_no or f"REF-{trx_id}",
        branch_id="branch-1",
        branch_name="Cabang Jakarta",
        account_id="coa-3",
        account_code="4-1000",
        account_name="Pendapatan Penjualan",
        notes="",
        total_amount=1000,
        status=status,
        created_at=created_at,
        updated_at=created_at,
    ))
    db_session.commit()


# --- create ---------------------------------------------------------------------

def test_create_omzet(client, auth_headers, omzet_payload):
    response = client.post("/api/omzet", json=omzet_payload(), headers=auth_headers)

    assert response.status_code == 201
    body = response.json()
    data = body["data"]
    assert body["message"] == f"Omzet {data['id']} successfully created."
    assert data["transaction_date"] == "25/12/2024"
    assert data["branch_name"] == "Cabang Jakarta"
    assert data["account_code"] == "4-1000"
    assert data["account_name"] == "Pendapatan Penjualan"
    assert data["status"] == "active"
    assert data["files"] == []
    assert data["total_amount"] == 250000
    assert data["created_at"] == data["updated_at"]


def test_create_defaults_notes_to_empty_string(client, auth_headers, omzet_payload):
    payload = omzet_payload()
    del payload["notes"]

    response = client.post("/api/omzet", json=payload, headers=auth_headers)

    assert response.json()["data"]["notes"] == ""


def test_date_round_trip(client, auth_headers, omzet_payload):
    created = client.post("/api/omzet", json=omzet_payload(), headers=auth_headers).json()["data"]

    fetched = client.get(f"/api/omzet/{created['id']}", headers=auth_headers).json()["data"]

    assert fetched["transaction_date"] == "25/12/2024"


def test_login_then_create_without_account(client, omzet_payload):
    login = client.post("/api/login", json={"email": DEMO_EMAIL, "password": DEMO_PASSWORD})
    assert login.status_code == 200
    headers = {"Authorization": f"Bearer {login.json()['data']['token']}"}
    payload = omzet_payload()
    del payload["account_id"]

    response = client.post("/api/omzet", json=payload, headers=headers)

    assert response.status_code == 400
    body = response.json()
    assert body["error"] == "Missing required fields"
    assert body["errors"] == ["account_id"]


@pytest.mark.parametrize("amount", [0, -5, "100", None, True])
def test_create_rejects_non_positive_amount(client, auth_headers, omzet_payload, amount):
    response = client.post("/api/omzet", json=omzet_payload(total_amount=amount), headers=auth_headers)

    assert response.status_code == 400


def test_create_rejects_string_amount_with_amount_message(client, auth_headers, omzet_payload):
    response = client.post("/api/omzet", json=omzet_payload(total_amount="100"), headers=auth_headers)

    assert response.json()["error"] == "Invalid total amount"


@pytest.mark.parametrize("amount", [float("inf"), float("-inf"), float("nan")])
def test_create_rejects_non_finite_amount(client, auth_headers, omzet_payload, amount):
    # json.dumps writes these as the bare tokens Infinity / NaN
    body = json.dumps(omzet_payload(reference_no="INF-1", total_amount=amount))
    headers = {**auth_headers, "Content-Type": "application/json"}

    response = client.post("/api/omzet", content=body, headers=headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid total amount"
    listing = client.get("/api/omzet", headers=auth_headers)
    assert listing.status_code == 200
    assert "INF-1" not in [t["reference_no"] for t in listing.json()["data"]]


@pytest.mark.parametrize("field,value,error", [
    ("transaction_date", "25-12-2024", "Invalid date format"),
    ("transaction_date", "2024/12/25", "Invalid date format"),
    ("transaction_type", "Operasional", "Invalid transaction type"),
    ("branch_id", "branch-404", "Branch not found"),
    ("account_id", "coa-404", "Account not found"),
])
def test_create_reports_first_violation(client, auth_headers, omzet_payload, field, value, error):
    response = client.post("/api/omzet", json=omzet_payload(**{field: value}), headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"] == error


def test_create_rejects_inactive_account(client, auth_headers, omzet_payload):
    client.delete("/api/coa/coa-3", headers=auth_headers)

    response = client.post("/api/omzet", json=omzet_payload(), headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Invalid account_id or account is inactive"


def test_create_rejects_file_without_names(client, auth_headers, omzet_payload):
    payload = omzet_payload(files=[{"filename": "nota.pdf"}])

    response = client.post("/api/omzet", json=payload, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "Each file must have filename and original_name"


def test_create_with_files_assigns_ids_and_defaults(client, auth_headers, omzet_payload):
    payload = omzet_payload(files=[
        {"filename": "nota-1.pdf", "original_name": "Nota 1.pdf", "size": 2048, "mime_type": "application/pdf"},
        {"filename": "nota-2.jpg", "original_name": "Nota 2.jpg"},
    ])

    files = client.post("/api/omzet", json=payload, headers=auth_headers).json()["data"]["files"]

    assert [f["filename"] for f in files] == ["nota-1.pdf", "nota-2.jpg"]
    assert files[0]["id"] != files[1]["id"]
    assert files[1]["size"] == 0
    assert files[1]["mime_type"] == "application/octet-stream"
    assert files[0]["uploaded_at"]


def test_reference_reusable_after_deactivation(client, auth_headers, omzet_payload):
    first = client.post("/api/omzet", json=omzet_payload(reference_no="INV-001"), headers=auth_headers)
    assert first.status_code == 201

    second = client.post("/api/omzet", json=omzet_payload(reference_no="INV-001"), headers=auth_headers)
    assert second.status_code == 409
    assert second.json()["error"] == "Reference number already exists"

    client.delete(f"/api/omzet/{first.json()['data']['id']}", headers=auth_headers)

    third = client.post("/api/omzet", json=omzet_payload(reference_no="INV-001"), headers=auth_headers)
    assert third.status_code == 201


def test_reference_unique_across_surfaces(client, auth_headers, expense_payload):
    response = client.post("/api/pengeluaran", json=expense_payload(reference_no="INV-2024-001"), headers=auth_headers)

    assert response.status_code == 409


# --- read -----------------------------------------------------------------------

def test_soft_deleted_transaction_is_hidden(client, auth_headers, omzet_payload, db_session):
    created = client.post("/api/omzet", json=omzet_payload(), headers=auth_headers).json()["data"]

    deleted = client.delete(f"/api/omzet/{created['id']}", headers=auth_headers)
    assert deleted.status_code == 200
    assert deleted.json()["message"] == f"Omzet {created['id']} successfully deactivated."

    assert client.get(f"/api/omzet/{created['id']}", headers=auth_headers).status_code == 404
    listed = client.get("/api/omzet", headers=auth_headers).json()["data"]
    assert created["id"] not in [t["id"] for t in listed]
    assert client.delete(f"/api/omzet/{created['id']}", headers=auth_headers).status_code == 404

    db_session.expire_all()
    stored = db_session.get(Transaction, created["id"])
    assert stored is not None
    assert stored.status == "inactive"


def test_list_includes_total(client, auth_headers):
    body = client.get("/api/omzet", headers=auth_headers).json()

    assert body["total"] == len(body["data"]) == 4


def test_date_range_is_inclusive_and_sorted_newest_first(client, auth_headers, db_session):
    base = datetime(2024, 2, 1, 9, 0, 0)
    _insert(db_session, "t-before", date(2023, 12, 31), base)
    _insert(db_session, "t-start", date(2024, 1, 1), base + timedelta(minutes=1))
    _insert(db_session, "t-mid", date(2024, 1, 15), base + timedelta(minutes=3))
    _insert(db_session, "t-end", date(2024, 1, 31), base + timedelta(minutes=2))
    _insert(db_session, "t-after", date(2024, 2, 1), base + timedelta(minutes=4))
    _insert(db_session, "t-gone", date(2024, 1, 10), base + timedelta(minutes=5), status="inactive")

    response = client.get(
        "/api/omzet",
        params={"start_date": "01/01/2024", "end_date": "31/01/2024"},
        headers=auth_headers,
    )

    assert response.status_code == 200
    assert [t["id"] for t in response.json()["data"]] == ["t-mid", "t-end", "t-start"]


@pytest.mark.parametrize("start,end", [
    ("01-01-2024", "31-01-2024"),
    ("01012024", "31012024"),
    ("01/01/2024", "31012024"),
])
def test_date_range_boundary_encodings(client, auth_headers, db_session, start, end):
    base = datetime(2024, 2, 1, 9, 0, 0)
    _insert(db_session, "t-in", date(2024, 1, 20), base)
    _insert(db_session, "t-out", date(2024, 2, 20), base)

    response = client.get("/api/omzet", params={"start_date": start, "end_date": end}, headers=auth_headers)

    assert [t["id"] for t in response.json()["data"]] == ["t-in"]


def test_open_ended_date_range(client, auth_headers, db_session):
    base = datetime(2024, 2, 1, 9, 0, 0)
    _insert(db_session, "t-old", date(2020, 1, 1), base)

    response = client.get("/api/omzet", params={"end_date": "31/12/2020"}, headers=auth_headers)

    assert [t["id"] for t in response.json()["data"]] == ["t-old"]


def test_invalid_date_boundary_rejected(client, auth_headers):
    response = client.get("/api/omzet", params={"start_date": "2024-01-01"}, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Invalid date format"


def test_search_is_case_insensitive_across_fields(client, auth_headers):
    by_reference = client.get("/api/omzet", params={"search": "inv-2024"}, headers=auth_headers).json()["data"]
    by_notes = client.get("/api/omzet", params={"search": "TEPUNG"}, headers=auth_headers).json()["data"]
    by_branch = client.get("/api/omzet", params={"search": "bandung"}, headers=auth_headers).json()["data"]
    by_account = client.get("/api/omzet", params={"search": "beban operasional"}, headers=auth_headers).json()["data"]

    assert {t["id"] for t in by_reference} == {"trx-1", "trx-2"}
    assert [t["id"] for t in by_notes] == ["trx-3"]
    assert {t["id"] for t in by_branch} == {"trx-2", "trx-4"}
    assert [t["id"] for t in by_account] == ["trx-4"]


def test_filters_by_type_account_and_branch(client, auth_headers):
    by_type = client.get("/api/omzet", params={"transaction_type": "Pemasukan"}, headers=auth_headers).json()["data"]
    by_account = client.get("/api/omzet", params={"account_id": "coa-4"}, headers=auth_headers).json()["data"]
    combined = client.get(
        "/api/omzet", params={"branch_id": "branch-2", "transaction_type": "Operasional"}, headers=auth_headers
    ).json()["data"]

    assert {t["id"] for t in by_type} == {"trx-1", "trx-2"}
    assert [t["id"] for t in by_account] == ["trx-3"]
    assert [t["id"] for t in combined] == ["trx-4"]


def test_pengeluaran_sees_only_expense_types(client, auth_headers):
    response = client.get("/api/pengeluaran", headers=auth_headers)

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Successfully retrieved Expense data."
    assert [t["id"] for t in body["data"]] == ["trx-4", "trx-3"]
    assert client.get("/api/pengeluaran/trx-1", headers=auth_headers).status_code == 404
    assert client.get("/api/pengeluaran/trx-1", headers=auth_headers).json()["error"] == "Expense not found"


# --- pengeluaran writes ---------------------------------------------------------

def test_create_pengeluaran(client, auth_headers, expense_payload):
    response = client.post("/api/pengeluaran", json=expense_payload(), headers=auth_headers)

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["transaction_type"] == "Operasional"
    assert data["transaction_date"] == "10/01/2024"
    assert data["account_code"] == "6-1000"


def test_pengeluaran_rejects_revenue_type(client, auth_headers, expense_payload):
    response = client.post("/api/pengeluaran", json=expense_payload(transaction_type="Pemasukan"), headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["message"] == "transaction_type must be 'Operasional' or 'Bahan Baku'"


# --- update ---------------------------------------------------------------------

def test_partial_update_leaves_other_fields(client, auth_headers, omzet_payload):
    created = client.post("/api/omzet", json=omzet_payload(), headers=auth_headers).json()["data"]

    response = client.patch(f"/api/omzet/{created['id']}", json={"notes": "Koreksi"}, headers=auth_headers)

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["notes"] == "Koreksi"
    assert data["reference_no"] == created["reference_no"]
    assert data["total_amount"] == created["total_amount"]
    assert data["transaction_date"] == "25/12/2024"
    assert data["updated_at"] >= created["updated_at"]


def test_update_resyncs_account_and_branch_snapshots(client, auth_headers, expense_payload):
    created = client.post("/api/pengeluaran", json=expense_payload(), headers=auth_headers).json()["data"]

    response = client.patch(
        f"/api/pengeluaran/{created['id']}",
        json={"account_id": "coa-4", "branch_id": "branch-3", "transaction_type": "Bahan Baku", "transaction_date": "11/01/2024"},
        headers=auth_headers,
    )

    data = response.json()["data"]
    assert data["account_code"] == "5-1000"
    assert data["account_name"] == "Beban Bahan Baku"
    assert data["branch_name"] == "Cabang Surabaya"
    assert data["transaction_type"] == "Bahan Baku"
    assert data["transaction_date"] == "11/01/2024"


def test_update_validates_each_present_field(client, auth_headers, omzet_payload):
    created = client.post("/api/omzet", json=omzet_payload(), headers=auth_headers).json()["data"]
    path = f"/api/omzet/{created['id']}"

    assert client.patch(path, json={"total_amount": 0}, headers=auth_headers).status_code == 400
    assert client.patch(path, json={"transaction_date": "2024-12-25"}, headers=auth_headers).status_code == 400
    assert client.patch(path, json={"account_id": "coa-404"}, headers=auth_headers).status_code == 400
    assert client.patch(path, json={"reference_no": ""}, headers=auth_headers).status_code == 400

    unchanged = client.get(path, headers=auth_headers).json()["data"]
    assert unchanged["total_amount"] == 250000
    assert unchanged["account_id"] == "coa-3"


def test_update_failure_does_not_apply_earlier_fields(client, auth_headers, omzet_payload):
    created = client.post("/api/omzet", json=omzet_payload(), headers=auth_headers).json()["data"]
    path = f"/api/omzet/{created['id']}"

    response = client.patch(path, json={"branch_id": "branch-2", "total_amount": -1}, headers=auth_headers)

    assert response.status_code == 400
    assert client.get(path, headers=auth_headers).json()["data"]["branch_id"] == "branch-1"


def test_update_reference_uniqueness_excludes_self(client, auth_headers, omzet_payload):
    created = client.post("/api/omzet", json=omzet_payload(), headers=auth_headers).json()["data"]
    path = f"/api/omzet/{created['id']}"

    same = client.patch(path, json={"reference_no": "INV-001"}, headers=auth_headers)
    taken = client.patch(path, json={"reference_no": "INV-2024-002"}, headers=auth_headers)

    assert same.status_code == 200
    assert taken.status_code == 409


def test_update_replaces_files(client, auth_headers, omzet_payload):
    payload = omzet_payload(files=[{"filename": "a.pdf", "original_name": "A.pdf"}])
    created = client.post("/api/omzet", json=payload, headers=auth_headers).json()["data"]
    kept = created["files"][0]

    response = client.patch(
        f"/api/omzet/{created['id']}",
        json={"files": [
            {"filename": "b.pdf", "original_name": "B.pdf"},
            {"id": kept["id"], "filename": "a.pdf", "original_name": "A.pdf"},
        ]},
        headers=auth_headers,
    )

    files = response.json()["data"]["files"]
    assert [f["filename"] for f in files] == ["b.pdf", "a.pdf"]
    assert files[1]["id"] == kept["id"]


def test_update_unknown_transaction(client, auth_headers):
    response = client.patch("/api/omzet/nope", json={"notes": "x"}, headers=auth_headers)

    assert response.status_code == 404
    assert response.json() == {"code": 404, "error": "Omzet not found"}


# --- files ----------------------------------------------------------------------

@pytest.mark.parametrize("surface,trx_id", [("omzet", "trx-1"), ("pengeluaran", "trx-3")])
def test_attach_two_files_then_remove_first(client, auth_headers, surface, trx_id):
    attached = client.post(
        f"/api/{surface}/{trx_id}/files",
        json={"files": [
            {"filename": "first.pdf", "original_name": "First.pdf"},
            {"filename": "second.pdf", "original_name": "Second.pdf"},
        ]},
        headers=auth_headers,
    )
    assert attached.status_code == 200
    data = attached.json()["data"]
    assert data["transaction_id"] == trx_id
    first, second = data["files"]

    removed = client.delete(f"/api/{surface}/{trx_id}/files/{first['id']}", headers=auth_headers)
    assert removed.status_code == 200

    files = client.get(f"/api/{surface}/{trx_id}", headers=auth_headers).json()["data"]["files"]
    assert files == [second]


def test_attach_appends_after_existing_files(client, auth_headers, omzet_payload):
    payload = omzet_payload(files=[{"filename": "a.pdf", "original_name": "A.pdf"}])
    created = client.post("/api/omzet", json=payload, headers=auth_headers).json()["data"]

    response = client.post(
        f"/api/omzet/{created['id']}/files",
        json={"files": [{"filename": "b.pdf", "original_name": "B.pdf"}]},
        headers=auth_headers,
    )

    assert [f["filename"] for f in response.json()["data"]["files"]] == ["a.pdf", "b.pdf"]


@pytest.mark.parametrize("body", [{}, {"files": []}])
def test_attach_requires_files(client, auth_headers, body):
    response = client.post("/api/omzet/trx-1/files", json=body, headers=auth_headers)

    assert response.status_code == 400
    assert response.json()["error"] == "Files array is required and cannot be empty"


def test_attach_rejects_invalid_file(client, auth_headers):
    response = client.post(
        "/api/omzet/trx-1/files",
        json={"files": [{"filename": "ok.pdf", "original_name": "ok.pdf"}, {"original_name": "x"}]},
        headers=auth_headers,
    )

    assert response.status_code == 400
    files = client.get("/api/omzet/trx-1", headers=auth_headers).json()["data"]["files"]
    assert files == []


def test_attach_to_unknown_transaction(client, auth_headers):
    response = client.post(
        "/api/pengeluaran/trx-1/files",
        json={"files": [{"filename": "a", "original_name": "a"}]},
        headers=auth_headers,
    )

    assert response.status_code == 404


def test_remove_unknown_file(client, auth_headers):
    response = client.delete("/api/omzet/trx-1/files/file-nope", headers=auth_headers)

    assert response.status_code == 404
    assert response.json() == {"code": 404, "error": "File not found"}
