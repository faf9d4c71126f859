from urllib.parse import parse_qs, urlparse


def test_save_appointment(client, store):
    resp = client.post("/appointment", json={"userId": "U1", "date": "2025-09-20", "time": "09:30"})
    assert resp.status_code == 201
    assert store.appended == [("DoctorAppointments", ["U1", "2025-09-20", "09:30", ""], "RAW")]


def test_duplicate_appointment_is_rejected(client, store):
    store.add("DoctorAppointments", ["U1", "2025-09-20", "09:30", "check-up"])
    resp = client.post("/appointment", json={"userId": "U1", "date": "2025-09-20", "time": "09:30", "note": "again"})
    assert resp.status_code == 409
    assert resp.get_json()["isDuplicate"] is True
    assert store.appended == []


def test_same_date_other_time_is_allowed(client, store):
    store.add("DoctorAppointments", ["U1", "2025-09-20", "09:30", ""])
    resp = client.post("/appointment", json={"userId": "U1", "date": "2025-09-20", "time": "13:00"})
    assert resp.status_code == 201


def test_appointment_requires_date_and_time(client):
    resp = client.post("/appointment", json={"userId": "U1", "date": "2025-09-20"})
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_appointment_records_newest_first_without_clamping(client, store):
    store.add(
        "DoctorAppointments",
        ["U1", "2025-09-20", "09:30", "eye"],
        ["U1", "2025-10-01", "08:00"],
        ["U1", "2025-09-20", "14:00", "blood test"],
        ["U2", "2025-12-01", "10:00", ""],
    )
    body = client.get("/appointment/records?userId=U1").get_json()
    assert body["appointments"] == [
        {"date": "2025-10-01", "time": "08:00", "note": ""},
        {"date": "2025-09-20", "time": "14:00", "note": "blood test"},
        {"date": "2025-09-20", "time": "09:30", "note": "eye"},
    ]
    assert body["pagination"]["totalPages"] == 1

    past_end = client.get("/appointment/records?userId=U1&page=4").get_json()
    assert past_end["appointments"] == []
    assert past_end["pagination"]["currentPage"] == 4
    assert past_end["pagination"]["prevPage"] == 3


def test_legacy_listing_returns_everything(client, store):
    store.add("DoctorAppointments", *[["U1", f"2025-09-{d:02d}", "09:00", ""] for d in range(1, 16)])
    body = client.get("/appointment?userId=U1").get_json()
    assert body["totalRecords"] == 15
    assert len(body["appointments"]) == 15
    assert body["appointments"][0]["date"] == "2025-09-15"


def test_legacy_listing_redirects_when_paged(client):
    resp = client.get("/appointment?userId=U1&page=2")
    assert resp.status_code == 302
    location = urlparse(resp.headers["Location"])
    assert location.path == "/appointment/records"
    assert parse_qs(location.query) == {"userId": ["U1"], "page": ["2"], "limit": ["12"]}


def test_legacy_listing_requires_user(client):
    assert client.get("/appointment").status_code == 400


def test_appointment_date_is_written_as_raw_text(client, store):
    client.post("/appointment", json={"userId": "U1", "date": "2025-09-15", "time": "09:00"})
    assert store.appended[0][2] == "RAW"
    assert store.data("DoctorAppointments") == [["U1", "2025-09-15", "09:00", ""]]
