def _submit(client, **overrides):
    body = {"userId": "U1", "sugar": 120, "type": "before", "period": "morning"}
    body.update(overrides)
    return client.post("/sugar", json=body)


def test_save_sugar_stores_translated_labels_and_server_date(client, store, registered):
    resp = _submit(client)
    assert resp.status_code == 201
    assert resp.get_json()["success"] is True
    assert store.appended == [
        ("SugarRecords", ["U1", 120, "ก่อนอาหาร", "เช้า", "14/9/2025"], "RAW"),
    ]

    listing = client.get("/sugar/records?userId=U1").get_json()
    assert listing["records"] == [
        {"userId": "U1", "sugar": "120", "type": "ก่อนอาหาร", "period": "เช้า", "date": "14/9/2025"},
    ]


def test_duplicate_sugar_reading_is_rejected(client, store, registered):
    assert _submit(client).status_code == 201

    resp = _submit(client, sugar=135)
    body = resp.get_json()
    assert resp.status_code == 409
    assert body["success"] is False
    assert body["isDuplicate"] is True

    listing = client.get("/sugar/records?userId=U1").get_json()
    assert listing["pagination"]["totalRecords"] == 1


def test_same_slot_on_another_period_is_allowed(client, registered):
    assert _submit(client).status_code == 201
    assert _submit(client, period="evening").status_code == 201


def test_unregistered_user_cannot_save(client, store):
    resp = _submit(client, userId="nobody")
    body = resp.get_json()
    assert resp.status_code == 404
    assert body["notRegistered"] is True
    assert store.appended == []


def test_invalid_payload_is_rejected_before_any_store_call(client, store):
    resp = client.post("/sugar", json={"userId": "U1", "sugar": -5, "type": "before", "period": "morning"})
    assert resp.status_code == 400
    assert resp.get_json()["fields"] == ["sugar"]
    assert store.fetches == []


def test_save_fails_cleanly_when_store_is_down(client, store, registered):
    store.unavailable = True
    resp = _submit(client)
    assert resp.status_code == 503
    assert resp.get_json()["success"] is False


def test_records_are_paginated_newest_first(client, store):
    rows = [["U1", str(100 + d), "ก่อนอาหาร", "เช้า", f"{d}/8/2025"] for d in range(1, 26)]
    store.add("SugarRecords", *rows)
    store.add("SugarRecords", ["U2", "99", "ก่อนอาหาร", "เช้า", "30/8/2025"])

    first = client.get("/sugar/records?userId=U1&page=1&limit=12").get_json()
    assert len(first["records"]) == 12
    assert first["records"][0]["date"] == "25/8/2025"
    assert first["pagination"] == {
        "currentPage": 1, "totalPages": 3, "totalRecords": 25, "recordsPerPage": 12,
        "hasNext": True, "hasPrev": False, "nextPage": 2, "prevPage": None,
    }

    last = client.get("/sugar/records?userId=U1&page=3").get_json()
    assert [r["date"] for r in last["records"]] == ["1/8/2025"]
    assert last["pagination"]["hasNext"] is False
    assert last["pagination"]["hasPrev"] is True


def test_records_page_is_not_clamped(client, store):
    store.add("SugarRecords", ["U1", "100", "ก่อนอาหาร", "เช้า", "1/9/2025"])
    body = client.get("/sugar/records?userId=U1&page=5").get_json()
    assert body["records"] == []
    assert body["pagination"]["currentPage"] == 5


def test_records_listing_reports_store_outage(client, store):
    store.unavailable = True
    resp = client.get("/sugar/records?userId=U1")
    body = resp.get_json()
    assert resp.status_code == 503
    assert body["success"] is False
    assert body["records"] == []
    assert body["pagination"] is None


def test_records_require_user_id(client):
    body = client.get("/sugar/records").get_json()
    assert body["success"] is False
    assert body["records"] == []


def test_weekly_chart_endpoint(client, store):
    store.add(
        "SugarRecords",
        ["U1", "100", "ก่อนอาหาร", "เช้า", "1/9/2025"],
        ["U1", "140", "หลังอาหาร", "เช้า", "2/9/2025"],
        ["U1", "90", "ก่อนอาหาร", "เย็น", "3/9/2025"],
    )
    body = client.get("/sugar/weekly?userId=U1").get_json()
    assert body["success"] is True
    assert len(body["labels"]) == 6
    assert body["beforeMeal"] == [100, None, None, None, None, 90]
    assert body["afterMeal"] == [None, None, 140, None, None, None]
    assert body["totalRecords"] == 3


def test_unknown_chart_range_is_empty(client, store):
    store.add("SugarRecords", ["U1", "100", "ก่อนอาหาร", "เช้า", "1/9/2025"])
    body = client.get("/sugar/monthly?userId=U1").get_json()
    assert body["success"] is True
    assert body["labels"] == []


def test_sugar_row_is_written_as_raw_text(client, store, registered):
    # the sheet must keep the date text exactly as written for duplicate matching
    _submit(client)
    table, row, value_input_option = store.appended[0]
    assert value_input_option == "RAW"
    assert row[4] == "14/9/2025"
    assert _submit(client).status_code == 409
