PROFILE = {"userId": "U9", "firstName": "Malee", "lastName": "Sukjai", "gender": "female"}


def test_status(client):
    body = client.get("/").get_json()
    assert body["spreadsheet"] == "sheet-123"


def test_check_user(client, registered):
    assert client.get("/check-user?userId=U1").get_json() == {"registered": True}
    assert client.get("/check-user?userId=U2").get_json() == {"registered": False}
    # the header row never counts as a user
    assert client.get("/check-user?userId=userId").get_json() == {"registered": False}


def test_get_user(client, registered):
    body = client.get("/user?userId=U1").get_json()
    assert body["success"] is True
    assert body["user"] == {
        "userId": "U1", "firstName": "Somchai", "lastName": "Jaidee",
        "gender": "male", "birthDay": "1980-01-01", "age": "45",
    }


def test_get_unknown_user(client):
    body = client.get("/user?userId=U2").get_json()
    assert body["success"] is False
    assert body["notRegistered"] is True


def test_register_computes_age_before_birthday(client, store):
    resp = client.post("/register", json=dict(PROFILE, birthDay="1990-09-15"))
    assert resp.status_code == 201
    assert store.appended == [("Users", ["U9", "Malee", "Sukjai", "female", "1990-09-15", 34], "RAW")]


def test_register_computes_age_on_birthday(client, store):
    client.post("/register", json=dict(PROFILE, birthDay="1990-09-14"))
    assert store.appended[0][1][5] == 35


def test_register_twice_is_rejected(client, store):
    client.post("/register", json=dict(PROFILE, birthDay="1990-09-14"))
    resp = client.post("/register", json=dict(PROFILE, birthDay="1990-09-14"))
    assert resp.status_code == 409
    assert len(store.appended) == 1


def test_register_requires_all_fields(client, store):
    resp = client.post("/register", json={"userId": "U9"})
    assert resp.status_code == 400
    assert resp.get_json()["fields"] == ["firstName", "lastName", "gender", "birthDay"]
    assert store.appended == []


def test_check_user_during_store_outage(client, store):
    store.unavailable = True
    resp = client.get("/check-user?userId=U1")
    assert resp.status_code == 503
    assert resp.get_json() == {
        "success": False, "registered": False, "message": "Cannot reach the data store, please try again",
    }
