from fastapi.testclient import TestClient
from workout_api.main import app
from workout_api.notifications import get_mailer
import uuid

client = TestClient(app)
PWD = "StrongPassw0rd!"
DAY = "2024-01-01"

def login_user():
    """Register, confirm and log in a fresh user; returns (user_id, headers)."""
    email = f"u_{uuid.uuid4().hex[:10]}@example.com"
    r = client.post("/users/register", json={"first_name": "W", "last_name": "O", "email": email, "password": PWD})
    assert r.status_code == 201, r.text
    token = app.dependency_overrides[get_mailer]().token_for(email)
    assert client.get(f"/users/validate/{token}").status_code == 200
    body = client.post("/users/login", json={"email": email, "password": PWD}).json()
    return body["user"]["id"], {"Authorization": f"Bearer {body['access_token']}"}

def catalog():
    return {e["name"]: e["id"] for e in client.get("/exercises").json()}

def save(user_id, headers, exercises, day=DAY):
    return client.post("/workouts", headers=headers, json={"user_id": user_id, "date": day, "exercises": exercises})

def test_exercise_catalog_is_public_and_ordered():
    r = client.get("/exercises")
    assert r.status_code == 200
    ids = [e["id"] for e in r.json()]
    assert ids == sorted(ids)
    assert {"Squat", "Bench Press", "Deadlift"} <= set(catalog())

def test_save_then_read_day():
    uid, h = login_user()
    ex = catalog()
    r = save(uid, h, [
        {"exercise_definition_id": ex["Squat"], "sets": [{"weight": 100, "repetitions": 5}, {"weight": 110, "repetitions": 3}]},
        {"exercise_definition_id": ex["Bench Press"], "sets": []},
    ])
    assert r.status_code == 200, r.text
    assert r.json()["message"] == "Workout saved successfully"
    workout_id = r.json()["workout_id"]

    r = client.get("/workouts", headers=h, params={"userId": uid, "date": DAY})
    assert r.status_code == 200
    [workout] = r.json()
    assert workout["id"] == workout_id
    assert workout["date"] == DAY
    assert [(e["name"], e["exercise_definition_id"]) for e in workout["exercises"]] == [
        ("Squat", ex["Squat"]), ("Bench Press", ex["Bench Press"]),
    ]
    assert [(s["weight"], s["repetitions"]) for s in workout["exercises"][0]["sets"]] == [(100, 5), (110, 3)]
    assert workout["exercises"][1]["sets"] == []

def test_second_save_replaces_the_day():
    uid, h = login_user()
    ex = catalog()
    save(uid, h, [{"exercise_definition_id": ex["Squat"], "sets": [{"weight": 60, "repetitions": 5}]}])
    save(uid, h, [{"exercise_definition_id": ex["Deadlift"], "sets": [{"weight": 140, "repetitions": 1}]}])
    workouts = client.get("/workouts", headers=h, params={"userId": uid, "date": DAY}).json()
    assert len(workouts) == 1
    assert [e["name"] for e in workouts[0]["exercises"]] == ["Deadlift"]

def test_empty_workout_is_kept():
    uid, h = login_user()
    assert save(uid, h, []).status_code == 200
    [workout] = client.get("/workouts", headers=h, params={"userId": uid, "date": DAY}).json()
    assert workout["exercises"] == []

def test_unknown_exercise_definition_is_skipped():
    uid, h = login_user()
    ex = catalog()
    r = save(uid, h, [
        {"exercise_definition_id": 999999, "sets": [{"weight": 1, "repetitions": 1}]},
        {"exercise_definition_id": ex["Dip"], "sets": [{"weight": 0, "repetitions": 12}]},
    ])
    assert r.status_code == 200
    [workout] = client.get("/workouts", headers=h, params={"userId": uid, "date": DAY}).json()
    assert [e["name"] for e in workout["exercises"]] == ["Dip"]

def test_all_workouts_of_user():
    uid, h = login_user()
    ex = catalog()
    for day in ("2024-03-02", "2024-03-01"):
        save(uid, h, [{"exercise_definition_id": ex["Lunge"], "sets": [{"weight": 20, "repetitions": 10}]}], day=day)
    r = client.get("/workouts/all", headers=h, params={"userId": uid})
    assert r.status_code == 200
    # ordered by id, i.e. by save order
    assert [w["date"] for w in r.json()] == ["2024-03-02", "2024-03-01"]

def test_malformed_payload_400():
    uid, h = login_user()
    assert client.post("/workouts", headers=h, json={"user_id": uid, "date": DAY}).status_code == 400
    assert client.post("/workouts", headers=h, json={"user_id": uid, "date": DAY, "exercises": "squat"}).status_code == 400
    r = save(uid, h, [{"exercise_definition_id": 1, "sets": [{"weight": -5, "repetitions": 5}]}])
    assert r.status_code == 400
    r = save(uid, h, [{"sets": []}])
    assert r.status_code == 400
    # nothing was written
    assert client.get("/workouts/all", headers=h, params={"userId": uid}).json() == []

def test_missing_query_params_400():
    uid, h = login_user()
    assert client.get("/workouts", headers=h, params={"userId": uid}).status_code == 400
    assert client.get("/workouts", headers=h, params={"date": DAY}).status_code == 400
    assert client.get("/workouts/all", headers=h).status_code == 400

def test_other_users_workouts_forbidden():
    uid, h = login_user()
    other_uid, other_h = login_user()
    save(uid, h, [])
    assert client.get("/workouts/all", headers=other_h, params={"userId": uid}).status_code == 403
    assert client.get("/workouts", headers=other_h, params={"userId": uid, "date": DAY}).status_code == 403
    assert save(uid, other_h, []).status_code == 403

def test_delete_workout():
    uid, h = login_user()
    ex = catalog()
    workout_id = save(uid, h, [{"exercise_definition_id": ex["Squat"], "sets": [{"weight": 1, "repetitions": 1}]}]).json()["workout_id"]
    r = client.delete(f"/workouts/{workout_id}", headers=h)
    assert r.status_code == 200
    assert r.json() == {"message": "Workout deleted successfully"}
    assert client.get("/workouts", headers=h, params={"userId": uid, "date": DAY}).json() == []

def test_delete_unknown_workout_is_noop():
    _, h = login_user()
    r = client.delete("/workouts/987654321", headers=h)
    assert r.status_code == 200

def test_delete_someone_elses_workout_forbidden():
    uid, h = login_user()
    _, other_h = login_user()
    workout_id = save(uid, h, []).json()["workout_id"]
    assert client.delete(f"/workouts/{workout_id}", headers=other_h).status_code == 403
    assert len(client.get("/workouts/all", headers=h, params={"userId": uid}).json()) == 1
