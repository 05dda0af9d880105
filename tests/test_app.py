from src.class_attendance.class_attendance.main import create_app


def test_health_check(monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    monkeypatch.setenv("AUTO_INIT_DB", "0")
    monkeypatch.setenv("AUTO_SEED_DB", "0")

    client = create_app().test_client()
    resp = client.get("/health")

    assert resp.status_code == 200
    assert resp.get_json()["status"] == "healthy"
