from backend import DEFAULT_BOT_SECRET, create_app
from backend.models import DailyDocument, db
from backend.store import JsonFileStore, SqlStore


def test_file_store_by_default(tmp_path, monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("BOT_SECRET", raising=False)
    app = create_app({"DAILY_DATA_FILE": str(tmp_path / "daily.json")})
    mgr = app.extensions["daily_state"]
    assert isinstance(mgr.store, JsonFileStore)
    assert mgr.secret == DEFAULT_BOT_SECRET


def test_file_store_persists_across_apps(tmp_path, monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    cfg = {"DAILY_DATA_FILE": str(tmp_path / "daily.json"), "BOT_SECRET": "s3cret"}
    client = create_app(cfg).test_client()
    r = client.post("/api/daily/tagesgericht", json={"secret": "s3cret", "dish1": "Soljanka"})
    assert r.status_code == 200

    again = create_app(cfg).test_client()
    assert again.get("/api/daily").json["todaysSpecial"]["dish1"] == "Soljanka"


def test_sql_store_when_database_configured(tmp_path):
    url = f"sqlite:///{tmp_path / 'daily.db'}"
    app = create_app({"SQLALCHEMY_DATABASE_URI": url, "BOT_SECRET": "s3cret"})
    assert isinstance(app.extensions["daily_state"].store, SqlStore)

    client = app.test_client()
    r = client.post("/api/daily/hinweis", json={"secret": "s3cret", "text": "Heute Eis"})
    assert r.status_code == 200
    assert client.get("/api/daily").json["notice"]["text"] == "Heute Eis"


def test_first_read_creates_document_file(tmp_path, monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    path = tmp_path / "daily.json"
    client = create_app({"DAILY_DATA_FILE": str(path)}).test_client()
    assert client.get("/api/daily").status_code == 200
    assert path.exists()


def test_corrupt_file_does_not_break_the_api(tmp_path, monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    path = tmp_path / "daily.json"
    path.write_bytes(b"\xff\xfe garbage")
    client = create_app({"DAILY_DATA_FILE": str(path), "BOT_SECRET": "s3cret"}).test_client()

    r = client.get("/api/daily")
    assert r.status_code == 200
    assert r.json["hoursOverride"]["active"] is False

    r = client.post("/api/daily/tagesgericht", json={"secret": "s3cret", "dish1": "Senfeier"})
    assert r.status_code == 200
    assert client.get("/api/daily").json["todaysSpecial"]["dish1"] == "Senfeier"


def test_first_read_creates_database_row(tmp_path):
    app = create_app({"SQLALCHEMY_DATABASE_URI": f"sqlite:///{tmp_path / 'daily.db'}"})
    assert app.test_client().get("/api/daily").status_code == 200
    with app.app_context():
        assert db.session.get(DailyDocument, SqlStore.ROW_ID) is not None
