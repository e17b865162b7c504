import pytest

import web_app
from llm_manager import ErrorKind, GenerationError, QUOTA_MESSAGE
from session_controller import VALIDATION_MESSAGE
from tests.conftest import StubGenerator


FORM = {
    "name": "Jane Doe",
    "recentPosition": "Data Analyst",
    "background": "Five years of analytics.",
    "companyName": "Acme Corp",
    "targetPosition": "Senior Analyst",
    "jobDescription": "Own the reporting stack.",
    "length": "100",
    "style": "Passionate",
}


@pytest.fixture
def session(make_session, monkeypatch):
    session = make_session()
    monkeypatch.setattr(web_app, "letter_session", session)
    return session


@pytest.fixture
def client(session, tmp_path, monkeypatch):
    monkeypatch.setitem(web_app.app.config, "OUTPUT_FOLDER", str(tmp_path))
    web_app.app.config["TESTING"] = True
    return web_app.app.test_client()


def test_index_renders_form(client):
    resp = client.get("/")
    assert resp.status_code == 200
    body = resp.get_data(as_text=True)
    assert "Creative &amp; Lively" in body
    assert 'data-length="500"' in body


def test_health(client):
    data = client.get("/api/health").get_json()
    assert data["status"] == "ok"
    assert data["api_key_present"] is True


def test_generate_with_form_payload(client, stub_generator):
    data = client.post("/api/generate", json=FORM).get_json()

    assert data["success"] is True
    assert data["state"]["result"] == stub_generator.text
    inputs, config = stub_generator.calls[0]
    assert inputs.job_description == "Own the reporting stack."
    assert config.length.value == "100"
    assert config.style.value == "Passionate"


def test_generate_validation_error_is_page_state(client, stub_generator):
    data = client.post("/api/generate", json={"background": "  ", "jobDescription": "x"}).get_json()

    assert data["success"] is False
    assert data["state"]["error"] == VALIDATION_MESSAGE
    assert stub_generator.calls == []


def test_generate_quota_error(client, session):
    session._generate_fn = StubGenerator(error=GenerationError(ErrorKind.QUOTA, QUOTA_MESSAGE))
    data = client.post("/api/generate", json=FORM).get_json()

    assert data["success"] is False
    assert data["state"]["error"] == QUOTA_MESSAGE
    assert data["state"]["error_kind"] == "quota"


def test_bad_selection_is_rejected(client):
    resp = client.post("/api/fields", json={"length": "42"})
    assert resp.status_code == 400
    assert resp.get_json()["success"] is False


def test_save_and_clear_profile(client, store):
    assert client.post("/api/profile", json=FORM).get_json()["state"]["profile_saved"] is True
    assert store.load() is not None

    unconfirmed = client.delete("/api/profile", json={}).get_json()
    assert unconfirmed["success"] is False
    assert store.load() is not None

    confirmed = client.delete("/api/profile", json={"confirm": True}).get_json()
    assert confirmed["success"] is True
    assert store.load() is None
    assert confirmed["state"]["fields"]["name"] == ""
    assert confirmed["state"]["fields"]["jobDescription"] == FORM["jobDescription"]


def test_copy_returns_result_text(client, stub_generator):
    assert client.post("/api/copy").get_json()["success"] is False

    client.post("/api/generate", json=FORM)
    data = client.post("/api/copy").get_json()
    assert data["success"] is True
    assert data["text"] == stub_generator.text
    assert data["state"]["copied"] is True


def test_export_pdf_download(client, session, tmp_path):
    def fake_exporter(text, path):
        with open(path, "wb") as f:
            f.write(b"%PDF-1.4 fake")
        return True

    session._pdf_exporter = fake_exporter
    client.post("/api/generate", json=FORM)

    resp = client.get("/api/export/pdf")
    assert resp.status_code == 200
    assert resp.mimetype == "application/pdf"
    assert "cover-letter.pdf" in resp.headers["Content-Disposition"]
    assert resp.data.startswith(b"%PDF")


def test_export_pdf_without_result(client):
    resp = client.get("/api/export/pdf")
    assert resp.status_code == 409
    assert resp.get_json()["success"] is False
