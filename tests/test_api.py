import pytest
from fastapi.testclient import TestClient

from conftest import FakeClient
from sqlsketch.domain.exceptions import NetworkError
from sqlsketch.main import app
from sqlsketch.presentation.api import get_generation_client

ANSWER = '```json\n{"sql_query": "SELECT region, SUM(sales) AS total FROM sales GROUP BY region", "result_data": [{"region": "EU", "total": 10}, {"region": "US", "total": 12}], "explanation": "Totals per region."}\n```'


@pytest.fixture
def fake():
    client = FakeClient()
    app.dependency_overrides[get_generation_client] = lambda: client
    yield client
    app.dependency_overrides.clear()


@pytest.fixture
def http(fake):
    with TestClient(app) as c:
        yield c


def test_health(http):
    assert http.get("/health").json() == {"status": "ok"}


def test_initial_state(http):
    body = http.get("/api/state").json()
    assert body["table"]["filename"] is None
    assert body["table"]["description"].startswith("No file uploaded")
    assert body["result"] is None


def test_upload_then_ask(http, fake):
    fake.responses += ['["Total by region?", "Max sales?", "Row count?"]', ANSWER]

    resp = http.post("/api/upload", files={"file": ("sales.csv", b"region,sales\nEU,10\n", "text/csv")})
    assert resp.status_code == 200
    body = resp.json()
    assert body["table"]["columns"] == ["region", "sales"]
    assert body["suggestions"]["items"] == ["Total by region?", "Max sales?", "Row count?"]

    resp = http.post("/api/ask", json={"question": "Total by region?"})
    assert resp.status_code == 200
    body = resp.json()
    assert body["chart_type"] == "bar"
    assert body["table"]["headers"] == ["region", "total"]
    assert body["table"]["rows"] == [["EU", "10"], ["US", "12"]]
    assert body["chart"]["values"] == [10.0, 12.0]
    assert "Table: sales.csv, Columns: region, sales" in fake.prompts[1]

    assert http.get("/api/state").json()["result"]["explanation"] == "Totals per region."


def test_upload_rejects_unsupported_file(http):
    resp = http.post("/api/upload", files={"file": ("book.xlsx", b"xx", "application/octet-stream")})
    assert resp.status_code == 400


def test_blank_question_returns_no_content(http, fake):
    assert http.post("/api/ask", json={"question": ""}).status_code == 204
    assert fake.prompts == []


def test_network_error_maps_to_502(http, fake):
    fake.responses.append(NetworkError("API key not valid."))
    resp = http.post("/api/ask", json={"question": "q"})
    assert resp.status_code == 502
    assert resp.json()["detail"] == "API key not valid."


def test_parse_error_maps_to_422_with_raw_text(http, fake):
    fake.responses.append("Sorry, I can't do that.")
    resp = http.post("/api/ask", json={"question": "q"})
    assert resp.status_code == 422
    assert resp.json()["detail"]["raw_text"] == "Sorry, I can't do that."


def test_suggestion_error_is_single_item(http, fake):
    fake.responses.append(NetworkError("quota exceeded"))
    body = http.post("/api/suggestions").json()
    assert body["items"] == ["Error: quota exceeded"]


def test_page_flow(http, fake):
    fake.responses += ['["Q?"]', ANSWER, NetworkError("boom")]

    resp = http.post("/upload", files={"file": ("sales.csv", b"region,sales\n", "text/csv")})
    assert resp.status_code == 200
    assert 'data-question="Q?"' in resp.text
    assert "user-question').value = this.dataset.question" in resp.text
    assert 'id="generate-btn"' in resp.text
    assert "btn.disabled = true" in resp.text
    assert "Analyzing..." in resp.text

    resp = http.post("/ask", data={"question": "Totals?"})
    assert "Totals per region." in resp.text
    assert "chart-spec" in resp.text

    resp = http.post("/ask", data={"question": "Again?"})
    assert resp.status_code == 502
    assert "Generation error: boom" in resp.text
    assert "Totals per region." in resp.text


def test_suggestion_error_item_is_not_clickable(http, fake):
    fake.responses.append(NetworkError("quota exceeded"))
    resp = http.post("/suggestions")
    assert "<li>Error: quota exceeded</li>" in resp.text
    assert "data-question" not in resp.text


def test_chart_spec_on_page_has_no_infinity(http, fake):
    fake.responses.append('{"sql_query": "S", "result_data": [{"k": "a", "v": "inf"}, {"k": "b", "v": 3}]}')
    resp = http.post("/ask", data={"question": "q"})
    assert resp.status_code == 200
    assert "Infinity" not in resp.text
    assert '"values": [null, 3.0]' in resp.text


def test_reset_drops_session_state(http, fake):
    fake.responses.append('["Q?"]')
    http.post("/api/upload", files={"file": ("sales.csv", b"region,sales\n", "text/csv")})
    assert http.get("/api/state").json()["table"]["filename"] == "sales.csv"

    assert http.post("/api/reset").status_code == 204
    assert http.get("/api/state").json()["table"]["filename"] is None
