from fastapi.testclient import TestClient

from hkcalc.models.types import Category, Variant
from hkcalc.rules.tables import build_rules
from hkcalc.web.app import app, create_app

client = TestClient(app)

GOOD = "A: true\nB: true\nC: false\nD: 33.3\nE: 10\nF: 7\n"


def post(input_text, substitution="base", c=client):
    return c.post("/api/assignment", json={"input": input_text, "substitution": substitution})


def test_index_page():
    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert "/api/assignment" in resp.text


def test_assignment_base():
    resp = post(GOOD)
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/plain")
    assert resp.text == "H: M\nK: 66.6\n"


def test_assignment_custom2():
    resp = post(GOOD.replace("D: 33.3", "D: 30"), "custom2")
    assert resp.status_code == 200
    assert resp.text.startswith("H: T\n")


def test_parse_error_is_400():
    resp = post("BAD STRING")
    assert resp.status_code == 400
    assert "detail" in resp.json()


def test_unknown_substitution_is_404():
    resp = post(GOOD, "Base")
    assert resp.status_code == 404
    assert "Base" in resp.json()["detail"]


def test_unclassifiable_is_422():
    resp = post(GOOD.replace("B: true", "B: false").replace("C: false", "C: true"))
    assert resp.status_code == 422
    assert "no category" in resp.json()["detail"]


def test_malformed_body_is_rejected():
    resp = client.post("/api/assignment", json={"input": GOOD})
    assert resp.status_code == 422


def test_get_on_api_is_not_allowed():
    assert client.get("/api/assignment").status_code == 405


def test_app_uses_injected_rules():
    rules = build_rules({Variant.CUSTOM1: {Category.T: (True, False, True)}})
    c = TestClient(create_app(rules))
    resp = post(GOOD.replace("B: true", "B: false").replace("C: false", "C: true"), "custom1", c)
    assert resp.status_code == 200
    assert resp.text.startswith("H: T\n")
