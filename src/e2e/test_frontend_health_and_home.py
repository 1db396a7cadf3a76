import pytest

@pytest.mark.e2e
def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    data = r.get_json()
    assert data["ok"] is True
    assert data["sentences"] == 2
    assert data["words"] == 5

@pytest.mark.e2e
def test_home_page_renders(client):
    r = client.get("/")
    assert r.status_code == 200
    html = r.data.decode("utf-8", errors="ignore").lower()
    assert "<form" in html and "/api/chat" in html
