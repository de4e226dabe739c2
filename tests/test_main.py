def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "running"


def test_health_check(client):
    response = client.get("/api/health")

    assert response.status_code == 200
    assert response.json()["status"] == "OK"
    assert response.json()["database"] == "connected"


def test_request_timing_header(client):
    response = client.get("/api/blogs/")
    assert "x-process-time" in response.headers


def test_uploads_route_refuses_traversal(client, tmp_path):
    (tmp_path / "secret.txt").write_text("nope")
    assert client.get("/uploads/..%2Fsecret.txt").status_code == 404


def test_unknown_upload_is_404(client):
    assert client.get("/uploads/blogs/missing.pdf").status_code == 404
