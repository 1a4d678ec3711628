"""Service endpoint tests."""

from httpx import ASGITransport, AsyncClient

from app.main import create_app


async def test_root(client):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.json()["message"] == "Animal Adoption API running"


async def test_health_reports_database(client):
    response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["checks"]["database"] == "healthy"


async def test_config_exposes_quiz_rules(client):
    response = await client.get("/config")

    assert response.status_code == 200
    assert response.json()["quizzes"] == {"passing_score": 50, "default_user_id": 1}


async def test_static_index_is_served_at_root(settings, database, tmp_path):
    (tmp_path / "index.html").write_text("<html>landing</html>")
    app = create_app(settings.model_copy(update={"STATIC_DIR": str(tmp_path)}), database)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.get("/")
        api = await ac.get("/api/courses")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "landing" in response.text
    assert api.json() == []


async def test_root_falls_back_to_json_without_index(settings, database, tmp_path):
    (tmp_path / "app.js").write_text("console.log('hi')")
    app = create_app(settings.model_copy(update={"STATIC_DIR": str(tmp_path)}), database)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        response = await ac.get("/")
        script = await ac.get("/app.js")

    assert response.json()["message"] == "Animal Adoption API running"
    assert script.status_code == 200
