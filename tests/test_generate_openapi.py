import json

from tasks_api.generate_openapi import generate_openapi


def test_writes_schema_with_task_routes(tmp_path):
    out = tmp_path / "interfaces" / "openapi.json"
    written = generate_openapi(str(out))
    assert written == str(out)

    schema = json.loads(out.read_text(encoding="utf-8"))
    assert schema["info"]["title"] == "Tasks API"
    assert set(schema["paths"]) >= {"/", "/health", "/api/tasks", "/api/tasks/{task_id}"}
    assert set(schema["paths"]["/api/tasks/{task_id}"]) == {"get", "put", "delete"}
    assert {t["name"] for t in schema["tags"]} >= {"health", "tasks"}
