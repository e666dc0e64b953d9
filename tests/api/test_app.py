# tests/api/test_app.py
import io
import json

import pytest
from wsgiref.util import setup_testing_defaults

from freelancehub.app import create_app
from freelancehub.database import models
from freelancehub.repositories.factory import RepositoryProvider
from freelancehub.services.project_service import ProjectService

# ===================================================================
#  WSGI 호출 도우미 및 Fixture
# ===================================================================

class Client:
    """WSGI 애플리케이션을 직접 호출하는 간단한 테스트 클라이언트."""
    def __init__(self, app):
        self.app = app

    def request(self, method, path, body=None, raw=None):
        environ = {}
        setup_testing_defaults(environ)
        payload = raw if raw is not None else (json.dumps(body).encode("utf-8") if body is not None else b"")
        environ.update({
            "REQUEST_METHOD": method,
            "PATH_INFO": path,
            "CONTENT_LENGTH": str(len(payload)),
            "CONTENT_TYPE": "application/json",
            "wsgi.input": io.BytesIO(payload),
        })
        captured = {}

        def start_response(status, headers):
            captured["status"] = int(status.split(" ", 1)[0])
            captured["headers"] = dict(headers)

        data = b"".join(self.app(environ, start_response))
        return captured["status"], (json.loads(data) if data else None)

    def get(self, path): return self.request("GET", path)
    def post(self, path, body=None, **kw): return self.request("POST", path, body, **kw)
    def patch(self, path, body=None, **kw): return self.request("PATCH", path, body, **kw)
    def delete(self, path): return self.request("DELETE", path)

@pytest.fixture
def provider() -> RepositoryProvider:
    """테스트마다 새 인메모리 저장소를 사용합니다."""
    return RepositoryProvider(None)

@pytest.fixture
def client(provider: RepositoryProvider) -> Client:
    return Client(create_app(provider))

def signup(client, email="jane@example.com", name="Jane", password="pw", **extra):
    return client.post("/api/auth/signup", {"email": email, "password": password, "name": name, **extra})

def new_project(client, client_id, **overrides):
    body = {"name": "Site", "description": "Company site", "clientId": client_id}
    body.update(overrides)
    return client.post("/api/admin/projects", body)

# ===================================================================
#  인증 엔드포인트
# ===================================================================
class TestAuthEndpoints:
    def test_signup_then_login(self, client):
        status, body = signup(client)
        assert status == 201
        assert body["user"] == {"id": 1, "email": "jane@example.com", "name": "Jane", "role": "client"}

        status, body = client.post("/api/auth/login", {"email": "jane@example.com", "password": "pw"})
        assert status == 200
        assert body["user"]["id"] == 1
        assert "password" not in body["user"]

    def test_signup_duplicate_email_conflicts(self, client):
        """같은 이메일로 다시 가입하면 409 이고 두 번째 레코드는 생기지 않는지 테스트합니다."""
        signup(client)

        status, body = signup(client, name="Impostor")

        assert status == 409
        assert body == {"message": "User already exists"}
        _, clients = client.get("/api/admin/clients")
        assert [c["name"] for c in clients] == ["Jane"]

    @pytest.mark.parametrize("body", [
        {"email": "not-an-email", "password": "pw", "name": "X"},
        {"email": "x@example.com", "password": "", "name": "X"},
        {"email": "x@example.com", "password": "pw"},
        {"email": "x@example.com", "password": "pw", "name": "X", "role": "owner"},
    ])
    def test_signup_malformed_body(self, client, body):
        status, response = client.post("/api/auth/signup", body)
        assert status == 400
        assert response == {"message": "Invalid request data"}

    def test_signup_normalizes_email_domain(self, client):
        """도메인 부분만 소문자로 저장되고, 같은 방식으로 정규화된 주소로 로그인되는지 테스트합니다."""
        status, body = signup(client, email="Jane@Example.COM")
        assert status == 201
        assert body["user"]["email"] == "Jane@example.com"

        status, _ = client.post("/api/auth/login", {"email": "Jane@EXAMPLE.com", "password": "pw"})
        assert status == 200

    def test_signup_rejects_special_use_domain(self, client):
        status, body = signup(client, email="x@foo.test")
        assert status == 400
        assert body == {"message": "Invalid request data"}
        _, clients = client.get("/api/admin/clients")
        assert clients == []

    def test_signup_rejects_non_json(self, client):
        status, _ = client.post("/api/auth/signup", raw=b"{not json")
        assert status == 400

    def test_login_invalid_credentials(self, client):
        signup(client)

        status, body = client.post("/api/auth/login", {"email": "jane@example.com", "password": "nope"})

        assert status == 401
        assert body == {"message": "Invalid credentials"}

    def test_login_malformed_body(self, client):
        status, _ = client.post("/api/auth/login", {"email": "jane@example.com"})
        assert status == 400

# ===================================================================
#  프로젝트 생명주기 시나리오
# ===================================================================
class TestProjectLifecycle:
    def test_client_project_lifecycle(self, client):
        """
        클라이언트 생성 -> 프로젝트 생성(기본 상태) -> 클라이언트 링크 제출 -> 관리자가 완료 처리.
        완료 후에는 화면에서 링크 제출을 막아야 하지만 API 는 막지 않습니다.
        """
        # === Arrange ===
        _, body = signup(client)
        jane_id = body["user"]["id"]
        assert jane_id == 1

        # === Act & Assert ===
        status, project = new_project(client, jane_id)
        assert status == 201
        assert project["status"] == "in-progress"
        assert project["completionPercentage"] == 0

        link = "https://drive.example.com/site"
        status, project = client.patch(f"/api/projects/{project['id']}/drive-link", {"driveLink": link})
        assert status == 200
        assert project["driveLink"] == link
        assert project["status"] == "in-progress"

        status, project = client.patch(f"/api/admin/projects/{project['id']}", {"status": "complete"})
        assert status == 200
        assert project["status"] == "complete"
        assert project["completionPercentage"] == 0
        assert project["driveLink"] == link
        assert ProjectService.can_submit_drive_link(project) is False

    def test_my_projects_only_returns_own(self, client):
        _, jane = signup(client)
        _, bob = signup(client, email="bob@example.com", name="Bob")
        new_project(client, jane["user"]["id"], name="Jane's")
        new_project(client, bob["user"]["id"], name="Bob's")

        status, projects = client.get(f"/api/projects/my/{jane['user']['id']}")

        assert status == 200
        assert [p["name"] for p in projects] == ["Jane's"]

    def test_create_project_validation(self, client):
        assert new_project(client, 1, completionPercentage=101)[0] == 400
        assert new_project(client, 1, completionPercentage=-5)[0] == 400
        assert new_project(client, 1, status="paused")[0] == 400
        assert new_project(client, 1, name="")[0] == 400
        assert new_project(client, 1, completionPercentage=True)[0] == 400
        assert new_project(client, True)[0] == 400
        assert client.post("/api/admin/projects", {"name": "x", "description": "y"})[0] == 400

    def test_create_project_accepts_numeric_string_percentage(self, client):
        status, project = new_project(client, 1, completionPercentage="40")
        assert status == 201
        assert project["completionPercentage"] == 40

    def test_update_project_partial_and_independent(self, client):
        """진행률만 바꾸면 상태는 그대로이고, 상태만 바꾸면 진행률이 그대로인지 테스트합니다."""
        _, project = new_project(client, 1, status="waiting-feedback", completionPercentage=20)
        pid = project["id"]

        _, project = client.patch(f"/api/admin/projects/{pid}", {"completionPercentage": 100})
        assert (project["status"], project["completionPercentage"]) == ("waiting-feedback", 100)

        _, project = client.patch(f"/api/admin/projects/{pid}", {"status": "in-progress", "notes": "Check colors"})
        assert (project["status"], project["completionPercentage"], project["notes"]) == ("in-progress", 100, "Check colors")

    @pytest.mark.parametrize("body", [
        {"completionPercentage": 150},
        {"status": "done"},
        {"name": None},
        {"description": ""},
        {"completionPercentage": True},
        {"completionPercentage": False},
    ])
    def test_update_project_invalid(self, client, body):
        _, project = new_project(client, 1)
        status, _ = client.patch(f"/api/admin/projects/{project['id']}", body)
        assert status == 400

    def test_update_missing_project_is_404_and_store_unchanged(self, client):
        new_project(client, 1)

        status, body = client.patch("/api/admin/projects/999", {"name": "Ghost"})

        assert status == 404
        assert body == {"message": "Project not found"}
        _, projects = client.get("/api/admin/projects")
        assert len(projects) == 1

    @pytest.mark.parametrize("body", [{}, {"link": "https://typo.example.com"}])
    def test_drive_link_requires_key(self, client, body):
        """driveLink 키가 없으면 400 이고 저장된 링크는 그대로인지 테스트합니다."""
        _, project = new_project(client, 1)
        link = "https://drive.example.com/site"
        client.patch(f"/api/projects/{project['id']}/drive-link", {"driveLink": link})

        status, _ = client.patch(f"/api/projects/{project['id']}/drive-link", body)

        assert status == 400
        assert client.get(f"/api/projects/{project['id']}")[1]["driveLink"] == link

    @pytest.mark.parametrize("cleared", [None, ""])
    def test_drive_link_explicit_clear(self, client, cleared):
        _, project = new_project(client, 1)
        client.patch(f"/api/projects/{project['id']}/drive-link", {"driveLink": "https://x.example.com"})

        status, project = client.patch(f"/api/projects/{project['id']}/drive-link", {"driveLink": cleared})

        assert status == 200
        assert project["driveLink"] is None

    def test_drive_link_missing_project(self, client):
        status, _ = client.patch("/api/projects/77/drive-link", {"driveLink": "https://x"})
        assert status == 404

    def test_delete_project_twice(self, client):
        _, project = new_project(client, 1)

        assert client.delete(f"/api/admin/projects/{project['id']}") == (204, None)
        assert client.delete(f"/api/admin/projects/{project['id']}")[0] == 404

# ===================================================================
#  관리자 조회 엔드포인트
# ===================================================================
class TestAdminEndpoints:
    def test_stats(self, client):
        """in-progress 2건, complete 1건일 때의 통계를 테스트합니다."""
        _, body = signup(client)
        jane_id = body["user"]["id"]
        new_project(client, jane_id)
        new_project(client, jane_id)
        new_project(client, jane_id, status="complete")

        status, stats = client.get("/api/admin/stats")

        assert status == 200
        assert stats == {"totalClients": 1, "activeProjects": 2, "pendingFeedback": 0, "completed": 1}

    def test_admin_projects_include_client_or_placeholder(self, client):
        _, body = signup(client)
        new_project(client, body["user"]["id"], name="Owned")
        new_project(client, 500, name="Orphan")

        status, projects = client.get("/api/admin/projects")

        assert status == 200
        assert [p["name"] for p in projects] == ["Orphan", "Owned"]
        assert projects[0]["client"] == {"id": 0, "name": "Unknown", "email": "unknown@example.com"}
        assert projects[1]["client"] == {"id": 1, "name": "Jane", "email": "jane@example.com"}

    def test_clients_list_excludes_admins(self, client, provider):
        with provider.session() as (user_repo, _):
            user_repo.create(models.User(email="admin@example.com", password="pw", name="Admin", role="admin"))
        signup(client, email="zed@example.com", name="Zed")
        signup(client, email="amy@example.com", name="Amy")

        _, clients = client.get("/api/admin/clients")

        assert [c["name"] for c in clients] == ["Amy", "Zed"]
        assert all("password" not in c for c in clients)

    def test_client_with_projects(self, client):
        _, body = signup(client)
        new_project(client, body["user"]["id"])

        status, result = client.get(f"/api/admin/clients/{body['user']['id']}")
        assert status == 200
        assert result["name"] == "Jane"
        assert len(result["projects"]) == 1

        assert client.get("/api/admin/clients/99")[0] == 404

        status, everyone = client.get("/api/admin/clients-with-projects")
        assert status == 200
        assert [c["name"] for c in everyone] == ["Jane"]

# ===================================================================
#  라우팅 및 오류 처리
# ===================================================================
class TestRoutingAndErrors:
    def test_unknown_route(self, client):
        assert client.get("/api/nothing") == (404, {"message": "Not Found"})

    def test_non_numeric_id_does_not_match(self, client):
        assert client.delete("/api/admin/projects/abc")[0] == 404

    def test_wrong_method(self, client):
        status, _ = client.request("PUT", "/api/admin/stats")
        assert status == 405

    def test_store_failure_is_generic_500(self, client, provider, monkeypatch):
        """저장소 오류는 원인을 노출하지 않고 고정된 메시지로 500 을 반환하는지 테스트합니다."""
        def broken(*args, **kwargs):
            raise RuntimeError("connection reset by peer")

        monkeypatch.setattr("freelancehub.repositories.memory.memory_project_repository.InMemoryProjectRepository.list_all", broken)

        status, body = client.get("/api/admin/stats")

        assert status == 500
        assert body == {"message": "Failed to fetch stats"}
