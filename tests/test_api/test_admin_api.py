"""管理端接口测试"""

import pytest

from folio.content import Category
from folio.reorder import ReorderController
from tests.helpers import auth_headers, register_and_login


def _titles(response):
    return [item["title"] for item in response.json()["data"]]


@pytest.fixture
def projects(memory_store):
    return [memory_store.create_item("projects", {"title": t}) for t in ("A", "B", "C")]


class TestAccess:
    """权限测试"""

    def test_requires_token(self, client):
        response = client.get("/api/admin/content/projects")
        assert response.status_code == 401

    def test_requires_admin(self, client, admin_headers):
        """测试第二个账号不是管理员"""
        guest = auth_headers(register_and_login(client, email="guest@example.com", display_name="Guest"))
        response = client.get("/api/admin/content/projects", headers=guest)
        assert response.status_code == 403
        assert response.json()["error_code"] == "ADMIN_REQUIRED"

    def test_sample_data_mode(self, settings):
        """测试示例数据模式下管理端不可用"""
        from fastapi.testclient import TestClient

        from folio.app import create_app

        settings.content.use_sample_data = True
        app = create_app(settings, setup_logging=False)
        with TestClient(app) as client:
            headers = auth_headers(register_and_login(client))
            assert client.get("/api/admin/content/projects", headers=headers).status_code == 503
            assert client.get("/api/content").json()["data"]["personal_info"]["name"] == "Your Name"
            assert client.get("/health").json()["data"]["using_sample_data"] is True


class TestCrud:
    """增删改查测试"""

    def test_create_and_list(self, client, admin_headers):
        response = client.post("/api/admin/content/projects", json={"title": "Engine"}, headers=admin_headers)
        assert response.status_code == 201
        assert response.json()["data"]["slug"] == "engine"
        assert response.json()["data"]["order"] == 0
        assert _titles(client.get("/api/admin/content/projects", headers=admin_headers)) == ["Engine"]

    def test_create_invalid(self, client, admin_headers):
        response = client.post("/api/admin/content/projects", json={"title": ""}, headers=admin_headers)
        assert response.status_code == 422
        assert response.json()["msg_details"]

    def test_singleton_category_rejected(self, client, admin_headers):
        response = client.post("/api/admin/content/personal_info", json={"name": "Ada"}, headers=admin_headers)
        assert response.status_code == 422
        assert response.json()["error_code"] == "UNKNOWN_CATEGORY"

    def test_get_update_delete(self, client, admin_headers, projects):
        item_id = projects[1]["id"]
        url = f"/api/admin/content/projects/{item_id}"

        assert client.get(url, headers=admin_headers).json()["data"]["title"] == "B"

        response = client.put(url, json={"summary": "Updated"}, headers=admin_headers)
        assert response.json()["data"]["summary"] == "Updated"
        assert response.json()["data"]["title"] == "B"

        assert client.delete(url, headers=admin_headers).status_code == 200
        assert client.get(url, headers=admin_headers).status_code == 404

    def test_slug_conflict(self, client, admin_headers):
        client.post("/api/admin/content/blog_posts", json={"title": "Hello"}, headers=admin_headers)
        response = client.post("/api/admin/content/blog_posts", json={"title": "Hello"}, headers=admin_headers)
        assert response.status_code == 409

    def test_writes_clear_public_cache(self, client, admin_headers):
        """测试写操作后公开内容立即更新"""
        assert client.get("/api/content/hobbies").json()["data"] == []
        client.post("/api/admin/content/hobbies", json={"title": "Chess"}, headers=admin_headers)
        assert _titles(client.get("/api/content/hobbies")) == ["Chess"]

    def test_singletons(self, client, admin_headers):
        url = "/api/admin/singletons/personal_info"
        assert client.get(url, headers=admin_headers).json()["data"] == {}

        client.put(url, json={"name": "Ada", "headline": "Engineer"}, headers=admin_headers)
        client.put(url, json={"headline": "Lead"}, headers=admin_headers)
        data = client.get(url, headers=admin_headers).json()["data"]
        assert data["name"] == "Ada"
        assert data["headline"] == "Lead"
        assert client.get("/api/content/personal_info").json()["data"]["headline"] == "Lead"


class TestOrdering:
    """排序接口测试"""

    def test_move(self, client, admin_headers, projects):
        response = client.post(
            "/api/admin/content/projects/move",
            json={"index": 2, "direction": "UP"},
            headers=admin_headers,
        )
        assert response.json()["data"]["moved"] is True
        assert [i["title"] for i in response.json()["data"]["items"]] == ["A", "C", "B"]
        assert _titles(client.get("/api/admin/content/projects", headers=admin_headers)) == ["A", "C", "B"]
        assert _titles(client.get("/api/content/projects")) == ["A", "C", "B"]

    def test_move_at_boundary(self, client, admin_headers, projects):
        response = client.post(
            "/api/admin/content/projects/move",
            json={"index": 0, "direction": "up"},
            headers=admin_headers,
        )
        assert response.json()["data"]["moved"] is False

    def test_move_out_of_range(self, client, admin_headers, projects):
        response = client.post(
            "/api/admin/content/projects/move",
            json={"index": 9, "direction": "down"},
            headers=admin_headers,
        )
        assert response.status_code == 422
        assert response.json()["error_code"] == "INDEX_OUT_OF_RANGE"

    def test_move_while_pending(self, app, client, admin_headers, memory_store, projects):
        """测试同一分类的写入未完成时再次移动返回 409"""
        controller = ReorderController(memory_store, Category.PROJECTS)
        controller.pending = True
        app.state.reorder_controllers[Category.PROJECTS] = controller

        response = client.post(
            "/api/admin/content/projects/move",
            json={"index": 1, "direction": "up"},
            headers=admin_headers,
        )
        assert response.status_code == 409
        assert response.json()["error_code"] == "REORDER_IN_PROGRESS"

    def test_save_order(self, client, admin_headers, projects):
        a, b, c = (p["id"] for p in projects)
        response = client.put(
            "/api/admin/content/projects/order",
            json=[{"id": c, "order": 0}, {"id": a, "order": 1}, {"id": b, "order": 2}],
            headers=admin_headers,
        )
        assert _titles(response) == ["C", "A", "B"]

    def test_save_order_unknown_id(self, client, admin_headers, projects):
        """测试批量写入包含不存在的 id 时整体失败"""
        response = client.put(
            "/api/admin/content/projects/order",
            json=[{"id": projects[0]["id"], "order": 2}, {"id": 999, "order": 0}],
            headers=admin_headers,
        )
        assert response.status_code == 503
        assert _titles(client.get("/api/admin/content/projects", headers=admin_headers)) == ["A", "B", "C"]

    def test_normalize(self, client, admin_headers, memory_store):
        memory_store.create_item("hobbies", {"title": "A", "order": 5})
        memory_store.create_item("hobbies", {"title": "B", "order": 10})
        response = client.post("/api/admin/content/hobbies/normalize", headers=admin_headers)
        assert response.json()["data"] == {"updated": 2}
        orders = [i["order"] for i in client.get("/api/admin/content/hobbies", headers=admin_headers).json()["data"]]
        assert orders == [0, 1]


class TestMessages:
    """联系留言与留言板管理测试"""

    def test_contact_messages(self, client, admin_headers):
        for subject in ("first", "second"):
            client.post("/api/contact", json={
                "name": "Ada", "email": "ada@example.com", "subject": subject, "message": "Hi",
            })

        page = client.get("/api/admin/contact-messages", headers=admin_headers).json()["data"]
        assert [m["subject"] for m in page["rows"]] == ["second", "first"]
        assert page["total_records"] == 2

        message_id = page["rows"][0]["id"]
        response = client.post(f"/api/admin/contact-messages/{message_id}/read", headers=admin_headers)
        assert response.json()["data"]["status"] == "read"
        unread = client.get("/api/admin/contact-messages?status=unread", headers=admin_headers).json()["data"]
        assert unread["total_records"] == 1

    def test_delete_guestbook_message(self, client, admin_headers):
        message_id = client.post(
            "/api/guestbook", json={"message": "hello"}, headers=admin_headers
        ).json()["data"]["id"]
        assert client.delete(f"/api/admin/guestbook/{message_id}", headers=admin_headers).status_code == 200
        assert client.get("/api/guestbook").json()["data"] == []
        assert client.delete(f"/api/admin/guestbook/{message_id}", headers=admin_headers).status_code == 404


class TestUploads:
    """上传接口测试"""

    def test_upload_image(self, client, admin_headers):
        response = client.post(
            "/api/admin/uploads/projects?kind=image",
            files={"file": ("cover.png", b"\x89PNG fake", "image/png")},
            headers=admin_headers,
        )
        assert response.status_code == 201
        data = response.json()["data"]
        assert data["url"].startswith("/uploads/projects/cover_")
        assert data["size"] == 9

        served = client.get(data["url"])
        assert served.status_code == 200
        assert served.content == b"\x89PNG fake"

    def test_wrong_type(self, client, admin_headers):
        response = client.post(
            "/api/admin/uploads/projects?kind=image",
            files={"file": ("cv.pdf", b"%PDF", "application/pdf")},
            headers=admin_headers,
        )
        assert response.status_code == 422
        assert response.json()["error_code"] == "INVALID_FILE_TYPE"

    def test_extension_must_match_type(self, client, admin_headers):
        """测试声明为图片的 html 文件被拒绝"""
        response = client.post(
            "/api/admin/uploads/projects?kind=image",
            files={"file": ("page.html", b"<script></script>", "image/png")},
            headers=admin_headers,
        )
        assert response.status_code == 422
        assert response.json()["error_code"] == "INVALID_FILE_TYPE"

    def test_too_large(self, client, admin_headers, app):
        app.state.settings.upload.max_image_size = "1KB"
        response = client.post(
            "/api/admin/uploads/gallery",
            files={"file": ("big.png", b"x" * 2048, "image/png")},
            headers=admin_headers,
        )
        assert response.status_code == 422
        assert response.json()["error_code"] == "FILE_TOO_LARGE"

    def test_unknown_path(self, client, admin_headers):
        response = client.post(
            "/api/admin/uploads/secrets",
            files={"file": ("a.png", b"x", "image/png")},
            headers=admin_headers,
        )
        assert response.status_code == 422
