import logging
from fastapi import status


class TestFailedRequestLogging:
    async def test_bearer_token_not_logged(self, client, auth_headers, caplog):
        """失败请求的日志不包含令牌"""
        caplog.set_level(logging.ERROR, logger="cms_admin.main")
        token = auth_headers["Authorization"].split(" ", 1)[1]

        response = await client.put(
            "/api/admin/comments/9999/status",
            headers=auth_headers,
            json={"status": "SPAM"}
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert "Request failed with status 404" in caplog.text
        assert "[REDACTED]" in caplog.text
        assert token not in caplog.text

    async def test_cookie_not_logged(self, client, caplog):
        """失败请求的日志不包含cookie"""
        caplog.set_level(logging.ERROR, logger="cms_admin.main")

        response = await client.get("/api/users/me", headers={"Cookie": "session=secret-cookie-value"})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert "secret-cookie-value" not in caplog.text

    async def test_password_not_logged(self, client, test_user_data, caplog):
        """登录失败的日志不包含密码"""
        caplog.set_level(logging.ERROR, logger="cms_admin.main")
        await client.post("/api/users/register", json=test_user_data)

        response = await client.post("/api/users/login", json={
            "username": test_user_data["username"],
            "password": "wrong-password-987"
        })

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert test_user_data["username"] in caplog.text
        assert "wrong-password-987" not in caplog.text
