"""JWT 管理器测试"""

from datetime import timedelta

import pytest

from folio.auth import JWTManager
from folio.exceptions import AuthenticationException, ErrorCode


class TestJWTManagerInit:
    """参数校验测试"""

    def test_invalid_access_expire(self, jwt_secret_key):
        with pytest.raises(ValueError):
            JWTManager(jwt_secret_key, access_token_expire_minutes=0)

    def test_sliding_days_must_be_less_than_expire(self, jwt_secret_key):
        """测试续期天数不能大于等于有效天数"""
        with pytest.raises(ValueError):
            JWTManager(jwt_secret_key, refresh_token_expire_days=2, refresh_token_sliding_days=2)


class TestTokens:
    """签发与验证测试"""

    def test_access_token_round_trip(self, jwt_manager, sample_token_payload):
        token = jwt_manager.create_access_token(sample_token_payload)
        data = jwt_manager.verify_token(token)
        assert data.sub == "owner@example.com"
        assert data.user_id == 1
        assert data.roles == ["admin"]
        assert data.token_type == "access"

    def test_refresh_token_carries_only_identity(self, jwt_manager, sample_token_payload):
        """测试 refresh token 只携带 sub 和 user_id"""
        data = jwt_manager.verify_token(jwt_manager.create_refresh_token(sample_token_payload))
        assert data.token_type == "refresh"
        assert data.user_id == 1
        assert data.email is None
        assert data.roles == []

    def test_wrong_secret(self, jwt_manager, sample_token_payload):
        token = jwt_manager.create_access_token(sample_token_payload)
        other = JWTManager("another-secret")
        assert other.verify_token(token) is None
        assert other.decode_token(token) is None

    def test_garbage_token(self, jwt_manager):
        assert jwt_manager.verify_token("not-a-token") is None

    def test_expired_token(self, jwt_manager, sample_token_payload):
        """测试过期令牌默认返回 None，raise_on_expired 时抛出 TOKEN_EXPIRED"""
        token = jwt_manager.create_access_token(sample_token_payload, expires_delta=timedelta(seconds=-1))
        assert jwt_manager.verify_token(token) is None
        with pytest.raises(AuthenticationException) as exc_info:
            jwt_manager.verify_token(token, raise_on_expired=True)
        assert exc_info.value.code == ErrorCode.TOKEN_EXPIRED

    def test_remaining_seconds(self, jwt_manager, sample_token_payload):
        token = jwt_manager.create_access_token(sample_token_payload)
        remaining = jwt_manager.get_remaining_seconds(token)
        assert 0 < remaining <= 30 * 60


class TestRefresh:
    """刷新令牌测试"""

    def test_refresh_without_renewal(self, jwt_manager, sample_token_payload):
        """测试剩余时间充足时不续期 refresh token"""
        refresh_token = jwt_manager.create_refresh_token(sample_token_payload)
        result = jwt_manager.refresh_tokens(refresh_token, sample_token_payload)
        assert result["access_token"]
        assert result["refresh_token"] is None
        assert result["refresh_token_renewed"] is False

    def test_refresh_with_renewal(self, jwt_manager, sample_token_payload):
        """测试剩余时间少于 sliding_days 时续期"""
        refresh_token = jwt_manager.create_refresh_token(sample_token_payload, expires_delta=timedelta(days=1))
        result = jwt_manager.refresh_tokens(refresh_token, sample_token_payload)
        assert result["refresh_token_renewed"] is True
        assert jwt_manager.verify_token(result["refresh_token"]).token_type == "refresh"

    def test_access_token_cannot_refresh(self, jwt_manager, sample_token_payload):
        access_token = jwt_manager.create_access_token(sample_token_payload)
        assert jwt_manager.refresh_tokens(access_token, sample_token_payload) is None

    def test_user_mismatch(self, jwt_manager, sample_token_payload):
        """测试载荷与 refresh token 不是同一用户"""
        refresh_token = jwt_manager.create_refresh_token(sample_token_payload)
        sample_token_payload.user_id = 2
        assert jwt_manager.refresh_tokens(refresh_token, sample_token_payload) is None
