"""Tests for auth/security.py and auth/dependencies.py — bearer JWT handling."""

import jwt
import pytest
from fastapi import HTTPException

from auth import dependencies, security


class TestAccessTokens:

    def test_round_trip(self):
        token = security.build_access_token(user_id=7)
        claims = security.decode_access_token(token)
        assert claims["sub"] == "7"

    def test_expired_token_rejected(self):
        token = security.build_access_token(user_id=7, expires_in_s=-60)
        with pytest.raises(security.AuthSecurityError):
            security.decode_access_token(token)

    def test_wrong_secret_rejected(self):
        token = jwt.encode({"sub": "7", "exp": security.now_epoch_s() + 60}, "other-secret", algorithm="HS256")
        with pytest.raises(security.AuthSecurityError):
            security.decode_access_token(token)

    def test_missing_sub_rejected(self):
        token = jwt.encode({"exp": security.now_epoch_s() + 60}, "test-secret", algorithm="HS256")
        with pytest.raises(security.AuthSecurityError):
            security.decode_access_token(token)

    def test_audience_enforced_when_configured(self, monkeypatch):
        token = security.build_access_token(user_id=7)
        monkeypatch.setenv("JWT_AUDIENCE", "lists-api")
        with pytest.raises(security.AuthSecurityError):
            security.decode_access_token(token)

        token = security.build_access_token(user_id=7)
        assert security.decode_access_token(token)["aud"] == "lists-api"

    def test_empty_token_rejected(self):
        with pytest.raises(security.AuthSecurityError):
            security.decode_access_token("  ")


class TestDependencies:

    @pytest.mark.parametrize("header", [None, "", "Bearer", "Basic abc", "Bearer  "])
    def test_bad_header_returns_401(self, header):
        with pytest.raises(HTTPException) as exc_info:
            dependencies._extract_bearer_token(header)
        assert exc_info.value.status_code == 401

    def test_bearer_token_extracted(self):
        assert dependencies._extract_bearer_token("bearer abc.def") == "abc.def"

    async def test_invalid_token_returns_401(self):
        with pytest.raises(HTTPException) as exc_info:
            await dependencies.get_current_user("garbage")
        assert exc_info.value.status_code == 401

    async def test_user_id_from_sub(self):
        assert await dependencies.get_current_user_id({"sub": "12"}) == 12

    async def test_non_numeric_sub_returns_401(self):
        with pytest.raises(HTTPException) as exc_info:
            await dependencies.get_current_user_id({"sub": "auth0|abc"})
        assert exc_info.value.status_code == 401
