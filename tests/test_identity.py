import httpx
import pytest

from pos_inventory.core.errors import Unauthorized
from pos_inventory.core.identity import IdentityVerifier, require_user


def make_verifier(handler):
    return IdentityVerifier(
        base_url="http://auth.test/auth/v1/",
        api_key="anon-key",
        timeout=1,
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_valid_token_returns_user():
    seen = {}

    def handler(request: httpx.Request):
        seen["url"] = str(request.url)
        seen["auth"] = request.headers.get("authorization")
        seen["apikey"] = request.headers.get("apikey")
        return httpx.Response(200, json={"id": "user-1", "email": "cajero@example.com", "role": "authenticated"})

    user = await make_verifier(handler).verify("good-token")

    assert user.id == "user-1"
    assert user.email == "cajero@example.com"
    assert seen == {"url": "http://auth.test/auth/v1/user", "auth": "Bearer good-token", "apikey": "anon-key"}


@pytest.mark.asyncio
@pytest.mark.parametrize("response", [
    httpx.Response(401, json={"msg": "invalid JWT"}),
    httpx.Response(403, json={"msg": "expired"}),
    httpx.Response(200, json={}),
    httpx.Response(200, text="not json"),
])
async def test_rejected_tokens(response):
    verifier = make_verifier(lambda request: response)

    with pytest.raises(Unauthorized) as excinfo:
        await verifier.verify("expired-token")

    assert excinfo.value.message == "Invalid or expired token"


@pytest.mark.asyncio
async def test_unreachable_provider_is_unauthorized():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with pytest.raises(Unauthorized):
        await make_verifier(handler).verify("good-token")


@pytest.mark.asyncio
async def test_empty_token_skips_provider():
    calls = []
    verifier = make_verifier(lambda request: calls.append(request) or httpx.Response(200, json={"id": "x"}))

    with pytest.raises(Unauthorized):
        await verifier.verify("")

    assert calls == []


@pytest.mark.asyncio
async def test_require_user_strips_bearer_prefix():
    verifier = make_verifier(
        lambda request: httpx.Response(200, json={"id": "user-9"})
        if request.headers["authorization"] == "Bearer abc.def"
        else httpx.Response(401)
    )

    user = await require_user(authorization="Bearer abc.def", verifier=verifier)

    assert user.id == "user-9"


@pytest.mark.asyncio
async def test_require_user_without_header():
    with pytest.raises(Unauthorized) as excinfo:
        await require_user(authorization=None, verifier=make_verifier(lambda request: httpx.Response(500)))

    assert excinfo.value.message == "Missing authorization header"
