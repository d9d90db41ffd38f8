"""
Live tests against the INWX OTE sandbox (no billing, no production impact).

Required environment variables:
    INWX_OTE_USERNAME - OTE account username
    INWX_OTE_PASSWORD - OTE account password
    INWX_OTE_OTP      - optional OTE 2FA shared secret

Run with: pytest -m ote
"""
import os

import pytest

from core.application.services.toolset_service import build_toolset
from core.domain.errors import InwxApiError, PolicyViolationError, ToolInputError
from core.infrastructure.adapters.inwx.client import InwxClient
from core.settings.modules.inwx_settings import InwxSettings
from orchestration.workflow import find_operation

OTE_USER = os.getenv("INWX_OTE_USERNAME", "")
OTE_PASS = os.getenv("INWX_OTE_PASSWORD", "")
OTE_OTP = os.getenv("INWX_OTE_OTP") or None

pytestmark = [
    pytest.mark.ote,
    pytest.mark.skipif(
        not (OTE_USER and OTE_PASS),
        reason="set INWX_OTE_USERNAME and INWX_OTE_PASSWORD to enable",
    ),
]


def ote_settings(**overrides) -> InwxSettings:
    values = {
        "username": OTE_USER,
        "password": OTE_PASS,
        "otp_secret": OTE_OTP,
        "environment": "ote",
    }
    values.update(overrides)
    return InwxSettings(_env_file=None, **values)


# =============================================================================
# CLIENT
# =============================================================================

@pytest.mark.asyncio
async def test_authenticates_and_reads_account_info():
    client = InwxClient(ote_settings())
    try:
        info = await client.call("account.info")
        assert isinstance(info, dict)
    finally:
        await client.logout()


@pytest.mark.asyncio
async def test_sequential_calls_share_one_session():
    async with InwxClient(ote_settings()) as client:
        assert isinstance(await client.call("account.info"), dict)
        check = await client.call("domain.check", {"domain": "ote-integration-test-1234567890.de"})
        assert isinstance(check, dict)


@pytest.mark.asyncio
async def test_logout_twice_does_not_raise():
    client = InwxClient(ote_settings())
    await client.call("account.info")
    await client.logout()
    await client.logout()


@pytest.mark.asyncio
async def test_invalid_credentials_are_rejected():
    client = InwxClient(
        ote_settings(username="definitely-not-a-real-user-xyz", password="wrong-password", otp_secret=None)
    )
    try:
        with pytest.raises(InwxApiError):
            await client.call("account.info")
    finally:
        await client.logout()


# =============================================================================
# TOOLS
# =============================================================================

@pytest.mark.asyncio
async def test_domain_check_returns_availability():
    tools = build_toolset(ote_settings())

    result = await find_operation(tools, "inwx_domain_check").run(
        {"domain": "ote-integration-unique-test-domain-9876.de"}
    )

    assert len(result) > 0
    assert "domain" in result[0]
    assert isinstance(result[0]["avail"], bool)


@pytest.mark.asyncio
async def test_domain_list_and_pricing_shapes():
    tools = build_toolset(ote_settings())

    listing = await find_operation(tools, "inwx_domain_list").run({})
    pricing = await find_operation(tools, "inwx_domain_pricing").run({"domain": "example.de"})

    assert isinstance(listing["total"], int)
    assert isinstance(listing["domains"], list)
    assert isinstance(pricing["total"], int)
    assert isinstance(pricing["pricing"], list)


@pytest.mark.asyncio
async def test_contact_list_answers():
    tools = build_toolset(ote_settings())

    assert await find_operation(tools, "inwx_contact_list").run({}) is not None


@pytest.mark.asyncio
async def test_guard_blocks_before_reaching_ote():
    read_only = build_toolset(ote_settings(read_only=True))
    allow_listed = build_toolset(ote_settings(allowed_operations=["inwx_account_info"]))

    with pytest.raises(PolicyViolationError, match="readOnly"):
        await find_operation(read_only, "inwx_domain_register").run({"domain": "should-be-blocked.de"})
    with pytest.raises(PolicyViolationError, match="allowedOperations"):
        await find_operation(allow_listed, "inwx_domain_check").run({"domain": "should-be-blocked.de"})

    assert await find_operation(allow_listed, "inwx_account_info").run({}) is not None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "name, params, message",
    [
        ("inwx_domain_check", {"domain": ""}, "domain is required"),
        ("inwx_nameserver_set", {"domain": "test.de"}, "domain and ns[] are required"),
        ("inwx_domain_pricing", {}, "domain or domains[] is required"),
    ],
)
async def test_input_validation_on_live_toolset(name, params, message):
    tools = build_toolset(ote_settings())

    with pytest.raises(ToolInputError, match=message.replace("[", r"\[").replace("]", r"\]")):
        await find_operation(tools, name).run(params)
