# tests/test_handlers.py
from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from roomshuffle.chat.handlers.shuffle_commands import (
    COMMANDS,
    FAILURE_MESSAGE,
    GUILD_ONLY_MESSAGE,
    Command,
    handle_shuffle,
)
from roomshuffle.services.shuffle_service import START_MESSAGE

from conftest import ORGANIZER_ROLE, build_server


def make_ctx(*role_ids, guild=object()):
    roles = [SimpleNamespace(id=r) for r in role_ids]
    return SimpleNamespace(author=SimpleNamespace(roles=roles), guild=guild, respond=AsyncMock())


def replies(ctx):
    return [call.args[0] for call in ctx.respond.await_args_list]


def test_every_command_is_described():
    assert set(COMMANDS) == set(Command)
    assert Command("shuffle") is Command.SHUFFLE


@pytest.mark.asyncio
async def test_shuffle_acknowledges(server, coordinator):
    ctx = make_ctx(ORGANIZER_ROLE)
    await handle_shuffle(ctx, coordinator=coordinator, platform=server)
    assert replies(ctx) == [START_MESSAGE]
    assert server.moves


@pytest.mark.asyncio
async def test_not_authorized(server, coordinator):
    ctx = make_ctx(7)
    await handle_shuffle(ctx, coordinator=coordinator, platform=server)
    assert replies(ctx) == ["You do not have an authorized role to use this command!"]
    assert server.calls == []


@pytest.mark.asyncio
async def test_member_without_roles(server, coordinator):
    ctx = SimpleNamespace(author=SimpleNamespace(), guild=object(), respond=AsyncMock())
    await handle_shuffle(ctx, coordinator=coordinator, platform=server)
    assert replies(ctx) == ["You do not have an authorized role to use this command!"]


@pytest.mark.asyncio
async def test_busy(server, coordinator):
    coordinator.guard.try_acquire()
    try:
        ctx = make_ctx(ORGANIZER_ROLE)
        await handle_shuffle(ctx, coordinator=coordinator, platform=server)
    finally:
        coordinator.guard.release()
    assert replies(ctx) == ["A shuffle is already in progress"]


@pytest.mark.asyncio
async def test_no_matching_category(coordinator):
    server = build_server(["Room 1"], [1], group_name="Elsewhere")
    ctx = make_ctx(ORGANIZER_ROLE)
    await handle_shuffle(ctx, coordinator=coordinator, platform=server)
    assert replies(ctx) == ["There is no category called 'speed friending'"]


@pytest.mark.asyncio
async def test_unknown_category_id(server, coordinator):
    ctx = make_ctx(ORGANIZER_ROLE)
    await handle_shuffle(ctx, category_id="12345", coordinator=coordinator, platform=server)
    assert replies(ctx) == ["There is no category with ID 12345"]


@pytest.mark.asyncio
async def test_invalid_category_id(server, coordinator):
    ctx = make_ctx(ORGANIZER_ROLE)
    await handle_shuffle(ctx, category_id="lobby", coordinator=coordinator, platform=server)
    assert replies(ctx) == ["Invalid value for category_id"]


@pytest.mark.asyncio
async def test_unexpected_error_gets_generic_reply(server, coordinator):
    server.broken_rooms = {102}
    ctx = make_ctx(ORGANIZER_ROLE)
    await handle_shuffle(ctx, coordinator=coordinator, platform=server)
    assert replies(ctx) == [FAILURE_MESSAGE]
    assert not coordinator.running


@pytest.mark.asyncio
async def test_outside_a_server(coordinator):
    ctx = make_ctx(ORGANIZER_ROLE, guild=None)
    await handle_shuffle(ctx, coordinator=coordinator)
    assert replies(ctx) == [GUILD_ONLY_MESSAGE]
