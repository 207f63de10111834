import asyncio

from src.bot.handlers import CommandHandlers

CALLER = 42


def _handlers(authorization, calendar, transport):
    return CommandHandlers(authorization, calendar, transport)


def test_start_prompts_login_for_unknown_caller(authorization, calendar, transport):
    asyncio.run(_handlers(authorization, calendar, transport).start(CALLER, CALLER))

    links = transport.of_kind("link")
    assert len(links) == 1
    assert links[0][3] == "You must login to use this function"
    assert "callerId" in links[0][4]


def test_start_welcomes_known_caller(authorization, calendar, transport, store, valid_tokens):
    store.put(CALLER, valid_tokens)

    asyncio.run(_handlers(authorization, calendar, transport).start(CALLER, CALLER))

    assert [c[3] for c in transport.of_kind("send")] == ["Welcome to the Calendar Bot!"]


def test_text_from_unknown_caller_prompts_login(authorization, calendar, transport):
    asyncio.run(_handlers(authorization, calendar, transport).handle_text(CALLER, CALLER, "05/12 dentist"))

    assert len(transport.of_kind("link")) == 1
    assert calendar.inserted == []


def test_text_from_known_caller_creates_events(authorization, calendar, transport, store, valid_tokens):
    store.put(CALLER, valid_tokens)

    asyncio.run(_handlers(authorization, calendar, transport).handle_text(CALLER, CALLER, "05/12 dentist"))

    assert [e["summary"] for e in calendar.inserted] == ["05/12 dentist"]


def test_slash_text_is_ignored(authorization, calendar, transport, store, valid_tokens):
    store.put(CALLER, valid_tokens)

    asyncio.run(_handlers(authorization, calendar, transport).handle_text(CALLER, CALLER, "/unknown 05/12"))

    assert transport.calls == []


def test_delete_all_events(authorization, calendar, transport, store, valid_tokens):
    store.put(CALLER, valid_tokens)
    calendar.insert_event(valid_tokens, {"summary": "a"})
    calendar.insert_event(valid_tokens, {"summary": "b"})

    asyncio.run(_handlers(authorization, calendar, transport).delete_all_events(CALLER, CALLER))

    assert calendar.list_events(valid_tokens) == []
    assert [c[3] for c in transport.of_kind("send")] == [
        "Deleting all events...",
        "All events have been deleted.",
    ]


def test_delete_all_events_failure_replies_once(authorization, calendar, transport, store, valid_tokens):
    store.put(CALLER, valid_tokens)
    calendar.insert_event(valid_tokens, {"summary": "a"})
    calendar.fail_deletes = True

    asyncio.run(_handlers(authorization, calendar, transport).delete_all_events(CALLER, CALLER))

    assert [c[3] for c in transport.of_kind("send")] == [
        "Deleting all events...",
        "There was an error deleting the events.",
    ]


def test_delete_all_events_requires_login(authorization, calendar, transport, store, expired_tokens):
    store.put(CALLER, expired_tokens)

    asyncio.run(_handlers(authorization, calendar, transport).delete_all_events(CALLER, CALLER))

    assert store.get(CALLER) is None
    assert len(transport.of_kind("link")) == 1
    assert transport.of_kind("send") == []
