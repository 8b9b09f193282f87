import asyncio

from config.config import CONFIG
from juggling.coach import Coach, summary_prompt
from juggling.state import ChatMessage, GameState, StateChanged

SETTINGS = CONFIG['coach']


def run(coro):
    return asyncio.run(coro)


def test_starts_with_greeting():
    coach = Coach()
    assert coach.last_reply == SETTINGS['greeting']
    assert not coach.is_thinking


def test_missing_backend_uses_fallback():
    coach = Coach()

    async def scenario():
        task = coach.ask("How do I throw higher?")
        return await task

    assert run(scenario()) == SETTINGS['missing_backend_reply']
    assert [m.role for m in coach.messages] == ['model', 'user', 'model']


def test_sync_backend_gets_history_and_prompt():
    calls = []

    def backend(history, message):
        calls.append(([m.role for m in history], message))
        return "Try the cascade pattern 🤹"

    replies = []
    coach = Coach(backend, on_reply=replies.append)

    async def scenario():
        return await coach.ask("Any tips?")

    assert run(scenario()) == "Try the cascade pattern 🤹"
    assert calls == [(['system', 'model', 'user'], "Any tips?")]
    assert replies[0].text == "Try the cascade pattern 🤹"
    assert coach.last_reply == "Try the cascade pattern 🤹"


def test_async_backend():
    async def backend(history, message):
        await asyncio.sleep(0)
        return "Scoop, then toss!"

    coach = Coach(backend)

    async def scenario():
        return await coach.ask("help")

    assert run(scenario()) == "Scoop, then toss!"


def test_backend_error_is_contained():
    def backend(history, message):
        raise ConnectionError("network down")

    coach = Coach(backend)

    async def scenario():
        return await coach.ask("hello?")

    assert run(scenario()) == SETTINGS['error_reply']


def test_empty_reply_gets_default():
    coach = Coach(lambda history, message: "   ")

    async def scenario():
        return await coach.ask("hi")

    assert run(scenario()) == SETTINGS['empty_reply']


def test_ask_does_not_block_frame_loop():
    async def backend(history, message):
        await asyncio.sleep(0.05)
        return "done"

    coach = Coach(backend)

    async def scenario():
        task = coach.ask("tip please")
        # The call returns immediately with the reply still pending
        assert coach.is_thinking
        assert not task.done()
        await task
        return coach.is_thinking

    assert run(scenario()) is False


def test_game_over_with_score_asks_for_summary():
    prompts = []

    def backend(history, message):
        prompts.append(message)
        return "Great juggling!"

    coach = Coach(backend)

    async def scenario():
        task = coach.on_game_event(StateChanged(GameState.GAME_OVER, 120), duration=42.7)
        return await task

    assert run(scenario()) == "Great juggling!"
    assert prompts == [summary_prompt(120, 42.7)]
    assert "120" in prompts[0]
    # Summary prompts are not shown as player messages
    assert [m.role for m in coach.messages] == ['model', 'model']


def test_other_events_are_ignored():
    coach = Coach(lambda history, message: "unused")

    assert coach.on_game_event(StateChanged(GameState.GAME_OVER, 0)) is None
    assert coach.on_game_event(StateChanged(GameState.PLAYING, 0)) is None
    assert coach.on_game_event(object()) is None


def test_without_event_loop_falls_back_immediately():
    coach = Coach(lambda history, message: "unused")

    assert coach.ask("tip") is None
    assert coach.last_reply == SETTINGS['error_reply']


def test_blank_message_is_ignored():
    coach = Coach()
    assert coach.ask("   ") is None
    assert len(coach.messages) == 1


def test_history_is_bounded():
    coach = Coach()
    for i in range(SETTINGS['max_history'] + 10):
        coach._append(ChatMessage('user', str(i)))

    assert len(coach.messages) == SETTINGS['max_history']
    assert coach.messages[-1].text == str(SETTINGS['max_history'] + 9)


def test_backend_receives_coach_persona():
    seen = []

    def backend(history, message):
        seen.append(history[0])
        return "Scoop low, toss high! 🤹"

    coach = Coach(backend)

    async def scenario():
        return await coach.ask("How do I start?")

    run(scenario())

    assert seen[0].role == 'system'
    assert seen[0].text == SETTINGS['instruction']
    assert "Juggler Joe" in seen[0].text
    # The persona is never part of the visible chat
    assert all(m.role != 'system' for m in coach.messages)


def test_without_event_loop_or_backend_reports_missing_backend():
    coach = Coach()

    assert coach.ask("tip") is None
    assert coach.last_reply == SETTINGS['missing_backend_reply']
