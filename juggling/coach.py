"""
Chat coach that comments on the game.

Replies come from a pluggable backend and are produced by asyncio tasks
that the frame loop never waits for. Any backend problem turns into one
of the fixed fallback replies; nothing here touches the game session.
"""

import asyncio
import inspect
import logging
from typing import Callable, List, Optional, Sequence, Set

from config.config import CONFIG
from juggling.state import ChatMessage, GameState, StateChanged

# Configure logging
logger = logging.getLogger(__name__)

# backend(history, message) -> reply text, plain or async.
# history starts with a 'system' message carrying the coach persona.
CoachBackend = Callable[[Sequence[ChatMessage], str], object]


def summary_prompt(score: int, duration: float) -> str:
    return (f"I just finished a game with a score of {score} "
            f"after {int(duration)} seconds. How did I do?")


class Coach:
    """Keeps the chat history and fetches replies in the background."""

    def __init__(self, backend: Optional[CoachBackend] = None,
                 on_reply: Optional[Callable[[ChatMessage], None]] = None):
        self.settings = CONFIG['coach']
        self.backend = backend
        self.on_reply = on_reply
        self.messages: List[ChatMessage] = [
            ChatMessage('model', self.settings['greeting'])]
        self._tasks: Set[asyncio.Task] = set()

    @property
    def is_thinking(self) -> bool:
        return bool(self._tasks)

    @property
    def last_reply(self) -> Optional[str]:
        for message in reversed(self.messages):
            if message.role == 'model':
                return message.text
        return None

    def ask(self, text: str) -> Optional[asyncio.Task]:
        """Post a player message and fetch the reply in the background."""
        text = text.strip()
        if not text:
            return None
        self._append(ChatMessage('user', text))
        return self._request(text)

    def on_game_event(self, event, duration: float = 0.0) -> Optional[asyncio.Task]:
        """React to session events; only a scored game over asks for a summary."""
        if (isinstance(event, StateChanged) and event.state == GameState.GAME_OVER
                and event.score > 0):
            return self._request(summary_prompt(event.score, duration))
        return None

    def close(self) -> None:
        """Cancel replies still in flight."""
        for task in list(self._tasks):
            task.cancel()
        self._tasks.clear()

    def _request(self, prompt: str) -> Optional[asyncio.Task]:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("No running event loop, coach replies with fallback")
            if self.backend is None:
                self._publish(self.settings['missing_backend_reply'])
            else:
                self._publish(self.settings['error_reply'])
            return None

        task = loop.create_task(self._fetch(prompt))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    async def _fetch(self, prompt: str) -> str:
        if self.backend is None:
            text = self.settings['missing_backend_reply']
        else:
            history = [ChatMessage('system', self.settings['instruction'])]
            history.extend(self.messages)
            try:
                if inspect.iscoroutinefunction(self.backend):
                    reply = await self.backend(history, prompt)
                else:
                    loop = asyncio.get_running_loop()
                    reply = await loop.run_in_executor(None, self.backend, history, prompt)
                text = str(reply).strip() if reply else ''
                text = text or self.settings['empty_reply']
            except Exception as e:
                logger.warning(f"Coach backend failed: {e}")
                text = self.settings['error_reply']

        self._publish(text)
        return text

    def _publish(self, text: str) -> None:
        message = ChatMessage('model', text)
        self._append(message)
        if self.on_reply:
            try:
                self.on_reply(message)
            except Exception as e:
                logger.warning(f"Coach reply callback failed: {e}")

    def _append(self, message: ChatMessage) -> None:
        self.messages.append(message)
        overflow = len(self.messages) - self.settings['max_history']
        if overflow > 0:
            del self.messages[:overflow]
