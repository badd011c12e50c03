# SPDX-License-Identifier: CC0-1.0

from __future__ import annotations

import asyncio
import random
from datetime import datetime
from pathlib import Path
from typing import Awaitable, Callable, Optional

from .actions import UnknownQuickAction, get_quick_action
from .faq import Corpus
from .fallback import DEFAULT_BRAND, Reply, answer_query
from .session import BOT, USER, JsonlLogger, Message, SessionState

WELCOME_TEMPLATE = (
    "Hi! I am your {brand} assistant. I can help you with plant identification, care "
    "tips, premium features, and more. How can I help you today?"
)

Sleep = Callable[[float], Awaitable[object]]


class TurnController:
    """
    Принимает реплики пользователя и дописывает ответы бота в транскрипт сессии.

    Пока ответ на предыдущую реплику не готов, новые реплики и быстрые действия
    отклоняются: ничего не дописывается, возвращается None.
    """

    def __init__(
            self,
            corpus: Corpus,
            *,
            brand: str = DEFAULT_BRAND,
            rng: random.Random | None = None,
            typing_delay: tuple[float, float] = (1.0, 2.0),
            sleep: Sleep = asyncio.sleep,
            logs_dir: Path | None = None,
    ) -> None:
        low, high = typing_delay
        if low < 0 or low > high:
            raise ValueError(f"invalid typing delay window: {typing_delay}")
        self.corpus = corpus
        self.brand = brand
        self.rng = rng or random.Random()
        self.typing_delay = typing_delay
        self.sleep = sleep
        self.logs_dir = logs_dir

    def create_session(self, session_id: str | None = None) -> SessionState:
        session_id = session_id or datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        logger = None
        if self.logs_dir is not None:
            logger = JsonlLogger(self.logs_dir / f"session_{session_id}.jsonl")

        session = SessionState(session_id=session_id, brand=self.brand, logger=logger)
        session.init_meta(len(self.corpus))
        session.append(BOT, WELCOME_TEMPLATE.format(brand=self.brand), extra={"source": "welcome"})
        return session

    def _busy(self, session: SessionState, content: str) -> bool:
        if session.closed:
            session.log_rejected("closed", content)
            return True
        if session.awaiting_response:
            session.log_rejected("awaiting_response", content)
            return True
        return False

    def submit_user_message(self, session: SessionState, text: str) -> Optional[asyncio.Task]:
        """
        Дописывает реплику пользователя как есть и планирует ответ.

        Возвращает задачу, которая завершится сообщением бота, или None,
        если реплика пустая или отклонена.
        """
        if not text.strip():
            return None
        if self._busy(session, text):
            return None

        loop = asyncio.get_running_loop()
        session.append(USER, text)
        session.awaiting_response = True
        session.pending = loop.create_task(self._resolve_turn(session, text))
        return session.pending

    def _typing_delay(self) -> float:
        low, high = self.typing_delay
        return self.rng.uniform(low, high)

    async def _resolve_turn(self, session: SessionState, text: str) -> Optional[Message]:
        reply = answer_query(text, self.corpus, self.rng, brand=self.brand)
        try:
            await self.sleep(self._typing_delay())
        except Exception:
            # иначе сессия навсегда останется в ожидании ответа
            session.awaiting_response = False
            session.pending = None
            raise

        if session.closed:
            return None
        message = self._apply(session, reply)
        session.awaiting_response = False
        session.pending = None
        return message

    def _apply(self, session: SessionState, reply: Reply) -> Message:
        # побочные эффекты применяются только здесь
        if reply.show_contact:
            session.request_contact_card()
        session.count_source(reply.source)
        return session.append(BOT, reply.text, extra={"source": reply.source, "rule": reply.rule})

    def quick_action(self, session: SessionState, action_id: str) -> Optional[Message]:
        action = get_quick_action(action_id)
        if action is None:
            raise UnknownQuickAction(action_id)
        if self._busy(session, action_id):
            return None

        reply = Reply(
            text=action.response,
            source="quick_action",
            rule=action.id,
            show_contact=action.show_contact,
        )
        return self._apply(session, reply)

    def close_session(self, session: SessionState) -> None:
        if session.closed:
            return
        session.closed = True
        if session.pending is not None and not session.pending.done():
            session.pending.cancel()
        session.pending = None
        session.awaiting_response = False
        session.log_summary()
