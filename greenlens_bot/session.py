# SPDX-License-Identifier: CC0-1.0

from __future__ import annotations

import asyncio
import itertools
import json
from dataclasses import dataclass, field
from datetime import datetime, UTC
from pathlib import Path
from typing import List, Dict, Any, Optional

USER = "user"
BOT = "bot"


class JsonlLogger:
    def __init__(self, path: Path):
        self.path = path

    def write(self, record: Dict[str, Any]):
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as f:
            f.write(json.dumps(record, ensure_ascii=False) + "\n")


@dataclass(frozen=True)
class Message:
    id: int
    role: str
    text: str
    created_at: datetime


@dataclass
class SourceTotals:
    faq: int = 0
    fallback: int = 0
    quick_action: int = 0

    def add(self, source: str):
        setattr(self, source, getattr(self, source) + 1)


@dataclass
class SessionState:
    session_id: str
    brand: str
    logger: Optional[JsonlLogger] = None
    transcript: List[Message] = field(default_factory=list)
    awaiting_response: bool = False
    contact_card_requested: bool = False
    closed: bool = False
    source_totals: SourceTotals = field(default_factory=SourceTotals)
    pending: Optional[asyncio.Task] = field(default=None, repr=False)
    _ids: Any = field(default_factory=lambda: itertools.count(1), repr=False)

    def _log(self, record: Dict[str, Any]):
        if self.logger is None:
            return
        self.logger.write({"timestamp": datetime.now(UTC).isoformat(), **record})

    def init_meta(self, corpus_size: int):
        self._log({
            "type": "meta",
            "session_id": self.session_id,
            "brand": self.brand,
            "corpus_size": corpus_size,
        })

    def append(self, role: str, text: str, extra: Dict[str, Any] | None = None) -> Message:
        message = Message(id=next(self._ids), role=role, text=text, created_at=datetime.now(UTC))
        self.transcript.append(message)

        event = {"type": "message", "id": message.id, "role": role, "content": text}
        if extra:
            event.update(extra)
        self._log(event)
        return message

    def log_rejected(self, reason: str, content: str | None = None):
        event = {"type": "rejected", "reason": reason}
        if content is not None:
            event["content"] = content
        self._log(event)

    def count_source(self, source: str):
        self.source_totals.add(source)

    def request_contact_card(self):
        # флаг "липкий": до конца сессии не сбрасывается
        self.contact_card_requested = True

    def contact_card_message(self) -> Optional[Message]:
        if not self.contact_card_requested:
            return None
        for message in reversed(self.transcript):
            if message.role == BOT:
                return message
        return None

    def log_summary(self):
        self._log({
            "type": "summary",
            "messages": len(self.transcript),
            "answers": {
                "faq": self.source_totals.faq,
                "fallback": self.source_totals.fallback,
                "quick_action": self.source_totals.quick_action,
            },
        })
