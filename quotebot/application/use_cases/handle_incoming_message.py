from __future__ import annotations

import logging
import threading
import weakref

from quotebot.application.exceptions import ExtractionUnavailable, TranscriptionUnavailable
from quotebot.application.ports.conversation_store import ConversationStorePort
from quotebot.application.ports.entity_extractor import EntityExtractorPort
from quotebot.application.ports.transcriber import TranscriberPort
from quotebot.application.use_cases import reply_composer
from quotebot.application.use_cases.conversation_flow import ConversationFlow
from quotebot.application.use_cases.send_reply import SendReplyUseCase
from quotebot.domain.entities.extracted_entity import ExtractedEntity
from quotebot.domain.entities.message import Message


class HandleIncomingMessageUseCase:
    """
    Run one inbound message through the quote conversation.

    Messages from the same user are processed one at a time (read, mutate,
    persist under a per-user lock); different users run concurrently. Any
    failure inside a turn leaves the stored state untouched and the user gets
    a generic retry prompt.
    """

    def __init__(
        self,
        store: ConversationStorePort,
        flow: ConversationFlow,
        extractor: EntityExtractorPort,
        send_reply: SendReplyUseCase,
        transcriber: TranscriberPort | None = None,
    ) -> None:
        self._store = store
        self._flow = flow
        self._extractor = extractor
        self._send_reply = send_reply
        self._transcriber = transcriber
        # entries disappear once no turn for that user holds the lock
        self._user_locks: weakref.WeakValueDictionary[str, threading.Lock] = weakref.WeakValueDictionary()
        self._locks_guard = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def _lock_for(self, user_key: str) -> threading.Lock:
        with self._locks_guard:
            lock = self._user_locks.get(user_key)
            if lock is None:
                lock = threading.Lock()
                self._user_locks[user_key] = lock
            return lock

    def handle(self, message: Message) -> str | None:
        """Process a message and send the reply. Returns the reply text (None for duplicates)."""
        with self._lock_for(message.user_key):
            if self._store.has_processed(message.id):
                self._logger.info("Duplicate message ignored", extra={"message_id": message.id})
                return None

            try:
                reply = self._run_turn(message)
            except Exception:
                self._logger.exception(
                    "Turn failed; state not committed",
                    extra={"message_id": message.id, "user_key": message.user_key},
                )
                reply = reply_composer.GENERIC_RETRY

            if reply:
                try:
                    self._send_reply.execute(recipient_id=message.user_key, text=reply)
                except Exception:
                    self._logger.exception(
                        "Reply delivery failed",
                        extra={"message_id": message.id, "user_key": message.user_key},
                    )
            return reply

    def _run_turn(self, message: Message) -> str | None:
        text = message.text or ""
        if message.media_id and not text.strip():
            try:
                text = self._transcribe(message.media_id)
            except TranscriptionUnavailable as e:
                self._logger.warning(
                    "Voice note not transcribed",
                    extra={"message_id": message.id, "user_key": message.user_key, "reason": str(e)},
                )
                self._store.mark_processed(message.user_key, message.id)
                return reply_composer.VOICE_NOT_UNDERSTOOD

        state = self._flow.session_for(self._store.get_state(message.user_key))
        entities = self._extract(message, text) if self._flow.should_extract(state, text) else []

        result = self._flow.process(message.user_key, state, text, entities)

        self._store.set_state(message.user_key, result.state)
        self._store.mark_processed(message.user_key, message.id)
        self._logger.info(
            "Turn committed",
            extra={"message_id": message.id, "user_key": message.user_key, "step": result.state.step.value},
        )
        return result.reply

    def _transcribe(self, media_id: str) -> str:
        if self._transcriber is None:
            raise TranscriptionUnavailable("No transcriber configured")
        return self._transcriber.transcribe(media_id)

    def _extract(self, message: Message, text: str) -> list[ExtractedEntity]:
        if not text.strip():
            return []
        try:
            return self._extractor.extract(text)
        except ExtractionUnavailable as e:
            # deterministic parsing and catalog lookup on the raw text take over
            self._logger.warning(
                "Extraction unavailable; using fallback",
                extra={"message_id": message.id, "user_key": message.user_key, "reason": str(e)},
            )
            return []
