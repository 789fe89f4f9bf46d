"""
Tests for the per-message turn: extraction fallback, dedup, fail-closed and voice notes.
"""

from __future__ import annotations

import gc

from quotebot.application.exceptions import ExtractionUpstreamError, TranscriptionUnavailable
from quotebot.application.ports.entity_extractor import EntityExtractorPort
from quotebot.application.ports.transcriber import TranscriberPort
from quotebot.application.use_cases import reply_composer
from quotebot.application.use_cases.handle_incoming_message import HandleIncomingMessageUseCase
from quotebot.application.use_cases.send_reply import SendReplyUseCase
from quotebot.domain.entities.conversation_step import ConversationStep
from quotebot.domain.entities.extracted_entity import ExtractedEntity
from quotebot.domain.entities.message import Message
from quotebot.infrastructure.store.memory_store import MemoryConversationStore
from quotebot.infrastructure.whatsapp.mock_platform import MockWhatsAppPlatform

USER = "15551234567"


class RecordingExtractor(EntityExtractorPort):
    def __init__(self, entities=None, error: Exception | None = None) -> None:
        self.calls: list[str] = []
        self._entities = entities or []
        self._error = error

    def extract(self, text: str) -> list[ExtractedEntity]:
        self.calls.append(text)
        if self._error is not None:
            raise self._error
        return list(self._entities)


class FixedTranscriber(TranscriberPort):
    def __init__(self, text: str | None) -> None:
        self._text = text

    def transcribe(self, media_id: str) -> str:
        if self._text is None:
            raise TranscriptionUnavailable("media expired")
        return self._text


class BrokenStore(MemoryConversationStore):
    def set_state(self, user_key, state) -> None:
        raise RuntimeError("disk full")


def _message(message_id: str, text: str = "", media_id: str | None = None) -> Message:
    return Message(id=message_id, user_key=USER, text=text, timestamp=1700000000, platform="whatsapp", media_id=media_id)


def _use_case(flow, store=None, extractor=None, transcriber=None, auto_reply=True):
    platform = MockWhatsAppPlatform()
    use_case = HandleIncomingMessageUseCase(
        store=store or MemoryConversationStore(),
        flow=flow,
        extractor=extractor or RecordingExtractor(),
        send_reply=SendReplyUseCase(platform=platform, auto_reply_enabled=auto_reply),
        transcriber=transcriber,
    )
    return use_case, platform


def test_extraction_failure_falls_back_to_catalog_lookup(flow):
    store = MemoryConversationStore()
    use_case, platform = _use_case(flow, store=store, extractor=RecordingExtractor(error=ExtractionUpstreamError("timeout")))

    reply = use_case.handle(_message("m1", "I need quote on flat pouch"))

    state = store.get_state(USER)
    assert state.step == ConversationStep.DIMENSION_INPUT
    assert state.data.product.id == "prod-flat-pouch"
    assert platform.sent == [(USER, reply)]


def test_extraction_is_skipped_for_narrow_steps(flow):
    extractor = RecordingExtractor()
    use_case, _ = _use_case(flow, extractor=extractor)

    use_case.handle(_message("m1", "I need quote on flat pouch"))
    use_case.handle(_message("m2", "5x4"))

    assert extractor.calls == ["I need quote on flat pouch"]


def test_duplicate_message_is_ignored(flow):
    use_case, platform = _use_case(flow)

    assert use_case.handle(_message("m1", "hi")) == reply_composer.GREETING
    assert use_case.handle(_message("m1", "hi")) is None
    assert len(platform.sent) == 1


def test_failed_turn_commits_nothing(flow):
    store = BrokenStore()
    use_case, platform = _use_case(flow, store=store)

    reply = use_case.handle(_message("m1", "I need quote on flat pouch"))

    assert reply == reply_composer.GENERIC_RETRY
    assert store.get_state(USER) is None
    assert store.has_processed("m1") is False
    assert platform.sent == [(USER, reply_composer.GENERIC_RETRY)]


def test_voice_note_transcribed(flow):
    store = MemoryConversationStore()
    use_case, _ = _use_case(flow, store=store, transcriber=FixedTranscriber("I need quote on flat pouch"))

    use_case.handle(_message("m1", media_id="media-1"))

    assert store.get_state(USER).step == ConversationStep.DIMENSION_INPUT


def test_voice_note_not_understood(flow):
    store = MemoryConversationStore()
    use_case, _ = _use_case(flow, store=store, transcriber=FixedTranscriber(None))

    reply = use_case.handle(_message("m1", media_id="media-1"))

    assert reply == reply_composer.VOICE_NOT_UNDERSTOOD
    assert store.get_state(USER) is None
    assert store.has_processed("m1") is True


def test_auto_reply_disabled_still_advances(flow):
    store = MemoryConversationStore()
    use_case, platform = _use_case(flow, store=store, auto_reply=False)

    reply = use_case.handle(_message("m1", "hi"))

    assert reply == reply_composer.GREETING
    assert platform.sent == []
    assert store.get_state(USER).step == ConversationStep.GREETING_RESPONSE


def test_user_locks_are_released_after_the_turn(flow):
    use_case, _ = _use_case(flow)

    held = use_case._lock_for(USER)
    assert use_case._lock_for(USER) is held

    use_case.handle(_message("m1", "hi"))
    del held
    gc.collect()
    assert USER not in use_case._user_locks
