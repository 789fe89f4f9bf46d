from dataclasses import dataclass

from quotebot.domain.entities.collected_data import CollectedData
from quotebot.domain.entities.conversation_step import ConversationStep
from quotebot.domain.entities.quote import Quote


@dataclass(frozen=True)
class ConversationState:
    step: ConversationStep = ConversationStep.START
    data: CollectedData = CollectedData()
    quote: Quote | None = None  # last generated quote, kept for review/acceptance
    last_message_at: float | None = None  # used by idle cleanup outside the core
    is_active: bool = True
    completed_at: float | None = None
