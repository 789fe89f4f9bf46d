from enum import Enum


class ConversationStep(str, Enum):
    START = "start"
    GREETING_RESPONSE = "greeting_response"
    PRODUCT_CATEGORY_SELECTION = "product_category_selection"
    PRODUCT_SELECTION = "product_selection"
    DIMENSION_INPUT = "dimension_input"
    MATERIAL_SELECTION = "material_selection"
    FINISH_SELECTION = "finish_selection"
    QUANTITY_INPUT = "quantity_input"
    QUOTE_REVIEW = "quote_review"
    QUOTE_GENERATION = "quote_generation"
    COMPLETED = "completed"


# Steps that ask a narrowly scoped question; general extraction never runs here.
EXTRACTION_BLOCKED_STEPS = frozenset(
    {
        ConversationStep.QUOTE_GENERATION,
        ConversationStep.MATERIAL_SELECTION,
        ConversationStep.FINISH_SELECTION,
        ConversationStep.DIMENSION_INPUT,
        ConversationStep.QUANTITY_INPUT,
    }
)

# Steps where a reset phrase is read as an answer, not as a restart.
ACTIVE_DATA_ENTRY_STEPS = frozenset(
    {
        ConversationStep.QUOTE_GENERATION,
        ConversationStep.GREETING_RESPONSE,
        ConversationStep.MATERIAL_SELECTION,
        ConversationStep.FINISH_SELECTION,
        ConversationStep.QUANTITY_INPUT,
        ConversationStep.DIMENSION_INPUT,
    }
)
