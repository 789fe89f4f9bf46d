from functools import lru_cache
import logging

from quotebot.application.ports.catalog_store import CatalogStorePort
from quotebot.application.ports.conversation_store import ConversationStorePort
from quotebot.application.ports.entity_extractor import EntityExtractorPort
from quotebot.application.ports.message_platform import MessagePlatformPort
from quotebot.application.ports.transcriber import TranscriberPort
from quotebot.application.use_cases.catalog_lookup import CatalogLookup
from quotebot.application.use_cases.conversation_flow import ConversationFlow
from quotebot.application.use_cases.entity_validator import EntityValidator
from quotebot.application.use_cases.handle_incoming_message import HandleIncomingMessageUseCase
from quotebot.application.use_cases.pricing import PricingEngine
from quotebot.application.use_cases.send_reply import SendReplyUseCase
from quotebot.core.config import settings
from quotebot.infrastructure.catalog.json_catalog_store import JsonCatalogStore
from quotebot.infrastructure.documents.text_quote_document import TextQuoteDocument
from quotebot.infrastructure.llm.mock_extractor import MockEntityExtractor
from quotebot.infrastructure.llm.openai_extractor import OpenAIEntityExtractor
from quotebot.infrastructure.llm.whisper_transcriber import WhisperTranscriber
from quotebot.infrastructure.store.json_store import JsonConversationStore
from quotebot.infrastructure.store.memory_store import MemoryConversationStore
from quotebot.infrastructure.whatsapp.mock_platform import MockWhatsAppPlatform
from quotebot.infrastructure.whatsapp.whatsapp_client import WhatsAppClient
from quotebot.infrastructure.whatsapp.whatsapp_platform import WhatsAppPlatform

logger = logging.getLogger(__name__)


def _is_dev() -> bool:
    return settings.ENV.lower() in {"dev", "local"}


def _has_openai_key() -> bool:
    return bool(settings.OPENAI_API_KEY and settings.OPENAI_API_KEY.strip())


@lru_cache
def get_catalog() -> CatalogStorePort:
    if settings.CATALOG_PATH:
        return JsonCatalogStore.from_file(settings.CATALOG_PATH)
    return JsonCatalogStore()


@lru_cache
def get_conversation_store() -> ConversationStorePort:
    if _is_dev():
        return JsonConversationStore(data_dir=f"{settings.STORE_DATA_DIR}/conversations")
    return MemoryConversationStore()


@lru_cache
def get_extractor() -> EntityExtractorPort:
    if _has_openai_key():
        return OpenAIEntityExtractor()
    logger.info("Using MockEntityExtractor (OPENAI_API_KEY missing)")
    return MockEntityExtractor()


@lru_cache
def get_whatsapp_client() -> WhatsAppClient | None:
    if not (settings.WHATSAPP_ACCESS_TOKEN and settings.WHATSAPP_PHONE_NUMBER_ID):
        return None
    return WhatsAppClient(
        access_token=settings.WHATSAPP_ACCESS_TOKEN,
        phone_number_id=settings.WHATSAPP_PHONE_NUMBER_ID,
        api_version=settings.WHATSAPP_GRAPH_API_VERSION,
    )


@lru_cache
def get_platform() -> MessagePlatformPort:
    logger.info(
        "WHATSAPP_ACCESS_TOKEN present=%s len=%s",
        bool(settings.WHATSAPP_ACCESS_TOKEN),
        len(settings.WHATSAPP_ACCESS_TOKEN or ""),
    )
    client = get_whatsapp_client()
    if client is None:
        if _is_dev():
            logger.info("Using MockWhatsAppPlatform (token missing, ENV=dev/local)")
            return MockWhatsAppPlatform()
        raise ValueError("WHATSAPP_ACCESS_TOKEN and WHATSAPP_PHONE_NUMBER_ID are required to send WhatsApp replies.")
    return WhatsAppPlatform(client=client)


@lru_cache
def get_transcriber() -> TranscriberPort | None:
    client = get_whatsapp_client()
    if client is None or not _has_openai_key():
        logger.info("Voice notes disabled (WhatsApp media or OpenAI key missing)")
        return None
    return WhisperTranscriber(media_client=client)


def build_flow(catalog: CatalogStorePort) -> ConversationFlow:
    return ConversationFlow(
        catalog=catalog,
        lookup=CatalogLookup(catalog),
        validator=EntityValidator(),
        pricing=PricingEngine(
            tax_rate=settings.TAX_RATE,
            shipping_fee=settings.SHIPPING_FEE,
            free_shipping_threshold=settings.FREE_SHIPPING_THRESHOLD,
            quote_valid_days=settings.QUOTE_VALID_DAYS,
        ),
        document=TextQuoteDocument(output_dir=settings.QUOTE_DOCUMENT_DIR),
    )


@lru_cache
def get_handle_incoming_message_use_case() -> HandleIncomingMessageUseCase:
    return HandleIncomingMessageUseCase(
        store=get_conversation_store(),
        flow=build_flow(get_catalog()),
        extractor=get_extractor(),
        send_reply=SendReplyUseCase(platform=get_platform(), auto_reply_enabled=settings.AUTO_REPLY_ENABLED),
        transcriber=get_transcriber(),
    )
