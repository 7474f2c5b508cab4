from functools import lru_cache
import logging

from app.core.config import CalComConfig, resolve_cal_com_config, settings
from app.application.ports.llm import LLMPort
from app.application.ports.scheduling import SchedulingPort
from app.application.ports.service_catalog import ServiceCataloguePort
from app.application.use_cases.availability import GetAvailabilityUseCase
from app.application.use_cases.booking import BookAppointmentUseCase
from app.application.use_cases.catalogue import GetCatalogueUseCase
from app.application.use_cases.chat import SalonChatUseCase
from app.infrastructure.calendar.cal_com_client import CalComClient
from app.infrastructure.calendar.mock_calendar import MockScheduling
from app.infrastructure.knowledge.service_catalog_store import ServiceCatalogueStore
from app.infrastructure.llm.mock_llm import MockLLM
from app.infrastructure.llm.openai_llm import OpenAILLM


@lru_cache
def get_cal_com_config() -> CalComConfig:
    return resolve_cal_com_config(settings)


@lru_cache
def get_llm() -> LLMPort:
    if settings.OPENAI_API_KEY and settings.OPENAI_API_KEY.strip():
        return OpenAILLM()
    return MockLLM()


@lru_cache
def get_scheduling() -> SchedulingPort:
    logger = logging.getLogger(__name__)
    config = get_cal_com_config()
    # The slots endpoint is public, so a missing key only forces the fake in dev/local.
    if not config.api_key and settings.ENV.lower() in {"dev", "local"}:
        logger.info("Using MockScheduling (CAL_API_KEY missing, ENV=dev/local)")
        return MockScheduling()
    logger.info(
        "Using Cal.com scheduling",
        extra={"username": config.username, "event_type_slug": config.event_type_slug},
    )
    return CalComClient(config)


@lru_cache
def get_service_catalogue() -> ServiceCataloguePort:
    return ServiceCatalogueStore()


def get_catalogue_use_case() -> GetCatalogueUseCase:
    return GetCatalogueUseCase(catalogue=get_service_catalogue())


def get_availability_use_case() -> GetAvailabilityUseCase:
    return GetAvailabilityUseCase(scheduling=get_scheduling(), config=get_cal_com_config())


def get_booking_use_case() -> BookAppointmentUseCase:
    return BookAppointmentUseCase(scheduling=get_scheduling(), config=get_cal_com_config())


def get_chat_use_case() -> SalonChatUseCase:
    return SalonChatUseCase(
        llm=get_llm(),
        catalogue=get_catalogue_use_case(),
        availability=get_availability_use_case(),
        booking=get_booking_use_case(),
        service_catalogue=get_service_catalogue(),
        business_name=settings.BUSINESS_NAME,
        max_tool_rounds=settings.CHAT_MAX_TOOL_ROUNDS,
    )
