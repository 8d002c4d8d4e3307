import pytest

from prompt_studio.llms.enums import LLMProvider
from prompt_studio.llms.factories import build_llm_factory_instance, build_llm_service
from prompt_studio.llms.registry import LLMFactory
from prompt_studio.llms.services import LLMService


@pytest.fixture(autouse=True)
async def _clear_llm_caches():
    build_llm_factory_instance.cache_clear()
    build_llm_service.cache_clear()
    LLMService._get_client_instance.cache_clear()
    yield
    build_llm_factory_instance.cache_clear()
    build_llm_service.cache_clear()
    LLMService._get_client_instance.cache_clear()


@pytest.fixture
def llm_api_keys() -> dict[LLMProvider, str | None]:
    return {
        LLMProvider.OPENAI: "sk-openai",
        LLMProvider.ANTHROPIC: "sk-anthropic",
        LLMProvider.GOOGLE: None,
    }


@pytest.fixture
def llm_service(llm_api_keys) -> LLMService:
    return LLMService(llm_factory=LLMFactory(), api_keys=llm_api_keys)


@pytest.fixture
def llm_factory_instance_mock(mocker):
    return mocker.create_autospec(LLMFactory, instance=True)
