"""LibreTranslate client"""

import requests  # type: ignore[import-untyped]
from pydantic import ValidationError
from requests.adapters import HTTPAdapter  # type: ignore[import-untyped]
from urllib3.util import Retry

from ..config.settings import settings
from ..logging_config import get_logger
from ..models.api_result import ApiResult
from ..models.deck import Language
from ..models.dictionary import TranslationResponse
from .constants import HttpConstants
from .interfaces import TranslatorInterface

logger = get_logger(__name__)


class LibreTranslateClient(TranslatorInterface):
    """Translates single words through a LibreTranslate instance"""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: int | None = None,
        max_redirects: int | None = None,
    ):
        self.base_url = (base_url or settings.translator.url).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.translator.api_key
        self.timeout = int(
            timeout if timeout is not None else settings.translator.timeout
        )
        self.session = requests.Session()
        self.session.headers.update(HttpConstants.DEFAULT_HEADERS)
        self.session.max_redirects = int(
            max_redirects
            if max_redirects is not None
            else settings.translator.max_redirects
        )
        self._configure_retries()

    def translate(
        self, word: str, from_lang: Language, to_lang: Language
    ) -> ApiResult[str]:
        url = f"{self.base_url}{HttpConstants.TRANSLATE_PATH}"
        data = {
            "q": word,
            "source": Language(from_lang).value,
            "target": Language(to_lang).value,
        }
        if self.api_key:
            data["api_key"] = self.api_key

        try:
            r = self.session.post(url, data=data, timeout=self.timeout)
            r.raise_for_status()
            body = TranslationResponse.model_validate(r.json())
            return ApiResult.ok(body.translated_text)
        except requests.RequestException as e:
            logger.error(f"External request to {url} failed for '{word}': {e}")
            return ApiResult.fail(str(e))
        except (ValueError, ValidationError) as e:
            logger.error(f"Unexpected response from {url} for '{word}': {e}")
            return ApiResult.fail(str(e))

    def _configure_retries(self) -> None:
        # Failed calls surface immediately; the caller decides what to do
        adapter = HTTPAdapter(max_retries=Retry(total=0, raise_on_status=False))
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)
