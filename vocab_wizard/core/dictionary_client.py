"""Free Dictionary API client"""

from urllib.parse import quote

import requests  # type: ignore[import-untyped]
from pydantic import TypeAdapter, ValidationError
from requests.adapters import HTTPAdapter  # type: ignore[import-untyped]
from urllib3.util import Retry

from ..config.settings import settings
from ..logging_config import get_logger
from ..models.api_result import ApiResult
from ..models.dictionary import DictionaryEntry
from .constants import HttpConstants
from .interfaces import LexicalLookupInterface

logger = get_logger(__name__)

_ENTRIES = TypeAdapter(list[DictionaryEntry])


class FreeDictionaryClient(LexicalLookupInterface):
    """Looks up English words in dictionaryapi.dev compatible services"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: int | None = None,
        max_redirects: int | None = None,
    ):
        self.base_url = (base_url or settings.dictionary.url).rstrip("/")
        self.timeout = int(
            timeout if timeout is not None else settings.dictionary.timeout
        )
        self.session = requests.Session()
        self.session.headers.update(HttpConstants.DEFAULT_HEADERS)
        self.session.max_redirects = int(
            max_redirects
            if max_redirects is not None
            else settings.dictionary.max_redirects
        )
        self._configure_retries()

    def lookup(self, word: str) -> ApiResult[list[DictionaryEntry]]:
        path = HttpConstants.DICTIONARY_ENTRIES_PATH.format(word=quote(word.strip()))
        url = f"{self.base_url}{path}"
        try:
            r = self.session.get(url, timeout=self.timeout)
            r.raise_for_status()
            entries = _ENTRIES.validate_python(r.json())
            return ApiResult.ok(entries)
        except requests.RequestException as e:
            logger.error(f"External request to {url} failed: {e}")
            return ApiResult.fail(str(e))
        except (ValueError, ValidationError) as e:
            logger.error(f"Unexpected dictionary response from {url}: {e}")
            return ApiResult.fail(str(e))

    def _configure_retries(self) -> None:
        adapter = HTTPAdapter(max_retries=Retry(total=0, raise_on_status=False))
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)
