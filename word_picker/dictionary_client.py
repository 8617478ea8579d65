"""Dictionary API client for WordsAPI (served through RapidAPI).

This module fetches definitions and example sentences for a word and turns
every possible response, including failures, into a display-safe outcome.
Network and parse errors never propagate past WordsApiClient.lookup().
"""

from dataclasses import dataclass

import requests
from loguru import logger
from requests_cache import CachedSession

MAX_EXAMPLES = 5
NO_DEFINITION_TEXT = "No definitions available"
NO_EXAMPLES_TEXT = "No examples available"
ERROR_TEXT = "Error fetching data"


@dataclass(frozen=True)
class LookupResult:
    """Definition and example sentences fetched for a word."""

    word: str
    definition: str | None = None
    examples: tuple[str, ...] = ()

    @property
    def definition_text(self) -> str:
        return self.definition or NO_DEFINITION_TEXT

    @property
    def example_lines(self) -> list[str]:
        return list(self.examples) or [NO_EXAMPLES_TEXT]


@dataclass(frozen=True)
class LookupEmpty:
    """The service answered but had nothing usable for the word."""

    word: str

    @property
    def definition_text(self) -> str:
        return NO_DEFINITION_TEXT

    @property
    def example_lines(self) -> list[str]:
        return [NO_EXAMPLES_TEXT]


@dataclass(frozen=True)
class LookupFailed:
    """The lookup could not be completed (network, HTTP or parse error)."""

    word: str
    reason: str

    @property
    def definition_text(self) -> str:
        return ERROR_TEXT

    @property
    def example_lines(self) -> list[str]:
        return [ERROR_TEXT]


LookupOutcome = LookupResult | LookupEmpty | LookupFailed


def extract_lookup_result(word: str, data: object) -> LookupResult | LookupEmpty:
    """Extract the first definition and up to five examples from a response body.

    Examples are flattened across all result entries in the order received.

    Args:
        word: The word the response belongs to
        data: Decoded JSON body, expected as {"results": [{"definition": ..., "examples": [...]}]}

    Returns:
        LookupResult, or LookupEmpty if the body is malformed or has no content
    """
    results = data.get("results") if isinstance(data, dict) else None
    if not isinstance(results, list) or not results:
        logger.debug(f"No results in response for '{word}'")
        return LookupEmpty(word)

    definition = None
    examples: list[str] = []
    for entry in results:
        if not isinstance(entry, dict):
            continue

        if definition is None:
            candidate = entry.get("definition")
            if isinstance(candidate, str) and candidate.strip():
                definition = candidate.strip()

        entry_examples = entry.get("examples")
        if isinstance(entry_examples, list):
            for example in entry_examples:
                if len(examples) >= MAX_EXAMPLES:
                    break
                if isinstance(example, str) and example.strip():
                    examples.append(example.strip())

    if definition is None and not examples:
        logger.debug(f"Results for '{word}' contained no definitions or examples")
        return LookupEmpty(word)

    logger.debug(f"Extracted definition and {len(examples)} example(s) for '{word}'")
    return LookupResult(word=word, definition=definition, examples=tuple(examples))


class WordsApiClient:
    """Client for the WordsAPI dictionary service.

    Attributes:
        api_key: RapidAPI key sent with every request
        session: Cached HTTP session for making requests
        base_url: Base URL of the service
        host: Value of the X-RapidAPI-Host header
        timeout: Request timeout in seconds
    """

    DEFAULT_BASE_URL = "https://wordsapiv1.p.rapidapi.com"
    DEFAULT_HOST = "wordsapiv1.p.rapidapi.com"
    DEFAULT_TIMEOUT = 8.0

    def __init__(
        self,
        api_key: str,
        session: CachedSession,
        base_url: str = DEFAULT_BASE_URL,
        host: str = DEFAULT_HOST,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize the WordsAPI client.

        Raises:
            ValueError: If api_key is empty or whitespace-only
        """
        if not api_key or not api_key.strip():
            msg = "API key cannot be empty"
            logger.error(msg)
            raise ValueError(msg)

        self.api_key = api_key.strip()
        self.session = session
        self.base_url = base_url.rstrip("/")
        self.host = host
        self.timeout = timeout
        logger.debug(f"Initialized WordsApiClient with API key: {self.api_key[:8]}...")

    @property
    def headers(self) -> dict[str, str]:
        return {"X-RapidAPI-Key": self.api_key, "X-RapidAPI-Host": self.host}

    def lookup(self, word: str) -> LookupOutcome:
        """Fetch the definition and examples for a word.

        Makes a single GET request. Nothing is retried and nothing is raised
        for network or response problems; those become LookupFailed.

        Args:
            word: The word to look up

        Returns:
            LookupResult, LookupEmpty or LookupFailed

        Raises:
            ValueError: If word is empty
        """
        if not word or not word.strip():
            msg = "word cannot be empty"
            logger.error(msg)
            raise ValueError(msg)

        word = word.strip()
        url = f"{self.base_url}/words/{word}"

        try:
            logger.debug(f"Fetching dictionary data for '{word}'")
            response = self.session.get(url, headers=self.headers, timeout=self.timeout)
            logger.debug(f"Response status code: {response.status_code}")
            response.raise_for_status()

        except requests.Timeout:
            logger.warning(f"Timed out after {self.timeout}s fetching '{word}'")
            return LookupFailed(word, "timeout")

        except requests.HTTPError as e:
            logger.warning(f"HTTP error fetching data for '{word}': {e}")
            return LookupFailed(word, f"http error: {e}")

        except requests.RequestException as e:
            logger.warning(f"Network error fetching data for '{word}': {e}")
            return LookupFailed(word, f"network error: {e}")

        try:
            data = response.json()
        except ValueError as e:
            logger.warning(f"Invalid JSON in response for '{word}': {e}")
            return LookupFailed(word, "invalid response body")

        outcome = extract_lookup_result(word, data)
        if isinstance(outcome, LookupResult):
            logger.info(f"Successfully fetched data for word '{word}'")
        return outcome
