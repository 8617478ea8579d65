"""Coordination between word generation and background dictionary lookups.

A lookup is tagged with the word and selector generation it was issued for.
When it completes, the outcome is only accepted if that word is still the
current one; results for words the user has moved past are discarded.
"""

import threading
from collections.abc import Callable
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from dataclasses import dataclass

from loguru import logger

from word_picker.dictionary_client import LookupOutcome, WordsApiClient
from word_picker.word_selector import Exhausted, WordSelector


@dataclass(frozen=True)
class LookupTicket:
    word: str
    generation: int


class WordSession:
    """Pairs a WordSelector with a dictionary client for one user session."""

    def __init__(
        self,
        selector: WordSelector,
        client: WordsApiClient | None = None,
        executor: Executor | None = None,
    ):
        self.selector = selector
        self.client = client
        self._executor = executor
        self._owns_executor = executor is None
        self._lock = threading.RLock()
        self._current_lookup: LookupOutcome | None = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    @property
    def current_lookup(self) -> LookupOutcome | None:
        """Lookup outcome accepted for the current word, if any."""
        with self._lock:
            lookup = self._current_lookup
            if lookup is not None and lookup.word != self.selector.current_word:
                self._current_lookup = None
            return self._current_lookup

    def generate_word(self) -> str | Exhausted:
        """Draw the next word and drop any displayed or pending lookup."""
        with self._lock:
            self._current_lookup = None
            return self.selector.generate_word()

    def begin_lookup(self) -> LookupTicket | None:
        with self._lock:
            word = self.selector.current_word
            if word is None:
                return None
            return LookupTicket(word, self.selector.generation)

    def complete_lookup(self, ticket: LookupTicket, outcome: LookupOutcome) -> bool:
        """Accept outcome if ticket still refers to the current word.

        Returns:
            True if the outcome became the current lookup, False if it was stale
        """
        with self._lock:
            if (
                ticket.generation != self.selector.generation
                or ticket.word != self.selector.current_word
            ):
                logger.debug(f"Discarding stale lookup for '{ticket.word}'")
                return False
            self._current_lookup = outcome
            return True

    def lookup_now(self) -> LookupOutcome | None:
        """Look up the current word synchronously."""
        ticket = self.begin_lookup()
        if ticket is None:
            return None
        outcome = self._require_client().lookup(ticket.word)
        return outcome if self.complete_lookup(ticket, outcome) else None

    def request_lookup(self, callback: Callable[[LookupOutcome], None]) -> Future | None:
        """Look up the current word in the background.

        callback is invoked with the outcome from the worker thread, and only
        if the word is still current when the response arrives. The session
        lock is held while it runs.

        Returns:
            The future for the request, or None when no word is selected
        """
        ticket = self.begin_lookup()
        if ticket is None:
            logger.debug("No current word to look up")
            return None

        client = self._require_client()

        def run() -> LookupOutcome:
            outcome = client.lookup(ticket.word)
            # generate_word() waits until the callback returns
            with self._lock:
                if self.complete_lookup(ticket, outcome):
                    callback(outcome)
            return outcome

        logger.debug(f"Requesting lookup for '{ticket.word}'")
        return self._get_executor().submit(run)

    def close(self) -> None:
        if self._owns_executor and self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)
            self._executor = None

    def _get_executor(self) -> Executor:
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="lookup")
        return self._executor

    def _require_client(self) -> WordsApiClient:
        if self.client is None:
            msg = "No dictionary client configured"
            logger.error(msg)
            raise RuntimeError(msg)
        return self.client
