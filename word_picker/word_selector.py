"""Random, non-repeating word selection per category.

The selector owns all mutable selection state: the set of words already drawn
for each category, the active category and the current word. Each draw is a
fresh uniform choice over the words not yet used in the active category.
"""

import random
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import NamedTuple

from loguru import logger

from word_picker.word_list import DEFAULT_WORD_LISTS, Category

ROW_WIDTH = 5


@dataclass(frozen=True)
class Exhausted:
    """Returned by generate_word() when every word in a category has been used."""

    category: Category

    @property
    def message(self) -> str:
        return f"All {self.category.value} words have been used."


class WordCounts(NamedTuple):
    remaining: int
    total: int


class WordMarker(NamedTuple):
    word: str
    used: bool


Listener = Callable[["WordSelector"], None]


class WordSelector:
    """Stateful, in-memory word selector.

    Attributes:
        active_category: Category that generate_word() draws from
        current_word: Last generated word, or None
        generation: Counter bumped on every state change that replaces the current word
    """

    def __init__(
        self,
        word_lists: Mapping[Category, Sequence[str]] = DEFAULT_WORD_LISTS,
        category: Category = Category.PRIMARY,
        rng: random.Random | None = None,
    ):
        """Initialize the selector with injected word lists.

        Args:
            word_lists: Mapping of category to its ordered, unique words
            category: Initially active category
            rng: Random source, mainly for reproducible tests

        Raises:
            ValueError: If a list contains duplicates or a category has no list
        """
        lists = {}
        for key, words in word_lists.items():
            key = Category(key)
            words = tuple(words)
            if len(set(words)) != len(words):
                msg = f"Word list for category '{key.value}' contains duplicates"
                logger.error(msg)
                raise ValueError(msg)
            lists[key] = words

        self._word_lists = MappingProxyType(lists)
        self._used: dict[Category, set[str]] = {key: set() for key in lists}
        self._rng = rng or random.Random()
        self._listeners: list[Listener] = []

        self._check_category(category)
        self.active_category = Category(category)
        self.current_word: str | None = None
        self._current_category: Category | None = None
        self.generation = 0

        logger.debug(
            "Initialized WordSelector with "
            + ", ".join(f"{key.value}={len(words)}" for key, words in lists.items())
        )

    @property
    def word_lists(self) -> Mapping[Category, tuple[str, ...]]:
        return self._word_lists

    def word_list(self, category: Category | None = None) -> tuple[str, ...]:
        return self._word_lists[self._resolve(category)]

    def used_words(self, category: Category | None = None) -> frozenset[str]:
        return frozenset(self._used[self._resolve(category)])

    def subscribe(self, listener: Listener) -> None:
        """Register a callback invoked with the selector after each state change."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        self._listeners.remove(listener)

    def select_category(self, category: Category) -> None:
        """Make category active. Usage tracking is left untouched."""
        category = self._resolve(category)
        if category != self.active_category:
            logger.info(f"Switching category to '{category.value}'")
        self.active_category = category
        self._notify()

    def remaining_words(self) -> list[str]:
        """Unused words of the active category, in word list order."""
        used = self._used[self.active_category]
        return [word for word in self._word_lists[self.active_category] if word not in used]

    def is_exhausted(self) -> bool:
        return not self.remaining_words()

    def generate_word(self) -> str | Exhausted:
        """Draw an unused word from the active category.

        Returns:
            The drawn word, or an Exhausted value if nothing remains. On
            exhaustion no state is modified.
        """
        remaining = self.remaining_words()
        if not remaining:
            logger.info(f"Category '{self.active_category.value}' is exhausted")
            return Exhausted(self.active_category)

        word = self._rng.choice(remaining)
        self._used[self.active_category].add(word)
        self.current_word = word
        self._current_category = self.active_category
        self.generation += 1

        logger.debug(
            f"Generated '{word}' from '{self.active_category.value}' "
            f"({len(remaining) - 1} remaining)"
        )
        self._notify()
        return word

    def get_counts(self) -> WordCounts:
        total = len(self._word_lists[self.active_category])
        return WordCounts(remaining=total - len(self._used[self.active_category]), total=total)

    def list_with_usage_markers(self) -> list[list[WordMarker]]:
        """Sorted words of the active category with used flags, in rows of five."""
        used = self._used[self.active_category]
        markers = [
            WordMarker(word, word in used)
            for word in sorted(self._word_lists[self.active_category])
        ]
        return [markers[i : i + ROW_WIDTH] for i in range(0, len(markers), ROW_WIDTH)]

    def reset(self, category: Category | None = None) -> None:
        """Forget every used word of a category (the active one by default)."""
        category = self._resolve(category)
        self._used[category].clear()
        if self._current_category == category:
            self.current_word = None
            self._current_category = None
            self.generation += 1
        logger.info(f"Reset used words for category '{category.value}'")
        self._notify()

    def _resolve(self, category: Category | None) -> Category:
        if category is None:
            return self.active_category
        self._check_category(category)
        return Category(category)

    def _check_category(self, category: Category) -> None:
        try:
            category = Category(category)
        except ValueError:
            msg = f"Unknown category: {category!r}"
            logger.error(msg)
            raise ValueError(msg) from None
        if category not in self._word_lists:
            msg = f"No word list configured for category '{category.value}'"
            logger.error(msg)
            raise ValueError(msg)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)
