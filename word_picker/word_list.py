"""Word lists for each practice category.

This module defines the practice categories, the built-in word lists and a
manager for loading replacement lists from plain text files.
"""

import re
from enum import Enum
from pathlib import Path
from types import MappingProxyType

from loguru import logger


class Category(str, Enum):
    """A named partition of the word corpus with its own usage tracking."""

    PRIMARY = "primary"
    INTERMEDIATE = "intermediate"


PRIMARY_WORDS = (
    "apple", "ball", "bird", "boat", "book", "cake", "chair", "clock", "cloud", "coat",
    "dog", "door", "duck", "farm", "fish", "frog", "game", "green", "hand", "happy",
    "house", "jump", "kite", "lamp", "milk", "moon", "nest", "park", "rain", "ship",
    "shoe", "sing", "snow", "star", "sun", "table", "train", "tree", "water", "yellow",
)

INTERMEDIATE_WORDS = (
    "absence", "accurate", "achieve", "address", "ancient", "apparent", "average",
    "believe", "breathe", "calendar", "caught", "century", "certain", "community",
    "consider", "continue", "decide", "describe", "different", "difficult", "disappear",
    "early", "earth", "eighth", "enough", "exercise", "experience", "familiar", "favourite",
    "february", "forward", "fruit", "grammar", "guard", "guide", "height", "history",
    "imagine", "interest", "island", "knowledge", "library", "medicine", "mention",
    "minute", "natural", "neighbour", "occasion", "opposite", "ordinary", "particular",
)

DEFAULT_WORD_LISTS = MappingProxyType(
    {
        Category.PRIMARY: PRIMARY_WORDS,
        Category.INTERMEDIATE: INTERMEDIATE_WORDS,
    }
)


class WordListManager:
    """Manages loading and processing of practice word lists."""

    # Only hyphens and apostrophes are allowed besides letters
    SPECIAL_CHARS_PATTERN = re.compile(r"^[a-zA-Z\u00C0-\u024F\-']+$")

    def load_from_file(self, file_path: str) -> list[str]:
        """Load words from a text file.

        Reads a text file containing one word per line, processes each word by:
        - Stripping whitespace
        - Skipping empty lines
        - Converting to lowercase
        - Validating word format (letters with optional hyphens/apostrophes)

        Args:
            file_path: Path to the word list file

        Returns:
            List of processed words in file order

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If a word contains invalid characters or the file is not UTF-8

        Example:
            >>> manager = WordListManager()
            >>> manager.load_from_file("primary.txt")
            ['apple', 'ball', 'bird']
        """
        path = Path(file_path)

        if not path.exists():
            error_msg = f"Word list file not found: {file_path}"
            logger.error(error_msg)
            raise FileNotFoundError(error_msg)

        logger.info(f"Loading word list from: {file_path}")

        words = []
        try:
            with path.open("r", encoding="utf-8") as f:
                for line_num, line in enumerate(f, start=1):
                    word = line.strip()
                    if not word:
                        continue

                    word = word.lower()

                    if not self.SPECIAL_CHARS_PATTERN.match(word):
                        error_msg = (
                            f"Invalid word format at line {line_num}: '{word}'. "
                            f"Words must contain only letters, hyphens, and apostrophes."
                        )
                        logger.error(error_msg)
                        raise ValueError(error_msg)

                    words.append(word)

        except UnicodeDecodeError as e:
            logger.error(f"Failed to decode file with UTF-8 encoding: {file_path}", exc_info=True)
            encoding_error_msg = f"File encoding error: {e}"
            raise ValueError(encoding_error_msg) from e

        logger.info(f"Loaded {len(words)} words from {file_path}")
        return words

    def remove_duplicates(self, words: list[str]) -> list[str]:
        """Remove duplicate words while preserving first-occurrence order.

        Example:
            >>> WordListManager().remove_duplicates(["apple", "ball", "apple"])
            ['apple', 'ball']
        """
        original_count = len(words)
        unique_words = list(dict.fromkeys(words))
        duplicates_removed = original_count - len(unique_words)

        if duplicates_removed > 0:
            logger.info(
                f"Removed {duplicates_removed} duplicate word(s). Unique words: {len(unique_words)}"
            )
        else:
            logger.debug("No duplicates found in word list")

        return unique_words

    def build_word_lists(
        self,
        primary_file: str | None = None,
        intermediate_file: str | None = None,
    ) -> dict[Category, tuple[str, ...]]:
        """Build the per-category word lists.

        Categories without a file fall back to the built-in list. Words loaded
        from a file are de-duplicated.

        Raises:
            FileNotFoundError: If a given file does not exist
            ValueError: If a file is invalid or yields no words
        """
        files = {
            Category.PRIMARY: primary_file,
            Category.INTERMEDIATE: intermediate_file,
        }

        word_lists = {}
        for category, file_path in files.items():
            if file_path is None:
                word_lists[category] = DEFAULT_WORD_LISTS[category]
                continue

            words = self.remove_duplicates(self.load_from_file(file_path))
            if not words:
                msg = f"Word list for category '{category.value}' is empty: {file_path}"
                logger.error(msg)
                raise ValueError(msg)
            word_lists[category] = tuple(words)

        return word_lists
