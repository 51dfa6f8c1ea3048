"""
Word pool extraction for scatters.

Reads plain text, Markdown and EPUB files and reduces them to a pool of
normalized content words:
1. Text is extracted per format (Markdown markup and EPUB XHTML stripped)
2. Tokens are split on whitespace, trimmed of surrounding punctuation, lowercased
3. Stop words and words shorter than MIN_WORD_LENGTH are dropped by WordBank
"""

from __future__ import annotations

import logging
import zipfile
from pathlib import Path

import ebooklib  # type: ignore[import-untyped]
from bs4 import BeautifulSoup
from ebooklib import epub  # type: ignore[import-untyped]
from markdown_it import MarkdownIt
from markdown_it.token import Token

__all__ = [
    "MIN_WORD_LENGTH",
    "STOP_WORDS",
    "SUPPORTED_SUFFIXES",
    "WordBank",
    "collect_words",
    "extract_words",
    "is_stop_word",
    "parse_epub",
    "parse_file",
    "strip_markdown",
]

logger = logging.getLogger(__name__)

MIN_WORD_LENGTH = 3

SUPPORTED_SUFFIXES = {".txt", ".md", ".markdown", ".epub"}

STOP_WORDS = frozenset(
    """
    the be to of and a in that have i it for not on with he as you do at this but his by
    from they we say her she or an will my one all would there their what so up out if
    about who get which go me when make can like time no just him know take people into
    year your good some could them see other than then now look only come its over think
    also back after use two how our work first well way even new want because any these
    give day most us is was are been has had were said did having may should am being does
    """.split()
)

_MARKDOWN = MarkdownIt("commonmark")


def is_stop_word(word: str) -> bool:
    return word in STOP_WORDS


def extract_words(text: str) -> list[str]:
    """
    Split text into normalized tokens.

    Example:
        "Hello, world! This is a test." -> ["hello", "world", "this", "is", "a", "test"]
    """
    words: list[str] = []
    for token in text.split():
        start, end = 0, len(token)
        while start < end and not token[start].isalnum():
            start += 1
        while end > start and not token[end - 1].isalnum():
            end -= 1
        if start < end:
            words.append(token[start:end].lower())
    return words


def _inline_text(tokens: list[Token]) -> list[str]:
    """Text and inline code from an inline token stream, including image alt text."""
    parts: list[str] = []
    for token in tokens:
        if token.type in ("text", "code_inline"):
            parts.append(token.content)
        elif token.type == "image" and token.children:
            parts.extend(_inline_text(token.children))
    return parts


def strip_markdown(text: str) -> str:
    """
    Reduce Markdown to its prose.

    Keeps text and inline code from paragraphs, headings, lists, links and
    image alt text. Code blocks (fenced or indented), HTML blocks and link
    reference definitions contribute nothing.
    """
    parts: list[str] = []
    for token in _MARKDOWN.parse(text):
        if token.type == "inline" and token.children:
            parts.extend(_inline_text(token.children))
    return " ".join(parts)


def parse_epub(path: Path) -> list[str]:
    """Extract words from every XHTML document in an EPUB."""
    book = epub.read_epub(str(path))
    parts: list[str] = []
    for item in book.get_items_of_type(ebooklib.ITEM_DOCUMENT):
        soup = BeautifulSoup(item.get_content(), "html.parser")
        for tag in soup(["script", "style"]):
            tag.decompose()
        parts.append(soup.get_text(separator=" "))
    return extract_words(" ".join(parts))


def parse_file(path: Path) -> list[str]:
    """
    Extract words from one file, choosing the format by suffix.

    Unsupported suffixes yield an empty list.

    Raises:
        OSError: If the file cannot be read
        UnicodeDecodeError: If a text file is not valid UTF-8
    """
    suffix = path.suffix.lower()
    if suffix == ".txt":
        return extract_words(path.read_text(encoding="utf-8"))
    if suffix in (".md", ".markdown"):
        return extract_words(strip_markdown(path.read_text(encoding="utf-8")))
    if suffix == ".epub":
        return parse_epub(path)
    return []


class WordBank:
    """Deduplicated content words in first-seen order."""

    def __init__(self) -> None:
        self._words: dict[str, None] = {}

    def add_words(self, words: list[str]) -> None:
        for word in words:
            if len(word) >= MIN_WORD_LENGTH and not is_stop_word(word):
                self._words.setdefault(word, None)

    def get_words(self) -> list[str]:
        return list(self._words)

    def word_count(self) -> int:
        return len(self._words)


def collect_words(directory: Path) -> tuple[WordBank, int]:
    """
    Parse every supported file directly inside `directory`.

    Files that fail to parse are logged and skipped.

    Returns:
        Tuple of (word_bank, parsed_file_count)

    Raises:
        ValueError: If `directory` is not a directory
    """
    if not directory.is_dir():
        raise ValueError(f"'{directory}' is not a valid directory")

    bank = WordBank()
    file_count = 0
    for path in sorted(directory.iterdir()):
        if not path.is_file() or path.suffix.lower() not in SUPPORTED_SUFFIXES:
            continue
        logger.info("Parsing: %s", path)
        try:
            words = parse_file(path)
        except (OSError, UnicodeDecodeError, KeyError, zipfile.BadZipFile, epub.EpubException) as e:
            logger.warning("Failed to parse %s: %s", path, e)
            continue
        bank.add_words(words)
        file_count += 1

    logger.info("Parsed %d files, %d unique words", file_count, bank.word_count())
    return bank, file_count
