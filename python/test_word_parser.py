"""Tests for word_parser module."""

import logging
from pathlib import Path

import pytest
from ebooklib import epub

from word_parser import (
    WordBank,
    collect_words,
    extract_words,
    is_stop_word,
    parse_epub,
    parse_file,
    strip_markdown,
)


def write_epub(path: Path, body: str) -> None:
    book = epub.EpubBook()
    book.set_identifier("scatters-test")
    book.set_title("Sample")
    book.set_language("en")
    chapter = epub.EpubHtml(title="Intro", file_name="chap_01.xhtml", lang="en")
    chapter.content = body
    book.add_item(chapter)
    book.toc = (chapter,)
    book.add_item(epub.EpubNcx())
    book.add_item(epub.EpubNav())
    book.spine = ["nav", chapter]
    epub.write_epub(str(path), book)


class TestExtractWords:
    """Tests for tokenizing and normalizing text."""

    def test_basic_sentence(self) -> None:
        assert extract_words("Hello, world! This is a test.") == ["hello", "world", "this", "is", "a", "test"]

    def test_inner_punctuation_kept(self) -> None:
        assert extract_words("don't re-enter (well-known)") == ["don't", "re-enter", "well-known"]

    def test_punctuation_only_tokens_dropped(self) -> None:
        assert extract_words("-- ... !! word") == ["word"]

    def test_empty_text(self) -> None:
        assert extract_words("   \n\t ") == []


class TestStripMarkdown:
    """Tests for Markdown cleanup."""

    def test_fenced_code_removed(self) -> None:
        text = "Before\n```python\nsecret_code = 1\n```\nAfter"
        words = extract_words(strip_markdown(text))
        assert words == ["before", "after"]

    def test_link_and_image_text_kept(self) -> None:
        text = "See [the harbour](http://example.com) and ![lantern](img.png)"
        words = extract_words(strip_markdown(text))
        assert words == ["see", "the", "harbour", "and", "lantern"]

    def test_html_and_emphasis(self) -> None:
        text = "# Title\n\nSome <span>**bold**</span> _quiet_ `inline`"
        words = extract_words(strip_markdown(text))
        assert words == ["title", "some", "bold", "quiet", "inline"]

    def test_html_block_dropped(self) -> None:
        text = "<div>\nhidden markup\n</div>\n\nVisible prose"
        assert extract_words(strip_markdown(text)) == ["visible", "prose"]

    def test_unclosed_fence_is_code(self) -> None:
        text = "Intro prose\n\n```python\nsecretcodeword = 1\n"
        assert extract_words(strip_markdown(text)) == ["intro", "prose"]

    def test_indented_code_removed(self) -> None:
        text = "Intro prose\n\n    indentedcodeword = 1\n"
        assert extract_words(strip_markdown(text)) == ["intro", "prose"]

    def test_reference_links(self) -> None:
        text = "See [docs][d].\n\n[d]: https://example.com/path"
        assert extract_words(strip_markdown(text)) == ["see", "docs"]


class TestWordBank:
    """Tests for stop-word and length filtering."""

    def test_stop_words_removed(self) -> None:
        bank = WordBank()
        bank.add_words(["the", "wonderful", "and", "beautiful"])
        assert bank.get_words() == ["wonderful", "beautiful"]

    def test_minimum_length(self) -> None:
        bank = WordBank()
        bank.add_words(["hi", "hello", "ox", "owl"])
        assert bank.get_words() == ["hello", "owl"]

    def test_deduplicates_in_first_seen_order(self) -> None:
        bank = WordBank()
        bank.add_words(["zebra", "apple", "zebra"])
        bank.add_words(["apple", "mango"])
        assert bank.get_words() == ["zebra", "apple", "mango"]
        assert bank.word_count() == 3

    def test_is_stop_word(self) -> None:
        assert is_stop_word("because")
        assert not is_stop_word("harbour")


class TestParseFile:
    """Tests for per-format parsing."""

    def test_txt(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.txt"
        path.write_text("Salt wind, salt WIND.", encoding="utf-8")
        assert parse_file(path) == ["salt", "wind", "salt", "wind"]

    def test_markdown(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.MD"
        path.write_text("## Heading\n\n```\nignored\n```\nBody text", encoding="utf-8")
        assert parse_file(path) == ["heading", "body", "text"]

    def test_unsupported_suffix(self, tmp_path: Path) -> None:
        path = tmp_path / "data.json"
        path.write_text('{"word": "value"}', encoding="utf-8")
        assert parse_file(path) == []

    def test_epub(self, tmp_path: Path) -> None:
        path = tmp_path / "book.epub"
        write_epub(path, "<h1>Lighthouse</h1><p>Quiet harbour lanterns.</p>")

        words = parse_epub(path)

        assert {"lighthouse", "quiet", "harbour", "lanterns"} <= set(words)
        assert parse_file(path) == words


class TestCollectWords:
    """Tests for directory collection."""

    def test_collects_supported_files(self, tmp_path: Path) -> None:
        (tmp_path / "a.txt").write_text("Granite meadow", encoding="utf-8")
        (tmp_path / "b.md").write_text("*Meadow* orchard", encoding="utf-8")
        (tmp_path / "c.json").write_text("ignored words", encoding="utf-8")
        (tmp_path / "sub").mkdir()
        (tmp_path / "sub" / "d.txt").write_text("nested", encoding="utf-8")

        bank, file_count = collect_words(tmp_path)

        assert file_count == 2
        assert bank.get_words() == ["granite", "meadow", "orchard"]

    def test_broken_files_skipped(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        (tmp_path / "good.txt").write_text("lantern", encoding="utf-8")
        (tmp_path / "broken.epub").write_bytes(b"not a zip archive")
        (tmp_path / "latin.txt").write_bytes("caf\xe9".encode("latin-1"))

        with caplog.at_level(logging.WARNING):
            bank, file_count = collect_words(tmp_path)

        assert file_count == 1
        assert bank.get_words() == ["lantern"]
        assert "broken.epub" in caplog.text
        assert "latin.txt" in caplog.text

    def test_not_a_directory(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError, match="not a valid directory"):
            collect_words(tmp_path / "missing")
