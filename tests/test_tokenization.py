"""Tests pinning paragraph, sentence, and word boundary behavior."""

from __future__ import annotations

from repeat_lens.analysis import (
    AnalysisDocument,
    AnalysisOptions,
    split_paragraphs,
    split_sentences,
    tokenize_words,
    word_count,
)
from repeat_lens.detectors.helpers import (
    is_common_phrase,
    is_common_sequence,
    meaningful_words,
    normalize_text,
)


def test_paragraphs_split_on_blank_lines_with_inner_whitespace() -> None:
    """Blank lines holding only spaces or tabs still separate paragraphs."""
    text = "  First block.  \n \t \nSecond block.\n\n\n\nThird block."
    assert split_paragraphs(text) == ["First block.", "Second block.", "Third block."]


def test_single_newline_does_not_split_paragraphs() -> None:
    assert split_paragraphs("line one\nline two") == ["line one\nline two"]


def test_paragraphs_split_on_html_paragraph_tags() -> None:
    """Paragraph tags split blocks and inline markup is stripped."""
    text = '<p>Alpha <b>bold</b></p><p class="x">Beta</p> <br/> <p>Gamma</p><p></p>'
    assert split_paragraphs(text) == ["Alpha bold", "Beta", "Gamma"]


def test_paragraph_split_handles_break_between_paragraph_tags() -> None:
    assert split_paragraphs("<p>One</p><br><p>Two</p>") == ["One", "Two"]


def test_empty_text_has_no_paragraphs_or_sentences() -> None:
    assert split_paragraphs("") == []
    assert split_paragraphs("\n\n   \n\n") == []
    assert split_sentences("") == []


def test_sentences_keep_consecutive_terminators_together() -> None:
    """A run of terminators closes one sentence."""
    sentences = split_sentences("Wait!?! Yes. Really...")
    assert [sentence.raw for sentence in sentences] == ["Wait!?!", " Yes.", " Really..."]


def test_trailing_unterminated_clause_is_not_a_sentence() -> None:
    sentences = split_sentences("Done. and then nothing")
    assert [sentence.text for sentence in sentences] == ["Done."]


def test_text_without_terminators_yields_no_sentences() -> None:
    assert split_sentences("no terminator anywhere in here") == []


def test_sentence_spans_point_into_source_text() -> None:
    """Raw spans and trimmed starts index the original string exactly."""
    text = "First one.  Second one! Third?"
    for sentence in split_sentences(text):
        assert text[sentence.start : sentence.end] == sentence.raw
        start = sentence.trimmed_start
        assert text[start : start + len(sentence.text)] == sentence.text


def test_words_are_runs_of_word_characters() -> None:
    """Digits and underscores belong to words; punctuation splits them."""
    assert tokenize_words("Re-run test_case 42 times, OK?") == [
        "Re",
        "run",
        "test_case",
        "42",
        "times",
        "OK",
    ]
    assert tokenize_words("Hello World", lowercase=True) == ["hello", "world"]
    assert word_count("one, two... three") == 3


def test_document_tokens_follow_case_option() -> None:
    document = AnalysisDocument.from_text("Apple apple")
    assert document.tokens(AnalysisOptions(ignore_case=True)) == ["apple", "apple"]
    assert document.tokens(AnalysisOptions(ignore_case=False)) == ["Apple", "apple"]
    assert document.words == ("Apple", "apple")


def test_normalize_text_applies_each_option() -> None:
    """Case folding and punctuation stripping are independent switches."""
    text = "  Hello,   World!\n"
    assert normalize_text(text, AnalysisOptions()) == "hello, world!"
    assert (
        normalize_text(text, AnalysisOptions(ignore_case=False, ignore_punctuation=True))
        == "Hello World"
    )
    assert normalize_text(text, AnalysisOptions(ignore_punctuation=True)) == "hello world"


def test_common_phrase_matches_substrings() -> None:
    assert is_common_phrase("went in the house")
    assert is_common_phrase("Of The Year")
    assert not is_common_phrase("quick brown fox")


def test_common_sequence_rules() -> None:
    """Short sequences and all-common sequences are treated as noise."""
    assert is_common_sequence("budget review")
    assert is_common_sequence("have been very")
    assert not is_common_sequence("quarterly budget review")


def test_meaningful_words_filter_short_and_common_words() -> None:
    assert meaningful_words("The new Budget will have many Reviews, and data.") == [
        "budget",
        "reviews",
        "data",
    ]
