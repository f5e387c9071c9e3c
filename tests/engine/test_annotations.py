# topmark:header:start
#
#   project      : ActorSchema
#   file         : test_annotations.py
#   file_relpath : tests/engine/test_annotations.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Unit tests for JSDoc tag collection, evaluation and shape validation."""

from __future__ import annotations

import pytest

from actorschema.core.errors import AnnotationEvaluationError
from actorschema.diagnostic.model import DiagnosticLog
from actorschema.engine.annotations import (
    EMPTY_ANNOTATION,
    Annotation,
    Tag,
    collect_tags,
    parse_annotation,
    strip_comment_decoration,
)

DOC: str = """/**
 * Start URLs for the crawler.
 * @title Start URLs
 * @description URLs to start with. Contact admin@example.com
 *   for access.
 * @prefill [{ url: 'https://apify.com' }]
 * @editor requestListSources
 */"""


def test_strip_comment_decoration() -> None:
    """Comment delimiters and gutters are removed, one line per source line."""
    body: str = strip_comment_decoration("/**\n * first\n *   second\n */")
    assert body == "first\nsecond"


def test_collect_tags_splits_on_recognized_tags_only() -> None:
    """Unknown ``@words`` (an e-mail address here) stay inside the value."""
    tags, summary = collect_tags(DOC)
    assert summary == "Start URLs for the crawler."
    assert tags[Tag.TITLE] == "Start URLs"
    assert tags[Tag.DESCRIPTION] == "URLs to start with. Contact admin@example.com for access."
    assert tags[Tag.PREFILL] == "[{ url: 'https://apify.com' }]"
    assert tags[Tag.EDITOR] == "requestListSources"


def test_name_is_an_alias_of_title_and_last_occurrence_wins() -> None:
    """``@name`` is read as ``@title``; a repeated tag keeps its last value."""
    tags, _ = collect_tags("/** @name First @title Second */")
    assert tags == {Tag.TITLE: "Second"}


def test_escaped_tags_stay_in_the_text() -> None:
    """``\\@tag`` is plain text without the backslash; ``@tag`` still starts a tag."""
    tags, summary = collect_tags(r"/** Uses \@title. @description see \@default docs @default 1 */")
    assert summary == "Uses @title."
    assert tags == {Tag.DESCRIPTION: "see @default docs", Tag.DEFAULT: "1"}


def test_parse_annotation_evaluates_evaluable_tags() -> None:
    """Evaluable tags hold parsed values; text tags lose one pair of quotes."""
    log = DiagnosticLog()
    annotation: Annotation = parse_annotation(
        "/** @title 'Max items' @default 10 @enumTitles ['A', 'B'] @required */",
        diagnostics=log,
    )
    assert annotation.get(Tag.TITLE) == "Max items"
    assert annotation.get(Tag.DEFAULT) == 10
    assert annotation.get(Tag.ENUM_TITLES) == ["A", "B"]
    assert annotation.get(Tag.REQUIRED) is True
    assert Tag.PREFILL not in annotation
    assert len(log) == 0


def test_parse_annotation_drops_wrongly_shaped_tags_with_a_warning() -> None:
    """A tag whose value has the wrong shape is ignored; the others are kept."""
    log = DiagnosticLog()
    annotation: Annotation = parse_annotation(
        "/** @title Max @minimum 'low' @enumTitles [1, 2] */",
        diagnostics=log,
        path=["maxItems"],
    )
    assert annotation.get(Tag.TITLE) == "Max"
    assert Tag.MINIMUM not in annotation
    assert Tag.ENUM_TITLES not in annotation
    messages: list[str] = log.messages()
    assert len(messages) == 2
    assert all("maxItems" in m for m in messages)


def test_parse_annotation_fails_on_malformed_literal() -> None:
    """A tag that is not a literal stops the conversion with tag and raw value."""
    with pytest.raises(AnnotationEvaluationError) as info:
        parse_annotation("/** @default getDefault() */", diagnostics=DiagnosticLog())
    assert info.value.tag == Tag.DEFAULT
    assert info.value.raw == "getDefault()"


def test_parse_annotation_without_doc() -> None:
    """An undocumented member has the empty annotation."""
    assert parse_annotation(None, diagnostics=DiagnosticLog()) is EMPTY_ANNOTATION
