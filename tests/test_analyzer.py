"""Behavioral tests for the prose style analyzer."""

from __future__ import annotations

from freewrite.ranges import TextRange
from freewrite.style import (
    StyleCategory,
    StyleFix,
    StyleIssue,
    StyleSeverity,
    apply_fix,
    apply_fixes,
    filter_ignored,
)
from freewrite.style.analysis import split_paragraphs


def _issues_for(analyzer, text: str, rule: str) -> list[StyleIssue]:
    return [issue for issue in analyzer.analyze(text) if issue.rule == rule]


def test_empty_text_has_no_issues(analyzer) -> None:
    """Analyzing an empty buffer should return nothing."""
    assert analyzer.analyze("") == []


def test_issue_ids_are_sequential_from_one(analyzer) -> None:
    """Every pass should number its issues 1..n."""
    issues = analyzer.analyze("Hello  world. wait--really...")
    assert [issue.id for issue in issues] == list(range(1, len(issues) + 1))


def test_issue_ranges_stay_inside_the_text(analyzer) -> None:
    """Issue and fix ranges should always lie within the analyzed text."""
    text = (
        "It is really quite simple.  There are things , and stuff...\n\n"
        'This is "odd (very odd.'
    )
    for issue in analyzer.analyze(text):
        assert 0 <= issue.range.offset <= issue.range.end <= len(text)
        if issue.fix is not None:
            assert issue.fix.range.end <= len(text)


def test_repeated_sentence_flags_second_sentence_as_redundant(analyzer) -> None:
    """Repeating a sentence should flag redundancy in the second copy."""
    text = "The cat sat. The cat sat."
    issues = [
        issue
        for issue in analyzer.analyze(text)
        if issue.category is StyleCategory.REDUNDANCY
    ]

    assert issues
    assert all(issue.range.offset >= 13 for issue in issues)
    assert {issue.rule for issue in issues} == {"repeated_lemma", "repeated_ngram"}


def test_repeated_word_outside_window_is_not_flagged(analyzer) -> None:
    """Lemmas farther apart than the window should not be flagged."""
    filler = " ".join(f"w{index}" for index in range(40))
    text = f"garden {filler} garden"
    assert _issues_for(analyzer, text, "repeated_lemma") == []


def test_double_space_gets_single_space_fix(analyzer) -> None:
    """A double space should carry a single-space replacement."""
    issues = _issues_for(analyzer, "Hello  world", "punctuation_spacing")

    assert len(issues) == 1
    assert issues[0].category is StyleCategory.PUNCTUATION
    assert issues[0].fix == StyleFix(TextRange(5, 2), " ")


def test_lowercase_after_sentence_end_is_capitalized(analyzer) -> None:
    """The fix should keep the punctuation and uppercase the letter."""
    text = "Done. next step"
    issues = [
        issue
        for issue in _issues_for(analyzer, text, "punctuation_spacing")
        if issue.message == "Lowercase after sentence end"
    ]

    assert len(issues) == 1
    assert apply_fix(text, issues[0].fix) == "Done. Next step"


def test_double_hyphen_gets_em_dash_fix(analyzer) -> None:
    """A double hyphen should become an em dash."""
    text = "wait--really"
    issues = _issues_for(analyzer, text, "em_dash")

    assert len(issues) == 1
    assert issues[0].category is StyleCategory.TYPOGRAPHY
    assert issues[0].fix == StyleFix(TextRange(4, 2), "—")
    assert apply_fix(text, issues[0].fix) == "wait—really"


def test_long_sentence_is_a_warning(analyzer) -> None:
    """Sentences over the word limit should be surfaced as warnings."""
    long_text = " ".join(["word"] * 45) + "."
    issues = _issues_for(analyzer, long_text, "long_sentence")

    assert len(issues) == 1
    assert issues[0].severity is StyleSeverity.WARNING
    assert issues[0].range == TextRange(0, len(long_text))

    short_text = " ".join(["word"] * 10) + "."
    assert _issues_for(analyzer, short_text, "long_sentence") == []


def test_wordy_phrase_keeps_capitalization(analyzer) -> None:
    """A sentence-initial wordy phrase should get a capitalized replacement."""
    text = "In order to win, we trained."
    issues = _issues_for(analyzer, text, "wordy_phrase")

    assert len(issues) == 1
    assert issues[0].fix == StyleFix(TextRange(0, 11), "To")


def test_wordy_phrase_range_survives_case_expanding_characters(analyzer) -> None:
    """Characters whose lowercase form is longer must not shift fix ranges."""
    text = "İİ went in order to win."
    issues = _issues_for(analyzer, text, "wordy_phrase")

    assert [issue.range for issue in issues] == [TextRange(8, 11)]
    assert issues[0].range.slice(text) == "in order to"
    assert apply_fixes(text, issues) == "İİ went to win."


def test_hedge_range_survives_case_expanding_characters(analyzer) -> None:
    """Hedge ranges should slice the hedge from the original text."""
    text = "İstanbul. I think so."
    issues = _issues_for(analyzer, text, "hedge_phrase")

    assert [issue.range.slice(text) for issue in issues] == ["I think"]
    assert apply_fixes(text, issues) == "İstanbul.  so."


def test_weak_opener_survives_case_expanding_characters(analyzer) -> None:
    """Sentence openings are read from the original text."""
    text = "İİ. There is a way."
    issues = _issues_for(analyzer, text, "weak_opener")

    assert [issue.ignored_key for issue in issues] == ["there is"]
    assert issues[0].range.slice(text) == "There is a way."


def test_repeated_start_needs_three_in_a_row(analyzer) -> None:
    """Only the third consecutive opening should be flagged."""
    two = "Users want speed. Users want clarity."
    three = "Users want speed. Users want clarity. Users want control."

    assert _issues_for(analyzer, two, "repeated_start") == []
    issues = _issues_for(analyzer, three, "repeated_start")
    assert len(issues) == 1
    assert issues[0].ignored_key == "start:users"
    assert issues[0].range.slice(three) == "Users want control."


def test_unclear_reference_checks_each_paragraph(analyzer) -> None:
    """Only the paragraph opening with a bare pronoun should be flagged."""
    text = "The report is done.\n\nIt is what it is."
    issues = _issues_for(analyzer, text, "unclear_reference")

    assert len(issues) == 1
    assert issues[0].range == TextRange(21, 2)
    assert issues[0].ignored_key == "it"


def test_unmatched_delimiters_flag_last_occurrence(analyzer) -> None:
    """Odd quotes and excess parentheses should flag the last instance."""
    text = 'She said "hi" and "bye. (One (two) three.'
    issues = _issues_for(analyzer, text, "unmatched_delimiter")

    assert [issue.message for issue in issues] == [
        "Unmatched quote",
        "Unmatched parenthesis",
    ]
    assert issues[0].range == TextRange(text.rindex('"'), 1)
    assert issues[1].range == TextRange(text.rindex("("), 1)


def test_filter_ignored_drops_matching_keys(analyzer) -> None:
    """Issues whose ignore key is listed should be filtered out."""
    issues = analyzer.analyze("The results were very good and really fast.")
    keys = {issue.ignored_key for issue in issues}
    assert {"very", "really"} <= keys

    kept = filter_ignored(issues, ["very"])
    assert "very" not in {issue.ignored_key for issue in kept}
    assert "really" in {issue.ignored_key for issue in kept}
    assert filter_ignored(issues, []) == issues


def test_report_counts_every_category(analyzer) -> None:
    """Counts should list all categories and match the kept issues."""
    report = analyzer.report("wait--really", ignored_keys=())

    assert set(report.counts) == {str(category) for category in StyleCategory}
    assert report.counts["Typography"] == 1
    assert sum(report.counts.values()) == len(report.issues)
    payload = report.to_payload()
    assert payload["total"] == len(report.issues)
    assert payload["fixable"] == report.fixable


def test_apply_fixes_skips_overlapping_edits() -> None:
    """Overlapping fixes should keep the later one and drop the earlier."""
    text = "abcdef"
    issues = [
        StyleIssue(
            category=StyleCategory.STYLE,
            range=TextRange(0, 3),
            message="first",
            fix=StyleFix.replace(TextRange(0, 3), "X"),
        ),
        StyleIssue(
            category=StyleCategory.STYLE,
            range=TextRange(2, 2),
            message="second",
            fix=StyleFix.replace(TextRange(2, 2), "Y"),
        ),
        StyleIssue(
            category=StyleCategory.STYLE,
            range=TextRange(5, 1),
            message="flag only",
            fix=StyleFix(TextRange(5, 1), None),
        ),
    ]

    assert apply_fixes(text, issues) == "abYef"


def test_apply_fixes_applies_all_disjoint_fixes(analyzer) -> None:
    """Every disjoint fix should land against the original offsets."""
    text = "Hello  world--wait..."
    fixed = apply_fixes(text, analyzer.analyze(text))
    assert fixed == "Hello world—wait…"


def test_split_paragraphs_keeps_offsets() -> None:
    """Paragraph ranges should point back into the original text."""
    text = "one\n\ntwo\n\n\nthree"
    paragraphs = split_paragraphs(text)
    assert [paragraph.slice(text) for paragraph in paragraphs] == [
        "one",
        "two",
        "\nthree",
    ]
