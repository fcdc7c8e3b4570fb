"""Tests for segmenter module (Layer 1a)."""

import pytest

from dialogue_parser.segmenter import (
    classify_line,
    find_speaker_tags,
    segment_text,
    speaker_from_attribution,
    speaker_from_tag,
    split_lines,
)
from dialogue_parser.constants import UNKNOWN_SPEAKER


# --- Rule 1: speaker tags ---

def test_speaker_tag_dialogue():
    """[S7] line becomes dialogue attributed to Speaker 7."""
    seg = classify_line("[S7] Hello there.", 0, 0)
    assert seg.type == "dialogue"
    assert seg.speaker == "Speaker 7"
    assert seg.speaker_tag == "[S7]"
    assert seg.text == "Hello there."
    assert seg.id == "dialogue_0"


def test_speaker_tag_extracts_emotion_and_instructions():
    """Parenthetical → emotion, braces → voice instructions, both removed from text."""
    seg = classify_line("[S2] I knew it (angrily) all along {low, fast}", 0, 3)
    assert seg.emotion == "angrily"
    assert seg.voice_instructions == "low, fast"
    assert seg.text == "I knew it all along"


def test_speaker_tag_first_emotion_wins():
    """Only the first parenthetical is kept as emotion; all are removed."""
    seg = classify_line("[S1] Yes (softly) and no (loudly)", 0, 0)
    assert seg.emotion == "softly"
    assert seg.text == "Yes and no"


def test_speaker_tag_keeps_inner_spacing():
    """Only whitespace around removed markup is folded."""
    assert classify_line("[S1] Hello   there.", 0, 0).text == "Hello   there."
    assert classify_line("[S1] Hello   there (calm)  now.", 0, 0).text == "Hello   there now."


def test_bare_speaker_tag_is_narrative():
    """A tag with no text after it does not match the dialogue rule."""
    seg = classify_line("[S1]", 0, 0)
    assert seg.type == "narrative"
    assert seg.text == "[S1]"


def test_speaker_from_tag():
    assert speaker_from_tag("[S12]") == "Speaker 12"
    assert speaker_from_tag("[X]") == UNKNOWN_SPEAKER


# --- Rule 2: quoted dialogue ---

def test_quoted_dialogue_said_name():
    """Quote followed by: said Name."""
    seg = classify_line('"I am leaving," said Elena.', 0, 0)
    assert seg.type == "dialogue"
    assert seg.speaker == "Elena"
    assert seg.text == "I am leaving,"


def test_quoted_dialogue_name_said():
    """Quote followed by: Name said."""
    seg = classify_line('"Hold on," Marcus said.', 0, 0)
    assert seg.speaker == "Marcus"


@pytest.mark.parametrize("line,speaker", [
    ('"Quiet," whispered Old Tom.', "Old Tom"),
    ('"Fine," Ana replied.', "Ana"),
    ('"Fine," replied Ana softly.', "Ana"),
])
def test_quoted_dialogue_other_verbs(line, speaker):
    seg = classify_line(line, 0, 0)
    assert seg.speaker == speaker


def test_quoted_dialogue_no_attribution():
    """No recognised attribution defaults to Unknown."""
    seg = classify_line('"Hello." She smiled.', 0, 0)
    assert seg.type == "dialogue"
    assert seg.speaker == UNKNOWN_SPEAKER
    assert seg.text == "Hello."


def test_quoted_dialogue_unlisted_verb_is_unknown():
    seg = classify_line('"Run!" shouted Ben.', 0, 0)
    assert seg.speaker == UNKNOWN_SPEAKER


def test_speaker_from_attribution_none():
    assert speaker_from_attribution(" and then silence.") is None


def test_attribution_drops_leading_connective():
    seg = classify_line('"Wait!" But Elena replied calmly.', 0, 0)
    assert seg.speaker == "Elena"


def test_name_said_must_open_the_clause():
    """A name-first clause later in the sentence is not an attribution."""
    seg = classify_line('"Hello." She smiled. Elena said nothing.', 0, 0)
    assert seg.speaker == UNKNOWN_SPEAKER


# --- Rule 3: named speaker ---

def test_named_speaker_dialogue():
    seg = classify_line('Marcus: "Wait for me!"', 0, 0)
    assert seg.type == "dialogue"
    assert seg.speaker == "Marcus"
    assert seg.text == "Wait for me!"


def test_named_speaker_without_quotes():
    seg = classify_line("Elder Mira: Listen closely.", 0, 0)
    assert seg.speaker == "Elder Mira"
    assert seg.text == "Listen closely."


def test_quoted_rule_precedes_named_rule():
    """A quoted line with a colon inside is still quoted dialogue."""
    seg = classify_line('"Note: stay here," said Ana.', 0, 0)
    assert seg.speaker == "Ana"
    assert seg.text == "Note: stay here,"


# --- Rule 4: action ---

def test_action_with_following_text():
    seg = classify_line("(sighs heavily) I suppose so.", 0, 5)
    assert seg.type == "action"
    assert seg.emotion == "sighs heavily"
    assert seg.text == "I suppose so."
    assert seg.id == "action_5"


def test_action_alone():
    """Parenthetical with nothing after it becomes the text too."""
    seg = classify_line("(pauses)", 0, 0)
    assert seg.type == "action"
    assert seg.text == "pauses"
    assert seg.emotion == "pauses"


# --- Rule 5: thought ---

def test_thought():
    seg = classify_line("*I wonder if this is real.*", 0, 2)
    assert seg.type == "thought"
    assert seg.text == "I wonder if this is real."
    assert seg.id == "thought_2"


def test_unbalanced_asterisk_is_narrative():
    """Malformed markup falls through unchanged."""
    seg = classify_line("*I wonder if this is real.", 0, 0)
    assert seg.type == "narrative"
    assert seg.text == "*I wonder if this is real."


def test_unbalanced_paren_is_narrative():
    seg = classify_line("(sighs heavily I suppose so.", 0, 0)
    assert seg.type == "narrative"


# --- Rule 6: narrative ---

def test_narrative_default():
    seg = classify_line("The forest was silent.", 0, 0)
    assert seg.type == "narrative"
    assert seg.text == "The forest was silent."
    assert seg.speaker is None
    assert seg.is_processed is False


# --- Line splitting and offsets ---

def test_blank_lines_skipped_but_advance_offset():
    text = "First line.\n\n   \nSecond line."
    lines = list(split_lines(text))
    assert [(i, line) for i, _, line in lines] == [(0, "First line."), (3, "Second line.")]
    assert lines[1][1] == text.index("Second line.")


def test_offsets_point_into_original_text(sample_text):
    """Every segment range covers exactly its trimmed source line."""
    segments = segment_text(sample_text)
    source_lines = [line.strip() for line in sample_text.split("\n") if line.strip()]
    assert len(segments) == len(source_lines)
    for seg, line in zip(segments, source_lines):
        assert sample_text[seg.start_position:seg.end_position] == line


def test_offsets_monotonic_and_non_overlapping(sample_text):
    segments = segment_text(sample_text)
    for prev, cur in zip(segments, segments[1:]):
        assert prev.end_position <= cur.start_position


def test_indented_line_offset():
    text = "    Indented narration."
    seg = segment_text(text)[0]
    assert seg.start_position == 4
    assert seg.end_position == len(text)


def test_segment_ids_unique(sample_text):
    ids = [s.id for s in segment_text(sample_text)]
    assert len(ids) == len(set(ids))


def test_empty_text():
    assert segment_text("") == []
    assert segment_text("\n\n  \n") == []


def test_mixed_types(sample_text):
    types = [s.type for s in segment_text(sample_text)]
    assert types == ["narrative", "dialogue", "dialogue", "dialogue", "action", "thought"]


# --- Speaker tag discovery ---

def test_find_speaker_tags():
    text = "[S2] Hi.\n[S1] Hello.\n[S2] Again."
    assert find_speaker_tags(text) == ["[S2]", "[S1]"]


def test_find_speaker_tags_none():
    assert find_speaker_tags("No tags here.") == []
