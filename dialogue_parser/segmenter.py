"""Split story text into classified line segments."""

import re

from dialogue_parser.models import Segment
from dialogue_parser.constants import (
    ATTRIBUTION_CONNECTIVES,
    ATTRIBUTION_VERBS,
    SPEAKER_LABEL,
    UNKNOWN_SPEAKER,
)

# Build regex alternation from attribution verbs
_VERB_PATTERN = "|".join(re.escape(v) for v in ATTRIBUTION_VERBS)

# One or more capitalized words: "Elena", "Old Tom"
_NAME_PATTERN = r"[A-Z][a-zA-Z]*(?:\s+[A-Z][a-zA-Z]*)*"

# Line patterns, in priority order
_SPEAKER_TAG_RE = re.compile(r"^(\[S\d+\])\s*(.+)")
_QUOTED_RE = re.compile(r'^"([^"]+)"(.*)')
_NAMED_SPEAKER_RE = re.compile(r'^([A-Z][a-zA-Z\s]+):\s*"?([^"]+)"?')
_ACTION_RE = re.compile(r"^\(([^)]+)\)\s*(.*)")
_THOUGHT_RE = re.compile(r"^\*([^*]+)\*(.*)")

# Attribution clauses after a closing quote
_VERB_FIRST_RE = re.compile(rf"\b(?:{_VERB_PATTERN})\s+({_NAME_PATTERN})")   # said Elena
_NAME_FIRST_RE = re.compile(rf"(?:^|,)\s*({_NAME_PATTERN})\s+(?:{_VERB_PATTERN})\b")   # , Elena said

# Inline markup inside tagged dialogue
_EMOTION_RE = re.compile(r"\(([^)]+)\)")
_INSTRUCTION_RE = re.compile(r"\{([^}]+)\}")
_EMOTION_STRIP_RE = re.compile(r"\s*\([^)]+\)\s*")
_INSTRUCTION_STRIP_RE = re.compile(r"\s*\{[^}]+\}\s*")
_TAG_NUMBER_RE = re.compile(r"\[S(\d+)\]")
_ANY_TAG_RE = re.compile(r"\[S\d+\]")


def speaker_from_tag(speaker_tag: str) -> str:
    """Map a tag like [S7] to "Speaker 7"; anything else is the unknown speaker."""
    match = _TAG_NUMBER_RE.match(speaker_tag)
    if match:
        return f"{SPEAKER_LABEL} {match.group(1)}"
    return UNKNOWN_SPEAKER


def _normalize_speaker(name: str) -> str | None:
    """Drop leading connectives: "But Elena" → "Elena"."""
    words = name.split()
    while words and words[0] in ATTRIBUTION_CONNECTIVES:
        words.pop(0)
    return " ".join(words) or None


def speaker_from_attribution(attribution: str) -> str | None:
    """Find the speaker in the clause following a quote, or None."""
    for pattern in (_VERB_FIRST_RE, _NAME_FIRST_RE):
        match = pattern.search(attribution)
        if match:
            return _normalize_speaker(match.group(1))
    return None


def find_speaker_tags(text: str) -> list[str]:
    """Distinct explicit [S<n>] tags in order of first appearance."""
    seen = []
    for tag in _ANY_TAG_RE.findall(text):
        if tag not in seen:
            seen.append(tag)
    return seen


def _remove_markup(pattern: re.Pattern, text: str) -> str:
    # Whitespace around the markup folds into one space; the rest is left alone
    return pattern.sub(" ", text).strip()


def _tagged_dialogue(match: re.Match, line: str, position: int, index: int) -> Segment:
    speaker_tag, body = match.group(1), match.group(2)

    emotion_match = _EMOTION_RE.search(body)
    instruction_match = _INSTRUCTION_RE.search(body)
    text = _remove_markup(_EMOTION_STRIP_RE, body)
    text = _remove_markup(_INSTRUCTION_STRIP_RE, text)

    return Segment(
        id=f"dialogue_{index}",
        type="dialogue",
        text=text,
        speaker=speaker_from_tag(speaker_tag),
        speaker_tag=speaker_tag,
        emotion=emotion_match.group(1) if emotion_match else None,
        voice_instructions=instruction_match.group(1) if instruction_match else None,
        start_position=position,
        end_position=position + len(line),
    )


def _quoted_dialogue(match: re.Match, line: str, position: int, index: int) -> Segment:
    speaker = speaker_from_attribution(match.group(2))
    return Segment(
        id=f"dialogue_{index}",
        type="dialogue",
        text=match.group(1).strip(),
        speaker=speaker or UNKNOWN_SPEAKER,
        start_position=position,
        end_position=position + len(line),
    )


def _named_dialogue(match: re.Match, line: str, position: int, index: int) -> Segment:
    return Segment(
        id=f"dialogue_{index}",
        type="dialogue",
        text=match.group(2).strip(),
        speaker=match.group(1).strip(),
        start_position=position,
        end_position=position + len(line),
    )


def _action(match: re.Match, line: str, position: int, index: int) -> Segment:
    action, following = match.group(1), match.group(2).strip()
    return Segment(
        id=f"action_{index}",
        type="action",
        text=following or action,
        emotion=action,
        start_position=position,
        end_position=position + len(line),
    )


def _thought(match: re.Match, line: str, position: int, index: int) -> Segment:
    return Segment(
        id=f"thought_{index}",
        type="thought",
        text=match.group(1).strip(),
        start_position=position,
        end_position=position + len(line),
    )


# Ordered (pattern, constructor) chain, first match wins
LINE_RULES = (
    (_SPEAKER_TAG_RE, _tagged_dialogue),
    (_QUOTED_RE, _quoted_dialogue),
    (_NAMED_SPEAKER_RE, _named_dialogue),
    (_ACTION_RE, _action),
    (_THOUGHT_RE, _thought),
)


def classify_line(line: str, position: int, index: int) -> Segment:
    """Classify one trimmed, non-blank line into a Segment.

    position is the offset of the line's first character in the original
    text; index is the source line number and becomes part of the id.
    """
    for pattern, build in LINE_RULES:
        match = pattern.match(line)
        if match:
            return build(match, line, position, index)

    return Segment(
        id=f"narrative_{index}",
        type="narrative",
        text=line,
        start_position=position,
        end_position=position + len(line),
    )


def split_lines(text: str):
    """Yield (index, position, line) for every non-blank line.

    Lines are trimmed; position points at the first non-whitespace
    character. Blank lines yield nothing but still advance the offset.
    """
    position = 0
    for index, raw in enumerate(text.split("\n")):
        line = raw.strip()
        if line:
            leading = len(raw) - len(raw.lstrip())
            yield index, position + leading, line
        position += len(raw) + 1


def count_lines(text: str) -> int:
    """Number of source lines, blank ones included."""
    return len(text.split("\n")) if text else 0


def segment_text(text: str) -> list[Segment]:
    """Parse story text into a list of classified Segments, one per non-blank line."""
    return [classify_line(line, position, index) for index, position, line in split_lines(text)]
