"""Assemble the final ParsedContent and its summary statistics."""

import math
from collections import Counter

from dialogue_parser.models import CharacterVoiceMapping, ParsedContent, Segment
from dialogue_parser.constants import READING_CHARS_PER_MINUTE, SEGMENT_TYPES
from dialogue_parser.segmenter import find_speaker_tags


def reading_time(text: str) -> int:
    """Minutes to read text at a fixed characters-per-minute rate."""
    return math.ceil(len(text) / READING_CHARS_PER_MINUTE)


def build_content(
    original_text: str,
    segments: list[Segment],
    mappings: list[CharacterVoiceMapping],
) -> ParsedContent:
    return ParsedContent(
        original_text=original_text,
        segments=list(segments),
        character_mappings=list(mappings),
        narrative_segments=[s for s in segments if s.type == "narrative"],
        dialogue_segments=[s for s in segments if s.type == "dialogue"],
        total_characters=len(mappings),
        reading_time=reading_time(original_text),
    )


def tag_collisions(mappings: list[CharacterVoiceMapping]) -> dict[str, list[str]]:
    """Speaker tags held by more than one character → those characters' names.

    Generated tags are sequential and can coincide with explicit [S<n>] tags.
    """
    holders: dict[str, list[str]] = {}
    for mapping in mappings:
        holders.setdefault(mapping.speaker_tag, []).append(mapping.character_name)
    return {tag: names for tag, names in holders.items() if len(names) > 1}


def summarize(parsed: ParsedContent) -> dict:
    """Summary statistics for display and export."""
    counts = Counter(s.type for s in parsed.segments)
    return {
        "segments": len(parsed.segments),
        "by_type": {t: counts.get(t, 0) for t in SEGMENT_TYPES},
        "characters": parsed.total_characters,
        "reading_time_minutes": parsed.reading_time,
        "speaker_tags": find_speaker_tags(parsed.original_text),
        "tag_collisions": tag_collisions(parsed.character_mappings),
    }
