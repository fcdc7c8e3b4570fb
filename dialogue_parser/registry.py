"""Track distinct speakers across a parse run."""

import logging
from collections.abc import Callable, Mapping

from dialogue_parser.models import CharacterVoiceMapping, Segment, VoiceProfile
from dialogue_parser.constants import SPEAKER_TAG_FORMAT
from dialogue_parser.voices import resolve_voice_profile

logger = logging.getLogger(__name__)


class CharacterRegistry:
    """Per-parse registry of characters keyed by lowercased speaker name.

    Create one per parse call and discard it afterwards. Characters keep
    the order in which they were first seen.
    """

    def __init__(
        self,
        voice_map: Mapping[str, VoiceProfile] | None = None,
        on_character: Callable[[CharacterVoiceMapping], None] | None = None,
    ):
        self._voice_map = voice_map
        self._on_character = on_character
        self._characters: dict[str, CharacterVoiceMapping] = {}

    def __len__(self) -> int:
        return len(self._characters)

    def _next_tag(self) -> str:
        # Sequential by discovery order; does not look at explicit [S<n>] tags,
        # so a generated tag can equal another character's explicit one.
        return SPEAKER_TAG_FORMAT.format(len(self) + 1)

    def register(self, segment: Segment) -> CharacterVoiceMapping | None:
        """Record one segment. Returns the speaker's mapping, or None if not attributable."""
        if segment.type != "dialogue" or not segment.speaker:
            return None

        key = segment.speaker.lower()
        existing = self._characters.get(key)
        if existing is not None:
            existing.dialogue_count += 1
            if segment.emotion and segment.emotion not in existing.emotional_range:
                existing.emotional_range.append(segment.emotion)
            return existing

        mapping = CharacterVoiceMapping(
            character_name=segment.speaker,
            speaker_tag=segment.speaker_tag or self._next_tag(),
            voice_profile=resolve_voice_profile(segment.speaker, self._voice_map),
            dialogue_count=1,
            emotional_range=[segment.emotion] if segment.emotion else [],
        )
        self._characters[key] = mapping
        logger.debug(
            "New character %r → %s (%s)",
            mapping.character_name, mapping.speaker_tag, mapping.voice_profile.archetype,
        )
        if self._on_character is not None:
            self._on_character(mapping)
        return mapping

    def mappings(self) -> list[CharacterVoiceMapping]:
        """All characters in order of first appearance."""
        return list(self._characters.values())


def detect_characters(
    segments: list[Segment],
    voice_map: Mapping[str, VoiceProfile] | None = None,
    on_character: Callable[[CharacterVoiceMapping], None] | None = None,
) -> list[CharacterVoiceMapping]:
    """Build character mappings from a segment list.

    on_character fires once per newly discovered character, in order.
    """
    registry = CharacterRegistry(voice_map=voice_map, on_character=on_character)
    for segment in segments:
        registry.register(segment)
    return registry.mappings()
