"""Voice profile resolution, voice-map sidecars and speaker-tag assignment."""

import dataclasses
import json
import logging
import os
from collections.abc import Mapping
from types import MappingProxyType

from dialogue_parser.models import CharacterVoiceMapping, Segment, VoiceProfile
from dialogue_parser.constants import (
    DEFAULT_VOICE_PROFILE,
    VOICE_ARCHETYPE_RULES,
    VOICE_MAP_SUFFIX,
)

logger = logging.getLogger(__name__)


def _as_profile(value) -> VoiceProfile:
    if isinstance(value, VoiceProfile):
        return value
    return VoiceProfile.from_dict(value)


def resolve_voice_profile(
    character_name: str,
    voice_map: Mapping[str, VoiceProfile] | None = None,
) -> VoiceProfile:
    """Pick a voice profile for a character.

    Priority: exact name in voice map → name keyword rules → narrator default.
    """
    if voice_map and character_name in voice_map:
        return _as_profile(voice_map[character_name])

    name = character_name.lower()
    for keywords, profile in VOICE_ARCHETYPE_RULES:
        if any(keyword in name for keyword in keywords):
            return VoiceProfile.from_dict(profile)

    return VoiceProfile.from_dict(DEFAULT_VOICE_PROFILE)


def _entries_from_data(data: dict) -> dict:
    """Accept either {name: profile} or the app's characterAssignments shape."""
    assignments = data.get("characterAssignments")
    if isinstance(assignments, dict):
        return {
            name: info.get("assignedVoiceProfile", {})
            for name, info in assignments.items()
            if isinstance(info, dict)
        }
    return data


def parse_voice_map(data: dict) -> Mapping[str, VoiceProfile]:
    """Convert decoded JSON into a read-only name → VoiceProfile mapping.

    Entries missing profile fields are skipped with a warning.
    """
    voice_map = {}
    for name, profile in _entries_from_data(data).items():
        try:
            voice_map[name] = _as_profile(profile)
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning("Skipping voice map entry %r: missing field %s", name, e)
    return MappingProxyType(voice_map)


def voice_map_path(story_path: str) -> str:
    """story.txt → story.voices.json"""
    base = os.path.splitext(story_path)[0]
    return base + VOICE_MAP_SUFFIX


def load_voice_map(story_path: str, path: str | None = None) -> Mapping[str, VoiceProfile]:
    """Load the voice-map sidecar for a story, or an explicit path.

    Returns an empty mapping if the file is missing or malformed.
    """
    map_path = path or voice_map_path(story_path)
    if not os.path.exists(map_path):
        return MappingProxyType({})
    try:
        with open(map_path) as f:
            data = json.load(f)
    except json.JSONDecodeError:
        logger.warning("Malformed voice map: %s — using name heuristics", map_path)
        return MappingProxyType({})
    if not isinstance(data, dict):
        logger.warning("Voice map is not a JSON object: %s — using name heuristics", map_path)
        return MappingProxyType({})
    return parse_voice_map(data)


def assign_voices(
    segments: list[Segment],
    mappings: list[CharacterVoiceMapping],
) -> list[Segment]:
    """Second pass: stamp resolved speaker tags onto dialogue segments.

    Returns new Segment objects, all marked processed. Text, emotion,
    voice instructions and offsets are carried over untouched.
    """
    by_name = {m.character_name.lower(): m for m in mappings}

    processed = []
    for seg in segments:
        if seg.type == "dialogue" and seg.speaker:
            mapping = by_name.get(seg.speaker.lower())
            if mapping is not None:
                processed.append(dataclasses.replace(
                    seg, speaker_tag=mapping.speaker_tag, is_processed=True,
                ))
                continue
        processed.append(dataclasses.replace(seg, is_processed=True))
    return processed
