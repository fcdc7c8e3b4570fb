"""Data models for dialogue parsing."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class VoiceProfile:
    id: str
    name: str
    archetype: str
    tone: str

    @classmethod
    def from_dict(cls, data: dict) -> "VoiceProfile":
        """Build a profile from a plain dict. Missing keys raise KeyError."""
        return cls(
            id=data["id"],
            name=data["name"],
            archetype=data["archetype"],
            tone=data["tone"],
        )

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "archetype": self.archetype, "tone": self.tone}


@dataclass
class Segment:
    id: str                              # "<type>_<line index>"
    type: str                            # "dialogue", "narrative", "action" or "thought"
    text: str
    start_position: int
    end_position: int
    speaker: str | None = None           # dialogue only
    speaker_tag: str | None = None       # "[S1]", explicit or resolved by the registry
    emotion: str | None = None
    voice_instructions: str | None = None
    is_processed: bool = False           # set by assign_voices()

    def to_dict(self) -> dict:
        """Export shape: camelCase keys, unset optional fields omitted."""
        data = {"id": self.id, "type": self.type, "text": self.text}
        optional = (
            ("speaker", self.speaker),
            ("speakerTag", self.speaker_tag),
            ("emotion", self.emotion),
            ("voiceInstructions", self.voice_instructions),
        )
        for key, value in optional:
            if value is not None:
                data[key] = value
        data["startPosition"] = self.start_position
        data["endPosition"] = self.end_position
        data["isProcessed"] = self.is_processed
        return data


@dataclass
class CharacterVoiceMapping:
    character_name: str
    speaker_tag: str
    voice_profile: VoiceProfile
    dialogue_count: int = 1
    emotional_range: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "characterName": self.character_name,
            "speakerTag": self.speaker_tag,
            "voiceProfile": self.voice_profile.to_dict(),
            "dialogueCount": self.dialogue_count,
            "emotionalRange": list(self.emotional_range),
        }


@dataclass
class ParsedContent:
    original_text: str
    segments: list[Segment]
    character_mappings: list[CharacterVoiceMapping]
    narrative_segments: list[Segment]
    dialogue_segments: list[Segment]
    total_characters: int
    reading_time: int                    # minutes

    def to_dict(self) -> dict:
        return {
            "originalText": self.original_text,
            "segments": [s.to_dict() for s in self.segments],
            "characterMappings": [m.to_dict() for m in self.character_mappings],
            "narrativeSegments": [s.to_dict() for s in self.narrative_segments],
            "dialogueSegments": [s.to_dict() for s in self.dialogue_segments],
            "totalCharacters": self.total_characters,
            "readingTime": self.reading_time,
        }
