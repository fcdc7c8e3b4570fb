"""All magic numbers and configuration constants."""

READING_CHARS_PER_MINUTE = 200      # chars — rough reading-speed estimate
PREVIEW_SEGMENT_LIMIT = 20          # segments shown by the CLI preview
UNKNOWN_SPEAKER = "Unknown"         # quoted dialogue with no attribution
SPEAKER_LABEL = "Speaker"           # "[S3]" → "Speaker 3"
SPEAKER_TAG_FORMAT = "[S{}]"        # generated tags for untagged speakers

# Verbs that attribute a quoted line to a speaker: "Hi," said Ana. / "Hi," Ana said.
ATTRIBUTION_VERBS = ("said", "whispered", "replied")

# Sentence openers dropped from the front of an attributed name: "But Elena replied"
ATTRIBUTION_CONNECTIVES = ("But", "And", "Then", "So", "Yet", "Or", "Still")

SEGMENT_TYPES = ("dialogue", "narrative", "action", "thought")

# Name keyword → voice profile, checked in order, first match wins
VOICE_ARCHETYPE_RULES = (
    (("elder", "wise", "sage"),
     {"id": "wise_elder", "name": "Wise Elder", "archetype": "wise_elder", "tone": "authoritative"}),
    (("child", "young", "little"),
     {"id": "child_spirit", "name": "Child Spirit", "archetype": "child", "tone": "playful"}),
    (("guide", "teacher", "mentor"),
     {"id": "mystical_guide", "name": "Mystical Guide", "archetype": "guide", "tone": "compassionate"}),
)
DEFAULT_VOICE_PROFILE = {
    "id": "narrator_main", "name": "Main Narrator", "archetype": "narrator", "tone": "warm",
}

VOICE_MAP_SUFFIX = ".voices.json"   # sidecar next to the story file
EXPORT_FILENAME = "parsed_dialogue_content.json"
OUTPUT_DIR = "output"
VERSION = "0.1.0"
