"""Shared fixtures for dialogue parser tests."""

import os

import pytest

from dialogue_parser.models import Segment


DEMO_DIR = os.path.join(os.path.dirname(os.path.dirname(__file__)), "demo")


@pytest.fixture
def demo_story_path():
    """Path to the bundled demo story."""
    return os.path.join(DEMO_DIR, "whispering_woods.txt")


@pytest.fixture
def sample_text():
    """A short story touching every segment type."""
    return (
        "The night was quiet.\n"
        "\n"
        "[S1] Who goes there? (nervously) {whisper}\n"
        '"Only a friend," said Elena.\n'
        'Marcus: "Wait for me!"\n'
        "(sighs heavily) I suppose so.\n"
        "*I wonder if this is real.*\n"
    )


@pytest.fixture
def sample_segments():
    """Pre-built segments for registry/voice tests."""
    return [
        Segment(id="narrative_0", type="narrative", text="It was dark.",
                start_position=0, end_position=12),
        Segment(id="dialogue_1", type="dialogue", text="Who's there?", speaker="Elena",
                emotion="afraid", start_position=13, end_position=40),
        Segment(id="dialogue_2", type="dialogue", text="Only me.", speaker="Marcus",
                start_position=41, end_position=60),
        Segment(id="dialogue_3", type="dialogue", text="Show yourself!", speaker="elena",
                emotion="angry", start_position=61, end_position=90),
    ]
