"""Parse entry points: segment → register → assign → aggregate."""

import asyncio
import logging
from collections.abc import Callable, Mapping

from dialogue_parser.models import CharacterVoiceMapping, ParsedContent, Segment, VoiceProfile
from dialogue_parser.segmenter import classify_line, count_lines, split_lines
from dialogue_parser.registry import detect_characters
from dialogue_parser.voices import assign_voices
from dialogue_parser.aggregator import build_content

logger = logging.getLogger(__name__)

CharacterObserver = Callable[[CharacterVoiceMapping], None]
CompletionObserver = Callable[[ParsedContent], None]
ProgressObserver = Callable[[int, int], None]


def _finish(
    text: str,
    segments: list[Segment],
    voice_map: Mapping[str, VoiceProfile] | None,
    on_character: CharacterObserver | None,
    on_complete: CompletionObserver | None,
) -> ParsedContent:
    mappings = detect_characters(segments, voice_map=voice_map, on_character=on_character)
    processed = assign_voices(segments, mappings)
    content = build_content(text, processed, mappings)
    logger.debug(
        "Parsed %d segments, %d characters", len(content.segments), content.total_characters,
    )
    if on_complete is not None:
        on_complete(content)
    return content


def parse(
    text: str,
    voice_map: Mapping[str, VoiceProfile] | None = None,
    on_character: CharacterObserver | None = None,
    on_complete: CompletionObserver | None = None,
    on_progress: ProgressObserver | None = None,
) -> ParsedContent:
    """Parse story text into segments and character voice mappings.

    on_character fires once per new character (first-appearance order),
    always before on_complete. on_progress receives (line_index, total_lines)
    for each non-blank line. Any exception, including one raised by an
    observer, propagates and on_complete is not called.
    """
    total = count_lines(text)
    segments = []
    try:
        for index, position, line in split_lines(text):
            segments.append(classify_line(line, position, index))
            if on_progress is not None:
                on_progress(index, total)
        return _finish(text, segments, voice_map, on_character, on_complete)
    except Exception:
        logger.debug("Parse failed after %d segments", len(segments), exc_info=True)
        raise


async def parse_incremental(
    text: str,
    voice_map: Mapping[str, VoiceProfile] | None = None,
    on_character: CharacterObserver | None = None,
    on_complete: CompletionObserver | None = None,
    on_progress: ProgressObserver | None = None,
    delay: float = 0.0,
) -> ParsedContent:
    """Same as parse(), yielding to the event loop after every line.

    Produces an identical result. If the task is cancelled, CancelledError
    propagates and on_complete is never called.
    """
    total = count_lines(text)
    segments = []
    try:
        for index, position, line in split_lines(text):
            segments.append(classify_line(line, position, index))
            if on_progress is not None:
                on_progress(index, total)
            await asyncio.sleep(delay)
        return _finish(text, segments, voice_map, on_character, on_complete)
    except Exception:
        logger.debug("Parse failed after %d segments", len(segments), exc_info=True)
        raise
