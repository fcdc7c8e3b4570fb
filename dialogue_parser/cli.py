"""CLI interface with subcommand routing."""

import argparse
import logging
import os
import sys

from dialogue_parser.constants import (
    OUTPUT_DIR,
    PREVIEW_SEGMENT_LIMIT,
    SEGMENT_TYPES,
    VERSION,
)
from dialogue_parser.pipeline import parse
from dialogue_parser.voices import load_voice_map
from dialogue_parser.aggregator import summarize
from dialogue_parser.exporter import export_parsed, slug_from_path


def _read_story(file_path: str) -> str:
    """Read a story file or exit with an error."""
    if not os.path.exists(file_path):
        print(f"Error: File not found: {file_path}", file=sys.stderr)
        raise SystemExit(1)

    with open(file_path) as f:
        text = f.read()

    if not text.strip():
        print(f"Error: File is empty: {file_path}", file=sys.stderr)
        raise SystemExit(1)
    return text


def _load_voices(args):
    if args.voices and not os.path.exists(args.voices):
        print(f"Error: Voice map not found: {args.voices}", file=sys.stderr)
        raise SystemExit(1)
    return load_voice_map(args.file, path=args.voices)


def _print_character(mapping) -> None:
    profile = mapping.voice_profile
    print(f"  {mapping.speaker_tag:<6} {mapping.character_name:<20} → {profile.name} "
          f"({profile.archetype}, {profile.tone}), {mapping.dialogue_count} lines")
    if mapping.emotional_range:
        print(f"         emotions: {', '.join(mapping.emotional_range)}")


def cmd_parse(args):
    """Parse a story file and write the JSON export."""
    text = _read_story(args.file)
    voice_map = _load_voices(args)

    parsed = parse(text, voice_map=voice_map)

    if args.output:
        output_dir, filename = os.path.split(os.path.abspath(args.output))
    else:
        output_dir = OUTPUT_DIR
        filename = f"{slug_from_path(args.file)}.parsed.json"
    path = export_parsed(parsed, output_dir, filename=filename, source=os.path.abspath(args.file))

    stats = summarize(parsed)
    by_type = stats["by_type"]
    print(f"Parsed {stats['segments']} segments "
          f"({by_type['dialogue']} dialogue, {by_type['narrative']} narrative, "
          f"{by_type['action']} action, {by_type['thought']} thought)")
    print(f"Characters: {stats['characters']}, reading time: {stats['reading_time_minutes']} min")
    for tag, names in stats["tag_collisions"].items():
        print(f"Warning: {tag} shared by {', '.join(names)}", file=sys.stderr)
    print(f"Written to {path}")


def cmd_characters(args):
    """Print the detected cast with voice assignments."""
    text = _read_story(args.file)
    voice_map = _load_voices(args)

    parsed = parse(text, voice_map=voice_map)

    print("Characters:")
    for mapping in parsed.character_mappings:
        _print_character(mapping)
    if not parsed.character_mappings:
        print("  (none detected)")


def cmd_segments(args):
    """Print a preview of classified segments."""
    text = _read_story(args.file)
    parsed = parse(text)

    segments = parsed.segments
    if args.type:
        segments = [s for s in segments if s.type == args.type]

    for seg in segments[:args.limit]:
        label = f"[{seg.type}]"
        details = ""
        if seg.speaker:
            details += f" {seg.speaker}"
        if seg.emotion:
            details += f" ({seg.emotion})"
        print(f"{label:<12}{details}: {seg.text}")

    if len(segments) > args.limit:
        print(f"... and {len(segments) - args.limit} more segments")


def main():
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="dialogue-parser",
        description="Dialogue Parser — split story text into speakers, segments and voices",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # parse
    parse_parser = subparsers.add_parser("parse", help="Parse a story file and export JSON")
    parse_parser.add_argument("file", help="Path to the story text file")
    parse_parser.add_argument("--voices", help="Voice map JSON (default: <story>.voices.json)")
    parse_parser.add_argument("-o", "--output", help="Output JSON path")
    parse_parser.set_defaults(func=cmd_parse)

    # characters
    chars_parser = subparsers.add_parser("characters", help="List detected characters and voices")
    chars_parser.add_argument("file", help="Path to the story text file")
    chars_parser.add_argument("--voices", help="Voice map JSON (default: <story>.voices.json)")
    chars_parser.set_defaults(func=cmd_characters)

    # segments
    seg_parser = subparsers.add_parser("segments", help="Preview classified segments")
    seg_parser.add_argument("file", help="Path to the story text file")
    seg_parser.add_argument("--type", choices=SEGMENT_TYPES, help="Only show one segment type")
    seg_parser.add_argument("--limit", type=int, default=PREVIEW_SEGMENT_LIMIT,
                            help="Maximum segments to show")
    seg_parser.set_defaults(func=cmd_segments)

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return

    args.func(args)
