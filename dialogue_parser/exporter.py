"""Export parsed content as JSON with a provenance block."""

import json
import os
import re
from datetime import datetime, timezone

from dialogue_parser.models import ParsedContent
from dialogue_parser.aggregator import summarize
from dialogue_parser.constants import EXPORT_FILENAME, VERSION


def slug_from_path(story_path: str) -> str:
    """Convert story filename to an output slug.

    "Whispering Woods.txt" → "whispering_woods"
    "/path/to/Chapter 1.txt" → "chapter_1"
    """
    basename = os.path.splitext(os.path.basename(story_path))[0]
    # Replace non-alphanumeric with underscore, collapse multiples, strip edges
    return re.sub(r"[^a-zA-Z0-9]+", "_", basename).strip("_").lower()


def export_parsed(
    parsed: ParsedContent,
    output_dir: str,
    filename: str = EXPORT_FILENAME,
    source: str = "",
) -> str:
    """Write parsed content to output_dir/filename.

    The document is ParsedContent.to_dict() plus "summary" and "export"
    blocks. Returns path to the written file.
    """
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, filename)

    document = parsed.to_dict()
    document["summary"] = summarize(parsed)
    document["export"] = {
        "source": source,
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "parser_version": VERSION,
    }

    with open(path, "w") as f:
        json.dump(document, f, indent=2)
    return path
