#!/usr/bin/env python3
"""
update_sitemap.py

Regenerates sitemap.xml from the translation files: one entry for the root
page, one "?lang=<code>" entry per language whose JSON file has a non-empty
"translations" section, and the fixed external links.

Usage:
    python update_sitemap.py                               # generate sitemap
    python update_sitemap.py --dry-run                     # preview sitemap
    python update_sitemap.py --validate                    # check translations
    python update_sitemap.py --base-url https://test.com   # custom base URL
"""

import os
import sys
import json
import logging
import argparse
from pathlib import Path
from datetime import datetime, timezone
from xml.sax.saxutils import escape

from log_setup import setup_logger

logger = logging.getLogger("update_sitemap")

TRANSLATIONS_DIR = Path("translations")
OUTPUT_FILE = Path("sitemap.xml")
DEFAULT_BASE_URL = os.getenv("SITEMAP_BASE_URL", "https://minios.dev")

STATIC_LINKS = [
    "https://minios.dev/docs",
    "https://t.me/s/minios_news",
    "https://github.com/minios-linux/minios-live",
    "https://github.com/minios-linux/minios-live/wiki",
]

SITEMAP_HEADER = """<?xml version="1.0" encoding="UTF-8"?>
<urlset
      xmlns="http://www.sitemaps.org/schemas/sitemap/0.9"
      xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"
      xsi:schemaLocation="http://www.sitemaps.org/schemas/sitemap/0.9
            http://www.sitemaps.org/schemas/sitemap/0.9/sitemap.xsd">

"""

SITEMAP_FOOTER = """
</urlset>"""


def translation_files(translations_dir):
    """*.json files in the directory, backups excluded, in name order."""
    return sorted(
        path for path in Path(translations_dir).iterdir()
        if path.is_file() and path.name.endswith(".json") and not path.name.endswith(".bak")
    )


def read_translation_file(path):
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def section_size(content, name):
    section = content.get(name) if isinstance(content, dict) else None
    return len(section) if isinstance(section, dict) else 0


def get_available_languages(translations_dir=TRANSLATIONS_DIR):
    if not Path(translations_dir).is_dir():
        logger.error("Error: translations directory not found")
        return []

    languages = []
    for path in translation_files(translations_dir):
        try:
            content = read_translation_file(path)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Warning: Could not parse {path.name}: {e}")
            continue
        if section_size(content, "translations"):
            languages.append(path.stem)

    return sorted(languages)


def format_lastmod(now=None):
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S+00:00")


def url_entry(loc, lastmod):
    return f"<url>\n  <loc>{escape(loc)}</loc>\n  <lastmod>{lastmod}</lastmod>\n</url>\n"


def generate_sitemap(base_url=DEFAULT_BASE_URL, languages=(), now=None):
    lastmod = format_lastmod(now)

    entries = [url_entry(f"{base_url}/", lastmod)]
    entries.extend(url_entry(f"{base_url}/?lang={lang}", lastmod) for lang in languages)
    entries.extend(url_entry(url, lastmod) for url in STATIC_LINKS)

    return SITEMAP_HEADER + "".join(entries) + SITEMAP_FOOTER


def update_sitemap(base_url=DEFAULT_BASE_URL, output=OUTPUT_FILE, dry_run=False,
                   translations_dir=TRANSLATIONS_DIR):
    print("=== Sitemap Generator ===\n")
    print(f"Base URL: {base_url}")
    print(f"Output: {output}")
    print(f"Dry run: {'Yes' if dry_run else 'No'}\n")

    languages = get_available_languages(translations_dir)
    print(f"Found {len(languages)} translation files: {', '.join(languages)}")

    sitemap_content = generate_sitemap(base_url, languages)

    if dry_run:
        print("Generated sitemap content:\n")
        print(sitemap_content)
        return 0

    try:
        with open(output, "w", encoding="utf-8") as f:
            f.write(sitemap_content)
    except OSError as e:
        print(f"❌ Error writing sitemap: {e}", file=sys.stderr)
        return 1

    print(f"✅ Sitemap updated successfully: {output}")
    print("\n📊 Summary:")
    print(f"- Languages: {len(languages)}")
    print(f"- Total URLs: {len(languages) + 1 + len(STATIC_LINKS)}")
    print(f"- Available languages: {', '.join(languages)}")
    return 0


def validate_translations(translations_dir=TRANSLATIONS_DIR):
    print("\n🔍 Translation Validation:\n")

    if not Path(translations_dir).is_dir():
        logger.error("Error: translations directory not found")
        return

    for path in translation_files(translations_dir):
        try:
            content = read_translation_file(path)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            print(f"{path.name:<12} - ❌ Invalid JSON: {e}")
            continue
        translation_count = section_size(content, "translations")
        legacy_count = section_size(content, "legacy")
        print(f"{path.name:<12} - {translation_count:>3} translations, {legacy_count:>3} legacy")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Sitemap Generator for MiniOS Website",
        formatter_class=argparse.RawTextHelpFormatter
    )
    parser.add_argument("--base-url", default=DEFAULT_BASE_URL,
                        help=f"Base URL for the sitemap (default: {DEFAULT_BASE_URL})")
    parser.add_argument("--output", default=OUTPUT_FILE,
                        help="Output file path (default: ./sitemap.xml)")
    parser.add_argument("--dry-run", action="store_true",
                        help="Show generated content without writing file")
    parser.add_argument("--validate", action="store_true",
                        help="Validate translation files and show statistics")
    parser.add_argument("--translations-dir", default=TRANSLATIONS_DIR,
                        help="Directory holding <lang>.json files (default: ./translations)")
    args = parser.parse_args(argv)

    setup_logger("update_sitemap", verbose=True)

    if args.validate:
        validate_translations(args.translations_dir)
        return 0

    return update_sitemap(
        base_url=args.base_url,
        output=args.output,
        dry_run=args.dry_run,
        translations_dir=args.translations_dir
    )


if __name__ == "__main__":
    sys.exit(main())
