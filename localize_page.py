#!/usr/bin/env python3
"""
Render a page in a visitor's language using the per-language JSON files.

Language resolution follows the page script: the "lang" query parameter,
then the browser locale, then "en". The full locale file is tried first
(translations/pt-BR.json), then its two-letter prefix (translations/pt.json).
Only the trimmed core of a text node is replaced; the node's surrounding
whitespace is kept verbatim.
"""

import os
import sys
import json
import logging
import argparse
from urllib.parse import parse_qs
from bs4 import BeautifulSoup

from log_setup import setup_logger
from extract_keys import iter_text_nodes, translation_key

logger = logging.getLogger("localize_page")

DEFAULT_LANGUAGE = "en"
TRANSLATIONS_DIR = "translations"

SKIPPED_HREF_PREFIXES = ("#", "http://", "https://")
SKIPPED_HREF_MARKERS = ("mailto:", "tel:")


class TranslationNotFoundError(LookupError):
    pass


def resolve_language(query_string="", browser_locale=None):
    params = parse_qs(query_string.lstrip("?"))
    lang = (params.get("lang") or [""])[0]
    if lang:
        return lang
    logger.debug("No 'lang' parameter in URL, falling back to browser language.")
    if browser_locale:
        logger.debug(f"Browser language detected: {browser_locale}")
        return browser_locale
    logger.debug(f"No language detected. Falling back to '{DEFAULT_LANGUAGE}' as default.")
    return DEFAULT_LANGUAGE


def short_language(code):
    return code[:2]


def language_file_candidates(code):
    candidates = [code]
    if short_language(code) != code:
        candidates.append(short_language(code))
    return candidates


def load_translations(code, translations_dir=TRANSLATIONS_DIR):
    """Return the "translations" mapping for the first language file that loads."""
    for candidate in language_file_candidates(code):
        language_file = os.path.join(translations_dir, f"{candidate}.json")
        logger.debug(f"Trying to load: {language_file}")
        try:
            with open(language_file, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.debug(f"Could not load {language_file}: {e}")
            continue
        if isinstance(data, dict) and isinstance(data.get("translations"), dict):
            return data["translations"]
        logger.debug(f"No translations section in {language_file}")
    raise TranslationNotFoundError(f"Translation file not found for '{code}'")


def substitute(node_text, translations):
    """Return node_text with its trimmed core replaced, or unchanged if there is no translation."""
    key = translation_key(node_text)
    if not key:
        return node_text
    translated = translations.get(key)
    if not translated:
        return node_text
    leading = node_text[:len(node_text) - len(node_text.lstrip())]
    trailing = node_text[len(node_text.rstrip()):]
    return f"{leading}{translated}{trailing}"


def translate_soup(soup, translations):
    replaced = 0
    for node in list(iter_text_nodes(soup)):
        text = str(node)
        new_text = substitute(text, translations)
        logger.debug(f"TK: {text.strip()}")
        if new_text != text:
            logger.debug(f"TR: {new_text.strip()}")
            node.replace_with(new_text)
            replaced += 1
    return replaced


def add_lang_to_links(soup, lang):
    """Carry the language over to links pointing at other pages of the site."""
    short_lang = short_language(lang)
    for link in soup.find_all("a"):
        href = link.get("href")
        if not href or href.startswith(SKIPPED_HREF_PREFIXES):
            continue
        if any(marker in href for marker in SKIPPED_HREF_MARKERS):
            continue
        if "lang=" in href:
            continue
        separator = "&" if "?" in href else "?"
        link["href"] = f"{href}{separator}lang={short_lang}"


def localize_html(html, lang, translations_dir=TRANSLATIONS_DIR):
    """
    Translate an HTML document. If neither language file can be loaded the
    page keeps its authored text; the failure is only logged in debug mode.
    """
    try:
        translations = load_translations(lang, translations_dir)
    except TranslationNotFoundError as e:
        logger.debug(f"Translation not performed: {e}")
        return html

    soup = BeautifulSoup(html, "html5lib")
    replaced = translate_soup(soup, translations)
    add_lang_to_links(soup, lang)
    logger.debug(f"Replaced {replaced} text nodes for '{lang}'")
    return str(soup)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Render an HTML page in a given language.")
    parser.add_argument("--input", "-i", required=True, help="Source HTML file")
    parser.add_argument("--output", "-o", help="Output HTML file (default: stdout)")
    parser.add_argument("--lang", "-l", help="Language code, as the 'lang' query parameter")
    parser.add_argument("--locale", help="Browser-reported locale used when --lang is absent")
    parser.add_argument("--translations-dir", default=TRANSLATIONS_DIR, help="Directory with <lang>.json files")
    parser.add_argument("--debug", action="store_true", help="Log language resolution and substitutions")
    args = parser.parse_args(argv)

    setup_logger("localize_page", args.debug)

    query = f"lang={args.lang}" if args.lang else ""
    lang = resolve_language(query, args.locale)
    logger.debug(f"Detected language: {lang}")

    try:
        with open(args.input, "r", encoding="utf-8") as f:
            html = f.read()
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    result = localize_html(html, lang, args.translations_dir)

    if not args.output:
        print(result)
        return 0

    try:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(result)
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"✅ Localized page written: {args.output}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
