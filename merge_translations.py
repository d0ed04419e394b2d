import os
import json
import logging

logger = logging.getLogger("html_i10n")

GENERATED_COMMENT = "This is a generated JSON file. Modify with care."


class TranslationWriteError(IOError):
    def __init__(self, path, cause):
        super().__init__(f"Could not write to file {path}: {cause}")
        self.path = path
        self.cause = cause


def empty_record():
    return {"translations": {}, "legacy": {}}


def _trimmed(mapping):
    if not isinstance(mapping, dict):
        return {}
    return {
        k.strip(): v.strip() if isinstance(v, str) else v
        for k, v in mapping.items()
    }


def normalize_record(data):
    """
    Trim keys and string values of both partitions.
    Anything that is not a mapping falls back to the empty record.
    """
    if not isinstance(data, dict):
        return empty_record()
    return {
        "translations": _trimmed(data.get("translations") or {}),
        "legacy": _trimmed(data.get("legacy") or {}),
    }


def load_record(json_file):
    """
    Read an existing translation file. A missing or malformed file is
    treated as empty since it is about to be regenerated in full.
    """
    if not os.path.exists(json_file):
        return empty_record()

    try:
        with open(json_file, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning(f"Warning: Could not read existing JSON file: {e}")
        return empty_record()

    return normalize_record(data)


def reconcile(texts, existing, keep_missing=False):
    """
    Merge current keys into an existing record.

    Each key takes its value from the existing translations, then from
    legacy, else "". Keys that disappeared from the page are either kept
    active (keep_missing) or moved to legacy. Legacy entries whose key is
    active again are dropped, so no key lives in both partitions.
    """
    existing = normalize_record(existing)
    existing_translations = existing["translations"]
    existing_legacy = existing["legacy"]

    new_translations = {}
    for text in texts:
        text = text.strip()
        if not text:
            continue
        translation = existing_translations.get(text) or existing_legacy.get(text) or ""
        new_translations[text] = translation

        if translation:
            logger.info(f"Found existing translation: {text} -> {translation}")
        else:
            logger.info(f"No translation found for: {text}")

    still_missing = {
        k: v for k, v in existing_translations.items() if k not in new_translations
    }

    if keep_missing:
        new_translations.update(still_missing)

    legacy_translations = {
        k: v for k, v in existing_legacy.items() if k not in new_translations
    }
    if not keep_missing:
        legacy_translations.update(still_missing)

    for text, translation in legacy_translations.items():
        logger.info(f"Legacy translation: {text} -> {translation}")

    return {
        "_comment": GENERATED_COMMENT,
        "translations": dict(sorted(new_translations.items())),
        "legacy": dict(sorted(legacy_translations.items())),
    }


def write_record(record, json_file):
    try:
        with open(json_file, "w", encoding="utf-8") as f:
            json.dump(record, f, indent=4, ensure_ascii=False)
    except OSError as e:
        raise TranslationWriteError(json_file, e) from e

    logger.info(f"Saved translated text to {json_file}")


def update_translation_file(texts, json_file, keep_missing=False):
    record = reconcile(texts, load_record(json_file), keep_missing=keep_missing)
    write_record(record, json_file)
    return record
