import os
import logging
from bs4 import BeautifulSoup, NavigableString
from bs4.element import PreformattedString

logger = logging.getLogger("html_i10n")

# Same tag list the page script translates at load time
TRANSLATABLE_TAGS = [
    "title", "span", "a", "p", "h1", "h2", "h3", "h4", "h5", "h6", "li", "strong"
]

IGNORED_TOKENS = {" ", ".", "*", "\xa0", ""}


class SourceNotFoundError(FileNotFoundError):
    pass


class EmptySourceError(ValueError):
    pass


def is_text_node(node):
    """Plain text only: comments, CDATA and doctypes are NavigableStrings too."""
    return isinstance(node, NavigableString) and not isinstance(node, PreformattedString)


def translation_key(text):
    """Return the normalized key for a text node, or None when it is not translatable."""
    key = text.strip()
    if key in IGNORED_TOKENS:
        return None
    return key


def iter_text_nodes(soup):
    """
    Yields the immediate text children of every allow-listed element.
    Text inside nested elements is reached through its own parent tag,
    never through an ancestor.
    """
    for element in soup.find_all(TRANSLATABLE_TAGS):
        for child in list(element.children):
            if is_text_node(child):
                yield child


def extract_keys_from_html(html):
    soup = BeautifulSoup(html, "html5lib")

    texts = []
    for node in iter_text_nodes(soup):
        key = translation_key(str(node))
        if key:
            logger.debug(f"Extracted text: {key}")
            texts.append(key)

    unique_texts = sorted(set(texts))
    logger.info(f"Found {len(texts)} total texts, {len(unique_texts)} unique")
    return unique_texts


def extract_keys(input_path):
    if not os.path.exists(input_path):
        raise SourceNotFoundError(f"The file {input_path} does not exist.")

    with open(input_path, "r", encoding="utf-8") as f:
        contents = f.read()

    if not contents:
        raise EmptySourceError(f"The file {input_path} is empty or cannot be read.")

    keys = extract_keys_from_html(contents)
    logger.info(f"Finished extracting text from {input_path}")
    return keys


def extract_from_files(input_paths):
    """Concatenate per-file keys; duplicates across files collapse during merge."""
    all_texts = []
    for input_path in input_paths:
        all_texts.extend(extract_keys(input_path))
    return all_texts
