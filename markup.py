# Module for converting blog HTML into the wiki markup of the new blog

import re

from bs4 import BeautifulSoup

import constants
from image_rewriter import rewrite_images
from link_classifier import rewrite_links
from text_utils import substitute_patterns

# --- Substitution Tables ---
LIST_RULES = (
    (r'</?[uo]l>', ''),
    (r'<li>', ' - '),
    (r'</li>', ''),
)

# Order matters: at a given position the first matching rule wins
MARKUP_RULES = (
    (constants.READ_MORE_PATTERN, '\n'),
    (r'<p>', ''),
    (r'</p>', '\n'),
    (r'\r', ''),
    (r'&#171;|&laquo;', '«'),
    (r'&#187;|&raquo;', '»'),
    (r'</?em>', '//'),
    (r'<br\s*/?>\n*', '\n\n'),
    (r'</?(?:strong|b)>', '**'),
    (r'&#8212;', '—'),
    (r'\s*\.{3,}', '…'),
    (r'\s*\.*\s*&#8230;', '…'),
    (r'&quot;', '"'),
    (r'&ndash;', '–'),
    (r'  +', ' '),
)

CAPTION_DUPLICATE_RE = re.compile(
    r'([^\n]+)\n{2,}(' + re.escape(constants.PHOTO_HOST_PREFIX) + r'[^\n]+)\n\1',
    re.DOTALL,
)
EXTRA_NEWLINES_RE = re.compile(r'\n{3,}')
BLOCKQUOTE_RE = re.compile(r'<blockquote>(.*?)</blockquote>', re.DOTALL)
LINE_START_RE = re.compile(r'^(?!\Z)', re.MULTILINE)


def _normalize_lists(content):
    for pattern, replacement in LIST_RULES:
        content = re.sub(pattern, replacement, content)
    return content


def _quote(match):
    text = BeautifulSoup(match.group(1), 'html.parser').get_text()
    return LINE_START_RE.sub('> ', text)


def fix_markup(content, ctime, resolve_picture):
    """
    Converts one note's HTML fragment into wiki markup.

    Steps run in a fixed order because later ones rely on text produced by
    earlier ones (pictures are resolved before captions are deduplicated,
    links are rewritten only after newlines are collapsed).
    """
    content = _normalize_lists(content)
    content = substitute_patterns(content, MARKUP_RULES)
    content = rewrite_images(content, ctime, resolve_picture)

    # Captions duplicated around a photo link
    content = CAPTION_DUPLICATE_RE.sub(r'\2\n\1', content)

    content = EXTRA_NEWLINES_RE.sub('\n\n', content)
    content = rewrite_links(content)
    content = BLOCKQUOTE_RE.sub(_quote, content)

    return content.strip()
