# Module for parsing one archived note page into a NoteRecord

import logging
import re
from datetime import datetime
from urllib.parse import unquote, urlparse
from zoneinfo import ZoneInfo

from bs4 import BeautifulSoup

import constants
from comment_parser import parse_comments
from errors import MissingFieldError
from markup import fix_markup
from models import NoteRecord, TagRef
from transliterator import to_translit

logger = logging.getLogger(__name__)

BODY_RE = re.compile(constants.BODY_PATTERN, re.DOTALL)
TIME_RE = re.compile(r'^(\d+):(\d+)$')
DATE_RE = re.compile(r'^(\d+)\.(\d+)\.(\d+)$')
TAG_HREF_RE = re.compile(r'^.*?/tag/([^/]+)/?', re.DOTALL)
PICTURE_NAME_RE = re.compile(constants.PICTURE_NAME_PATTERN, re.MULTILINE)


# --- Header Fields ---
def _extract_ctime(soup, tz):
    """Builds the note's creation time from the entry-date span."""
    span = soup.find('span', class_=constants.DATE_CLASS, title=TIME_RE)
    if span is None:
        raise MissingFieldError("Note page has no entry date")
    date_match = DATE_RE.match(span.get_text().strip())
    if date_match is None:
        raise MissingFieldError(f"Unparsable entry date: {span.get_text()!r}")

    hour, minute = (int(part) for part in TIME_RE.match(span['title']).groups())
    day, month, year = (int(part) for part in date_match.groups())
    return datetime(year, month, day, hour, minute, tzinfo=tz)


def _extract_title(soup):
    heading = soup.find('h1', class_=constants.TITLE_CLASS)
    if heading is None:
        raise MissingFieldError("Note page has no title heading")
    return heading.get_text().strip()


def _extract_body(content):
    """Returns the raw article HTML, cut before the share buttons."""
    match = BODY_RE.search(content)
    if match is None:
        raise MissingFieldError("Note page has no article-content markers")
    text = match.group(1).strip()

    idx = text.find(constants.SHARE_WIDGET_MARKER)
    if idx != -1:
        text = text[:idx]
    return text


# --- Tags and Pictures ---
def _is_tag_anchor(tag):
    # rel is multi-valued, so rel="category tag" must not count as a tag link
    return tag.name == 'a' and tag.get('rel') == ['tag']


def extract_tags(soup):
    """Returns the note's keywords from every rel="tag" link on the page."""
    tags = []
    for anchor in soup.find_all(_is_tag_anchor):
        text = anchor.get_text().lower()
        href = unquote(TAG_HREF_RE.sub(r'\1', anchor.get('href', ''), count=1))
        slug = to_translit(href)
        if not slug:
            logger.warning(f"Tag '{text}' ({anchor.get('href')}) produced an empty slug")
        tags.append(TagRef(slug, text))
    return tags


def extract_image_refs(body):
    return PICTURE_NAME_RE.findall(body)


def note_alias(url):
    """Returns the permalink slug of an archived note URL."""
    if not url:
        return None
    path = urlparse(url).path
    segments = [segment for segment in path.split('/') if segment]
    return unquote(segments[-1]) if segments else None


# --- Note Parsing ---
def parse_note(content, resolve_picture, source_url=None, tz_name=constants.DEFAULT_SOURCE_TIMEZONE):
    """
    Parses a full archived note page.

    Raises MissingFieldError when the date, title or body markers are absent;
    link and image errors from the markup conversion propagate unchanged.
    """
    tz = ZoneInfo(tz_name)
    soup = BeautifulSoup(content, 'html.parser')

    ctime = _extract_ctime(soup, tz)
    title = _extract_title(soup)
    body = fix_markup(_extract_body(content), ctime, resolve_picture)

    note = NoteRecord(
        ctime=ctime,
        title=title,
        body=body,
        tags=tuple(extract_tags(soup)),
        images=tuple(extract_image_refs(body)),
        comments=tuple(parse_comments(soup, tz_name)),
        alias=note_alias(source_url),
    )
    logger.debug(f"Parsed note '{title}' ({ctime:%Y-%m-%d %H:%M}): {len(note.tags)} tags, {len(note.images)} pictures, {len(note.comments)} comments")
    return note
