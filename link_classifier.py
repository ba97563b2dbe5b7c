# Module for classifying archived anchors and rewriting them to wiki links

import logging
import re
from dataclasses import dataclass
from urllib.parse import unquote

from bs4 import BeautifulSoup

import constants
from errors import MalformedLinkError, UnrecognizedLinkShapeError
from text_utils import replace_all
from transliterator import to_translit

logger = logging.getLogger(__name__)

ANCHOR_RE = re.compile(r'<a [^>]+>.*?</a>', re.DOTALL)
INTERNAL_PREFIX_RE = re.compile(constants.INTERNAL_LINK_PREFIX_PATTERN)
EXTERNAL_PREFIX_RE = re.compile(constants.EXTERNAL_LINK_PREFIX_PATTERN)
PERMALINK_RE = re.compile(r'\d+/\d+/\d+/')


# --- Classification Outcomes ---
@dataclass(frozen=True)
class TagLink:
    slug: str
    text: str

    def render(self):
        return f"[[{constants.TAGS_PATH_PREFIX}{self.slug} {self.text}]]"


@dataclass(frozen=True)
class InternalPermalink:
    path: str
    text: str

    def render(self):
        # Old permalinks land in the tag namespace of the new blog
        return f"[[{constants.TAGS_PATH_PREFIX}{self.path} {self.text}]]"


@dataclass(frozen=True)
class ExternalLink:
    url: str
    text: str

    def render(self):
        return f"[[{self.url} {self.text}]]"


@dataclass(frozen=True)
class Dropped:
    def render(self):
        return ''


# --- Classification ---
def classify_link(href, text):
    """
    Decides what an archived anchor points to.

    Returns one of TagLink, InternalPermalink, ExternalLink or Dropped.
    Raises MalformedLinkError for hrefs outside the archive and
    UnrecognizedLinkShapeError for internal paths of unknown shape.
    """
    path, internal_count = INTERNAL_PREFIX_RE.subn('', href)

    if internal_count == 0:
        url, external_count = EXTERNAL_PREFIX_RE.subn('', href)
        if external_count == 0:
            raise MalformedLinkError(f"Link is not an archived URL: {href!r}")
        if constants.SUBSCRIPTION_LINK_FRAGMENT in url:
            return Dropped()
        return ExternalLink(url, text)

    if path.startswith('tag'):
        segments = unquote(path).split('/')
        if len(segments) < 2:
            raise MalformedLinkError(f"Tag link without a tag name: {href!r}")
        return TagLink(to_translit(segments[1]), text)

    if PERMALINK_RE.search(path):
        segments = path.split('/', 3)
        if len(segments) < 4:
            raise UnrecognizedLinkShapeError(f"Permalink without a slug: {href!r}")
        return InternalPermalink(segments[3], text)

    raise UnrecognizedLinkShapeError(f"Unrecognized internal link: {href!r}")


def _parse_anchor(tag):
    """Repairs one anchor fragment and returns its (href, text)."""
    anchor = BeautifulSoup(tag, 'html.parser').find('a')
    if anchor is None or not anchor.get('href'):
        raise MalformedLinkError(f"Anchor without href: {tag[:200]!r}")
    return anchor['href'], anchor.get_text().strip()


# --- Rewriting ---
def rewrite_links(content):
    """Replaces every anchor in `content` with its wiki-markup rendering."""
    links = {}
    for tag in ANCHOR_RE.findall(content):
        if tag in links:
            continue
        href, text = _parse_anchor(tag)
        rule = classify_link(href, text)
        logger.debug(f"Link {href} -> {type(rule).__name__}")
        links[tag] = rule.render()

    return replace_all(content, links)
