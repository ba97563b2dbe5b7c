# Module for replacing embedded images with local picture references

import logging
import re

from bs4 import BeautifulSoup

import constants
from errors import MalformedImageError
from text_utils import replace_all

logger = logging.getLogger(__name__)

IMG_RE = re.compile(r'<img[^>]+>', re.DOTALL)
ARCHIVE_PREFIX_RE = re.compile(constants.ARCHIVE_ASSET_PREFIX_PATTERN)


def _parse_image(tag):
    """Repairs one <img> fragment and returns its attribute dict."""
    img = BeautifulSoup(tag, 'html.parser').find('img')
    if img is None or not img.get('src'):
        raise MalformedImageError(f"Image without src: {tag[:200]!r}")
    return img.attrs


def _smiley_for(src):
    for asset, emoji in constants.SMILEY_EMOJI.items():
        if asset in src:
            return emoji
    return None


def _caption(attrs):
    # An empty alt still wins over title
    if 'alt' in attrs:
        caption = attrs['alt']
    else:
        caption = attrs.get('title', '')
    return caption.rstrip('.')


def rewrite_images(content, ctime, resolve_picture):
    """
    Replaces every <img> tag in `content` with a picture reference.

    `resolve_picture(src, date_bucket, n)` downloads the picture and returns
    its local filename, or None when the source is broken.
    """
    images = {}
    date_bucket = ctime.strftime(constants.PICTURE_DATE_FORMAT)

    for tag in IMG_RE.findall(content):
        if tag in images:
            continue
        attrs = _parse_image(tag)
        src = ARCHIVE_PREFIX_RE.sub('', attrs['src'])

        emoji = _smiley_for(src)
        if emoji is not None:
            images[tag] = emoji
            continue

        number = len(images) + 1
        filename = resolve_picture(src, date_bucket, number)
        if filename is None:
            logger.warning(f"Picture {number} of {date_bucket} is unavailable ({src}), using {constants.MISSING_PICTURE_NAME}")
            filename = constants.MISSING_PICTURE_NAME
        images[tag] = f"{filename}\n{_caption(attrs)}\n"

    return replace_all(content, images)
