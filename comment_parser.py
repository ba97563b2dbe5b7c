# Module for extracting reader comments from an archived note page

import logging
import re
from datetime import datetime
from zoneinfo import ZoneInfo

import constants
from errors import MalformedCommentError, MissingFieldError
from models import CommentRecord, IdentityProvider

logger = logging.getLogger(__name__)

COMMENT_ID_RE = re.compile(constants.COMMENT_ID_PATTERN)
COMMENT_DATE_RE = re.compile(constants.COMMENT_DATE_PATTERN)
GRAVATAR_HASH_RE = re.compile(constants.GRAVATAR_HASH_PATTERN)
VK_PROFILE_RE = re.compile(constants.VK_PROFILE_PATTERN)
ARCHIVE_PREFIX_RE = re.compile(constants.ARCHIVE_ASSET_PREFIX_PATTERN)


def _comment_blocks(soup):
    """Yields comment containers that carry an author marker."""
    for block in soup.find_all(id=COMMENT_ID_RE):
        if block.find(class_=constants.COMMENT_AUTHOR_CLASS) is not None:
            yield block


def _author(block):
    author_tag = block.find(class_=constants.COMMENT_AUTHOR_CLASS)
    name_tag = author_tag.find(class_='fn') or author_tag
    name = name_tag.get_text(' ', strip=True)
    if not name:
        raise MissingFieldError(f"Comment {block.get('id')} has no author name")
    return name


def _timestamp(block, tz):
    match = COMMENT_DATE_RE.search(block.get_text(' '))
    if not match:
        raise MissingFieldError(f"Comment {block.get('id')} has no date")
    day, month, year, hour, minute = (int(part) for part in match.groups())
    return datetime(year, month, day, hour, minute, tzinfo=tz)


def _text(block):
    paragraphs = [p.get_text().strip() for p in block.find_all('p')]
    return '\n\n'.join(p for p in paragraphs if p)


def _is_vk_login(block):
    for img in block.find_all('img'):
        if constants.VK_LOGIN_LABEL in (img.get('alt'), img.get('title')):
            return True
    return False


def _identity(block):
    """Returns (provider, account_key, avatar_url, avatar_name) for a comment."""
    avatar = block.find('img', class_='avatar')
    src = ARCHIVE_PREFIX_RE.sub('', avatar['src']) if avatar is not None and avatar.get('src') else None

    if _is_vk_login(block):
        profile = block.find('a', href=VK_PROFILE_RE)
        if profile is None:
            raise MalformedCommentError(f"Comment {block.get('id')} is a vk.com login without a profile link")
        account_key = VK_PROFILE_RE.search(profile['href']).group(1)
        avatar_name = f"vk-{account_key}{constants.AVATAR_EXTENSION}" if src else None
        return IdentityProvider.VK, account_key, src, avatar_name

    if src and constants.GRAVATAR_MARKER in src:
        match = GRAVATAR_HASH_RE.search(src)
        if match is None:
            logger.debug(f"Comment {block.get('id')} has a gravatar without a hash: {src}")
            return IdentityProvider.NONE, None, None, None
        gravatar_hash = match.group(1)
        avatar_url = constants.GRAVATAR_AVATAR_URL_FORMAT.format(hash=gravatar_hash)
        return IdentityProvider.EMAIL, gravatar_hash, avatar_url, f"{gravatar_hash}{constants.AVATAR_EXTENSION}"

    return IdentityProvider.NONE, None, None, None


def parse_comments(soup, tz_name=constants.DEFAULT_SOURCE_TIMEZONE):
    """Extracts every comment of a parsed note page, in page order."""
    tz = ZoneInfo(tz_name)
    comments = []
    for block in _comment_blocks(soup):
        provider, account_key, avatar_url, avatar_name = _identity(block)
        comments.append(CommentRecord(
            author=_author(block),
            text=_text(block),
            timestamp=_timestamp(block, tz),
            provider=provider,
            account_key=account_key,
            avatar_url=avatar_url,
            avatar_name=avatar_name,
        ))
    logger.debug(f"Found {len(comments)} comments")
    return comments
