# Module for downloading note pictures and commenter avatars

import glob
import logging
import os
import re
from io import BytesIO

import requests
from PIL import Image, UnidentifiedImageError

import constants # Import constants
from file_handler import ensure_directory

ORIGINAL_SIZE_RE = re.compile(constants.ORIGINAL_SIZE_PATTERN, re.IGNORECASE)


def _download(url, config):
    """Returns the body of `url` as bytes, or None when it cannot be fetched."""
    headers = {'User-Agent': config.get('user_agent', constants.DEFAULT_USER_AGENT)}
    request_timeout = config.get('request_timeout_seconds', constants.DEFAULT_TIMEOUT)
    try:
        response = requests.get(url, headers=headers, timeout=request_timeout)
    except requests.exceptions.RequestException as e:
        logging.warning(f"Failed to download {url}: {e}")
        return None

    try:
        if response.status_code != 200:
            logging.warning(f"Download of {url} failed with status {response.status_code}.")
            return None
        if not response.content:
            logging.warning(f"Downloaded empty content from {url}.")
            return None
        return response.content
    finally:
        response.close()


def original_size_url(url):
    """Rewrites a photo-host size suffix (e.g. `_XL`) to the original size."""
    return ORIGINAL_SIZE_RE.sub(constants.ORIGINAL_SIZE_REPLACEMENT, url)


def find_cached_picture(pictures_dir, date_str, number):
    pattern = f"{glob.escape(date_str)}.{number}{constants.PICTURE_EXTENSION}"
    high_res_pattern = f"{glob.escape(date_str)}.{number}{constants.HIGH_RES_SUFFIX}{constants.PICTURE_EXTENSION}"
    for path in sorted(glob.glob(os.path.join(pictures_dir, pattern)) + glob.glob(os.path.join(pictures_dir, high_res_pattern))):
        if os.path.getsize(path) > 0:
            return os.path.basename(path)
    return None


# --- Pictures ---
def download_picture(url, date_str, number, config):
    """
    Downloads the original-size picture behind `url` into the pictures
    directory and returns its local filename, or None if it is broken.

    The name is `<date_str>.<number>.jpg`, with an `@2x` suffix for pictures
    at least 2000 pixels wide. An existing non-empty file for the same date
    and number is reused without downloading.
    """
    pictures_dir = ensure_directory(config.get('pictures_dir', constants.DEFAULT_PICTURES_DIR))

    cached = find_cached_picture(pictures_dir, date_str, number)
    if cached:
        logging.debug(f"Got cache: {cached}")
        return cached

    url = original_size_url(url)
    logging.info(f"Downloading {url}")
    content = _download(url, config)
    if content is None:
        return None

    try:
        with Image.open(BytesIO(content)) as image:
            width = image.size[0]
    except (UnidentifiedImageError, OSError) as e:
        logging.warning(f"Downloaded picture {url} is not a readable image: {e}")
        return None

    suffix = constants.HIGH_RES_SUFFIX if width >= constants.HIGH_RES_MIN_WIDTH else ''
    filename = f"{date_str}.{number}{suffix}{constants.PICTURE_EXTENSION}"
    with open(os.path.join(pictures_dir, filename), 'wb') as f:
        f.write(content)
    logging.info(f"Saved picture {filename} ({width}px wide)")
    return filename


# --- Avatars ---
def fetch_avatar_if_absent(url, local_name, config):
    """
    Saves a commenter avatar as `local_name` unless it is already there.
    Returns True when the avatar is available locally.
    """
    avatars_dir = ensure_directory(config.get('avatars_dir', constants.DEFAULT_AVATARS_DIR))
    path = os.path.join(avatars_dir, local_name)
    if os.path.exists(path) and os.path.getsize(path) > 0:
        logging.debug(f"Got cache: {local_name}")
        return True

    content = _download(url, config)
    if content is None:
        logging.warning(f"Skipping avatar {local_name}.")
        return False

    try:
        with open(path, 'wb') as f:
            f.write(content)
    except OSError as e:
        logging.warning(f"Could not save avatar {path}: {e}")
        return False
    logging.info(f"Saved avatar {local_name}")
    return True
