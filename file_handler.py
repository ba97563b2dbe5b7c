# Module for file system operations (cache keys, on-disk response cache)

import os
import json
import logging
import re
import constants # Import constants


# --- Key Sanitizing ---
def sanitize_filename(name):
    """Sanitizes a cache key or name to be used as a valid filename."""
    # Path separators would escape the cache directory
    name = name.replace('/', '_').replace('\\', '_')
    # Remove other invalid characters
    name = re.sub(r'[*?:\'"<>|]', '', name)
    name = name.strip(' .')
    name = name.replace(' ', '_')
    name = name[:constants.FILENAME_MAX_LENGTH]
    name = name.strip(' .')
    if not name:
        name = constants.UNTITLED_FILENAME
    return name


def ensure_directory(path):
    """Creates `path` (and parents) if needed and returns it."""
    os.makedirs(path, exist_ok=True)
    return path


# --- Response Cache ---
def cache_path(key, cache_dir):
    return os.path.join(cache_dir, sanitize_filename(key))


def load_cached(key, cache_dir):
    """
    Returns (True, value) when `key` is cached, (False, None) otherwise.
    A corrupt entry counts as a miss and is recomputed.
    """
    path = cache_path(key, cache_dir)
    if not os.path.exists(path):
        return False, None
    try:
        with open(path, 'r', encoding='utf-8') as f:
            value = json.load(f)
        logging.debug(f"Got cache: {os.path.basename(path)}")
        return True, value
    except json.JSONDecodeError:
        logging.warning(f"Could not decode JSON from cache file {path}. Fetching again.")
        return False, None


def save_cached(key, value, cache_dir):
    ensure_directory(cache_dir)
    path = cache_path(key, cache_dir)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(value, f, ensure_ascii=False)
    logging.debug(f"Saved cache: {os.path.basename(path)}")


def cached_or_compute(key, producer, cache_dir):
    """Returns the cached value for `key`, calling `producer()` and caching its result on a miss."""
    found, value = load_cached(key, cache_dir)
    if found:
        return value
    value = producer()
    save_cached(key, value, cache_dir)
    return value
