# Module for fetching archived blog pages from the Wayback Machine

import requests
import logging
import re
import constants # Import constants
from errors import FetchError

PAGE_LINK_RE = re.compile(constants.LISTING_PAGE_PATTERN)
NOTE_LINK_RE = re.compile(constants.NOTE_URL_PATTERN)


# --- Page Fetching ---
def fetch_page(url, config):
    """
    Fetches one archived page and returns its HTML as text.
    Raises FetchError on transport failure or a non-200 status.
    """
    headers = {'User-Agent': config.get('user_agent', constants.DEFAULT_USER_AGENT)}
    request_timeout = config.get('request_timeout_seconds', constants.DEFAULT_TIMEOUT)

    logging.info(f"Getting {url}")
    try:
        response = requests.get(url, headers=headers, timeout=request_timeout)
    except requests.exceptions.RequestException as e:
        raise FetchError(f"Request for {url} failed: {e}") from e

    try:
        if response.status_code != 200:
            raise FetchError(f"Wayback Machine returned status {response.status_code} for {url}")
        response.encoding = 'utf-8' # The blog was served as UTF-8
        return response.text
    finally:
        response.close()


# --- Listing Crawl ---
def fetch_note_links(start_url, config):
    """
    Walks the paginated note listing starting at `start_url` and returns the
    archived note URLs in the order they were first seen.
    """
    timestamp = config.get('archive_timestamp', constants.ARCHIVE_TIMESTAMP)
    # The start page is page 1
    pages = {1: True}
    notes = {}
    url = start_url

    while url is not None:
        content = fetch_page(url, config)

        for page in PAGE_LINK_RE.findall(content):
            pages.setdefault(int(page), False)

        for note_url in NOTE_LINK_RE.findall(content):
            notes.setdefault(note_url, None)

        unvisited = [page for page, visited in pages.items() if not visited]
        if unvisited:
            page = unvisited[0]
            pages[page] = True
            url = constants.LISTING_PAGE_URL_FORMAT.format(timestamp=timestamp, page=page)
        else:
            url = None

    logging.info(f"Received {len(notes)} note urls from {len(pages)} listing pages.")
    return list(notes)
