# Main script to orchestrate the blog migration
import sys
import hashlib
import logging
from functools import partial

from config_loader import load_config
from logger_setup import setup_logging
from api_clients.wayback_client import fetch_note_links, fetch_page
from api_clients.picture_client import download_picture, fetch_avatar_if_absent
from errors import MigrationError
from file_handler import cached_or_compute
from note_parser import parse_note
from sql_dump import SqlDumpWriter
import constants


def note_cache_key(url):
    return constants.NOTE_CACHE_KEY_PREFIX + hashlib.sha1(url.encode('utf-8')).hexdigest()


def fetch_avatars(note, config):
    """Downloads the avatars of a note's commenters; failures are only logged."""
    fetched = 0
    for comment in note.comments:
        if comment.avatar_url and comment.avatar_name:
            if fetch_avatar_if_absent(comment.avatar_url, comment.avatar_name, config=config):
                fetched += 1
    return fetched


def migrate(config):
    """Runs the whole migration. Raises MigrationError on the first structural problem."""
    cache_dir = config['cache_dir']
    resolve_picture = partial(download_picture, config=config)

    # 1. Collect note URLs from the listing pages
    note_urls = cached_or_compute(
        constants.NOTE_LINKS_CACHE_KEY,
        lambda: fetch_note_links(config['start_url'], config),
        cache_dir,
    )
    total_urls = len(note_urls)
    logging.info(f"Starting migration of {total_urls} notes.")

    comment_count = 0
    avatar_count = 0

    # 2. Parse every note and write it out
    with SqlDumpWriter(config['notes_dump_file'], config['tags_dump_file'], config['comments_dump_file']) as writer:
        for index, url in enumerate(note_urls, start=1):
            progress_percent = (index / total_urls) * 100
            logging.info(f"Processing note {index}/{total_urls} ({progress_percent:.1f}%): {url}")

            content = cached_or_compute(note_cache_key(url), lambda: fetch_page(url, config), cache_dir)
            note = parse_note(content, resolve_picture, source_url=url, tz_name=config['source_timezone'])
            writer.write_note(note)

            comment_count += len(note.comments)
            avatar_count += fetch_avatars(note, config)

    logging.info("--- Migration Summary ---")
    logging.info(f"Notes written: {writer.notes_written}")
    logging.info(f"Comments written: {comment_count}")
    logging.info(f"Avatars available: {avatar_count}")
    return writer.notes_written


# --- Main Execution ---
def main():
    """Main function to orchestrate the migration."""
    config = load_config()
    setup_logging(config['log_file'])
    logging.info("--- Starting Blog Migration ---")

    try:
        migrate(config)
    except MigrationError as e:
        logging.critical(f"Migration aborted: {type(e).__name__}: {e}")
        logging.critical("Dump files are incomplete; fix the cause and re-run from scratch.")
        sys.exit(1)

    logging.info("--- Blog Migration Finished ---")


if __name__ == "__main__":
    main()
