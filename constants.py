# constants.py - Define constants used throughout the application

# --- Archived Site ---
ARCHIVE_TIMESTAMP = "20170923015827"
SITE_HOST = "glazelki.ru"
SITE_ORIGIN = f"http://{SITE_HOST}/"
WAYBACK_BASE_URL = "https://web.archive.org/web/"
DEFAULT_START_URL = f"{WAYBACK_BASE_URL}{ARCHIVE_TIMESTAMP}/http://{SITE_HOST}:80/"
LISTING_PAGE_URL_FORMAT = WAYBACK_BASE_URL + "{timestamp}/" + SITE_ORIGIN + "page/{page}"

# --- Archive URL Patterns ---
LISTING_PAGE_PATTERN = r"https://web\.archive\.org/web/\d+/http://glazelki\.ru/page/(\d+)"
NOTE_URL_PATTERN = r'https://web\.archive\.org/web/\d+/http://glazelki\.ru/\d+/\d+/\d+/[^"/]+'
INTERNAL_LINK_PREFIX_PATTERN = r"https://web\.archive\.org/web/\d+/http://glazelki\.ru/"
EXTERNAL_LINK_PREFIX_PATTERN = r"https://web\.archive\.org/web/\d+/"
ARCHIVE_ASSET_PREFIX_PATTERN = r"https://web\.archive\.org/web/[^/]+/"

# --- Note Page Markers ---
BODY_PATTERN = r"<!-- article-content -->(.*?)<!--(?:Start Share Buttons| /article-content)"
SHARE_WIDGET_MARKER = (
    '<div style="clear:both;"></div><div class="header_text" style="text-align:">'
    "<h3>Поделиться в соц. сетях"
)
DATE_CLASS = "entry-date"
TITLE_CLASS = "art-postheader"
READ_MORE_PATTERN = r'(?:<p>)?<strong><span id="more-\d+"></span></strong>(?:</p>)?'

# --- Markup ---
TAGS_PATH_PREFIX = "/tags/"
SUBSCRIPTION_LINK_FRAGMENT = "feedburner.google.com/fb/a/mailverify"
PHOTO_HOST_PREFIX = "https://img-fotki.yandex.ru"
SMILEY_EMOJI = {
    "simple-smile.png": "🙂",
}
MISSING_PICTURE_NAME = "MISSING.jpg" # Placeholder when a picture cannot be downloaded
PICTURE_NAME_PATTERN = r"^\d{4}\.\d{2}\.\d{2}\.\d{2}\.\d{2}\.\d+(?:@2x)?\.jpg$"

# --- Pictures ---
PICTURE_DATE_FORMAT = "%Y.%m.%d.%H.%M"
HIGH_RES_MIN_WIDTH = 2000
HIGH_RES_SUFFIX = "@2x"
PICTURE_EXTENSION = ".jpg"
ORIGINAL_SIZE_PATTERN = r"_[a-z]+(?:\.[.a-z]+)?$"
ORIGINAL_SIZE_REPLACEMENT = "_orig"

# --- Comments ---
COMMENT_ID_PATTERN = r"^comment-\d+$"
COMMENT_AUTHOR_CLASS = "comment-author"
COMMENT_DATE_PATTERN = r"(\d{2})\.(\d{2})\.(\d{4}) в (\d{1,2}):(\d{2})"
GRAVATAR_MARKER = "gravatar.com/avatar"
GRAVATAR_HASH_PATTERN = r"gravatar\.com/avatar/([0-9a-f]{32})"
GRAVATAR_AVATAR_URL_FORMAT = "https://secure.gravatar.com/avatar/{hash}?s=200&d=404"
VK_LOGIN_LABEL = "vk.com"
VK_PROFILE_PATTERN = r"vk\.com/id(\d+)"
AVATAR_EXTENSION = ".jpg"

# --- Target Schema ---
NOTE_FORMATTER_ID = "neasden"
ALIAS_ENTITY_TYPE = "n"
NOTE_UTC_OFFSET_SECONDS = 3 * 60 * 60 # Written for every note regardless of its date
NOTE_IS_DST = 0

# --- File/Directory Names ---
DEFAULT_CACHE_DIR = "cache"
DEFAULT_PICTURES_DIR = "pictures"
DEFAULT_AVATARS_DIR = "avatars"
DEFAULT_LOG_FILE = "migration.log"
DEFAULT_NOTES_DUMP_FILE = "dump.sql"
DEFAULT_TAGS_DUMP_FILE = "dump2.sql"
DEFAULT_COMMENTS_DUMP_FILE = "dump3.sql"
NOTE_LINKS_CACHE_KEY = "note_links"
NOTE_CACHE_KEY_PREFIX = "note_"
UNTITLED_FILENAME = "untitled" # Fallback for sanitized filenames

# --- Limits ---
FILENAME_MAX_LENGTH = 100 # Max length for sanitized filenames (excluding extension)

# --- Request Defaults ---
DEFAULT_USER_AGENT = "GlazelkiMigrator/1.0"
DEFAULT_TIMEOUT = 60 # Seconds for every network call
DEFAULT_SOURCE_TIMEZONE = "Europe/Moscow"
