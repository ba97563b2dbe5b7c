# Module for turning Cyrillic tag names into Latin slugs

import functools
import logging
import re

from slugify import slugify

logger = logging.getLogger(__name__)

SLUG_RE = re.compile(r'^[a-z-]*$')
NON_SLUG_RE = re.compile(r'[^a-z-]')

# Russian reading rules where the generic ASCII folding reads differently
RUSSIAN_READING_RULES = (
    ('щ', 'shch'),
    ('ё', 'e'),
    ('й', 'y'),
    ('ю', 'yu'),
    ('я', 'ya'),
    ('х', 'kh'),
    ('ц', 'ts'),
    ('ы', 'y'),
    ('ь', ''),
    ('ъ', ''),
)


class Transliterator:
    """Cyrillic to URL-safe Latin converter."""

    def __init__(self, rules=RUSSIAN_READING_RULES):
        # Capitalised letters need their own rules, folding lowercases later
        self.replacements = [[cyr, lat] for cyr, lat in rules]
        self.replacements += [[cyr.upper(), lat] for cyr, lat in rules]

    def transliterate(self, text):
        """Returns `text` as a slug made of a-z and hyphens only."""
        if SLUG_RE.match(text):
            return text
        # Hyphens of the source are kept as they are, anything else outside
        # a-z is dropped without leaving a separator behind
        parts = [
            slugify(part, replacements=self.replacements, separator='', lowercase=True)
            for part in text.split('-')
        ]
        return NON_SLUG_RE.sub('', '-'.join(parts))


@functools.lru_cache(maxsize=None)
def get_transliterator():
    """Returns the process-wide transliterator, building it on first use."""
    logger.debug("Creating transliterator")
    return Transliterator()


def to_translit(text):
    return get_transliterator().transliterate(text)
