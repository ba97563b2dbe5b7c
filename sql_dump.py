# Module for writing migrated notes as SQL dumps for the new blog schema

import logging
import os

import constants
from models import IdentityProvider

logger = logging.getLogger(__name__)

SQL_ESCAPES = {
    '\n': '\\n',
    '\r': '\\r',
    '\0': '\\000',
    "'": "\\'",
}

NOTE_SQL = """INSERT INTO e2BlogNotes
(
    Title, Text, FormatterID, Uploads, IsPublished, IsCommentable, IsVisible,
    IsFavourite, Stamp, LastModified, Offset, IsDST, IsIndexed, IsExternal,
    SourceID, SourceNoteURL
) VALUES (
    '{title}', '{text}', '{formatter}', '{uploads}', 1, 1, 1, 0,
    {stamp}, {stamp}, {offset}, {is_dst}, 0, 0, 0, 0
);

"""

ALIAS_SQL = """INSERT INTO e2BlogAliases (EntityType, EntityID, Alias, Stamp)
SELECT '{entity_type}', n.ID, '{alias}', {stamp}
FROM e2BlogNotes n
WHERE Stamp={stamp};

"""

TAG_SQL = """INSERT INTO e2BlogKeywords (Keyword, OriginalAlias, Uploads, IsFavourite)
SELECT '{name}', '{slug}', 'a:0:{{}}', 0
FROM DUAL
WHERE NOT EXISTS (
    SELECT * FROM e2BlogKeywords
    WHERE OriginalAlias='{slug}' LIMIT 1
);

INSERT INTO e2BlogNotesKeywords(SubsetID, NoteID, KeywordID)
SELECT 0, n.ID, (SELECT ID FROM e2BlogKeywords WHERE OriginalAlias='{slug}' LIMIT 1)
FROM e2BlogNotes n
WHERE Stamp={stamp};

"""

GIP_USER_SQL = """INSERT INTO e2BlogGIPUsers (GIP, GIPAuthorID, Name, Email, Link)
SELECT '{gip}', '{account}', '{name}', '', ''
FROM DUAL
WHERE NOT EXISTS (
    SELECT * FROM e2BlogGIPUsers
    WHERE GIP='{gip}' AND GIPAuthorID='{account}' LIMIT 1
);

"""

COMMENT_SQL = """INSERT INTO e2BlogComments
(
    NoteID, AuthorName, AuthorEmail, Text, Reply, IsVisible, IsAnswerAware,
    IsSubscriber, IsSpamSuspect, IsNew, Stamp, LastModified, IP,
    IsGIPUsed, GIPAuthorID
)
SELECT n.ID, '{author}', '', '{text}', '', 1, 0, 0, 0, 0, {stamp}, {stamp}, '',
    {is_gip}, {gip_author}
FROM e2BlogNotes n
WHERE Stamp={note_stamp};

"""

GIP_AUTHOR_SELECT = "(SELECT ID FROM e2BlogGIPUsers WHERE GIP='{gip}' AND GIPAuthorID='{account}' LIMIT 1)"


# --- Value Formatting ---
def escape_sql(value):
    """Escapes newline, carriage return, NUL and single quote for a quoted SQL literal."""
    return ''.join(SQL_ESCAPES.get(char, char) for char in value)


def php_serialize_list(items):
    """Serializes a list of strings the way the blog engine stores upload lists."""
    parts = []
    for index, item in enumerate(items):
        parts.append(f'i:{index};s:{len(item.encode("utf-8"))}:"{item}";')
    return f"a:{len(items)}:{{{''.join(parts)}}}"


# --- Dump Writer ---
class SqlDumpWriter:
    """
    Appends INSERT statements for migrated notes to three dump files:
    notes with their aliases, keywords with their note links, and comments.

    Files are truncated on open, so every run regenerates the dumps.
    """

    def __init__(self, notes_path, tags_path, comments_path):
        self.paths = (notes_path, tags_path, comments_path)
        self.notes_file = None
        self.tags_file = None
        self.comments_file = None
        self.notes_written = 0

    def open(self):
        for path in self.paths:
            directory = os.path.dirname(path)
            if directory:
                os.makedirs(directory, exist_ok=True)

        notes_path, tags_path, comments_path = self.paths
        self.notes_file = open(notes_path, 'w', encoding='utf-8', newline='\n')
        self.tags_file = open(tags_path, 'w', encoding='utf-8', newline='\n')
        self.comments_file = open(comments_path, 'w', encoding='utf-8', newline='\n')

        self.notes_file.write("TRUNCATE TABLE e2BlogNotes;\n")
        self.notes_file.write("TRUNCATE TABLE e2BlogAliases;\n")
        self.tags_file.write("TRUNCATE TABLE e2BlogKeywords;\n")
        self.tags_file.write("TRUNCATE TABLE e2BlogNotesKeywords;\n")
        self.comments_file.write("TRUNCATE TABLE e2BlogComments;\n")
        self.comments_file.write("TRUNCATE TABLE e2BlogGIPUsers;\n")
        logger.info(f"Writing SQL dumps to {', '.join(self.paths)}")
        return self

    def close(self):
        for f in (self.notes_file, self.tags_file, self.comments_file):
            if f is not None:
                f.close()
        self.notes_file = self.tags_file = self.comments_file = None

    def __enter__(self):
        return self.open()

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def write_note(self, note):
        """Writes the note, its alias, keywords and comments."""
        self.notes_file.write(NOTE_SQL.format(
            title=escape_sql(note.title),
            text=escape_sql(note.body),
            formatter=constants.NOTE_FORMATTER_ID,
            uploads=escape_sql(php_serialize_list(note.images)),
            stamp=note.stamp,
            offset=constants.NOTE_UTC_OFFSET_SECONDS,
            is_dst=constants.NOTE_IS_DST,
        ))
        if note.alias:
            self.notes_file.write(ALIAS_SQL.format(
                entity_type=constants.ALIAS_ENTITY_TYPE,
                alias=escape_sql(note.alias),
                stamp=note.stamp,
            ))

        for tag in note.tags:
            self.write_tag(tag, note.stamp)
        for comment in note.comments:
            self.write_comment(comment, note.stamp)

        self.notes_written += 1

    def write_tag(self, tag, note_stamp):
        self.tags_file.write(TAG_SQL.format(
            name=escape_sql(tag.text),
            slug=escape_sql(tag.slug),
            stamp=note_stamp,
        ))

    def write_comment(self, comment, note_stamp):
        is_gip = comment.provider is not IdentityProvider.NONE and comment.account_key
        gip_author = 'NULL'
        if is_gip:
            gip = comment.provider.value
            account = escape_sql(comment.account_key)
            self.comments_file.write(GIP_USER_SQL.format(
                gip=gip,
                account=account,
                name=escape_sql(comment.author),
            ))
            gip_author = GIP_AUTHOR_SELECT.format(gip=gip, account=account)

        self.comments_file.write(COMMENT_SQL.format(
            author=escape_sql(comment.author),
            text=escape_sql(comment.text),
            stamp=int(comment.timestamp.timestamp()),
            is_gip=1 if is_gip else 0,
            gip_author=gip_author,
            note_stamp=note_stamp,
        ))
