"""Cross-platform filename sanitization for downloaded documents.

This module converts server-proposed filenames and document titles into names
that are valid on Windows, macOS and Linux file systems.
"""

import re

# Characters reserved on at least one major file system
RESERVED_CHARS = re.compile(r'[/\\:*?"<>|]')

# C0 control characters and DEL
CONTROL_CHARS = re.compile(r'[\x00-\x1f\x7f]')

MAX_FILENAME_LENGTH = 200


class FilenameSanitizer:
    """Converts arbitrary titles into portable filenames.

    Conversion rules:
    - Reserved characters (/, \\, :, *, ?, ", <, >, |) → underscore (_)
    - Control characters (including newlines, tabs and NUL) → removed
    - Runs of spaces → collapsed to a single space
    - Leading/trailing spaces → trimmed
    - Length capped at 200 characters

    Examples:
        - "Q3: Plan/Review" → "Q3_ Plan_Review"
        - "  Meeting   notes  " → "Meeting notes"
    """

    @staticmethod
    def sanitize(name: str) -> str:
        """Sanitize a title or proposed filename.

        Args:
            name: Raw name, possibly containing reserved or control characters

        Returns:
            A portable filename (may be empty if nothing printable remains)

        Examples:
            >>> FilenameSanitizer.sanitize('bad:name?')
            'bad_name_'
            >>> FilenameSanitizer.sanitize('  hello  ')
            'hello'
        """
        cleaned = CONTROL_CHARS.sub('', name)
        cleaned = RESERVED_CHARS.sub('_', cleaned)
        cleaned = re.sub(r' {2,}', ' ', cleaned).lstrip(' ')
        return cleaned[:MAX_FILENAME_LENGTH].rstrip(' ')

    @staticmethod
    def strip_extension(name: str) -> str:
        """Remove the final extension of a filename, ignoring dots in directories.

        Examples:
            >>> FilenameSanitizer.strip_extension('report.final.docx')
            'report.final'
            >>> FilenameSanitizer.strip_extension('dir.v2/README')
            'dir.v2/README'
        """
        last_sep = max(name.rfind('/'), name.rfind('\\'))
        last_dot = name.rfind('.')
        return name[:last_dot] if last_dot > last_sep else name
