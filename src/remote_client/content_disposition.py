"""Content-Disposition header parsing.

Extracts the download filename a server proposes in either the plain
``filename`` parameter or the RFC 5987 ``filename*`` form.
"""

from typing import Optional
from urllib.parse import unquote


def _strip_quotes(value: str) -> str:
    if len(value) >= 2 and value.startswith('"') and value.endswith('"'):
        return value[1:-1]
    return value


def parse_filename(disposition: Optional[str]) -> Optional[str]:
    """Return the filename component from a Content-Disposition header.

    The first ``filename*`` or ``filename`` parameter wins. ``filename*`` values
    have their charset prefix (``UTF-8''``) removed and are percent-decoded;
    values that do not decode cleanly are returned undecoded.

    Args:
        disposition: Raw header value (may be None)

    Returns:
        The filename, or None if the header carries none

    Examples:
        >>> parse_filename('attachment; filename="Report.docx"')
        'Report.docx'
        >>> parse_filename("attachment; filename*=UTF-8''My%20Doc.txt")
        'My Doc.txt'
    """
    if not disposition:
        return None

    for raw_part in disposition.split(';'):
        key, sep, value = raw_part.strip().partition('=')
        key = key.strip().lower()
        if not sep or not key:
            continue
        value = value.strip()

        if key == 'filename*':
            _, marker, encoded = value.partition("''")
            candidate = _strip_quotes(encoded if marker else value)
            try:
                return unquote(candidate, errors='strict')
            except UnicodeDecodeError:
                return candidate

        if key == 'filename':
            return _strip_quotes(value)

    return None
