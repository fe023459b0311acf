"""This module contains the text handling utilities shared by the
Key-Value Form modules.

Keys and values are handled as text.  Binary input is still accepted,
but it is deprecated.  It is decoded using UTF-8 with the
C{surrogateescape} error handler, so octets which are not valid UTF-8
are kept as lone surrogates.  Such text is reported by validation and
is encoded back to the very same octets by C{L{text_to_octets}}.
"""
import codecs
import warnings

__all__ = ['string_to_text', 'force_text', 'is_valid_text', 'text_to_octets']

ENCODING = 'utf-8'
SURROGATES_ERRORS = 'openid-kvform-surrogates'


def string_to_text(value, deprecate_msg):
    """
    Return input string coverted to text string.

    If input is text, it is returned as is.
    If input is binary, it is decoded using UTF-8 to text.
    """
    assert isinstance(value, (str, bytes))
    if isinstance(value, bytes):
        warnings.warn(deprecate_msg, DeprecationWarning)
        value = value.decode(ENCODING, 'surrogateescape')
    return value


def force_text(value):
    """
    Return a text object representing value.
    """
    if isinstance(value, str):
        # It's already a text, just return it.
        return value
    elif isinstance(value, bytes):
        # It's a byte string, decode it.
        return value.decode(ENCODING, 'surrogateescape')
    else:
        # It's not a string, convert it.
        return str(value)


def is_valid_text(value):
    """Return whether value is a sequence of Unicode scalar values.

    @type value: str or bytes

    @rtype: bool
    """
    try:
        if isinstance(value, bytes):
            value.decode(ENCODING)
        elif isinstance(value, str):
            value.encode(ENCODING)
        else:
            return False
    except UnicodeError:
        return False
    return True


def _escape_surrogates(error):
    """Encode lone surrogates of the failing range.

    Surrogates U+DC80 to U+DCFF are the octets escaped on decoding, any
    other surrogate is encoded as is.
    """
    if not isinstance(error, UnicodeEncodeError):
        raise error
    octets = []
    for char in error.object[error.start:error.end]:
        code = ord(char)
        if 0xDC80 <= code <= 0xDCFF:
            octets.append(bytes([code - 0xDC00]))
        else:
            octets.append(char.encode(ENCODING, 'surrogatepass'))
    return b''.join(octets), error.end


codecs.register_error(SURROGATES_ERRORS, _escape_surrogates)


def text_to_octets(value):
    """Return the UTF-8 encoded octets of the text.

    Lone surrogates produced from invalid binary input are turned back
    into the original octets, any other surrogate is encoded as is.
    """
    return value.encode(ENCODING, SURROGATES_ERRORS)
