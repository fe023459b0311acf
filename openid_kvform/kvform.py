# -*- test-case-name: openid_kvform.test.test_kvform -*-
"""Key-Value Form encoding of OpenID messages.

A message in Key-Value Form is a sequence of lines.  Each line begins
with a key, followed by a colon and the value associated with the key.
The line is terminated by a single newline (UCS codepoint 10, "\\n")::

    mode:error
    error:This is an example message

Key-Value Form is used for signature calculation and for direct
responses to Relying Parties.  The message must be encoded in UTF-8 to
produce a byte string.
"""
import logging

from .constants import COLON, NEWLINE
from .oidutil import force_text, is_valid_text, string_to_text, text_to_octets

__all__ = ['Form', 'seqToKV', 'dictToKV', 'checkPair', 'KVFormError', 'EmptyValue', 'InvalidEncoding',
           'ForbiddenCharacterInKey', 'WhitespaceInKey', 'WhitespaceInValue']


_LOGGER = logging.getLogger(__name__)


class KVFormError(ValueError):
    """Raised if a message can not be represented in Key-Value Form.

    @ivar key: The key of the offending pair.
    """

    def __init__(self, message, key=None):
        super(KVFormError, self).__init__(message)
        self.key = key


class EmptyValue(KVFormError):
    """Raised if a value is empty."""


class InvalidEncoding(KVFormError):
    """Raised if a key or a value is not valid UTF-8 text."""


class ForbiddenCharacterInKey(KVFormError):
    """Raised if a key contains a colon or a newline."""


class WhitespaceInKey(KVFormError):
    """Raised if a key begins or ends with whitespace."""


class WhitespaceInValue(KVFormError):
    """Raised if a value begins or ends with whitespace."""


def _isSpace(char):
    # The information separators U+001C to U+001F are not whitespace in
    # Key-Value Form, even though str.isspace() says they are.
    return char.isspace() and not '\x1c' <= char <= '\x1f'


def _hasOuterWhitespace(text):
    return _isSpace(text[:1]) or _isSpace(text[-1:])


def checkPair(key, value):
    """Check that the pair can be a line of a Key-Value Form message.

    Additional characters, including whitespace, must not be added
    before or after the colon or newline.

    @raises KVFormError: If the pair is not valid.
    """
    if value is None or (isinstance(value, (str, bytes)) and not value):
        raise EmptyValue('Empty value for key %r' % (key,), key)

    if not is_valid_text(key):
        raise InvalidEncoding('Key must consist of valid UTF-8 text: %r' % (key,), key)
    if not is_valid_text(value):
        raise InvalidEncoding('Value for key %r must consist of valid UTF-8 text: %r' % (key, value), key)

    key = force_text(key)
    value = force_text(value)

    # Only the key is checked for separators.  A value containing a colon or
    # a newline is accepted, even though a newline breaks the line structure.
    if NEWLINE in key or COLON in key:
        raise ForbiddenCharacterInKey('Key contains a newline or colon: %r' % (key,), key)

    if _hasOuterWhitespace(key):
        raise WhitespaceInKey('Key has whitespace at beginning or end: %r' % (key,), key)

    if _hasOuterWhitespace(value):
        raise WhitespaceInValue('Value for key %r has whitespace at beginning or end: %r' % (key, value), key)


def seqToKV(seq, strict=False):
    """Represent a sequence of pairs of strings as newline-terminated
    key:value pairs. The pairs are generated in the order given.

    @param seq: The pairs
    @type seq: Iterable[Tuple[str, str]], bytes values are deprecated.

    @param strict: Whether to check every pair before it is serialized.

    @return: A string representation of the sequence
    @rtype: str

    @raises KVFormError: If C{strict} is set and a pair is not valid.
    """
    def err(msg):
        _LOGGER.debug('seqToKV warning: %s', msg)

    lines = []
    for k, v in seq:
        if strict:
            checkPair(k, v)

        if not isinstance(k, (str, bytes)):
            err('Converting key to text: %r' % (k,))
            k = str(k)
        if not isinstance(v, (str, bytes)):
            err('Converting value to text: %r' % (v,))
            v = str(v)

        k = string_to_text(k, "Binary values for keys are deprecated. Use text input instead.")
        v = string_to_text(v, "Binary values for values are deprecated. Use text input instead.")

        lines.append(k + COLON + v + NEWLINE)

    return ''.join(lines)


def dictToKV(d):
    """Serialize a dictionary with its keys sorted."""
    if not d:
        return ''
    seq = sorted(d.items())
    return seqToKV(seq)


class Form(object):
    """A message in Key-Value Form.

    The form works on the dictionary it is created with, it is never
    copied.  Callers which share a form between threads have to
    synchronize access themselves.

    @ivar fields: Dictionary mapping keys to values.
    @type fields: Dict[str, str]
    """

    def __init__(self, fields=None):
        if fields is None:
            fields = {}
        self.fields = fields

    @classmethod
    def fromPairs(cls, pairs):
        """Construct a form from a sequence of (key, value) pairs."""
        return cls(dict(pairs))

    def __repr__(self):
        return "<%s.%s %r>" % (self.__class__.__module__, self.__class__.__name__, self.fields)

    def __str__(self):
        return self.toKVForm()

    def __len__(self):
        return len(self.fields)

    def __contains__(self, key):
        return key in self.fields

    def __iter__(self):
        return iter(self.fields)

    def __eq__(self, other):
        if isinstance(other, Form):
            other = other.fields
        return self.fields == other

    __hash__ = None

    def items(self):
        return self.fields.items()

    def copy(self):
        return self.__class__(dict(self.fields))

    def get(self, key):
        """Get the value associated with the key.

        Missing keys and empty values are both returned as an empty
        string.

        @rtype: str
        """
        value = self.fields.get(key)
        if value is None:
            return ''
        return force_text(value)

    def set(self, key, value):
        """Set the key to the value, replacing any existing value.

        The pair is not validated.
        """
        if isinstance(key, bytes):
            key = string_to_text(key, "Binary values for keys are deprecated. Use text input instead.")
        if isinstance(value, bytes):
            value = string_to_text(value, "Binary values for values are deprecated. Use text input instead.")
        self.fields[key] = value

    def delete(self, key):
        """Delete the value associated with the key, if there is any."""
        self.fields.pop(key, None)

    def validate(self):
        """Check that every pair of the form is valid Key-Value Form.

        An empty form is valid.  If there are more invalid pairs, it is
        not specified which of them is reported.

        @raises KVFormError: If the form is not valid.
        """
        for key, value in self.fields.items():
            checkPair(key, value)

    def isValid(self):
        """Return whether the form is valid Key-Value Form.

        @rtype: bool
        """
        try:
            self.validate()
        except KVFormError:
            return False
        return True

    def toKVForm(self):
        """Generate the message in Key-Value Form.

        The form is not validated, an invalid form produces a malformed
        message.

        @rtype: str
        """
        return seqToKV(self.fields.items())

    def toKVBytes(self):
        """Generate the message in Key-Value Form encoded in UTF-8.

        @rtype: bytes
        """
        return text_to_octets(self.toKVForm())
