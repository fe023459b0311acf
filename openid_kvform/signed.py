# -*- test-case-name: openid_kvform.test.test_signed -*-
"""Signature base strings of OpenID messages.

The signature of a message covers the fields listed in
C{openid.signed}.  These fields are serialized in Key-Value Form in the
order of the list, each key prefixed with C{openid.}.  The resulting
octets are the input of the signature algorithm, so the receiving side
must be able to rebuild them exactly.
"""
import logging

from .constants import OPENID_PREFIX, SIGNED_FIELDS_SEPARATOR
from .kvform import Form, seqToKV
from .oidutil import string_to_text, text_to_octets

__all__ = ['SignedForm']


_LOGGER = logging.getLogger(__name__)


class SignedForm(object):
    """A form together with the ordered list of its fields to sign.

    @ivar form: The form with the values, its keys are not prefixed.
    @type form: L{Form}

    @ivar fields: Names of the fields to sign, without the C{openid.} prefix.
    @type fields: List[str]
    """

    def __init__(self, form, fields):
        if not isinstance(form, Form):
            form = Form(form)
        self.form = form
        self.fields = [string_to_text(f, "Binary values for fields are deprecated. Use text input instead.")
                       for f in fields]

    @classmethod
    def fromSignedList(cls, form, signed):
        """Construct a signed form from the value of C{openid.signed}.

        @param signed: Comma separated names of the fields to sign.
        @type signed: str, bytes is deprecated
        """
        signed = string_to_text(signed, "Binary values for signed are deprecated. Use text input instead.")
        if signed:
            fields = signed.split(SIGNED_FIELDS_SEPARATOR)
        else:
            fields = []
        return cls(form, fields)

    def __repr__(self):
        return "<%s.%s %r %r>" % (self.__class__.__module__, self.__class__.__name__, self.fields, self.form.fields)

    def signedFieldList(self):
        """Return the names of the signed fields as in C{openid.signed}.

        @rtype: str
        """
        return SIGNED_FIELDS_SEPARATOR.join(self.fields)

    def signedPairs(self):
        """Return the prefixed pairs to sign, in the order of the fields.

        If the form is empty or any of the fields is missing or empty,
        no pairs are returned at all.

        @rtype: List[Tuple[str, str]]
        """
        if not self.form:
            _LOGGER.debug('Nothing to sign, the form is empty.')
            return []

        pairs = []
        for field in self.fields:
            value = self.form.get(field)
            if not value:
                _LOGGER.debug('Signed field %r is missing in %r.', field, self.form)
                return []
            pairs.append((OPENID_PREFIX + field, value))
        return pairs

    def signedString(self):
        """Return the signature base string in Key-Value Form.

        @return: The serialized pairs or an empty string if they can't
            be signed.
        @rtype: str
        """
        return seqToKV(self.signedPairs())

    def signedBytes(self):
        """Return the signature base string encoded in UTF-8.

        @rtype: bytes
        """
        return text_to_octets(self.signedString())
