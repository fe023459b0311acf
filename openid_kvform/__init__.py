"""
This package is an implementation of the Key-Value Form encoding of the
OpenID Authentication 2.0 specification in Python.  For building,
validating and serializing messages, see the C{L{openid_kvform.kvform}}
module.  For the signature base string of a message, see the
C{L{openid_kvform.signed}} module.
"""
from .kvform import (EmptyValue, ForbiddenCharacterInKey, Form, InvalidEncoding, KVFormError, WhitespaceInKey,
                     WhitespaceInValue, dictToKV, seqToKV)
from .signed import SignedForm

__version__ = '1.0.0'

# Parse the version info
try:
    version_info = tuple(int(part) for part in __version__.split('.'))
except ValueError:
    version_info = (None, None, None)
else:
    if len(version_info) != 3:
        version_info = (None, None, None)

__all__ = ['Form', 'SignedForm', 'KVFormError', 'EmptyValue', 'InvalidEncoding', 'ForbiddenCharacterInKey',
           'WhitespaceInKey', 'WhitespaceInValue', 'seqToKV', 'dictToKV']
