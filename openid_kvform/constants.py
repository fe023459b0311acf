"""Basic constants for the Key-Value Form encoding."""

# Key-Value Form is defined in the OpenID specification
# http://openid.net/specs/openid-authentication-2_0.html#kvform
COLON = ':'
NEWLINE = '\n'

# Separator of field names in openid.signed.
SIGNED_FIELDS_SEPARATOR = ','

# Prepended to every key of a signed field when the signature base string is built.
OPENID_PREFIX = 'openid.'
