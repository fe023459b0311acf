"""Test `openid_kvform.signed` module."""
import unittest
import warnings

from testfixtures import LogCapture, ShouldWarn, StringComparison

from openid_kvform.kvform import Form
from openid_kvform.signed import SignedForm


class TestSignedFieldList(unittest.TestCase):
    """Test `SignedForm.signedFieldList` method."""

    cases = [
        ({'foo': 'bar'}, ['foo'], 'foo'),
        ({'foo': 'bar', 'santa': 'banta'}, ['santa', 'foo'], 'santa,foo'),
        ({'foo': 'bar', 'santa': 'banta'}, ['foo', 'santa'], 'foo,santa'),
        ({'foo': 'bar'}, [], ''),
        ({}, [], ''),
        # Missing fields are listed as well
        ({}, ['foo'], 'foo'),
    ]

    def test_signed_field_list(self):
        for fields, signed, expected in self.cases:
            self.assertEqual(SignedForm(Form(fields), signed).signedFieldList(), expected)


class TestSignedString(unittest.TestCase):
    """Test `SignedForm.signedString` method."""

    cases = [
        ({'foo': 'bar'}, ['foo'], 'openid.foo:bar\n'),
        ({'foo': 'bar', 'santa': 'banta'}, ['santa', 'foo'], 'openid.santa:banta\nopenid.foo:bar\n'),
        ({'foo': 'bar', 'santa': 'banta'}, ['foo', 'santa'], 'openid.foo:bar\nopenid.santa:banta\n'),
        # Only listed fields are signed
        ({'foo': 'bar', 'santa': 'banta'}, ['santa'], 'openid.santa:banta\n'),
        ({'foo': 'bar'}, [], ''),
    ]

    def test_signed_string(self):
        for fields, signed, expected in self.cases:
            self.assertEqual(SignedForm(Form(fields), signed).signedString(), expected)

    def test_plain_dict(self):
        signed_form = SignedForm({'foo': 'bar', 'santa': 'banta'}, ('santa', 'foo'))
        self.assertEqual(signed_form.signedString(), 'openid.santa:banta\nopenid.foo:bar\n')
        self.assertEqual(signed_form.form, Form({'foo': 'bar', 'santa': 'banta'}))

    def test_prefix_not_stored(self):
        form = Form({'mode': 'id_res'})
        SignedForm(form, ['mode']).signedString()
        self.assertEqual(form.fields, {'mode': 'id_res'})
        self.assertEqual(form.get('openid.mode'), '')

    def test_idempotent(self):
        signed_form = SignedForm(Form({'foo': 'bar', 'santa': 'banta'}), ['santa', 'foo'])
        self.assertEqual(signed_form.signedString(), signed_form.signedString())

    def test_follows_form(self):
        form = Form({'foo': 'bar'})
        signed_form = SignedForm(form, ['foo'])
        form.set('foo', 'baz')
        self.assertEqual(signed_form.signedString(), 'openid.foo:baz\n')

    def test_empty_form(self):
        with LogCapture() as logbook:
            self.assertEqual(SignedForm(Form(), ['foo']).signedString(), '')
            self.assertEqual(SignedForm(Form(), []).signedString(), '')
        logbook.check(('openid_kvform.signed', 'DEBUG', 'Nothing to sign, the form is empty.'),
                      ('openid_kvform.signed', 'DEBUG', 'Nothing to sign, the form is empty.'))

    def test_missing_field(self):
        signed_form = SignedForm(Form({'foo': 'bar'}), ['foo', 'santa'])
        with LogCapture() as logbook:
            self.assertEqual(signed_form.signedString(), '')
        logbook.check(('openid_kvform.signed', 'DEBUG', StringComparison("Signed field 'santa' is missing in .*")))

    def test_empty_field(self):
        signed_form = SignedForm(Form({'foo': 'bar', 'santa': ''}), ['foo', 'santa'])
        self.assertEqual(signed_form.signedString(), '')
        self.assertEqual(signed_form.signedPairs(), [])


class TestSignedPairs(unittest.TestCase):
    """Test `SignedForm.signedPairs` method."""

    def test_pairs(self):
        signed_form = SignedForm(Form({'foo': 'bar', 'santa': 'banta'}), ['santa', 'foo'])
        self.assertEqual(signed_form.signedPairs(), [('openid.santa', 'banta'), ('openid.foo', 'bar')])

    def test_missing(self):
        self.assertEqual(SignedForm(Form({'foo': 'bar'}), ['baz']).signedPairs(), [])


class TestSignedBytes(unittest.TestCase):
    """Test `SignedForm.signedBytes` method."""

    def test_utf8(self):
        signed_form = SignedForm(Form({'identity': 'http://example.com/Zo\xeb'}), ['identity'])
        self.assertEqual(signed_form.signedBytes(), b'openid.identity:http://example.com/Zo\xc3\xab\n')

    def test_empty(self):
        self.assertEqual(SignedForm(Form(), ['foo']).signedBytes(), b'')

    def test_invalid_octets(self):
        form = Form({'foo': 'ba\udcfer', 'santa': 'x\ud800'})
        signed_form = SignedForm(form, ['foo', 'santa'])
        self.assertEqual(signed_form.signedBytes(), b'openid.foo:ba\xfer\nopenid.santa:x\xed\xa0\x80\n')


class TestFromSignedList(unittest.TestCase):
    """Test `SignedForm.fromSignedList` constructor."""

    def test_from_signed_list(self):
        form = Form({'foo': 'bar', 'santa': 'banta'})
        signed_form = SignedForm.fromSignedList(form, 'santa,foo')
        self.assertEqual(signed_form.fields, ['santa', 'foo'])
        self.assertIs(signed_form.form, form)
        self.assertEqual(signed_form.signedFieldList(), 'santa,foo')
        self.assertEqual(signed_form.signedString(), 'openid.santa:banta\nopenid.foo:bar\n')

    def test_empty(self):
        signed_form = SignedForm.fromSignedList(Form({'foo': 'bar'}), '')
        self.assertEqual(signed_form.fields, [])
        self.assertEqual(signed_form.signedFieldList(), '')

    def test_binary(self):
        with ShouldWarn(DeprecationWarning('Binary values for signed are deprecated. Use text input instead.')):
            warnings.simplefilter('always')
            signed_form = SignedForm.fromSignedList(Form({'foo': 'bar'}), b'foo')
        self.assertEqual(signed_form.fields, ['foo'])
