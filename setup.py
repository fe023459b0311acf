# -*- coding: utf-8 -*-
from setuptools import setup

# Import version from openid_kvform library itself
VERSION = __import__('openid_kvform').__version__
INSTALL_REQUIRES = []
EXTRAS_REQUIRE = {
    'quality': ('flake8', 'isort'),
    'tests': ('testfixtures', 'coverage'),
}
LONG_DESCRIPTION = open('README.md').read() + '\n\n' + open('Changelog.md').read()
CLASSIFIERS = [
    'Development Status :: 5 - Production/Stable',
    'Intended Audience :: Developers',
    'License :: OSI Approved :: Apache Software License',
    'Operating System :: POSIX',
    'Programming Language :: Python',
    'Programming Language :: Python :: 3',
    'Topic :: Internet :: WWW/HTTP',
    'Topic :: Software Development :: Libraries :: Python Modules',
    'Topic :: System :: Systems Administration :: Authentication/Directory',
]


setup(
    name='python-openid-kvform',
    version=VERSION,
    description='Key-Value Form encoding of OpenID 2.0 messages and signature base strings.',
    long_description=LONG_DESCRIPTION,
    long_description_content_type='text/markdown',
    packages=['openid_kvform'],
    python_requires='>=3.6',
    install_requires=INSTALL_REQUIRES,
    extras_require=EXTRAS_REQUIRE,
    # license specified by classifier.
    classifiers=CLASSIFIERS,
)
