#!/usr/bin/env python
#encoding: utf8

import io
import os
import re

from setuptools import setup
from setuptools import find_packages


with io.open(os.path.join(os.path.dirname(__file__), 'ccmember',
                                              '__init__.py'), 'r') as v:
    VERSION = re.match(r".*__version__ = '(.*?)'", v.read(), re.S).group(1)

SHORT_DESC = "A client for the member service of the Campaign Commander " \
"SOAP api."

LONG_DESC = """ccmember opens and keeps a session with the Campaign Commander
member service, renews expired tokens transparently and turns the service's
responses into plain python dicts.
"""

try:
    os.stat('CHANGELOG.rst')
    with io.open('CHANGELOG.rst', 'rb') as f:
        LONG_DESC += u"\n\n" + f.read().decode('utf8')
except OSError:
    pass


setup(
    name='ccmember',
    packages=find_packages(exclude=['*.test', '*.test.*']),

    version=VERSION,
    description=SHORT_DESC,
    long_description=LONG_DESC,
    classifiers=[
        'Programming Language :: Python',
        'Programming Language :: Python :: 3',
        'Programming Language :: Python :: Implementation :: CPython',
        'Operating System :: OS Independent',
        'Natural Language :: English',
        'Development Status :: 5 - Production/Stable',
        'Intended Audience :: Developers',
        'Topic :: Internet :: WWW/HTTP',
    ],
    keywords='soap client campaign commander emailvision member api',
    license='LGPL-2.1',
    zip_safe=False,
    python_requires='>=3.7',
    install_requires=[
        'pytz',
        'lxml',
        'requests',
        'zeep>=4.0',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-cov',
        ],
    },
)
