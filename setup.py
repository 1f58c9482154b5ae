#!/usr/bin/env python

# tickerpal: symbol search gear for hackers
# Copyright (C) 2024-present  tickerpal contributors

# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU Affero General Public License for more details.

# You should have received a copy of the GNU Affero General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.

from setuptools import setup, find_packages

with open('README.rst', encoding='utf-8') as f:
    readme = f.read()


setup(
    name="tickerpal",
    version='0.1.0.alpha0.dev0',
    description='debounced symbol search palette for trading UIs.',
    long_description=readme,
    license='AGPLv3',
    platforms=['linux'],
    packages=find_packages(include=['tickerpal', 'tickerpal.*']),
    entry_points={
        'console_scripts': [
            'tickerpal = tickerpal.cli:cli',
        ]
    },
    install_requires=[
        'tomlkit',
        'tomli; python_version < "3.11"',  # fastest pure py reader
        'click',
        'colorlog',
        'pygments',
        'msgspec',  # performant structs and json decoding

        # async
        'trio',

        # UI
        'PyQt5',
        'fuzzywuzzy[speedup]',  # fuzzy search
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    python_requires=">=3.10",
    keywords=[
        "async",
        "trading",
        "finance",
        "search",
    ],
    classifiers=[
        'Development Status :: 3 - Alpha',
        'Operating System :: POSIX :: Linux',
        "Programming Language :: Python :: Implementation :: CPython",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.10",
        'Intended Audience :: Financial and Insurance Industry',
        'Intended Audience :: Developers',
    ],
)
