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

"""
Log like a forester!
"""
import logging
import json

import colorlog
from pygments import (
    highlight,
    lexers,
    formatters,
)

# Makes it so we only see the full module name when using ``__name__``
# without the extra "tickerpal." prefix.
_proj_name: str = 'tickerpal'

LOG_FORMAT = (
    '{log_color}{asctime}{reset}'
    ' {bold_white}{thin_white}({reset}'
    '{thin_white}{name}{reset}{bold_white}{thin_white})'
    ' {reset}{log_color}[{reset}{bold_log_color}{levelname}{reset}{log_color}]'
    ' {thin_white}{filename}{log_color}:{reset}{thin_white}{lineno}{log_color}'
    ' {reset}{bold_white}{thin_white}{message}'
)
DATE_FORMAT = '%b %d %H:%M:%S'

STD_PALETTE = {
    'CRITICAL': 'red',
    'ERROR': 'red',
    'WARNING': 'yellow',
    'INFO': 'green',
    'DEBUG': 'white',
}
BOLD_PALETTE = {
    'bold': {
        level: f'bold_{color}' for level, color in STD_PALETTE.items()
    }
}


def get_logger(
    name: str | None = None,

) -> logging.Logger:
    '''
    Return the package log or a sub-log for `name` if provided.

    '''
    log = logging.getLogger(_proj_name)

    if (
        name
        and name != _proj_name
    ):
        # strip the package prefix so that ``__name__`` from inside
        # the package doesn't double up as "tickerpal.tickerpal.x"
        if name.startswith(f'{_proj_name}.'):
            name = name[len(_proj_name) + 1:]

        log = log.getChild(name)

    return log


def get_console_log(
    level: str | None = None,
    name: str | None = None,

) -> logging.Logger:
    '''
    Get the package logger and enable a handler which writes to stderr.

    Yeah yeah, i know we can use ``DictConfig``. You do it...

    '''
    log = get_logger(name)
    if not level:
        return log

    log.setLevel(level.upper())

    # only ever install a single colored stream handler per logger
    if not any(
        isinstance(handler.formatter, colorlog.ColoredFormatter)
        for handler in log.handlers
    ):
        handler = logging.StreamHandler()
        handler.setFormatter(
            colorlog.ColoredFormatter(
                LOG_FORMAT,
                datefmt=DATE_FORMAT,
                log_colors=STD_PALETTE,
                secondary_log_colors=BOLD_PALETTE,
                style='{',
            )
        )
        log.addHandler(handler)

    return log


def colorize_json(
    data: dict | list,
    style='algol_nu',
):
    '''
    Colorize json output using ``pygments``.

    '''
    formatted_json = json.dumps(
        data,
        sort_keys=True,
        indent=4,
    )
    return highlight(
        formatted_json,
        lexers.JsonLexer(),

        # likeable styles: algol_nu, tango, monokai
        formatters.TerminalTrueColorFormatter(style=style)
    )
