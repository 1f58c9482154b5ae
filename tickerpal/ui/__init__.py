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

'''
Search palette presentation and window event plumbing.

NOTE: the Qt relay lives in ``._qt`` and is *not* imported here so
headless users never need ``PyQt5`` loaded.

'''
from ._event import (
    KeyboardMsg,
    WindowEvents,
    is_palette_shortcut,
)
from ._palette import (
    CommandPalette,
    PaletteFrame,
    ResultRow,
    format_frame,
    open_command_palette,
)

__all__ = [
    'KeyboardMsg',
    'WindowEvents',
    'is_palette_shortcut',
    'CommandPalette',
    'PaletteFrame',
    'ResultRow',
    'format_frame',
    'open_command_palette',
]
