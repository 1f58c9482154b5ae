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
tickerpal: symbol search gear for hackers.

'''
from ._debounce import (
    Debouncer,
    DebounceCache,
)
from ._search import (
    SearchableItem,
    SearchSession,
    SessionState,
)
from .ui import (
    CommandPalette,
    open_command_palette,
)

__all__ = [
    'Debouncer',
    'DebounceCache',
    'SearchableItem',
    'SearchSession',
    'SessionState',
    'CommandPalette',
    'open_command_palette',
]
