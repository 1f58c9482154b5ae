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
Qt event proxying into a ``WindowEvents`` hub.

"""
from typing import Callable

from PyQt5 import QtCore
from PyQt5.QtCore import (
    Qt,
    QEvent,
)
from PyQt5.QtWidgets import QWidget

from ..log import get_logger
from ._event import (
    KeyboardMsg,
    WindowEvents,
)


log = get_logger(__name__)


def unpack_key_event(ev: QEvent) -> KeyboardMsg:
    '''
    Convert a ``QKeyEvent`` to our ``KeyboardMsg``.

    '''
    key: int = ev.key()
    mods = ev.modifiers()

    # letter keys map to their (upper case) ascii code point, anything
    # else we just take the text Qt renders for the press.
    if 0x20 <= key < 0x7f:
        txt: str = chr(key).lower()
    else:
        txt: str = ev.text()

    return KeyboardMsg(
        key=txt,
        etype=(
            'keydown' if ev.type() == QEvent.KeyPress
            else 'keyup'
        ),
        ctrl=bool(mods & Qt.ControlModifier),
        meta=bool(mods & Qt.MetaModifier),
        alt=bool(mods & Qt.AltModifier),
        shift=bool(mods & Qt.ShiftModifier),
    )


class EventRelay(QtCore.QObject):
    '''
    Relay Qt key events to a ``WindowEvents`` hub.

    '''
    _event_types: set[QEvent.Type] = {QEvent.KeyPress}
    _events: WindowEvents = None
    _filter_auto_repeats: bool = True

    def eventFilter(
        self,

        source: QWidget,
        ev: QEvent,

    ) -> bool:
        '''
        Qt global event filter: return `False` to pass through and `True`
        to filter event out.

        https://doc.qt.io/qt-5/qobject.html#eventFilter
        https://doc.qt.io/qtforpython/overviews/eventsandfilters.html#event-filters

        '''
        etype = ev.type()
        if etype not in self._event_types:
            return False

        if (
            ev.isAutoRepeat()
            and self._filter_auto_repeats
        ):
            ev.ignore()
            return True

        msg = unpack_key_event(ev)
        passed: bool = self._events.dispatch(msg)

        # a handler vetoed the default, so stop the widget seeing it
        return not passed


def install_key_relay(
    source_widget: QWidget,
    events: WindowEvents,
    filter_auto_repeats: bool = True,

) -> Callable[[], None]:
    '''
    Install an ``EventRelay`` on ``source_widget`` and return a handle
    which removes it again.

    '''
    # parented so Qt keeps the relay alive as long as the widget
    relay = EventRelay(source_widget)
    relay._events = events
    relay._filter_auto_repeats = filter_auto_repeats

    source_widget.installEventFilter(relay)

    removed: bool = False

    def uninstall() -> None:
        nonlocal removed
        if not removed:
            removed = True
            source_widget.removeEventFilter(relay)

    return uninstall
