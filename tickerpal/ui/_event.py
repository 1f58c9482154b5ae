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
Window level (keyboard) event dispatch.

Handlers are called synchronously so they can veto the default
(toolkit) handling of an event before dispatch returns.

"""
from typing import Callable

from ..log import get_logger
from ..types import Struct


log = get_logger(__name__)


class KeyboardMsg(Struct):
    '''
    Unpacked (toolkit agnostic) keyboard event data.

    '''
    key: str
    etype: str = 'keydown'
    ctrl: bool = False
    meta: bool = False
    alt: bool = False
    shift: bool = False
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True

    def to_tuple(self) -> tuple:
        return tuple(self.to_dict().values())


KeyHandler = Callable[[KeyboardMsg], None]


def is_palette_shortcut(msg: KeyboardMsg) -> bool:
    '''
    Match the platform conventional "open search" combo: cmd+k on mac,
    ctl+k everywhere else.

    '''
    return (
        msg.etype == 'keydown'
        and (msg.meta or msg.ctrl)
        and msg.key.lower() == 'k'
    )


class WindowEvents:
    '''
    A window's event listener registry.

    ``.subscribe()`` hands back an unsubscribe handle which is safe to
    call any number of times.

    '''
    def __init__(self) -> None:
        self._handlers: dict[str, list[KeyHandler]] = {}

    def listeners(
        self,
        etype: str = 'keydown',
    ) -> list[KeyHandler]:
        return list(self._handlers.get(etype, ()))

    def subscribe(
        self,
        etype: str,
        handler: KeyHandler,

    ) -> Callable[[], None]:

        handlers = self._handlers.setdefault(etype, [])
        handlers.append(handler)
        log.debug(f'Subscribed {handler} to `{etype}`')

        unsubscribed: bool = False

        def unsubscribe() -> None:
            nonlocal unsubscribed
            if unsubscribed:
                return

            unsubscribed = True
            handlers.remove(handler)
            log.debug(f'Unsubscribed {handler} from `{etype}`')

        return unsubscribe

    def dispatch(
        self,
        msg: KeyboardMsg,
    ) -> bool:
        '''
        Deliver ``msg`` to every handler subscribed to its type.

        Return ``False`` if any handler prevented the default action.

        '''
        # copy so handlers may (un)subscribe while we iterate
        for handler in self.listeners(msg.etype):
            handler(msg)

        return not msg.default_prevented
