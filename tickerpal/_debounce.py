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
Keyboard debouncing: collapse a burst of triggers into a single
(delayed) invocation using ``trio`` cancel scopes.

'''
import inspect
from typing import (
    Any,
    Awaitable,
    Callable,
)

import trio

from .log import get_logger


log = get_logger(__name__)

Action = Callable[[], Awaitable[Any] | Any]


class Debouncer:
    '''
    Fire ``action`` once ``delay`` seconds have passed since the most
    recent ``.trigger()``.

    Each trigger cancels any not-yet-fired invocation; there is no
    queueing, only the last trigger in a burst survives. Timer tasks
    are spawned in the (owner's) ``nursery`` so the action never runs
    synchronously inside ``.trigger()``, even for ``delay <= 0``.

    '''
    def __init__(
        self,
        action: Action,
        delay: float,
        nursery: trio.Nursery,

    ) -> None:
        self.action = action
        self.delay = delay
        self._nursery = nursery
        self._pending: trio.CancelScope | None = None
        self._closed: bool = False

    def __repr__(self) -> str:
        return (
            f'{type(self).__name__}('
            f'{getattr(self.action, "__name__", self.action)}, '
            f'delay={self.delay})'
        )

    @property
    def pending(self) -> bool:
        return self._pending is not None

    @property
    def closed(self) -> bool:
        return self._closed

    def trigger(self) -> None:
        if self._closed:
            raise trio.ClosedResourceError(f'{self!r} was torn down')

        self.cancel()
        scope = self._pending = trio.CancelScope()
        self._nursery.start_soon(self._fire_after, scope)

    def cancel(self) -> None:
        '''
        Drop any pending invocation without firing it.

        '''
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

    def teardown(self) -> None:
        '''
        Cancel any pending invocation and refuse further triggers.

        Must be called by the owner when it is destroyed.

        '''
        if not self._closed:
            log.debug(f'Tearing down {self!r}')

        self.cancel()
        self._closed = True

    async def _fire_after(
        self,
        scope: trio.CancelScope,
    ) -> None:

        # NOTE: a scope cancelled before this task even started
        # still swallows the first checkpoint inside it.
        with scope:
            await trio.sleep(max(self.delay, 0))

        if scope.cancelled_caught:
            return

        if self._pending is scope:
            self._pending = None

        result = self.action()
        if inspect.isawaitable(result):
            await result


class DebounceCache:
    '''
    Value-memoized ``Debouncer`` keyed on ``(action, delay)``.

    The same instance is handed back as long as neither input changes,
    otherwise the previous one is torn down so its in-flight timer
    can never fire the new configuration's action.

    Once torn down the cache refuses to build any further debouncers.

    '''
    def __init__(
        self,
        nursery: trio.Nursery,
    ) -> None:
        self._nursery = nursery
        self._key: tuple[Action, float] | None = None
        self._debouncer: Debouncer | None = None
        self._closed: bool = False

    def get(
        self,
        action: Action,
        delay: float,

    ) -> Debouncer:
        if self._closed:
            raise trio.ClosedResourceError(
                f'{type(self).__name__} was torn down'
            )

        key = (action, delay)
        if (
            self._debouncer is not None
            and not self._debouncer.closed
            and self._key == key
        ):
            return self._debouncer

        if self._debouncer is not None:
            self._debouncer.teardown()

        self._key = key
        self._debouncer = Debouncer(action, delay, self._nursery)
        return self._debouncer

    @property
    def current(self) -> Debouncer | None:
        return self._debouncer

    @property
    def closed(self) -> bool:
        return self._closed

    def teardown(self) -> None:
        self._closed = True
        if self._debouncer is not None:
            self._debouncer.teardown()
