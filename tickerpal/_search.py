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
Search session state machine: open/close, debounced symbol lookups and
result selection.

"""
from typing import (
    Any,
    Awaitable,
    Callable,
    Iterable,
    Sequence,
)

import msgspec
import trio

from .log import get_logger
from .types import Struct
from ._debounce import (
    DebounceCache,
    Debouncer,
)


log = get_logger(__name__)

# reference "quiet period" after the last keystroke before searching
_default_delay: float = 0.3

# max number of seed entries shown while the query is blank
_default_seed_limit: int = 10


class SearchableItem(Struct, frozen=True):
    '''
    A single (tradeable) instrument as delivered by a lookup backend.

    Field names on the wire match the web front-end's JSON.

    '''
    symbol: str
    name: str = ''
    exchange: str = ''
    kind: str = msgspec.field(default='', name='type')
    in_watchlist: bool = msgspec.field(default=False, name='isInWatchlist')

    @property
    def title(self) -> str:
        # some backends deliver blank names for obscure listings
        return self.name or self.symbol

    @property
    def detail(self) -> str:
        return f'{self.symbol} | {self.exchange} | {self.kind}'


class SessionState(Struct):
    is_open: bool = False
    query: str = ''
    results: list[SearchableItem] = []
    is_loading: bool = False


Lookup = Callable[[str], Awaitable[Iterable[SearchableItem | dict]]]
Navigate = Callable[[str], Any]


def detail_path(symbol: str) -> str:
    '''
    Return the per-symbol detail page path.

    '''
    return f'/stocks/{symbol}'


def as_items(
    results: Iterable[SearchableItem | dict],
) -> list[SearchableItem]:
    '''
    Cast (json-ish) lookup results to ``SearchableItem``s, raising
    ``msgspec.ValidationError`` on anything malformed.

    '''
    items: list[SearchableItem] = []
    for res in results:
        if not isinstance(res, SearchableItem):
            res = msgspec.convert(res, type=SearchableItem)

        items.append(res)

    return items


class SearchSession:
    '''
    The search palette's controller.

    Owns the ``SessionState`` and drives the external ``lookup`` via
    a ``Debouncer`` which is (re)built from ``(._run_lookup, .delay)``.

    Every user driven transition bumps ``._seq``; a lookup snapshots it
    when it fires and only writes its response if the seq hasn't
    changed, so late (stale) responses are always discarded.

    '''
    def __init__(
        self,
        lookup: Lookup,
        navigate: Navigate,
        nursery: trio.Nursery,
        seed: Sequence[SearchableItem] | None = None,
        delay: float = _default_delay,
        seed_limit: int = _default_seed_limit,
        lookup_timeout: float | None = None,

    ) -> None:
        self._lookup = lookup
        self._navigate = navigate

        # read-only snapshot; never mutated
        self.seed: tuple[SearchableItem, ...] = tuple(seed or ())
        self._delay = delay
        self.seed_limit = seed_limit
        self.lookup_timeout = lookup_timeout

        self.state = SessionState(results=self.seed_results())

        self._seq: int = 0
        self._debouncers = DebounceCache(nursery)
        self._changed = trio.Event()

    def seed_results(self) -> list[SearchableItem]:
        return list(self.seed[:self.seed_limit])

    @property
    def delay(self) -> float:
        return self._delay

    @delay.setter
    def delay(
        self,
        value: float,
    ) -> None:
        old = self._debouncers.current
        pending: bool = old is not None and old.pending
        self._delay = value

        # the old timer is torn down on rebuild so re-schedule any
        # waiting lookup with the new config
        if pending:
            self.debouncer.trigger()

    @property
    def debouncer(self) -> Debouncer:
        return self._debouncers.get(self._run_lookup, self.delay)

    @property
    def closed(self) -> bool:
        return self._debouncers.closed

    def _check_alive(self) -> None:
        if self.closed:
            raise trio.ClosedResourceError(
                f'{type(self).__name__} was torn down'
            )

    def _cancel_pending(self) -> None:
        debouncer = self._debouncers.current
        if debouncer is not None:
            debouncer.cancel()

    def _invalidate(self) -> None:
        # any in-flight lookup response is now stale
        self._seq += 1

    def _notify(self) -> None:
        self._changed.set()
        self._changed = trio.Event()

    def _reset(self) -> None:
        state = self.state
        state.query = ''
        state.results = self.seed_results()
        state.is_loading = False

    def open(self) -> None:
        self._check_alive()
        if self.state.is_open:
            return

        self._invalidate()
        self._reset()
        self.state.is_open = True
        log.debug('Search palette opened')
        self._notify()

    def close(self) -> None:
        if not self.state.is_open:
            return

        self._cancel_pending()
        self._invalidate()
        self.state.is_loading = False
        self.state.is_open = False
        log.debug('Search palette closed')
        self._notify()

    def toggle(self) -> None:
        if self.state.is_open:
            self.close()
        else:
            self.open()

    def set_query(
        self,
        text: str,
    ) -> None:
        '''
        Store the (literal) input text and either restore the seed list
        immediately (blank input) or schedule a debounced lookup.

        '''
        self._check_alive()
        state = self.state
        if not state.is_open:
            log.warning(f'Ignoring query {text!r} for closed palette')
            return

        self._invalidate()
        state.query = text
        pattern = text.strip()

        if not pattern:
            # fast path, clearing the input should feel instant
            self._cancel_pending()
            state.results = self.seed_results()
            state.is_loading = False

        else:
            state.is_loading = True
            self.debouncer.trigger()

        self._notify()

    def select(
        self,
        item: SearchableItem,
    ) -> None:
        self._check_alive()
        path = detail_path(item.symbol)
        log.info(f'Selected {item.symbol} -> {path}')
        self._navigate(path)

        self._cancel_pending()
        self._invalidate()
        self._reset()
        self.state.is_open = False
        self._notify()

    async def _run_lookup(self) -> None:
        seq = self._seq
        pattern = self.state.query.strip()
        log.info(f'Searching for "{pattern}"')

        try:
            with trio.fail_after(
                self.lookup_timeout
                if self.lookup_timeout is not None
                else float('inf')
            ):
                results = as_items(await self._lookup(pattern))

        except Exception as err:
            # a broken backend should just look like "no matches"
            log.warning(f'Lookup for "{pattern}" failed: {err!r}')
            results = []

        if seq != self._seq:
            log.debug(f'Discarding stale results for "{pattern}"')
            return

        self.state.results = results
        self.state.is_loading = False
        self._notify()

    async def wait_settled(self) -> SessionState:
        '''
        Wait until no lookup for the current query is outstanding.

        '''
        while self.state.is_loading:
            await self._changed.wait()

        return self.state

    def teardown(self) -> None:
        '''
        Drop any pending lookup (and the response of one in flight),
        discard the session state and refuse any further input.

        '''
        if self.closed:
            return

        self._debouncers.teardown()
        self._invalidate()
        self._reset()
        self.state.is_open = False
        log.debug('Search session torn down')
        self._notify()
