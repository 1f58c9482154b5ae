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
Command palette: the search overlay's entry affordance, global
shortcut and (immutable) render frames.

"""
from contextlib import asynccontextmanager as acm
from typing import (
    AsyncIterator,
    Callable,
    Sequence,
)

import trio

from ..log import get_logger
from ..types import Struct
from ..config import PaletteConf
from .._search import (
    Lookup,
    Navigate,
    SearchableItem,
    SearchSession,
    detail_path,
)
from ._event import (
    KeyboardMsg,
    WindowEvents,
    is_palette_shortcut,
)


log = get_logger(__name__)

_placeholder: str = 'Search stocks...'

# affordance variant -> css class
_affordances: dict[str, str] = {
    'button': 'search-btn',
    'text': 'search-text',
}


class Affordance(Struct, frozen=True):
    kind: str
    label: str
    css_class: str


class ResultRow(Struct, frozen=True):
    symbol: str
    title: str
    detail: str
    href: str
    in_watchlist: bool = False


class PaletteFrame(Struct, frozen=True):
    '''
    Everything needed to draw the palette at one instant.

    '''
    affordance: Affordance
    is_open: bool = False
    placeholder: str = _placeholder
    query: str = ''
    loading: bool = False
    heading: str | None = None
    status: str | None = None
    rows: tuple[ResultRow, ...] = ()


def as_row(item: SearchableItem) -> ResultRow:
    return ResultRow(
        symbol=item.symbol,
        title=item.title,
        detail=item.detail,
        href=detail_path(item.symbol),
        in_watchlist=item.in_watchlist,
    )


class CommandPalette:
    '''
    Presentation over a ``SearchSession``: all state decisions are
    delegated to the session and all timing to its debouncer.

    '''
    def __init__(
        self,
        session: SearchSession,
        events: WindowEvents,
        render_as: str = 'button',
        label: str = 'Add stock',

    ) -> None:
        if render_as not in _affordances:
            raise ValueError(
                f'`render_as` must be one of {set(_affordances)}, '
                f'not {render_as!r}'
            )

        self.session = session
        self.events = events
        self.affordance = Affordance(
            kind=render_as,
            label=label,
            css_class=_affordances[render_as],
        )
        self._unsubscribe: Callable[[], None] | None = None

    @property
    def mounted(self) -> bool:
        return self._unsubscribe is not None

    def mount(self) -> None:
        if self.mounted:
            return

        self._unsubscribe = self.events.subscribe(
            'keydown',
            self.on_key,
        )

    def unmount(self) -> None:
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is None:
            return

        unsubscribe()
        self.session.teardown()
        log.debug('Command palette unmounted')

    def on_key(
        self,
        msg: KeyboardMsg,
    ) -> None:
        if not is_palette_shortcut(msg):
            return

        # stop the browser/toolkit doing its own thing with the combo
        msg.prevent_default()
        self.session.toggle()

    def activate(self) -> None:
        '''
        Click handler for the entry affordance.

        '''
        self.session.open()

    def type(
        self,
        text: str,
    ) -> None:
        self.session.set_query(text)

    def choose(
        self,
        symbol: str,
    ) -> SearchableItem:
        '''
        Select the visible row for ``symbol``.

        '''
        state = self.session.state
        if (
            not state.is_open
            or state.is_loading
        ):
            raise LookupError(f'No visible rows to choose {symbol} from')

        for item in self.visible_items():
            if item.symbol == symbol:
                self.session.select(item)
                return item

        raise LookupError(f'{symbol} is not a visible result')

    def visible_items(self) -> list[SearchableItem]:
        session = self.session
        state = session.state
        if not state.query.strip():
            return session.seed_results()

        return list(state.results)

    def render(self) -> PaletteFrame:
        state = self.session.state
        if not state.is_open:
            return PaletteFrame(affordance=self.affordance)

        if state.is_loading:
            return PaletteFrame(
                affordance=self.affordance,
                is_open=True,
                query=state.query,
                loading=True,
                status='Loading stocks...',
            )

        rows = tuple(map(as_row, self.visible_items()))
        blank: bool = not state.query.strip()
        heading: str | None = None
        status: str | None = None

        if rows:
            heading = (
                f'Popular stocks ({len(rows)})' if blank
                else f'Search results ({len(rows)})'
            )
        else:
            status = (
                'No stocks available' if blank
                else 'No results found'
            )

        return PaletteFrame(
            affordance=self.affordance,
            is_open=True,
            query=state.query,
            heading=heading,
            status=status,
            rows=rows,
        )


def format_frame(frame: PaletteFrame) -> str:
    '''
    Plain text rendering of a frame for terminals.

    '''
    aff = frame.affordance
    lines: list[str] = [
        f'[{aff.label}]' if aff.kind == 'button' else aff.label
    ]
    if not frame.is_open:
        return lines[0]

    lines.append(f'> {frame.query or frame.placeholder}')

    if frame.heading:
        lines.append(frame.heading)

    if frame.status:
        lines.append(frame.status)

    for row in frame.rows:
        star: str = '*' if row.in_watchlist else ' '
        lines.extend([
            f' {star} {row.title}',
            f'     {row.detail}',
        ])

    return '\n'.join(lines)


@acm
async def open_command_palette(
    lookup: Lookup,
    navigate: Navigate,
    seed: Sequence[SearchableItem] | None = None,
    events: WindowEvents | None = None,
    conf: PaletteConf | None = None,

) -> AsyncIterator[CommandPalette]:
    '''
    Mount a palette for the lifetime of the block.

    On exit the shortcut listener is removed, the debouncer torn down
    and any in-flight lookup cancelled.

    '''
    conf = conf or PaletteConf()
    events = events or WindowEvents()

    async with trio.open_nursery() as n:
        session = SearchSession(
            lookup=lookup,
            navigate=navigate,
            nursery=n,
            seed=seed,
            delay=conf.debounce,
            seed_limit=conf.seed_limit,
            lookup_timeout=conf.lookup_timeout,
        )
        palette = CommandPalette(
            session,
            events,
            render_as=conf.render_as,
            label=conf.label,
        )
        palette.mount()
        try:
            yield palette
        finally:
            palette.unmount()
            n.cancel_scope.cancel()
