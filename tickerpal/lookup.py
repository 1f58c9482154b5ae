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
Local symbol table lookups using ``fuzzywuzzy``.

"""
from functools import partial
from pathlib import Path
from typing import (
    Iterable,
    Sequence,
)

from fuzzywuzzy import process as fuzzy
import msgspec
from msgspec import structs

from .log import get_logger
from ._search import (
    Lookup,
    SearchableItem,
)


log = get_logger(__name__)


def load_symbols(path: Path | str) -> list[SearchableItem]:
    '''
    Decode a json array of instrument objects from ``path``.

    '''
    path = Path(path)
    items = msgspec.json.decode(
        path.read_bytes(),
        type=list[SearchableItem],
    )
    log.debug(f'Loaded {len(items)} symbols from {path}')
    return items


def mark_watchlisted(
    items: Iterable[SearchableItem],
    watchlist: Iterable[str],

) -> list[SearchableItem]:
    '''
    Return copies of ``items`` with ``.in_watchlist`` set for every
    symbol found in ``watchlist``.

    '''
    watched: set[str] = {str(sym).upper() for sym in watchlist}
    return [
        structs.replace(
            item,
            in_watchlist=item.symbol.upper() in watched,
        )
        for item in items
    ]


async def search_symbol_table(
    text: str,
    table: Sequence[SearchableItem],
    score_cutoff: int = 80,
    limit: int | None = None,

) -> list[SearchableItem]:
    '''
    Fuzzy match ``text`` against each entry's symbol and name.

    Exact symbol hits are always sorted first.

    '''
    pattern: str = text.strip()
    if not pattern:
        return []

    tokens: dict[int, str] = {
        i: f'{item.symbol} {item.name}'
        for i, item in enumerate(table)
    }
    matches = fuzzy.extractBests(
        pattern,
        tokens,
        score_cutoff=score_cutoff,
        limit=limit,
    )

    # with dict choices each match is `(choice, score, key)`
    hits: list[SearchableItem] = [table[i] for _, _, i in matches]

    upper: str = pattern.upper()
    exact: list[SearchableItem] = [
        item for item in table
        if item.symbol.upper() == upper
    ]
    results = exact + [item for item in hits if item not in exact]
    log.debug(f'{len(results)} matches for "{pattern}"')
    return results[:limit] if limit else results


def symbol_table_lookup(
    table: Sequence[SearchableItem],
    watchlist: Iterable[str] = (),
    **kwargs,

) -> Lookup:
    '''
    Build a ``Lookup`` over ``table`` with watchlist status applied
    to every entry.

    '''
    table = mark_watchlisted(table, watchlist)
    return partial(
        search_symbol_table,
        table=table,
        **kwargs,
    )
