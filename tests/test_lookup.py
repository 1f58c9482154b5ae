'''
Local symbol table lookups.

'''
from functools import partial
import json

import msgspec
import pytest
import trio

from tickerpal import SearchableItem
from tickerpal.lookup import (
    load_symbols,
    mark_watchlisted,
    search_symbol_table,
    symbol_table_lookup,
)


@pytest.fixture
def table() -> list[SearchableItem]:
    return [
        SearchableItem('AAPL', 'Apple Inc.', 'NASDAQ', 'Common Stock'),
        SearchableItem('TSLA', 'Tesla, Inc.', 'NASDAQ', 'Common Stock'),
        SearchableItem('MSFT', 'Microsoft Corporation', 'NASDAQ', 'Common Stock'),
        SearchableItem('SPY', 'SPDR S&P 500 ETF Trust', 'NYSE ARCA', 'ETP'),
    ]


def test_exact_symbol_is_first(table):
    results = trio.run(search_symbol_table, 'tsla', table)
    assert results[0].symbol == 'TSLA'


def test_name_match(table):
    results = trio.run(search_symbol_table, 'Microsoft', table)
    assert 'MSFT' in [item.symbol for item in results]


def test_no_match_and_blank(table):
    assert trio.run(search_symbol_table, 'qqqqzzzzxxxx', table) == []
    assert trio.run(search_symbol_table, '   ', table) == []


def test_limit(table):
    results = trio.run(
        partial(
            search_symbol_table,
            'a',
            table,
            score_cutoff=0,
            limit=2,
        )
    )
    assert len(results) == 2


def test_mark_watchlisted(table):
    marked = mark_watchlisted(table, ['aapl', 'SPY'])
    assert [item.in_watchlist for item in marked] == [
        True,
        False,
        False,
        True,
    ]

    # inputs are left untouched
    assert not any(item.in_watchlist for item in table)


def test_symbol_table_lookup(table):
    lookup = symbol_table_lookup(table, watchlist=['TSLA'])
    results = trio.run(lookup, 'TSLA')
    assert results[0] == SearchableItem(
        'TSLA',
        'Tesla, Inc.',
        'NASDAQ',
        'Common Stock',
        in_watchlist=True,
    )


def test_load_symbols(tmp_path):
    path = tmp_path / 'symbols.json'
    path.write_text(json.dumps([
        {
            'symbol': 'AAPL',
            'name': 'Apple Inc.',
            'exchange': 'NASDAQ',
            'type': 'Common Stock',
            'isInWatchlist': False,
        },
        {'symbol': 'GOOGL'},
    ]))
    items = load_symbols(path)
    assert items == [
        SearchableItem('AAPL', 'Apple Inc.', 'NASDAQ', 'Common Stock'),
        SearchableItem('GOOGL'),
    ]

    path.write_text(json.dumps([{'name': 'no symbol'}]))
    with pytest.raises(msgspec.ValidationError):
        load_symbols(path)
