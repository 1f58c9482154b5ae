import logging
from pathlib import Path

import pytest
import trio
from trio.testing import MockClock

from tickerpal import (
    config,
    SearchableItem,
)
from tickerpal.log import get_console_log


def pytest_addoption(parser):
    parser.addoption("--ll", action="store", dest='loglevel',
                     default=None, help="logging level to set when testing")


@pytest.fixture(scope='session')
def loglevel(request) -> str:
    return request.config.option.loglevel


@pytest.fixture()
def log(
    request: pytest.FixtureRequest,
    loglevel: str,
) -> logging.Logger:
    '''
    Deliver a per-test-named ``tickerpal.log`` instance.

    '''
    return get_console_log(
        level=loglevel,
        name=request.node.name,
    )


@pytest.fixture
def tmpconfdir(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
) -> Path:
    '''
    Point the config dir at a per-test tmp dir so we never touch
    (or read) the user's real ``palette.toml``.

    '''
    tmpconfdir: Path = tmp_path / '_testing'
    tmpconfdir.mkdir()
    monkeypatch.setattr(config, '_config_dir', tmpconfdir)
    return tmpconfdir


@pytest.fixture
def run_mocked():
    '''
    Run an async fn under ``trio`` with a virtual clock which jumps
    ahead whenever all tasks are blocked; all timing is deterministic.

    '''
    def run(fn, *args):
        return trio.run(
            fn,
            *args,
            clock=MockClock(autojump_threshold=0),
        )

    return run


@pytest.fixture
def seed() -> list[SearchableItem]:
    return [
        SearchableItem('AAPL', 'Apple Inc.', 'NASDAQ', 'Common Stock'),
        SearchableItem('GOOGL', 'Alphabet Inc.', 'NASDAQ', 'Common Stock'),
        SearchableItem(
            'MSFT',
            'Microsoft Corporation',
            'NASDAQ',
            'Common Stock',
            in_watchlist=True,
        ),
    ]


@pytest.fixture
def search_results() -> list[SearchableItem]:
    return [
        SearchableItem('TSLA', 'Tesla, Inc.', 'NASDAQ', 'Common Stock'),
        SearchableItem('AMZN', 'Amazon.com, Inc.', 'NASDAQ', 'Common Stock'),
    ]
