'''
Qt key event relaying.

'''
import pytest

pytest.importorskip('PyQt5')

from PyQt5.QtCore import (  # noqa: E402
    Qt,
    QEvent,
)
from PyQt5.QtGui import QKeyEvent  # noqa: E402

from tickerpal.ui import (  # noqa: E402
    KeyboardMsg,
    WindowEvents,
)
from tickerpal.ui._qt import (  # noqa: E402
    EventRelay,
    unpack_key_event,
)


def press(
    key: int,
    mods=Qt.NoModifier,
    autorep: bool = False,
) -> QKeyEvent:
    return QKeyEvent(QEvent.KeyPress, key, mods, '', autorep)


def test_unpack_key_event():
    msg = unpack_key_event(press(Qt.Key_K, Qt.ControlModifier))
    assert msg == KeyboardMsg('k', ctrl=True)

    msg = unpack_key_event(
        press(Qt.Key_K, Qt.MetaModifier | Qt.ShiftModifier)
    )
    assert msg.key == 'k'
    assert msg.meta
    assert msg.shift
    assert not msg.ctrl


def test_relay_filters_prevented_events():
    events = WindowEvents()
    seen: list[KeyboardMsg] = []

    def on_key(msg: KeyboardMsg) -> None:
        seen.append(msg)
        if msg.ctrl and msg.key == 'k':
            msg.prevent_default()

    unsubscribe = events.subscribe('keydown', on_key)

    relay = EventRelay()
    relay._events = events

    # vetoed by the handler so Qt must not see it
    assert relay.eventFilter(None, press(Qt.Key_K, Qt.ControlModifier))

    # passed through to the widget
    assert not relay.eventFilter(None, press(Qt.Key_J))
    assert [m.key for m in seen] == ['k', 'j']

    # auto repeats are dropped before dispatch
    assert relay.eventFilter(
        None,
        press(Qt.Key_K, Qt.ControlModifier, autorep=True),
    )
    assert len(seen) == 2

    # non key events are ignored entirely
    assert not relay.eventFilter(None, QEvent(QEvent.MouseButtonPress))

    unsubscribe()
    unsubscribe()
    assert not relay.eventFilter(None, press(Qt.Key_K, Qt.ControlModifier))
    assert len(seen) == 2
