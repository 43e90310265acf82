import json

import pytest

from framecheck.input.event_log import EventLogError, TimedAction, load_event_log, save_event_log
from framecheck.patterns.actions import Action, Button, Stick


def test_load_json(tmp_path):
    path = tmp_path / "log.json"
    path.write_text(json.dumps({"events": [
        {"time": 1.0, "action": "press:Y"},
        {"time_ms": 1050, "action": "enter@c:up smash"},
    ]}))
    events = load_event_log(path)
    assert events == [
        TimedAction(Action.press(Button.Y), 1.0),
        TimedAction(Action.enter("up smash", Stick.C), 1.05),
    ]


def test_load_json_bare_list(tmp_path):
    path = tmp_path / "log.json"
    path.write_text(json.dumps([{"time": 0, "action": "release:a"}]))
    assert load_event_log(path) == [TimedAction(Action.release(Button.A), 0.0)]


def test_load_csv_keeps_file_order(tmp_path):
    path = tmp_path / "log.csv"
    path.write_text("# time_ms,action\n\n100,press:B\n50,press:Y\n")
    events = load_event_log(path)
    assert [e.action for e in events] == [Action.press(Button.B), Action.press(Button.Y)]
    assert [e.timestamp for e in events] == [0.1, 0.05]


@pytest.mark.parametrize("content", [
    '{"events": [{"time": 0}]}',
    '{"events": [{"action": "press:Y"}]}',
    '{"events": [{"time": 0, "action": "press:turbo"}]}',
    '{"events": [{"time": "soon", "action": "press:Y"}]}',
    '{"events": 3}',
    '{not json',
])
def test_malformed_json(tmp_path, content):
    path = tmp_path / "log.json"
    path.write_text(content)
    with pytest.raises(EventLogError):
        load_event_log(path)


@pytest.mark.parametrize("content", ["100\n", "abc,press:Y\n", "100,press\n"])
def test_malformed_csv(tmp_path, content):
    path = tmp_path / "log.csv"
    path.write_text(content)
    with pytest.raises(EventLogError, match=":1:"):
        load_event_log(path)


def test_unsupported_format(tmp_path):
    path = tmp_path / "log.txt"
    path.write_text("")
    with pytest.raises(EventLogError):
        load_event_log(path)


def test_save_then_load(tmp_path):
    events = [
        TimedAction(Action.press(Button.Y), 0.0),
        TimedAction(Action.leave("left smash"), 0.25),
    ]
    path = tmp_path / "saved.json"
    save_event_log(events, path)
    assert load_event_log(path) == events


@pytest.mark.parametrize("suffix, content", [
    (".csv", b"50,press:\xff\xfe\n"),
    (".json", b'{"events": [{"time": 0, "action": "press:\xff"}]}'),
])
def test_invalid_utf8(tmp_path, suffix, content):
    path = tmp_path / f"log{suffix}"
    path.write_bytes(content)
    with pytest.raises(EventLogError, match="not UTF-8"):
        load_event_log(path)


def test_utf8_zone_names(tmp_path):
    path = tmp_path / "log.csv"
    path.write_bytes("0,enter:zône\n".encode("utf-8"))
    assert load_event_log(path) == [TimedAction(Action.enter("zône"), 0.0)]
