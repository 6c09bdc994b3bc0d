import logging

from connectfour.debug import DebugLevel, DebugManager


class ListHandler(logging.Handler):
    def __init__(self):
        super().__init__(level=1)
        self.messages = []

    def emit(self, record):
        self.messages.append((record.levelname, record.getMessage()))


def make_manager(name):
    manager = DebugManager(logger_name=name)
    handler = ListHandler()
    manager.logger.addHandler(handler)
    return manager, handler


def test_level_filtering() -> None:
    manager, handler = make_manager("connectfour.test.levels")
    manager.configure(level=DebugLevel.INFO)

    manager.info("shown", "search")
    manager.debug("hidden", "search")

    assert handler.messages == [("INFO", "[search] shown")]


def test_trace_level_and_components() -> None:
    manager, handler = make_manager("connectfour.test.components")
    manager.configure(level=DebugLevel.TRACE, components=["selector"])

    manager.trace("kept", "selector")
    manager.trace("dropped", "search")

    assert handler.messages == [("TRACE", "[selector] kept")]
    assert not manager.is_enabled_for(DebugLevel.ERROR, "board")


def test_none_and_disabled_emit_nothing() -> None:
    manager, handler = make_manager("connectfour.test.none")
    manager.configure(level=DebugLevel.NONE)
    manager.error("quiet")

    manager.configure(level=DebugLevel.DEBUG, enabled=False)
    manager.error("quiet too")

    assert handler.messages == []


def test_timers() -> None:
    manager, handler = make_manager("connectfour.test.timers")
    manager.configure(level=DebugLevel.DEBUG)

    manager.start_timer("work")
    elapsed = manager.end_timer("work", "search")

    assert elapsed is not None and elapsed >= 0
    assert manager.end_timer("work") is None
    assert handler.messages[-1][0] == "WARNING"


def test_set_from_string_and_log_file(tmp_path) -> None:
    manager, handler = make_manager("connectfour.test.file")
    manager.set_from_string("debug")
    assert manager.level == DebugLevel.DEBUG

    manager.set_from_string("loud")
    assert manager.level == DebugLevel.DEBUG

    log_path = tmp_path / "engine.log"
    manager.configure(log_file=str(log_path))
    manager.info("to file", "game")
    manager.configure(log_file="")

    assert "[game] to file" in log_path.read_text()
