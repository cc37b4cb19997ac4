from pathlib import Path

from keysort.movelog import MoveLog, MoveLogEntry


def test_lifo():
	log = MoveLog()
	log.record(Path("a"), Path("x/a"))
	log.record(Path("b"), Path("x/b"))
	assert len(log) == 2
	assert log.pop_last() == MoveLogEntry(Path("b"), Path("x/b"))
	assert log.pop_last() == MoveLogEntry(Path("a"), Path("x/a"))
	assert log.pop_last() is None


def test_empty_log_is_falsy():
	log = MoveLog()
	assert not log
	assert log.peek() is None
	log.record("a", "b")
	assert log
	assert log.peek() == (Path("a"), Path("b"))


def test_push_back_restores_top():
	log = MoveLog()
	entry = log.record(Path("a"), Path("b"))
	log.pop_last()
	log.push_back(entry)
	assert log.peek() is entry
