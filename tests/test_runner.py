"""
Tests for query dispatch and result rendering.
"""

import logging

import pytest

from fuzzytodo.errors import NotFoundError
from fuzzytodo.parser import parse_query
from fuzzytodo.runner import Added, Completed, Found, render, run_line, run_query
from fuzzytodo.types import Index


class TestRunQuery:

    def test_add(self, store):
        assert run_query(parse_query('add "buy milk" #errand'), store) == Added(Index(0))
        assert store.get(Index(0)).tags == ("errand",)

    def test_done(self, errands):
        assert run_query(parse_query("done 1"), errands) == Completed(Index(1))
        assert errands.get(Index(1)).done

    def test_done_unknown(self, errands):
        with pytest.raises(NotFoundError):
            run_query(parse_query("done 5"), errands)

    def test_search_returns_items_newest_first(self, errands):
        result = run_query(parse_query("search buy #errand"), errands)
        assert isinstance(result, Found)
        assert [item.index for item in result.items] == [Index(1), Index(0)]


class TestRender:

    def test_added(self):
        assert render(Added(Index(3))) == "3"

    def test_completed(self):
        assert render(Completed(Index(3))) == "done"

    def test_found(self, errands):
        result = run_query(parse_query("search buy"), errands)
        assert render(result) == (
            "2 item(s) found\n"
            '1 "buy milk" #errand\n'
            '0 "buy groceries" #errand'
        )

    def test_found_nothing(self):
        assert render(Found(())) == "0 item(s) found"


class TestRunLine:

    def test_session(self, store, capsys):
        for line in [
            'add "buy groceries" #errand',
            'add "buy milk" #errand',
            "search groceries",
            "done 0",
            "search buy",
        ]:
            assert run_line(line, store)
        out = capsys.readouterr().out
        assert out == (
            "0\n"
            "1\n"
            "1 item(s) found\n"
            '0 "buy groceries" #errand\n'
            "done\n"
            "1 item(s) found\n"
            '1 "buy milk" #errand\n'
        )

    def test_invalid_index_goes_to_stderr(self, store, capsys):
        assert not run_line("done 0", store)
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == "Error: Invalid Index\n"

    def test_unparseable_line_is_skipped(self, store, capsys, caplog):
        with caplog.at_level(logging.WARNING, logger="fuzzytodo"):
            assert not run_line("frobnicate", store)
        assert capsys.readouterr().out == ""
        assert "Skipping query" in caplog.text
        assert len(store) == 0

    def test_blank_line(self, store, capsys):
        assert not run_line("   ", store)
        assert capsys.readouterr().out == ""
