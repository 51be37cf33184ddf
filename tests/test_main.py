"""Test the command line entry point."""

import json
import logging

import pytest

from content_search_step.main import main

TREE = {
    "indexes": [{"name": "master", "root": "root"}],
    "items": [
        {"id": "root", "name": "content", "parent": None},
        {"id": "home", "name": "home", "parent": "root",
         "versions": [
             {"language": "en", "version": 1, "display_name": "Home"},
             {"language": "en", "version": 2, "display_name": "Home v2"},
         ]},
        {"id": "hidden", "name": "home secret", "parent": "root", "hidden": True,
         "versions": [{"language": "en", "version": 1}]},
    ],
}


@pytest.fixture
def tree_file(tmp_path):
    """Write the test tree to disk."""
    path = tmp_path / "tree.json"
    path.write_text(json.dumps(TREE), encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep environment changes made by main() local to each test."""
    monkeypatch.setenv("CONTENT_SEARCH_LOG_LEVEL", "WARNING")
    monkeypatch.setenv("CONTENT_SEARCH_SEARCH__SHOW_HIDDEN_ITEMS", "false")
    yield
    logger = logging.getLogger("content_search_step")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)


def _results(output):
    return [json.loads(line) for line in output.splitlines() if line.startswith("{")]


def test_main_prints_results(tree_file, capsys):
    """Test a search printing one JSON line per result."""
    exit_code = main(["--tree", str(tree_file), "--query", "home", "--log-level", "WARNING"])

    results = _results(capsys.readouterr().out)
    assert exit_code == 0
    assert results == [
        {
            "title": "Home v2",
            "icon": "Applications/16x16/document.png",
            "url": "content://master/home?lang=en&ver=2",
        }
    ]


def test_main_show_hidden(tree_file, capsys):
    """Test that --show-hidden includes hidden items."""
    main(["--tree", str(tree_file), "--query", "home", "--show-hidden",
          "--log-level", "WARNING"])

    titles = [r["title"] for r in _results(capsys.readouterr().out)]
    assert titles == ["Home v2", "home secret"]


def test_main_missing_tree(tmp_path):
    """Test that an unreadable tree file exits with an error code."""
    assert main(["--tree", str(tmp_path / "nope.json"), "--query", "x"]) == 1


@pytest.mark.parametrize(
    "tree",
    [
        {"items": [{"name": "no id"}]},
        {"items": [{"id": "a", "name": "a", "parent": "ghost"}]},
        {"indexes": [{"name": "master", "root": "root"}],
         "items": [{"id": "root", "name": "content",
                    "versions": [{"language": "en", "version": "latest"}]}]},
        ["not", "a", "tree"],
    ],
)
def test_main_malformed_tree(tmp_path, tree):
    """Test that a malformed tree exits with an error code instead of a traceback."""
    path = tmp_path / "tree.json"
    path.write_text(json.dumps(tree), encoding="utf-8")

    assert main(["--tree", str(path), "--query", "x"]) == 1
