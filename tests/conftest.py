"""
Pytest configuration and shared fixtures for profile analyzer tests.
"""
import json
import pytest

from profile_analyzer import ProfileAnalyzer


def _node(node_id, name, url='', line=-1, column=-1, children=None, **extra):
    node = {
        "id": node_id,
        "callFrame": {
            "functionName": name,
            "scriptId": "0" if not url else "42",
            "url": url,
            "lineNumber": line,
            "columnNumber": column,
        },
        "hitCount": 0,
    }
    if children:
        node["children"] = children
    node.update(extra)
    return node


MAIN_URL = "file:///home/dev/project/src/main.js"
LODASH_URL = "file:///home/dev/project/node_modules/lodash/index.js"


@pytest.fixture
def node_factory():
    """Build a raw .cpuprofile node."""
    return _node


@pytest.fixture
def app_profile():
    """
    Small application profile.

        (root) -> main -> work
                       -> lodash
               -> (garbage collector)

    Every sample delta is 10us; 'work' runs for 40us, 'lodash' and the
    garbage collector for 10us each.
    """
    return {
        "nodes": [
            _node(1, "(root)", children=[2, 5]),
            _node(2, "main", MAIN_URL, 0, 0, children=[3, 4]),
            _node(3, "work", MAIN_URL, 10, 4),
            _node(4, "chunk", LODASH_URL, 5, 2),
            _node(5, "(garbage collector)"),
        ],
        "startTime": 1000,
        "endTime": 1050,
        "samples": [2, 3, 3, 4, 3, 5, 3],
        "timeDeltas": [10, 10, 10, 10, 10, 10],
    }


@pytest.fixture
def chain_profile():
    """Three nodes in a single chain, with four samples."""
    return {
        "nodes": [
            _node(1, "(root)", children=[2]),
            _node(2, "outer", MAIN_URL, 1, 0, children=[3]),
            _node(3, "inner", MAIN_URL, 2, 0),
        ],
        "startTime": 0,
        "endTime": 15,
        "samples": [1, 2, 3, 3],
        "timeDeltas": [5, 5, 5],
    }


@pytest.fixture
def deep_profile():
    """A single call chain far deeper than the interpreter's recursion limit."""
    depth = 5000
    nodes = [_node(1, "(root)", children=[2])]
    for i in range(2, depth + 1):
        children = [i + 1] if i < depth else None
        nodes.append(_node(i, f"fn{i}", MAIN_URL, i, 0, children=children))
    return {
        "nodes": nodes,
        "startTime": 0,
        "endTime": 3,
        "samples": [depth, depth, depth],
        "timeDeltas": [1, 1],
    }


@pytest.fixture
def annotated_profile():
    """Profile that already carries deduplicated locations and a root path."""
    return {
        "nodes": [
            _node(1, "(root)", children=[2], locationId=0),
            _node(2, "handler", "http://localhost/app.js", 3, 0, locationId=1,
                  positionTicks=[{"line": 4, "ticks": 7, "startLocationId": 2, "endLocationId": 3}]),
        ],
        "startTime": 0,
        "endTime": 20,
        "samples": [2, 2, 2],
        "timeDeltas": [10, 10],
        "$vscode": {
            "rootPath": "/srv/app",
            "locations": [
                {
                    "callFrame": {"functionName": "(root)", "url": "", "scriptId": "0",
                                  "lineNumber": -1, "columnNumber": -1},
                    "locations": [],
                },
                {
                    "callFrame": {"functionName": "handler", "url": "http://localhost/app.js",
                                  "scriptId": "42", "lineNumber": 3, "columnNumber": 0},
                    "locations": [
                        {"lineNumber": 3, "columnNumber": 0,
                         "source": {"name": "app.js", "path": "http://localhost/app.js",
                                    "sourceReference": 12}},
                        {"lineNumber": 3, "columnNumber": 0,
                         "source": {"name": "app.ts", "path": "/srv/app/src/app.ts",
                                    "sourceReference": 0}},
                    ],
                },
                {
                    "callFrame": {"functionName": "handler", "url": "http://localhost/app.js",
                                  "scriptId": "42", "lineNumber": 3, "columnNumber": 0},
                    "locations": [],
                },
                {
                    "callFrame": {"functionName": "handler", "url": "http://localhost/app.js",
                                  "scriptId": "42", "lineNumber": 4, "columnNumber": 0},
                    "locations": [],
                },
            ],
        },
    }


@pytest.fixture
def analyzer():
    """Analyzer with a root path so relative paths are computed."""
    return ProfileAnalyzer(root_path="/home/dev/project")


@pytest.fixture
def temp_json_file(tmp_path):
    """Create a temporary JSON file and return a helper function."""
    def _create_file(data, name=None):
        file_path = tmp_path / (name or f"test_{id(data)}.cpuprofile")
        with open(file_path, "w") as f:
            json.dump(data, f)
        return str(file_path)

    return _create_file
