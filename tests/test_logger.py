import io
import json

import pytest

from cityroutes.exceptions import ConfigError
from cityroutes.logger import StdLogger


def test_level_filtering():
    buf = io.StringIO()
    log = StdLogger(level="info", stream=buf)
    log.debug("hidden", x=1)
    log.info("shown", x=1)
    log.warning("also_shown")
    assert buf.getvalue() == "info shown x=1\nwarning also_shown\n"


def test_json_lines():
    buf = io.StringIO()
    log = StdLogger(level="debug", json_fmt=True, stream=buf)
    log.debug("dijkstra", source="York", extractions=3)
    assert json.loads(buf.getvalue()) == {
        "level": "debug",
        "event": "dijkstra",
        "source": "York",
        "extractions": 3,
    }


def test_bound_fields_come_first():
    buf = io.StringIO()
    log = StdLogger(level="debug", stream=buf).bind(edges="cities.txt")
    log.bind(run=2).error("run_failed", error="UnknownNode")
    assert buf.getvalue() == "error run_failed edges=cities.txt run=2 error=UnknownNode\n"


def test_unknown_level():
    with pytest.raises(ConfigError):
        StdLogger(level="trace")
