"""Tests for the logging setup and project metadata."""

import io
import json
import logging

import numpy as np
import pytest

import chroma_about
import chroma_logging
from chroma_engine import MatrixTRCTransform
from chroma_logging import ChromaFormatter, get_logger, setup_logging
from chroma_spaces import SRGB_TONE_RESPONSE_CURVE


@pytest.mark.usefixtures("reset_logging")
class TestSetupLogging:

    def test_debug_records_reach_stream(self):
        stream = io.StringIO()
        setup_logging("DEBUG", stream=stream)
        get_logger("chroma_engine").debug("hello %s", "hub")
        line = stream.getvalue().strip()
        assert line.endswith("| chroma_engine | hello hub")
        assert "| DEBUG    |" in line

    def test_level_filters(self):
        stream = io.StringIO()
        setup_logging("WARNING", stream=stream)
        get_logger("chroma_engine").debug("hidden")
        assert stream.getvalue() == ""

    def test_transform_construction_logs(self):
        stream = io.StringIO()
        setup_logging("debug", stream=stream)
        MatrixTRCTransform(
            matrix=np.eye(3),
            red_trc=SRGB_TONE_RESPONSE_CURVE,
            green_trc=SRGB_TONE_RESPONSE_CURVE,
            blue_trc=SRGB_TONE_RESPONSE_CURVE,
            chromatic_adaptation_matrix=np.eye(3),
            name="identity",
        )
        assert "identity" in stream.getvalue()

    def test_repeated_setup_replaces_handler(self):
        first = io.StringIO()
        second = io.StringIO()
        setup_logging("DEBUG", stream=first)
        handler = setup_logging("DEBUG", stream=second)
        get_logger("chroma_hexcodec").debug("once")
        assert first.getvalue() == ""
        assert second.getvalue().count("once") == 1
        assert logging.getLogger("chroma_hexcodec").handlers.count(handler) == 1
        assert chroma_logging._handler is handler

    def test_json_mode(self):
        stream = io.StringIO()
        setup_logging("INFO", json=True, stream=stream)
        get_logger("chroma_spaces").info("built")
        record = json.loads(stream.getvalue())
        assert record["lvl"] == "INFO"
        assert record["name"] == "chroma_spaces"
        assert record["msg"] == "built"
        assert "t" in record

    def test_no_color_on_non_tty(self):
        stream = io.StringIO()
        setup_logging("INFO", color=True, stream=stream)
        get_logger("chroma_color").info("plain")
        assert "\033[" not in stream.getvalue()

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            setup_logging("LOUD")


class TestFormatter:

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            ChromaFormatter("xml")

    def test_color_wraps_level(self):
        record = logging.LogRecord("chroma_engine", logging.ERROR, __file__, 1, "boom", None, None)
        line = ChromaFormatter("human", use_color=True).format(record)
        assert ChromaFormatter.COLORS["ERROR"] in line
        assert line.endswith("| chroma_engine | boom")


def test_metadata_summary():
    summary = chroma_about.metadata_summary()
    assert summary["title"] == "Chromahub"
    assert summary["version"] == chroma_about.__version__
    assert summary["license"] == "LGPL-3.0-or-later"
