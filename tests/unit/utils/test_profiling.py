from __future__ import annotations

import json

import pytest

from folio.cli._dispatcher import main
from folio.core.extensions import Node
from folio.core.manager import resolve_document
from folio.core.utils.profiling import Profiler, enable_profiler, span


def test_spans_are_noops_without_profiler() -> None:
    profiler = Profiler()

    with span("anything"):
        pass

    assert profiler.spans == []


def test_nested_spans_record_their_parents() -> None:
    profiler = Profiler()

    with enable_profiler(profiler):
        with span("outer"):
            with span("inner", count=2):
                pass

    inner, outer = profiler.spans
    assert inner.path == "outer > inner"
    assert inner.meta == {"count": 2}
    assert outer.parents == ()


def test_resolution_records_spans(config_manager) -> None:
    profiler = Profiler()

    with enable_profiler(profiler):
        resolve_document([Node.create(name="doc")], config=config_manager)

    names = {record.name for record in profiler.spans}
    assert {"resolve", "resolution.flatten", "resolution.sort", "schema.attributes", "schema.types"} <= names
    assert "resolve" in profiler.to_dict()["totals_ms"]
    assert "resolve > resolution.flatten" in {entry["path"] for entry in profiler.to_dict()["spans"]}


def test_cli_profile_flag_reports_to_stderr(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--profile", "config", "show", "--json"]) == 0

    report = json.loads(capsys.readouterr().err)
    assert "cli.total" in report["totals_ms"]
