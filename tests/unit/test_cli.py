"""The command-line entry point, run against the mock adapter."""

import json

import pytest

from content_forge.__main__ import build_parser, main

pytestmark = pytest.mark.unit


def _run(capsys, *argv: str):
    code = main(list(argv))
    captured = capsys.readouterr()
    return code, captured.out, captured.err


def test_plan_defaults_to_youtube():
    args = build_parser().parse_args(["plan", "Cooking"])
    assert (args.command, args.niche, args.platform) == ("plan", "Cooking", "YouTube")


def test_unknown_platform_is_rejected_by_the_parser():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["plan", "Cooking", "--platform", "MySpace"])


def test_analyze_prints_the_record_in_service_form(capsys):
    code, out, _ = _run(capsys, "analyze", "Fitness")

    assert code == 0
    payload = json.loads(out)
    assert {"name", "trendScore", "platformFit", "sources"} <= set(payload)
    assert payload["sources"][0]["uri"].startswith("https://")


def test_concepts_print_a_list(capsys):
    code, out, _ = _run(capsys, "concepts", "Fitness")
    assert code == 0
    assert isinstance(json.loads(out), list)


def test_trending_prints_value_and_sources(capsys):
    code, out, _ = _run(capsys, "trending")
    payload = json.loads(out)
    assert code == 0
    assert set(payload) == {"value", "sources"}


def test_storyboard_reads_the_script_file(capsys, tmp_path):
    script = tmp_path / "script.txt"
    script.write_text("[SCENE: gym] Welcome back.", encoding="utf-8")

    code, out, _ = _run(capsys, "storyboard", str(script))

    assert code == 0
    (scene,) = json.loads(out)
    assert scene["id"]


def test_errors_go_to_stderr_with_exit_code_one(capsys, tmp_path):
    code, out, err = _run(capsys, "storyboard", str(tmp_path / "missing.txt"))
    assert code == 1
    assert out == ""
    assert err.startswith("error:")


def test_blank_niche_is_a_validation_error(capsys):
    code, _, err = _run(capsys, "analyze", "   ")
    assert code == 1
    assert "niche" in err
