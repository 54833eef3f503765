import io
import json
import sys

import pytest
from loguru import logger

import mettanorm
from mettanorm import InferenceConfig, analyze, analyze_metrics
from mettanorm.cli import main as cli_main

CONFLICT_OUTPUT = "(conflict not_opt soa_elam)"


@pytest.fixture(autouse=True)
def _reset_logging():
    yield
    logger.remove()
    logger.disable("mettanorm")


def test_mettanorm_namespace_exports_analyze():
    assert callable(mettanorm.analyze)
    assert "analyze_metrics" in mettanorm.__all__


def test_analyze_returns_result_model():
    result = analyze(CONFLICT_OUTPUT)
    assert result.conflicts[0].regulation1 == "Not optional (prohibited)"


def test_analyze_uses_given_config():
    config = InferenceConfig(entity_mappings={"soa_elam": "the leaving vessel"})
    assert analyze(CONFLICT_OUTPUT, config).conflicts[0].affected_entity == "the leaving vessel"


def test_analyze_metrics_counts():
    metrics = analyze_metrics(CONFLICT_OUTPUT)
    assert metrics.conflicts == 1
    assert metrics.total() == 1


def test_mettanorm_cli_help_runs(monkeypatch, capsys):
    monkeypatch.setattr(sys, "argv", ["mettanorm"])
    assert cli_main() == 0
    assert "mettanorm CLI" in capsys.readouterr().out


def test_mettanorm_cli_version_runs(capsys):
    assert cli_main(["--version"]) == 0
    assert capsys.readouterr().out.strip()


def test_mettanorm_cli_analyze_inline_text(capsys):
    assert cli_main(["analyze", "--text", CONFLICT_OUTPUT]) == 0
    captured = capsys.readouterr()
    payload = json.loads(captured.out)
    assert payload["conflicts"][0]["requirement"] == "permission vs prohibition to leave"
    assert captured.err == ""


def test_mettanorm_cli_analyze_reads_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("[(soa_enpam soa_epam15k)]"))
    assert cli_main(["analyze"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["compliances"][0]["fulfilled_by"] == "soa_epam15k"


def test_mettanorm_cli_analyze_metrics(tmp_path, capsys):
    source = tmp_path / "engine.out"
    source.write_text(CONFLICT_OUTPUT, encoding="utf-8")
    assert cli_main(["analyze", str(source), "--metrics"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["conflicts"] == 1
    assert payload["conflict_details"][0]["entity1"] == "Not optional (prohibited)"


def test_mettanorm_cli_verbose_emits_info_logs(capsys):
    assert cli_main(["-v", "analyze", "--text", CONFLICT_OUTPUT]) == 0
    assert "INFO | mettanorm" in capsys.readouterr().err


def test_mettanorm_cli_explicit_log_level_overrides_verbose(capsys):
    assert cli_main(["--log-level", "ERROR", "-vv", "analyze", "--text", CONFLICT_OUTPUT]) == 0
    assert capsys.readouterr().err == ""


def test_mettanorm_cli_rejects_unknown_log_level():
    with pytest.raises(SystemExit):
        cli_main(["--log-level", "LOUD", "analyze", "--text", CONFLICT_OUTPUT])


def test_mettanorm_cli_rejects_missing_config(tmp_path):
    with pytest.raises(SystemExit):
        cli_main(["analyze", "--text", CONFLICT_OUTPUT, "--config", str(tmp_path / "absent.json")])


def test_mettanorm_cli_rejects_invalid_config(tmp_path):
    config = tmp_path / "config.json"
    config.write_text(json.dumps({"entity_mapping": {}}), encoding="utf-8")
    with pytest.raises(SystemExit):
        cli_main(["analyze", "--text", CONFLICT_OUTPUT, "--config", str(config)])


def test_mettanorm_cli_validate_clean_document(tmp_path, capsys):
    document = tmp_path / "soa.metta"
    document.write_text(
        "(ct-triple soa_emam type rexist)\n"
        "(ct-triple soa_emam type soaMoor)\n"
        "(ct-triple soa_emam soaHas_agent soa_ALEXANDRA_MAERSK)\n",
        encoding="utf-8",
    )
    assert cli_main(["validate", str(document)]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["eventualities"] == 1
    assert payload["errors"] == []


def test_mettanorm_cli_validate_reports_errors(tmp_path, capsys):
    document = tmp_path / "soa.metta"
    document.write_text(
        "(ct-triple soa_ewrong type rexist)\n"
        "(ct-triple soa_ewrong type soaMoor)\n"
        "(ct-triple soa_ewrong soaHas_agent soa_ALEXANDRA_MAERSK)\n"
        "(ct-triple soa_x type\n",
        encoding="utf-8",
    )
    assert cli_main(["validate", str(document)]) == 1
    payload = json.loads(capsys.readouterr().out)
    assert any("Expected: 'soa_emam'" in error for error in payload["errors"])
    assert payload["diagnostics"][0]["kind"] == "parse_error"
