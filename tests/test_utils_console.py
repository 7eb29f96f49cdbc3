"""
Tests for utils.console module.

Covers OutputMode buffering, message routing in human and agent modes,
and the results table and summary panel.
"""

import json
from unittest.mock import patch

import pytest

from extraction_eval.evals.schema import EvaluationMetrics, EvaluationRecord
from extraction_eval.matching.models import StandardSemanticMetricsResult
from extraction_eval.utils.console import (
    OutputMode,
    error,
    info,
    output_mode,
    print_final_summary,
    print_metrics_table,
    success,
    warning,
)


@pytest.fixture
def reset_output_mode():
    output_mode.reset()
    yield
    output_mode.reset()


def make_record(error_message=None):
    semantic = None
    if error_message is None:
        semantic = StandardSemanticMetricsResult(
            precision=0.65,
            recall=0.8125,
            f1=0.717,
            TPw=3.25,
            FPw=1.75,
            FNw=0.75,
            exact=["Heavy Rain"],
            noMatch=["city"],
        )
    return EvaluationRecord(
        run_id="2025-01-05T12-00-00Z",
        prompt_name="causal-extraction-v1",
        model="gpt-4o-mini",
        task="entity_extraction",
        timestamp_utc="2025-01-05T12:00:00Z",
        classifier="judge",
        matching_scope="global",
        standard_metrics=EvaluationMetrics(
            precision=0.4,
            recall=0.5,
            f1=0.444,
            true_positives=2,
            false_positives=3,
            false_negatives=2,
        ),
        semantic_metrics=semantic,
        error=error_message,
    )


SUMMARY = {
    "total_runs": 2,
    "succeeded": 1,
    "failed": 1,
    "average_standard": {"precision": 0.4, "recall": 0.5, "f1": 0.444},
    "average_semantic": {"precision": 0.65, "recall": 0.8125, "f1": 0.717},
}


class TestOutputMode:
    """Test OutputMode class."""

    def test_defaults(self):
        mode = OutputMode()

        assert mode.is_human()
        assert not mode.is_agent()
        assert mode.quiet is False

    def test_invalid_format(self):
        with pytest.raises(ValueError, match="Invalid format"):
            OutputMode(format_type="xml")

    def test_flush_json_writes_and_clears(self, capsys):
        mode = OutputMode(format_type="json")
        mode.add_json("status", "success")

        mode.flush_json()

        assert json.loads(capsys.readouterr().out) == {"status": "success"}
        assert mode._json_buffer == {}

    def test_flush_json_no_op_in_human_mode(self, capsys):
        mode = OutputMode()
        mode.add_json("status", "success")

        mode.flush_json()

        assert capsys.readouterr().out == ""

    def test_reset(self):
        mode = OutputMode(format_type="json", quiet=True)
        mode.add_json("status", "error")

        mode.reset()

        assert mode.is_human()
        assert mode.quiet is False
        assert mode._json_buffer == {}


class TestMessages:
    """Test success(), error(), warning() and info()."""

    @patch("extraction_eval.utils.console.console")
    def test_success_human_mode(self, mock_console, reset_output_mode):
        success("Loaded configuration")

        printed = mock_console.print.call_args[0][0]
        assert "[green]" in printed
        assert "Loaded configuration" in printed

    @patch("extraction_eval.utils.console.console_err")
    def test_error_goes_to_stderr(self, mock_console_err, reset_output_mode):
        error("Config file not found")

        mock_console_err.print.assert_called_once()

    def test_agent_mode_buffers(self, reset_output_mode):
        output_mode.format = "json"

        warning("1 of 2 run(s) failed")
        error("judge unavailable")

        assert output_mode._json_buffer == {
            "warning": "1 of 2 run(s) failed",
            "status": "error",
            "error": "judge unavailable",
        }

    @patch("extraction_eval.utils.console.console")
    def test_info_silent_when_quiet(self, mock_console, reset_output_mode):
        output_mode.quiet = True

        info("Loaded 2 run(s)")

        mock_console.print.assert_not_called()


class TestMetricsTable:
    """Test print_metrics_table() function."""

    def test_agent_mode_uses_aliases(self, reset_output_mode):
        output_mode.format = "json"

        print_metrics_table([make_record()])

        record = output_mode._json_buffer["records"][0]
        assert record["semantic_metrics"]["TPw"] == 3.25
        assert record["semantic_metrics"]["noMatch"] == ["city"]
        assert record["standard_metrics"]["true_positives"] == 2

    @patch("extraction_eval.utils.console.console_err")
    @patch("extraction_eval.utils.console.console")
    def test_human_mode_reports_failed_runs(
        self, mock_console, mock_console_err, reset_output_mode
    ):
        print_metrics_table([make_record(), make_record("rate limited")])

        mock_console.print.assert_called_once()
        failure = mock_console_err.print.call_args[0][0]
        assert "rate limited" in failure

    @patch("extraction_eval.utils.console.console")
    def test_quiet_mode_prints_nothing(self, mock_console, reset_output_mode):
        output_mode.quiet = True

        print_metrics_table([make_record()])

        mock_console.print.assert_not_called()


class TestFinalSummary:
    """Test print_final_summary() function."""

    def test_agent_mode_flushes(self, capsys, reset_output_mode):
        output_mode.format = "json"

        print_final_summary("2025-01-05T12-00-00Z", SUMMARY)

        data = json.loads(capsys.readouterr().out)
        assert data["run_id"] == "2025-01-05T12-00-00Z"
        assert data["summary"]["failed"] == 1

    def test_quiet_mode_tab_separated(self, capsys, reset_output_mode):
        output_mode.quiet = True

        print_final_summary("2025-01-05T12-00-00Z", SUMMARY)

        assert capsys.readouterr().out == "2025-01-05T12-00-00Z\t1\t2\t0.717000\n"

    @patch("extraction_eval.utils.console.console")
    def test_partial_failure_panel(self, mock_console, reset_output_mode):
        print_final_summary("2025-01-05T12-00-00Z", SUMMARY)

        panel = mock_console.print.call_args[0][0]
        assert panel.border_style == "yellow"
        assert "with Failures" in panel.title
