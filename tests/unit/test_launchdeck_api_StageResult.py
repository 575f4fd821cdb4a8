"""Unit tests for StageResult."""

from launchdeck.api.StageResult import StageResult


def test_progress_callback_sets_result():
    def do_work(result_obj):
        yield (0.5, "Working...")
        result_obj.finish("Done", {"errors": [], "warnings": []}, True)
        yield (1.0, "Complete")

    result = StageResult(announce="Starting...", progress_callback=do_work)
    assert [message for _, message in result.progress_callback(result)] == ["Working...", "Complete"]
    assert result.success
    assert result.result == "Done"
    assert result.output == {"errors": [], "warnings": []}


def test_defaults_before_work():
    result = StageResult(announce="Starting...", progress_callback=lambda _: iter(()))
    assert result.result == ""
    assert result.output == {}
    assert not result.success


def test_drain_runs_to_completion():
    seen = []

    def do_work(result_obj):
        seen.append("started")
        yield (1.0, "Complete")
        result_obj.finish("Failed", {"errors": ["boom"], "warnings": []}, False)
        seen.append("finished")

    result = StageResult(announce="Starting...", progress_callback=do_work)
    assert result.drain() is result
    assert seen == ["started", "finished"]
    assert result.result == "Failed"
    assert result.output["errors"] == ["boom"]
    assert not result.success
