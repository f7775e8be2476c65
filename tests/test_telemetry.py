import pytest

from vim_remap.runtime.telemetry import env, env_flag, record_event, span


def test_env_helpers_use_prefix(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VIM_REMAP_SAMPLE", "Yes")
    monkeypatch.delenv("VIM_REMAP_MISSING", raising=False)

    assert env("SAMPLE") == "Yes"
    assert env_flag("SAMPLE", False) is True
    assert env_flag("MISSING", True) is True


def test_span_reraises_and_records_metadata() -> None:
    with pytest.raises(RuntimeError):
        with span("tests::span", component="tests", metadata={"key": 1}) as handle:
            assert handle.metadata == {"key": "1"}
            raise RuntimeError("boom")


def test_record_event_rejects_unknown_level() -> None:
    with pytest.raises(ValueError):
        record_event("tests.event", level="shout")
