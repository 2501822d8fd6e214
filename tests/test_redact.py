from __future__ import annotations

from pystatetable._redact import is_sensitive_key, redact_for_log


def test_redact_for_log_redacts_sensitive_keys() -> None:
    assert redact_for_log("Room:display:AdminPassword", "hunter2") == "<redacted>"
    assert redact_for_log("Room:cloud:authToken", "abc") == "<redacted>"
    assert redact_for_log("Room:codec:Pin", "1234") == "<redacted>"
    assert redact_for_log("Room:display:Input", "hdmi1") == "hdmi1"


def test_sensitive_marker_matched_per_segment() -> None:
    assert is_sensitive_key("Room:Secrets:Wifi")
    assert not is_sensitive_key("RoomController:room:SourceLevel:laptop")


def test_redact_for_log_truncates_long_strings() -> None:
    redacted = redact_for_log("Room:display:Banner", "x" * 600, max_string=10)

    assert redacted is not None
    assert redacted.startswith("x" * 10)
    assert "<truncated>" in redacted


def test_redact_for_log_passes_none_through() -> None:
    assert redact_for_log("Room:display:Input", None) is None


def test_short_markers_only_match_whole_segments() -> None:
    assert is_sensitive_key("Room:codec:PIN")
    assert not is_sensitive_key("Room:matrix:InputMapping")
