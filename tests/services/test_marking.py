"""Tests for MarkerService."""

from __future__ import annotations

from pathlib import Path

import pytest

from lanemark.config.settings import LanemarkSettings
from lanemark.services.marking import MarkerService, parse_kind, parse_state
from tests.conftest import NOW

START_0900 = "▶️ 2024-01-01 09:00"
PAUSE_1100 = "⏸️ 2024-01-01 11:00"
END_1730 = "⏹️ 2024-01-02 17:30"


class TestParsing:
    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("todo", "todo"),
            ("In Progress", "in-progress"),
            ("in_progress", "in-progress"),
            ("ON-HOLD", "on-hold"),
            (" done ", "done"),
        ],
    )
    def test_parse_state(self, raw: str, expected: str) -> None:
        assert parse_state(raw) == expected

    def test_parse_state_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown state"):
            parse_state("blocked")

    def test_parse_kind(self) -> None:
        assert parse_kind("Start") == "start"

    def test_parse_kind_unknown(self) -> None:
        with pytest.raises(ValueError, match="Unknown marker"):
            parse_kind("created")


class TestMove:
    def test_start_task(self, service: MarkerService) -> None:
        result = service.move("Task", "in-progress", "todo")
        assert result.ok
        assert result.op == "move"
        assert result.data["title"] == "Task ▶️ 2024-03-05 14:07"
        assert result.data["previous"] == "Task"
        assert result.data["source"] == "todo"
        assert result.data["destination"] == "in-progress"
        assert result.data["changed"] is True

    def test_same_state_unchanged(self, service: MarkerService) -> None:
        title = f"Task {START_0900}"
        result = service.move(title, "in-progress", "in-progress")
        assert result.ok
        assert result.data["title"] == title
        assert result.data["changed"] is False

    def test_guarded_pause(self, service: MarkerService) -> None:
        result = service.move("Buy milk", "on-hold", "in-progress")
        assert result.data["title"] == "Buy milk"
        assert result.data["changed"] is False

    def test_invalid_state(self, service: MarkerService) -> None:
        result = service.move("Task", "archived", "todo")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_STATE"

    def test_uses_clock(self, settings: LanemarkSettings) -> None:
        ticks = iter([NOW.replace(minute=1), NOW.replace(minute=2)])
        svc = MarkerService(settings, clock=lambda: next(ticks))
        first = svc.move("Task", "in-progress", "todo").data["title"]
        second = svc.move(first, "done", "in-progress").data["title"]
        assert second == "Task ▶️ 2024-03-05 14:01 ⏹️ 2024-03-05 14:02"


class TestMoveBetweenLanes:
    def test_default_lanes(self, service: MarkerService) -> None:
        result = service.move_between_lanes("Task", "Todo", "In Progress")
        assert result.ok
        assert result.data["title"] == "Task ▶️ 2024-03-05 14:07"
        assert result.data["from_lane"] == "Todo"
        assert result.data["to_lane"] == "In Progress"

    def test_status_char_sets_source(self, service: MarkerService) -> None:
        title = f"Task {START_0900} {END_1730}"
        result = service.move_between_lanes(title, "todo", "in progress", status_char="x")
        assert result.data["source"] == "done"
        assert result.data["title"] == "Task ▶️ 2024-03-05 14:07"

    @pytest.mark.parametrize(
        "title,status_char",
        [
            (f"Task {START_0900} {END_1730}", "x"),
            (f"Task {START_0900}", "/"),
            ("Task", " "),
        ],
    )
    def test_same_lane_keeps_markers(
        self, service: MarkerService, title: str, status_char: str
    ) -> None:
        result = service.move_between_lanes(title, "Todo", "todo", status_char=status_char)
        assert result.ok
        assert result.data["source"] == result.data["destination"]
        assert result.data["title"] == title
        assert result.data["changed"] is False

    def test_flagged_lane_to_itself(self, service: MarkerService) -> None:
        title = f"Task {START_0900} {PAUSE_1100}"
        result = service.move_between_lanes(title, "On Hold", "On Hold")
        assert result.data["title"] == title
        assert result.data["changed"] is False

    def test_between_unflagged_lanes_keeps_markers(self, tmp_path: Path) -> None:
        (tmp_path / "lanemark.toml").write_text(
            '[[board.lanes]]\nname = "Inbox"\n[[board.lanes]]\nname = "Later"\n',
            encoding="utf-8",
        )
        settings = LanemarkSettings.from_cli(board_root=tmp_path)
        svc = MarkerService(settings, clock=lambda: NOW)
        title = f"Task {START_0900} {END_1730}"
        result = svc.move_between_lanes(title, "Inbox", "Later", status_char="x")
        assert result.data["source"] == "done"
        assert result.data["destination"] == "done"
        assert result.data["title"] == title

    def test_flagged_target_wins_over_status_char(self, service: MarkerService) -> None:
        result = service.move_between_lanes(
            f"Task {START_0900}", "Todo", "On Hold", status_char="/"
        )
        assert result.data["destination"] == "on-hold"
        assert result.data["title"] == f"Task {START_0900} ⏸️ 2024-03-05 14:07"

    def test_unknown_lane(self, service: MarkerService) -> None:
        result = service.move_between_lanes("Task", "Todo", "Review")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "UNKNOWN_LANE"
        assert "Done" in result.error.detail["lanes"]

    def test_configured_lanes(self, tmp_path: Path) -> None:
        (tmp_path / "lanemark.toml").write_text(
            "[board]\n"
            'name = "sprint"\n'
            "[[board.lanes]]\n"
            'name = "Backlog"\n'
            "[[board.lanes]]\n"
            'name = "Blocked"\n'
            "mark_on_hold = true\n",
            encoding="utf-8",
        )
        settings = LanemarkSettings.from_cli(board_root=tmp_path)
        svc = MarkerService(settings, clock=lambda: NOW)
        result = svc.move_between_lanes(f"Task {START_0900}", "Backlog", "Blocked", status_char="/")
        assert result.data["source"] == "in-progress"
        assert result.data["destination"] == "on-hold"
        assert result.data["title"] == f"Task {START_0900} ⏸️ 2024-03-05 14:07"


class TestAct:
    def test_start(self, service: MarkerService) -> None:
        result = service.act("Task", "todo", "start")
        assert result.ok
        assert result.data["title"] == "Task ▶️ 2024-03-05 14:07"
        assert result.data["action"] == "start"
        assert result.data["lane"] == "In Progress"
        assert result.warnings == []

    def test_reopen(self, service: MarkerService) -> None:
        result = service.act(f"Task {START_0900} {END_1730}", "done", "reopen")
        assert result.data["title"] == "Task ▶️ 2024-03-05 14:07"
        assert result.data["destination"] == "in-progress"

    def test_unavailable_action(self, service: MarkerService) -> None:
        result = service.act("Task", "todo", "pause")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_ACTION"
        assert result.error.detail["available"] == ["start"]

    def test_invalid_state(self, service: MarkerService) -> None:
        result = service.act("Task", "someday", "start")
        assert result.error is not None
        assert result.error.code == "INVALID_STATE"

    def test_missing_lane_warns(self, tmp_path: Path) -> None:
        (tmp_path / "lanemark.toml").write_text(
            '[[board.lanes]]\nname = "Inbox"\n', encoding="utf-8"
        )
        settings = LanemarkSettings.from_cli(board_root=tmp_path)
        result = MarkerService(settings, clock=lambda: NOW).act("Task", "todo", "start")
        assert result.ok
        assert result.data["lane"] is None
        assert result.warnings == ["No lane is configured for state in-progress"]


class TestStamp:
    def test_stamp(self, service: MarkerService) -> None:
        result = service.stamp(f"Task {END_1730}", "pause")
        assert result.ok
        assert result.data["title"] == f"Task ⏸️ 2024-03-05 14:07 {END_1730}"
        assert result.data["marker"] == "pause"

    def test_unstamp(self, service: MarkerService) -> None:
        result = service.unstamp(f"Task {START_0900} {PAUSE_1100}", "pause")
        assert result.data["title"] == f"Task {START_0900}"

    def test_invalid_marker(self, service: MarkerService) -> None:
        for result in (service.stamp("Task", "due"), service.unstamp("Task", "due")):
            assert not result.ok
            assert result.error is not None
            assert result.error.code == "INVALID_MARKER"


class TestInspect:
    def test_positions(self, service: MarkerService) -> None:
        result = service.inspect(f"Task {START_0900}")
        assert result.ok
        assert result.data["markers"] == {
            "completion": None,
            "start": 5,
            "pause": None,
            "end": None,
        }
        assert result.data["present"] == ["start"]
        assert result.warnings == []

    def test_out_of_order_warns(self, service: MarkerService) -> None:
        result = service.inspect(f"Task {END_1730} {START_0900}")
        assert result.warnings == ["Markers are out of canonical order"]


class TestState:
    def test_flags(self, service: MarkerService) -> None:
        result = service.state(mark_on_hold=True)
        assert result.data["state"] == "on-hold"
        assert result.data["actions"] == [
            {"name": "resume", "glyph": "▶️", "target": "in-progress"}
        ]

    def test_status_char(self, service: MarkerService) -> None:
        assert service.state(status_char="X").data["state"] == "done"

    def test_list_lanes(self, service: MarkerService) -> None:
        result = service.list_lanes()
        assert result.data["count"] == 4
        assert [item["state"] for item in result.data["items"]] == [
            "todo",
            "in-progress",
            "on-hold",
            "done",
        ]

    def test_list_lanes_reports_board_location(
        self, service: MarkerService, board_root: Path
    ) -> None:
        result = service.list_lanes()
        assert result.data["root"] == str(board_root)
        assert result.data["config"] is None

    def test_list_lanes_reports_config_file(self, board_root: Path) -> None:
        config = board_root / "lanemark.toml"
        config.write_text('[[board.lanes]]\nname = "Only"\n', encoding="utf-8")
        settings = LanemarkSettings.from_cli(board_root=board_root)
        result = MarkerService(settings).list_lanes()
        assert Path(result.data["config"]) == config.resolve()
        assert result.data["count"] == 1
