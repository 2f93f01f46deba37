# tests/test_task_registry.py

from __future__ import annotations

import pytest

from puptrack.core.errors import NotFoundError
from puptrack.core.state import AppState
from puptrack.tasks import task_api
from puptrack.tasks.task_models import COLOR_PALETTE, Task
from puptrack.tasks.task_registry import TaskRegistry

from .fakes import FakeSnapshotBackend


def test_defaults_are_five_unselected_builtins() -> None:
    reg = TaskRegistry()
    names = [t.name for t in reg.list()]
    assert names == ["Toothbrushing", "Cut Nails", "Throwing up", "Brushing Fur", "Bath"]
    assert [t.color for t in reg.list()] == ["mint", "orange", "yellow", "pink", "blue"]
    assert reg.selected() == []
    assert len({t.id for t in reg.list()}) == 5


def test_toggle_twice_restores(state: AppState, backend: FakeSnapshotBackend) -> None:
    task = task_api.list_tasks(state)[0]
    assert task.is_selected is False

    assert task_api.toggle_task(state, task.id).is_selected is True
    assert backend.stored["tasks"][0]["is_selected"] is True

    assert task_api.toggle_task(state, task.id).is_selected is False
    assert backend.save_count == 2
    assert backend.stored["tasks"][0]["is_selected"] is False


def test_toggle_unknown_id_raises_without_saving(state: AppState, backend: FakeSnapshotBackend) -> None:
    with pytest.raises(NotFoundError):
        task_api.toggle_task(state, "no-such-id")
    assert backend.save_count == 0


@pytest.mark.parametrize("raw", ["", "   ", "\n\t", None])
def test_blank_custom_task_is_ignored(state: AppState, backend: FakeSnapshotBackend, raw) -> None:
    before = task_api.list_tasks(state)
    assert task_api.add_custom_task(state, raw) is None
    assert task_api.list_tasks(state) == before
    assert backend.save_count == 0


def test_custom_task_is_trimmed_truncated_and_selected(state: AppState, backend: FakeSnapshotBackend) -> None:
    task = task_api.add_custom_task(state, "X" * 40)
    assert task is not None
    assert task.name == "X" * 25
    assert task.is_selected is True
    assert task_api.selected_tasks(state) == [task]
    assert backend.save_count == 1

    trimmed = task_api.add_custom_task(state, "  Walk  ")
    assert trimmed is not None and trimmed.name == "Walk"


def test_color_rotation_uses_current_size() -> None:
    reg = TaskRegistry()
    first = reg.add_custom("Walk")
    second = reg.add_custom("Feed")
    assert first is not None and second is not None
    assert first.color == COLOR_PALETTE[5]
    assert second.color == COLOR_PALETTE[6]


def test_color_rotation_wraps_around() -> None:
    reg = TaskRegistry([Task(name=f"t{i}") for i in range(len(COLOR_PALETTE))])
    added = reg.add_custom("wrap")
    assert added is not None and added.color == COLOR_PALETTE[0]


def test_names_are_not_unique_and_color_lookup_uses_first_match() -> None:
    reg = TaskRegistry([Task(name="Walk", color="red"), Task(name="Walk", color="blue")])
    ids = {t.id for t in reg.list()}
    assert len(ids) == 2
    assert reg.color_for("Walk") == "red"
    assert reg.color_for("Unknown") == "gray"


def test_unknown_color_displays_gray() -> None:
    assert Task(name="x", color="chartreuse").display_color == "gray"
    assert Task(name="x", color="Teal").display_color == "teal"
