"""Tests for gridpick.navigation -- selection index arithmetic."""

from __future__ import annotations

from gridpick.navigation import PROMPT_INDEX, NavigationIndexer


class TestVerticalMovement:
    def test_down_then_up(self) -> None:
        nav = NavigationIndexer(5, 4)
        assert nav.move_vertically_by(1) == 4
        assert nav.move_vertically_by(-1) == 0

    def test_down_stops_at_bottom_of_column(self) -> None:
        nav = NavigationIndexer(5, 4, index=1)
        assert nav.move_vertically_by(1) == 1

    def test_down_walks_column(self) -> None:
        nav = NavigationIndexer(10, 4, index=1)
        assert nav.down() == 5
        assert nav.down() == 9
        assert nav.down() == 9

    def test_up_stops_at_top_row(self) -> None:
        nav = NavigationIndexer(10, 4, index=2)
        assert nav.up() == 2

    def test_multi_row_step(self) -> None:
        nav = NavigationIndexer(20, 4)
        assert nav.move_vertically_by(2) == 8

    def test_column_count_argument_updates_state(self) -> None:
        nav = NavigationIndexer(10, 4)
        assert nav.move_vertically_by(1, 2) == 2
        assert nav.column_count == 2

    def test_zero_step(self) -> None:
        nav = NavigationIndexer(10, 4, index=3)
        assert nav.move_vertically_by(0) == 3

    def test_down_then_up_round_trips_when_moved(self) -> None:
        for count in range(1, 14):
            for columns in range(1, 5):
                for start in range(count):
                    nav = NavigationIndexer(count, columns, index=start)
                    if nav.down() != start:
                        assert nav.up() == start


class TestPromptSelection:
    def test_up_from_first_reaches_prompt(self) -> None:
        nav = NavigationIndexer(5, 4, prompt_selectable=True)
        assert nav.up() == PROMPT_INDEX
        assert nav.up() == PROMPT_INDEX
        assert nav.down() == 0

    def test_prompt_not_reachable_by_default(self) -> None:
        nav = NavigationIndexer(5, 4)
        assert nav.up() == 0
        assert nav.select(-1) == 0

    def test_disabling_prompt_clamps(self) -> None:
        nav = NavigationIndexer(5, 4, prompt_selectable=True, index=-1)
        assert nav.set_prompt_selectable(False) == 0


class TestClamping:
    def test_select_clamps(self) -> None:
        nav = NavigationIndexer(5, 4)
        assert nav.select(99) == 4
        assert nav.select(-5) == 0

    def test_horizontal_moves_clamp(self) -> None:
        nav = NavigationIndexer(5, 4, index=4)
        assert nav.forward() == 4
        nav.select(0)
        assert nav.backward() == 0

    def test_large_horizontal_steps_clamp(self) -> None:
        nav = NavigationIndexer(5, 4)
        assert nav.move_horizontally_by(100) == 4
        assert nav.move_horizontally_by(-100) == 0

    def test_large_horizontal_steps_clamp_to_prompt(self) -> None:
        nav = NavigationIndexer(5, 4, prompt_selectable=True)
        assert nav.move_horizontally_by(-100) == -1
        assert nav.move_horizontally_by(100) == 4

    def test_shrinking_count_clamps(self) -> None:
        nav = NavigationIndexer(5, 4, index=4)
        assert nav.set_count(2) == 1

    def test_empty_list(self) -> None:
        nav = NavigationIndexer(0, 4)
        assert nav.current_index == 0
        assert nav.down() == 0
        assert nav.forward() == 0

    def test_empty_list_with_prompt(self) -> None:
        nav = NavigationIndexer(0, 4, prompt_selectable=True)
        assert nav.current_index == PROMPT_INDEX
        assert nav.down() == PROMPT_INDEX
