"""Tests for ListState."""

import pytest

from reactivity import ListState


@pytest.fixture
def letters():
    return ListState(["A", "B", "C"])


class TestListState:
    def test_copies_initial(self):
        source = ["a"]
        lst = ListState(source)
        source.append("b")
        assert lst.get() == ["a"]

    def test_none_initial_is_empty(self):
        assert ListState().get() == []
        assert ListState.of(None).get() == []

    def test_set_none_is_empty(self, letters):
        letters.set(None)
        assert letters.get() == []

    def test_reads(self, letters):
        assert len(letters) == 3
        assert letters[0] == "A"
        assert letters[-1] == "C"
        assert list(letters) == ["A", "B", "C"]
        assert "B" in letters
        assert "X" not in letters
        assert letters.index("C") == 2

    def test_index_missing(self, letters):
        with pytest.raises(ValueError):
            letters.index("X")

    def test_contains_all(self, letters):
        assert letters.contains_all(["A", "B"])
        assert not letters.contains_all(["A", "X"])
        with pytest.raises(TypeError):
            letters.contains_all(None)


class TestMutations:
    def test_add(self, letters):
        letters.add("D")
        assert letters.get() == ["A", "B", "C", "D"]

    def test_add_all(self, letters):
        letters.add_all(["D", "E"])
        letters.add_all(("F",))
        assert letters.get() == ["A", "B", "C", "D", "E", "F"]

    def test_add_all_none(self, letters):
        with pytest.raises(TypeError):
            letters.add_all(None)
        assert letters.get() == ["A", "B", "C"]

    def test_remove_last(self, letters):
        letters.remove_last()
        assert letters.get() == ["A", "B"]

    def test_remove_last_empty_does_not_notify(self):
        lst = ListState()
        log = []
        lst.subscribe(log.append)
        lst.remove_last()
        assert log == [[]]

    def test_clear(self, letters):
        letters.clear()
        assert letters.get() == []
        assert len(letters) == 0

    def test_remove_if(self, letters):
        letters.remove_if(lambda s: s == "B")
        assert letters.get() == ["A", "C"]

    def test_remove(self, letters):
        assert letters.remove("B") is True
        assert letters.get() == ["A", "C"]
        assert letters.remove("X") is False

    def test_remove_all(self, letters):
        assert letters.remove_all(["A", "C"]) is True
        assert letters.get() == ["B"]
        assert letters.remove_all(["X"]) is False

    def test_retain_all(self, letters):
        assert letters.retain_all(["A", "C", "Z"]) is True
        assert letters.get() == ["A", "C"]
        assert letters.retain_all(["A", "C"]) is False

    def test_set_at(self, letters):
        letters.set_at(1, "X")
        assert letters.get() == ["A", "X", "C"]

    def test_set_at_out_of_range(self, letters):
        with pytest.raises(IndexError):
            letters.set_at(3, "X")
        with pytest.raises(IndexError):
            letters.set_at(-1, "X")
        assert letters.get() == ["A", "B", "C"]

    def test_replace(self, letters):
        assert letters.replace("B", "X") is True
        assert letters.get() == ["A", "X", "C"]
        assert letters.replace("nope", "Y") is False
        assert letters.get() == ["A", "X", "C"]

    def test_update_if(self):
        fruit = ListState(["apple", "banana", "cherry"])
        assert fruit.update_if(lambda s: s.startswith("a"), str.upper) is True
        assert fruit.get() == ["APPLE", "banana", "cherry"]

    def test_update_if_all(self):
        fruit = ListState(["apple", "banana", "cherry"])
        assert fruit.update_if(lambda s: True, str.upper) is True
        assert fruit.get() == ["APPLE", "BANANA", "CHERRY"]

    def test_update_if_no_match(self):
        fruit = ListState(["apple", "banana"])
        log = []
        fruit.subscribe(log.append)
        assert fruit.update_if(lambda s: s == "kiwi", str.upper) is False
        assert len(log) == 1

    def test_update_if_none_args(self, letters):
        with pytest.raises(TypeError):
            letters.update_if(None, str.upper)
        with pytest.raises(TypeError):
            letters.update_if(lambda s: True, None)


class TestReactivity:
    def test_each_mutation_notifies_once(self, letters):
        log = []
        letters.subscribe(log.append)
        letters.add("D")
        letters.remove("A")
        assert log == [["A", "B", "C"], ["A", "B", "C", "D"], ["B", "C", "D"]]

    def test_delivered_lists_are_not_mutated(self, letters):
        seen = []
        letters.subscribe(seen.append)
        letters.add("D")
        letters.set_at(0, "Z")
        assert seen[0] == ["A", "B", "C"]
        assert seen[1] == ["A", "B", "C", "D"]

    def test_equal_result_does_not_notify(self, letters):
        log = []
        letters.subscribe(log.append)
        letters.set_at(0, "A")
        letters.remove_if(lambda s: False)
        assert len(log) == 1

    def test_todo_scenario(self):
        todos = ListState([f"Task {n}" for n in range(1, 6)])
        todos.remove_if(lambda t: t in ("Task 1", "Task 3"))
        assert todos.get() == ["Task 2", "Task 4", "Task 5"]
        assert todos[1] == "Task 4"
        todos.remove("Task 2")
        assert todos.get() == ["Task 4", "Task 5"]
