import pytest

from ssrkit.linkedlist import LinkedList


def _eq(a, b):
    return a == b


def _gt(a, b):
    return a > b


def test_add_back_and_front_order():
    lst = LinkedList()
    lst.add_back(2)
    lst.add_back(3)
    lst.add_front(1)
    assert list(lst) == [1, 2, 3]
    assert len(lst) == 3


def test_add_front_on_empty_then_back():
    lst = LinkedList()
    lst.add_front("a")
    lst.add_back("b")
    assert list(lst) == ["a", "b"]


def test_items_are_copied():
    source = [1, 2]
    lst = LinkedList()
    lst.add_back(source)
    source.append(3)
    assert list(lst) == [[1, 2]]


def test_delete_node_removes_first_match():
    lst = LinkedList([5, 6, 5])
    assert lst.delete_node(5, _eq) is True
    assert list(lst) == [6, 5]
    assert lst.delete_node(9, _eq) is False
    assert len(lst) == 2


def test_delete_last_then_append():
    lst = LinkedList([1, 2])
    assert lst.delete_node(2, _eq) is True
    lst.add_back(3)
    assert list(lst) == [1, 3]


def test_delete_at():
    lst = LinkedList(["a", "b", "c"])
    lst.delete_at(1)
    assert list(lst) == ["a", "c"]
    lst.delete_at(1)
    lst.add_back("d")
    assert list(lst) == ["a", "d"]


@pytest.mark.parametrize("index", [-1, 3, 10])
def test_delete_at_out_of_range(index):
    lst = LinkedList([1, 2, 3])
    with pytest.raises(IndexError):
        lst.delete_at(index)
    assert list(lst) == [1, 2, 3]


def test_modify_at():
    lst = LinkedList([1, 2, 3])
    lst.modify_at(2, 30)
    assert list(lst) == [1, 2, 30]
    with pytest.raises(IndexError):
        lst.modify_at(3, 0)


def test_have_same():
    lst = LinkedList(["x", "y"])
    assert lst.have_same("y", _eq) is True
    assert lst.have_same("z", _eq) is False


def test_have_same_cmp_reports_differing_item():
    assert LinkedList([4, 4]).have_same_cmp(4) is False
    assert LinkedList([4, 5]).have_same_cmp(4) is True
    assert LinkedList().have_same_cmp(4) is False


def test_foreach_visits_in_order():
    seen = []
    LinkedList([3, 1, 2]).foreach(seen.append)
    assert seen == [3, 1, 2]


def test_sort_ascending():
    values = [5, 3, 9, 1, 3, 7]
    lst = LinkedList(values)
    lst.sort(_gt)
    assert list(lst) == sorted(values)


def test_sort_descending_with_reversed_predicate():
    values = [2, 8, 4]
    lst = LinkedList(values)
    lst.sort(lambda a, b: a < b)
    assert list(lst) == sorted(values, reverse=True)


def test_clear():
    lst = LinkedList([1, 2, 3])
    lst.clear()
    assert len(lst) == 0
    lst.add_back(4)
    assert list(lst) == [4]