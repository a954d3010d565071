import pytest

from xcl.linked_list import LinkedList, ListNode


def make(values):
    lst = LinkedList()
    nodes = [ListNode(v) for v in values]
    for node in nodes:
        lst.add_back(node)
    return lst, nodes


def cmp(a, b):
    return (a > b) - (a < b)


def test_add_back_keeps_order():
    data = ["a", "b", "c", "d"]
    lst, _ = make(data)
    assert lst.values() == data
    assert len(lst) == len(data)


def test_add_front_reverses():
    data = [1, 2, 3]
    lst = LinkedList()
    for v in data:
        lst.add_front(ListNode(v))
    assert lst.values() == list(reversed(data))


def test_pop_front_and_back():
    data = ["a", "b", "c", "d"]
    lst, nodes = make(data)
    assert lst.pop_front() is nodes[0]
    assert lst.pop_back() is nodes[-1]
    assert lst.values() == data[1:-1]
    assert not nodes[0].linked


def test_pop_empty_raises():
    lst = LinkedList()
    with pytest.raises(IndexError):
        lst.pop_front()
    with pytest.raises(IndexError):
        lst.pop_back()


def test_first():
    lst = LinkedList()
    assert lst.first() is None
    lst, nodes = make(["x", "y"])
    assert lst.first() is nodes[0]


def test_insert_before_position_and_at_end():
    lst, nodes = make(["a", "b", "c"])
    lst.insert(nodes[1], ListNode("x"))
    lst.insert(None, ListNode("z"))
    assert lst.values() == ["a", "x", "b", "c", "z"]


def test_insert_linked_node_raises():
    lst, nodes = make(["a", "b"])
    other = LinkedList()
    with pytest.raises(ValueError):
        other.add_back(nodes[0])


def test_insert_at_foreign_position_raises():
    lst, nodes = make(["a"])
    other = LinkedList()
    with pytest.raises(ValueError):
        other.insert(nodes[0], ListNode("b"))


def test_erase():
    lst, nodes = make(["a", "b", "c"])
    lst.erase(nodes[1])
    assert lst.values() == ["a", "c"]
    with pytest.raises(ValueError):
        lst.erase(nodes[1])


def test_sort_matches_sorted():
    data = [5, 3, 9, 1, 7, 3, 0, 8]
    lst, nodes = make(data)
    lst.sort(cmp)
    assert lst.values() == sorted(data)
    assert {id(n) for n in lst} == {id(n) for n in nodes}


def test_sort_is_stable():
    pairs = [(2, "a"), (1, "b"), (2, "c"), (1, "d"), (0, "e")]
    lst, _ = make(pairs)
    lst.sort(lambda x, y: cmp(x[0], y[0]))
    assert lst.values() == sorted(pairs, key=lambda p: p[0])


def test_sort_empty():
    lst = LinkedList()
    lst.sort(cmp)
    assert lst.values() == []


def test_splice_all_moves_everything():
    a_data, b_data = ["a", "b"], ["c", "d"]
    a, _ = make(a_data)
    b, b_nodes = make(b_data)
    a.splice_all(None, b)
    assert a.values() == a_data + b_data
    assert not b
    assert len(a) == len(a_data) + len(b_data)
    a.erase(b_nodes[0])
    assert a.values() == a_data + b_data[1:]


def test_splice_all_into_self_raises():
    a, _ = make(["a"])
    with pytest.raises(ValueError):
        a.splice_all(None, a)


def test_splice_single_node():
    a, a_nodes = make(["a", "b"])
    b, b_nodes = make(["c", "d"])
    a.splice(a_nodes[0], b, b_nodes[1])
    assert a.values() == ["d", "a", "b"]
    assert b.values() == ["c"]


def test_swap():
    a_data, b_data = ["a"], ["b", "c"]
    a, _ = make(a_data)
    b, b_nodes = make(b_data)
    a.swap(b)
    assert a.values() == b_data
    assert b.values() == a_data
    a.erase(b_nodes[0])
    assert a.values() == b_data[1:]


def test_traverse_can_erase():
    lst, _ = make(["a", "b", "c"])
    lst.traverse(lst.erase)
    assert not lst
    assert lst.first() is None


def test_traverse_visits_in_order():
    data = ["a", "b", "c"]
    lst, _ = make(data)
    seen = []
    lst.traverse(lambda n: seen.append(n.value))
    assert seen == data