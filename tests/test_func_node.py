import json

import pytest

from funcwander.atom import AtomFunc0, AtomFunc1, AtomFunc2
from funcwander.func_node import AtomFuncs, AtomIndex, FuncNode

VALUES_RANGE = 256
MASK = 0xFFFF


class ConstAtom(AtomFunc0):
    def __init__(self, value):
        self._value = value
        self._values = [value] * VALUES_RANGE

    def calculate(self):
        return self._values

    def constant(self):
        return True

    def __str__(self):
        return str(self._value)


class ArgX(AtomFunc0):
    def __init__(self):
        self._values = list(range(VALUES_RANGE))

    def calculate(self):
        return self._values

    def constant(self):
        return False

    def __str__(self):
        return "X"


class Not(AtomFunc1):
    def calculate(self, arg):
        return [~v & MASK for v in arg]

    def involutive(self):
        return True

    def argument(self):
        return False

    def __str__(self):
        return "NOT"


class BitCount(AtomFunc1):
    def calculate(self, arg):
        return [bin(v & MASK).count("1") for v in arg]

    def involutive(self):
        return True

    def argument(self):
        return False

    def __str__(self):
        return "BITCOUNT"


class Sum(AtomFunc2):
    def calculate(self, arg1, arg2):
        return [(a + b) & MASK for a, b in zip(arg1, arg2)]

    def commutative(self):
        return True

    def idempotent(self):
        return False

    def __str__(self):
        return "SUM"


class And(AtomFunc2):
    def calculate(self, arg1, arg2):
        return [a & b for a, b in zip(arg1, arg2)]

    def commutative(self):
        return True

    def idempotent(self):
        return True

    def __str__(self):
        return "AND"


class Or(AtomFunc2):
    def calculate(self, arg1, arg2):
        return [a | b for a, b in zip(arg1, arg2)]

    def commutative(self):
        return True

    def idempotent(self):
        return True

    def __str__(self):
        return "OR"


def make_atoms():
    atoms = AtomFuncs()
    atoms.arg0.append(ArgX())
    atoms.arg0.extend(ConstAtom(i) for i in range(1, 4))
    atoms.arg1.extend([Not(), BitCount()])
    atoms.arg2.extend([Sum(), And(), Or()])
    return atoms


def node_from(atoms, data, **kwargs):
    node = FuncNode(atoms, **kwargs)
    node.from_json(data)
    return node


X = {"arity": 0, "num": 0}
ONE = {"arity": 0, "num": 1}


def test_serial_number_strictly_increases():
    atoms = make_atoms()
    fnc = FuncNode(atoms)
    snum = fnc.serial_number()
    assert snum == 0
    steps = 0
    while fnc.iterate(2):
        steps += 1
        new_snum = fnc.serial_number()
        assert new_snum > snum
        snum = new_snum
    assert steps > 0


SKIP_SYMMETRIC_SEQUENCE = [
    "X", "1", "2", "3",
    "NOT(X)", "NOT(1)", "NOT(2)", "NOT(3)",
    "BITCOUNT(X)", "BITCOUNT(1)", "BITCOUNT(2)", "BITCOUNT(3)",
    "SUM(X;X)", "SUM(X;1)", "SUM(1;1)", "SUM(X;2)", "SUM(1;2)", "SUM(2;2)",
    "SUM(X;3)", "SUM(1;3)", "SUM(2;3)", "SUM(3;3)",
    "AND(X;X)", "AND(X;1)", "AND(X;2)", "AND(1;2)", "AND(X;3)", "AND(1;3)",
    "AND(2;3)",
    "OR(X;X)", "OR(X;1)", "OR(X;2)", "OR(1;2)", "OR(X;3)", "OR(1;3)",
    "OR(2;3)",
    "NOT(NOT(X))",
]


def test_skip_symmetric_sequence():
    fnc = FuncNode(make_atoms(), skip_symmetric=True)
    assert fnc.expression() == SKIP_SYMMETRIC_SEQUENCE[0]
    for expected in SKIP_SYMMETRIC_SEQUENCE[1:]:
        assert fnc.iterate(2)
        assert fnc.expression() == expected


def test_skip_constant_yields_no_constant_compound():
    fnc = FuncNode(make_atoms(), skip_constant=True)
    seen = 0
    while fnc.iterate(2):
        seen += 1
        if fnc.arity() != 0:
            assert not fnc.constant()
    assert seen > 0


def test_json_round_trip_during_iteration():
    atoms = make_atoms()
    fnc = FuncNode(atoms, skip_constant=True, skip_symmetric=True)
    for _ in range(100):
        assert fnc.iterate(2)
        text = json.dumps(fnc.to_json())
        loaded = FuncNode(atoms, skip_constant=True, skip_symmetric=True)
        loaded.from_json(json.loads(text))
        assert loaded == fnc
        assert loaded.serial_number() == fnc.serial_number()
        assert loaded.expression() == fnc.expression()


def test_to_json_content():
    atoms = make_atoms()
    fnc = node_from(atoms, {"arity": 1, "num": 0, "arg1": X})
    assert fnc.to_json() == {
        "arity": 1,
        "num": 0,
        "name": "NOT",
        "arg1": {"arity": 0, "num": 0, "name": "X"},
    }


@pytest.mark.parametrize(
    "data",
    [
        {"num": 0},
        {"arity": 0},
        {"arity": -1, "num": 0},
        {"arity": True, "num": 0},
        {"arity": 0, "num": 1.5},
        {"arity": 1, "num": 0},
        {"arity": 1, "num": 0, "arg1": [1]},
        {"arity": 2, "num": 0, "arg1": X},
        {"arity": 0, "num": 4},
        {"arity": 3, "num": 0},
        [1, 2],
    ],
)
def test_from_json_rejects_malformed(data):
    fnc = FuncNode(make_atoms())
    with pytest.raises(ValueError):
        fnc.from_json(data)
    assert fnc.expression() == "X"


def test_levels_and_function_count():
    atoms = make_atoms()
    fnc = node_from(
        atoms,
        {"arity": 2, "num": 0, "arg1": X, "arg2": {"arity": 1, "num": 0, "arg1": X}},
    )
    assert fnc.expression() == "SUM(X;NOT(X))"
    assert fnc.functions_count() == 2
    assert fnc.current_max_level() == 2
    assert fnc.current_min_level() == 1


def test_max_serial_number():
    fnc = FuncNode(make_atoms())
    assert fnc.max_serial_number(0) == 4
    assert fnc.max_serial_number(1) == 60


def test_calculate_values():
    atoms = make_atoms()
    not_x = node_from(atoms, {"arity": 1, "num": 0, "arg1": X})
    assert not_x.calculate()[0] == 65535
    sum_x1 = node_from(atoms, {"arity": 2, "num": 0, "arg1": X, "arg2": ONE})
    assert sum_x1.calculate()[5] == 6
    bitcount = node_from(atoms, {"arity": 1, "num": 1, "arg1": X})
    assert bitcount.calculate()[255] == 8
    assert len(bitcount.calculate(recalculate=True)) == VALUES_RANGE


def test_clear_calculated_recomputes_same_values():
    atoms = make_atoms()
    fnc = node_from(atoms, {"arity": 1, "num": 0, "arg1": X})
    first = list(fnc.calculate())
    fnc.clear_calculated()
    assert list(fnc.calculate()) == first


def test_constant_detection():
    atoms = make_atoms()
    assert node_from(atoms, {"arity": 1, "num": 0, "arg1": ONE}).constant()
    assert not node_from(atoms, {"arity": 2, "num": 1, "arg1": ONE, "arg2": X}).constant()


def test_init_depth_builds_chain():
    fnc = FuncNode(make_atoms())
    fnc.init_depth(3)
    assert fnc.expression() == "NOT(NOT(NOT(X)))"
    assert fnc.current_max_level() == 3
    with pytest.raises(ValueError):
        fnc.init_depth(1, 2)


def test_copy_is_independent():
    atoms = make_atoms()
    fnc = FuncNode(atoms)
    fnc.init_depth(2)
    clone = fnc.copy()
    assert clone == fnc
    assert clone.iterate(2)
    assert clone != fnc
    assert fnc.expression() == "NOT(NOT(X))"


def test_equality_requires_same_atoms():
    a = FuncNode(make_atoms())
    b = FuncNode(make_atoms())
    assert a != b
    assert a == FuncNode(a.atoms)


def test_expression_append():
    fnc = FuncNode(make_atoms())
    assert fnc.expression("!") == "X!"
    assert str(fnc) == "X"


def test_atom_index_default():
    assert AtomIndex() == AtomIndex(0, 0)
    assert AtomIndex(1, 2) != AtomIndex(2, 1)


def test_atom_funcs_add_orders_nullary():
    atoms = AtomFuncs()
    c1, c2, x = ConstAtom(1), ConstAtom(2), ArgX()
    atoms.add(c1)
    atoms.add(c2)
    atoms.add(x)
    atoms.add(Not())
    atoms.add(Sum())
    assert atoms.arg0 == [x, c1, c2]
    assert [str(a) for a in atoms.arg1] == ["NOT"]
    assert atoms.get(2, 0) is atoms.arg2[0]
    assert atoms.get(0, 1) is c1


def test_atom_funcs_errors():
    atoms = make_atoms()
    with pytest.raises(ValueError):
        atoms.get(3, 0)
    with pytest.raises(IndexError):
        atoms.get(1, 5)
    with pytest.raises(TypeError):
        atoms.add("not an atom")