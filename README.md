# funcwander

funcwander enumerates expression trees built from small "atom" functions
and looks for the ones whose output comes closest to a target table of
values. It is a brute-force search for a short formula, written with
operations such as `SUM`, `AND`, `OR`, `SHL` or `NOT`, that maps every
input `X` in a range to a wanted output.

The package ships a ready-made search for the A-law to linear PCM table,
and a small library for building your own searches. It has no
dependencies outside the standard library.

## Installation

```
pip install .
```

To run the test suite as well:

```
pip install .[test]
pytest
```

## The A-law search

```
funcwander-alaw --max-depth 3 --max-best 32 --savefile state.json
```

- `--max-depth` limits how deep expression trees may grow (default 3).
- `--max-best` sets how many best candidates are kept (default 32).
- `--savefile` names a JSON file holding the search state. If the file can
  be read when the search starts, the search resumes from it; if it cannot
  be opened, a message is printed and the search starts afresh; if its
  contents are not a valid saved state, the program prints a message and
  ends without searching. When the search ends, the current state is
  written to the file.

The search uses the atoms `X`, the constants 1 to 256, `NOT`, `BITCOUNT`,
`SUM`, `SUB`, `AND`, `OR`, `XOR`, `SHR` and `SHL` (see `funcwander.cli.build_atoms`),
skipping trees made only of constants and symmetric duplicates of
commutative operations.

About every ten seconds the program prints a status report: the number of
iterations, the expression being examined, its position in the enumeration
against the total, the percentage done, the speed, and the list of best
candidates. Each candidate line shows the number of mismatching positions,
the tree depth, the expression and the ranges of input positions where it
already matches the target. The search ends when the enumeration is
exhausted or on Ctrl+C; a final report is printed and, with `--savefile`,
the state is saved so the next run continues where this one left off.

## Building your own search

The building blocks live in these modules:

- `funcwander.atom`: the abstract atoms. `AtomFunc0` is a leaf (an argument
  or a constant), `AtomFunc1` takes one argument, `AtomFunc2` takes two and
  says whether it is commutative and idempotent, which lets the enumeration
  skip symmetric duplicates. An atom's `str()` is its name in expressions.
- `funcwander.samples`: ready atoms over 256 input positions: `ArgX`,
  `ConstAtom`, `Not`, `BitCount`, `BitClz`, `Fw1`, `Fw2`, `Sum`, `Sub`,
  `And`, `Or`, `Xor`, `Shr`, `Shl`. Results are reduced to 16-bit signed
  integers, shift counts are taken modulo 32, and a `ValueError` is raised
  when an argument does not hold exactly 256 values.
- `funcwander.target`: `Target`, the abstract goal. It compares a table of
  values with the wanted one (`compare`), reports where they match
  (`match_positions`, a `RangeSet`) and gives the wanted values (`values`).
- `funcwander.alaw`: `AlawTarget`, the A-law table as a `Target`, with
  `str_full` listing all its values.
- `funcwander.func_node`: `AtomFuncs`, the collection of atoms, and
  `FuncNode`, an expression tree that steps through every tree in a fixed
  order.
- `funcwander.search_task`: `Settings` and `SearchTask`, which run the
  enumeration, keep the best candidates and save or restore their state as
  JSON.
- `funcwander.common`: `RangeSet`, a set of integers kept as merged ranges;
  its `str()` lists them as `[start,end]` or single numbers.

Enumerating expressions directly:

```python
from funcwander.func_node import AtomFuncs, FuncNode
from funcwander.samples import ArgX, ConstAtom, Not, Sum, And

atoms = AtomFuncs()
atoms.add(ArgX())
for value in (1, 2, 3):
    atoms.add(ConstAtom(value))
atoms.add(Not())
atoms.add(Sum())
atoms.add(And())

node = FuncNode(atoms, skip_constant=False, skip_symmetric=True)
print(node.expression())          # X
while node.iterate(2):
    print(node.serial_number(), node.expression(), node.calculate()[:4])
```

`AtomFuncs.add` keeps the non-constant leaves ahead of the constants, so the
enumeration always starts from `X`. With `skip_symmetric=True`, a commutative
atom is tried with each unordered pair of arguments only once; with
`skip_constant=True`, trees built only from constants are passed over.
`FuncNode` also reports `arity`, `functions_count`, `current_max_level`,
`current_min_level` and `max_serial_number`, and can be copied with `copy`
and converted with `to_json` / `from_json`.

Running a search against a target:

```python
from funcwander.alaw import AlawTarget
from funcwander.search_task import SearchTask, Settings

settings = Settings(max_best=5, max_depth=2)
task = SearchTask(settings, atoms, AlawTarget(),
                  skip_constant=True, skip_symmetric=True)

while task.search_iterate():
    pass

print(task.status())
for node in task.best():
    print(node.expression())
```

`SearchTask.run` starts the same loop in a background thread and
`SearchTask.stop` ends it; `done` tells whether the enumeration has reached
its end. `to_json` returns a dictionary with the settings, the iteration
count, the current expression and the best candidates; `from_json` takes
that dictionary serialised as JSON text (for example with `json.dumps`) and
restores it, raising `ValueError` on malformed input, so a long search can
be interrupted and resumed.