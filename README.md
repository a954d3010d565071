# xcl

A library of containers, reference-counted handles, a JSON value tree and a
template-driven file logger. It is pure Python and needs nothing beyond the
standard library.

## Modules

- `xcl.rb`: `RbTree`, `RbNode` and `RbColor`. This is a red-black tree that does
  not compare keys itself. The caller finds the parent, then calls
  `insert(node, parent, left)`, and the tree rebalances. It also offers
  `remove`, `next`/`prev`, `minimum`/`maximum`, in-order `nodes()` and
  `verify()`. `verify()` raises `ValueError` when an invariant is broken.
- `xcl.heap`: `Heap(compare)` is a binary min-heap ordered by a three-way
  comparison function. It has `push`, `pop`, `top`, `build`, `clear` and `len()`.
  `pop` and `top` raise `IndexError` when the heap is empty.
- `xcl.hash_table`: a chained `HashTable` that takes an optional hasher, an
  equality function and a key extractor. It has two wrappers:
  - `HashMap`: `add` refuses a key that is already present and returns `False`.
  - `HashSet`: holds unique items.
- `xcl.linked_list`: `LinkedList` and `ListNode`. This is a circular doubly
  linked list of caller-owned nodes. It has:
  - `add_front`, `add_back`, `pop_front`, `pop_back`;
  - `insert`, `erase`;
  - `splice`, `splice_all`;
  - a stable `sort(compare)`, `swap`, `traverse` and `values`.

  A node can be in only one list at a time.
- `xcl.treemap`: `SortedMap` and `SortedSet`, built on the red-black tree. They
  keep keys in order and allow equal keys when added with `unique=False`. They
  have:
  - `equal_range`, `copy`, `move_from`, `swap` and `verify`;
  - equality by contents.
- `xcl.handle_pool`: `HandlePool` hands out `HandleEntry` slots from
  fixed-size spans and keeps emptied spans for reuse.
- `xcl.handle_table`: `HandleTable` maps objects to integer handles. It has:
  - `map(obj, destructor, name)`;
  - `get`, `clone`, `clone_by_name`, `close`, `close_by_name`, `contains` and
    `clear`.

  Clones share one reference count, and the destructor runs when the last
  handle is closed. Closing by name destroys the object at once and makes its
  other handles stale. `map` raises `ValueError` in three cases: for `None`, for
  a name of 64 bytes or more, and for a duplicate name.
- `xcl.json_node`: `JsonNode` and `JsonType`. A node keeps integers and doubles
  apart, with the sign held separately. Object keys are looked up ignoring
  ASCII case. It has:
  - `get_int`, `get_str`, `get_double`;
  - `add_int`, `add_str`, `add_double`;
  - `replace_add`, `check_items`;
  - the `create_*` helpers.
- `xcl.json_codec`: `parse(text)`, `render(node)` (tabs and newlines) and
  `render_unformatted(node)`. Doubles are rendered with `%.16f`. Parse failures
  raise `JsonParseError`, whose `position` gives the offset.
- `xcl.log_format`: `LogLevel`, `LogContext` and `format_log(fmt, ctx, limit)`.
  `format_log` expands these variables:
  - `${path}`, `${level}`, `${function}`, `${filename}`, `${tag}`, `${line}`;
  - `${year}`, `${month}`, `${day}`, `${hour}`, `${minute}`, `${second}`;
  - `${datetime}`, `${message}`.

  Unknown variables are copied unchanged.
- `xcl.log_manager`: `LogManageConfig`, `LogFileInfo` and `LogManager`. The
  manager tracks `.log` files and discards the oldest ones to stay within these
  limits: single file size, total size, number of files and age in seconds. A
  negative limit means no limit. A `filter` and a `discard_cb` callback can be
  given.
- `xcl.log_file_writer`: `LogFileWriter` appends to a file whose name comes
  from a `.log` name format. It starts a new file in two cases:
  - the day changes and the expanded name differs;
  - the manager's size limit is reached. The file is then sliced:
    `app.log` → `app.[slice1].log`, and so on, as computed by `slice_name`.
- `xcl.logger`: `LogConfig` and `Logger`. `write` prints records at or above
  `show_level` and writes records at or above `write_level` to files. `echo`
  only prints. Records below `WARNING` go to stdout and the rest to stderr.
  Lines are cut to 4096 characters.
- `xcl.log`: a shared logger reached through `default_logger()`, plus
  `configure`, `log`, `print_log`, `log_assert` and `print_assert`. These
  functions record the caller's file, line and function. The two assert
  functions raise `AssertionError` when the predicate is false.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

A heap:

```python
from xcl.heap import Heap

heap = Heap(lambda a, b: (a > b) - (a < b))
heap.build([5, 3, 8, 1])
heap.pop()   # 1
```

A sorted map:

```python
from xcl.treemap import SortedMap

m = SortedMap()
m.add("b", 2)
m.add("a", 1)
list(m.keys())   # ["a", "b"]
```

Parsing and rendering JSON:

```python
from xcl.json_codec import parse, render_unformatted

node = parse('{"name": "demo", "count": 3}')
node.get_int("count", 0)      # 3
render_unformatted(node)      # '{"name":"demo","count":3}'
```

Filling in a log template:

```python
from xcl.log_format import LogContext, LogLevel, format_log

ctx = LogContext(level=LogLevel.INFO, tag="app", message="started")
format_log("[${tag}] [${level}] ${message}", ctx)   # "[app] [info] started"
```

Logging to the console and to daily files, keeping at most five files:

```python
from xcl.log import configure, log
from xcl.log_format import LogLevel
from xcl.log_manager import LogManageConfig
from xcl.logger import LogConfig

configure(
    LogConfig(tag="app", file_fmt="logs/app-${year}${month}${day}.log",
              write_level=LogLevel.INFO, show_level=LogLevel.WARNING),
    LogManageConfig(max_logs=5),
)
log(LogLevel.INFO, "processed %d items", 42)
```

The log directory must already exist.

## What it does not do

- It has no command-line tool. Everything is used as a library.
- The logger handles levels `VERBOSE` to `ERROR`. Records at `FATAL` are
  dropped.
- The logger writes only to the console streams and to local files. It does
  not send records over the network.