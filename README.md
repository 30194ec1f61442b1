# corewarvm

Building blocks of a Core War virtual machine: the instruction table, a
circular memory of 6144 bytes, champions and processes, the sixteen
instructions, and the reader for compiled champion files (`.cor`).

## Installation

```
pip install .
```

## Modules

- `corewarvm.op` holds the machine's constants (`MEM_SIZE`, `IDX_MOD`,
  `REG_NUMBER`, `CYCLE_TO_DIE`, ...), the `ArgType` flags (`REG`, `DIR`,
  `IND`, `LAB`), the `Op` record and the table `OP_TAB`. `op_by_code(code)`
  returns the entry for opcodes 1 to 16 and raises `ValueError` otherwise;
  `swap_endian(value)` reverses the bytes of a 32-bit integer.
- `corewarvm.memory` works on a `bytearray` of `MEM_SIZE` bytes:
  `calculate_address`, `read_short`, `read_int`, `read_memory` and
  `write_memory` wrap around the end of memory and read big-endian values;
  `format_dump` renders memory as upper-case hex, 32 bytes per line, and
  `dump_memory` writes that to a stream (standard output by default).
- `corewarvm.models` defines `Champion`, `Options`, `Process` and
  `CorewarError`. `Process.from_champion` creates a champion's first
  process with its number in register 1; `get_register`, `set_register`,
  `param_value` and `clone` do what their names say.
- `corewarvm.instructions` holds `op_live`, `op_ld`, `op_st`, `op_add`,
  `op_sub`, `op_and`, `op_or`, `op_xor`, `op_zjmp`, `op_ldi`, `op_sti`,
  `op_fork`, `op_lld`, `op_lldi`, `op_lfork` and `op_aff`, each called as
  `fn(vm, process)` on a process whose `current_op_arg_types` and
  `current_op_args` are already filled in. `instruction_for(opcode)`
  returns the function for an opcode.
- `corewarvm.champion` parses champion files: `parse_champion_bytes(data)`
  returns `(name, comment, code)`, `read_champion_file(champion)` fills a
  `Champion` from its `filename`, and both raise `CorewarError` on a bad
  file, magic number or program size. `is_number_used` and
  `find_available_number` choose champion numbers.

The `vm` argument of the instructions is any object with a `memory`
bytearray, a `champions` list, `cycle_counter`, `lives_in_period` and
`last_alive_champion` attributes and an `add_process(process)` method.

```python
from corewarvm.models import Process
from corewarvm.instructions import instruction_for
from corewarvm.op import ArgType

process = Process(champion_number=1, pc=0)
process.set_register(2, 40)
process.set_register(3, 2)
process.current_op_arg_types[:3] = [ArgType.REG] * 3
process.current_op_args[:3] = [2, 3, 4]
instruction_for(4)(None, process)   # add r2, r3, r4
assert process.get_register(4) == 42
```

## What the package does not do

There is no `corewar` command and no command-line parsing, no decoder
that reads an instruction and its arguments out of memory, and no machine
that schedules processes cycle by cycle, checks lives or announces a
winner. A match has to be driven by the caller from the pieces above.

## Tests

```
pip install .[test]
pytest
```