# philosim

A threaded simulation of the dining philosophers problem. Philosophers sit
around a table with one fork between each pair of neighbours. Each one runs
in its own thread. It takes two forks, eats, puts the forks down, sleeps and
thinks, over and over. A watchdog checks whether anyone has gone hungry for
longer than the allowed time. When that happens it prints the death and the
simulation ends.

## Installation

```
pip install .
```

## Usage

```
philosim NUMBER_OF_PHILOSOPHERS TIME_TO_DIE TIME_TO_EAT TIME_TO_SLEEP [MAX_MEALS]
```

All times are in milliseconds. Every argument must be a non-empty run of
the digits `0`–`9`. Signs, spaces and other characters are rejected.

Example:

```
philosim 5 800 200 200
```

Each line of output has the form `<ms since start> <philosopher id> <status>`.
A status is one of these:

- `has taken left fork` / `has taken right fork`
- `is eating`
- `is sleeping`
- `is thinking`
- `died`

Philosophers are numbered from 1. Even-numbered philosophers pick up their
left fork first and odd-numbered ones pick up their right fork first, which
prevents deadlock. A lone philosopher takes the single fork and puts it
back. It never eats, so the watchdog reports its death once `TIME_TO_DIE`
milliseconds have passed. After the death line no further status lines are
printed.

If there are fewer than four or more than five arguments, or if any argument
is not a plain number, the program prints a usage box and exits with
status 1. After a death it exits with status 0.

## Limitations

`MAX_MEALS` is checked and stored as `Settings.max_eat`. When it is left
out, the default is 9999999. The simulation does not use this value: it runs
until a philosopher dies and never stops because everyone has eaten enough.
Each philosopher counts its own meals in `meal_counter`.

## Library use

```python
import io

from philosim.parsing import parse_arguments
from philosim.simulation import Table

settings = parse_arguments(["4", "410", "200", "200"])
out = io.StringIO()
Table(settings, output=out).run()
print(out.getvalue())
```

- `philosim.parsing.parse_arguments(args)` takes the arguments without the
  program name. It returns a frozen `Settings` with `number_of_philos`,
  `time_to_die`, `time_to_eat`, `time_to_sleep` and `max_eat`. It raises
  `UsageError`, a `ValueError` whose message is `usage_message()`, when the
  input is invalid.
- `is_valid_number(text)` reports whether a string is all digits.
  `leading_number(text)` converts the digits at the start of a string to a
  32-bit signed integer.
- `philosim.simulation.Table(settings, output=None, clock=None)` sets up the
  forks and the `Philosopher` objects. Output goes to `output`, or to
  standard output when none is given. `clock` returns the time in
  milliseconds and defaults to the wall clock. `run()` starts the threads,
  polls `watchdog()` until a death, then joins the threads. `start()`,
  `watchdog()` and `join()` can also be called separately. `elapsed_ms()`
  gives the milliseconds since setup, and `ended` tells whether the
  simulation has stopped.
- `philosim.cli.main(argv=None)` is the command's entry point. It returns
  the exit status.

## Tests

```
pip install .[test]
pytest
```