import io

from philosim.parsing import Settings
from philosim.simulation import Table


class FakeClock:
    def __init__(self, now=1000):
        self.now = now

    def __call__(self):
        return self.now


def make_table(count=3, die=100, eat=10, sleep=10):
    clock = FakeClock()
    out = io.StringIO()
    table = Table(Settings(count, die, eat, sleep), output=out, clock=clock)
    return table, clock, out


def test_forks_are_shared_between_neighbours():
    table, _, _ = make_table(count=4)
    ids = [p.philo_id for p in table.philosophers]
    assert ids == [1, 2, 3, 4]
    for i, philosopher in enumerate(table.philosophers):
        assert philosopher.left_fork is table.forks[i]
        assert philosopher.right_fork is table.forks[(i + 1) % 4]


def test_single_philosopher_has_one_fork_on_both_sides():
    table, _, _ = make_table(count=1)
    only = table.philosophers[0]
    assert only.left_fork is only.right_fork


def test_elapsed_ms_is_relative_to_start():
    table, clock, _ = make_table()
    assert table.elapsed_ms() == 0
    clock.now += 250
    assert table.elapsed_ms() == 250


def test_print_status_format():
    table, clock, out = make_table()
    clock.now += 5
    table.print_status(table.philosophers[1], "is eating")
    assert out.getvalue() == "5 2 is eating\n"


def test_watchdog_waits_until_strictly_past_time_to_die():
    table, clock, out = make_table(die=100)
    clock.now += 100
    assert table.watchdog() is False
    assert out.getvalue() == ""
    assert table.ended is False


def test_watchdog_reports_first_starved_philosopher():
    table, clock, out = make_table(die=100)
    clock.now += 101
    assert table.watchdog() is True
    assert out.getvalue() == "101 1 died\n"
    assert table.ended is True


def test_watchdog_skips_fed_philosopher():
    table, clock, out = make_table(count=2, die=100)
    clock.now += 50
    table.philosophers[0]._record_meal()
    clock.now += 60
    assert table.watchdog() is True
    assert out.getvalue() == "110 2 died\n"


def test_nothing_is_reported_after_the_end():
    table, clock, out = make_table(die=100)
    clock.now += 200
    assert table.watchdog() is True
    before = out.getvalue()
    assert table.watchdog() is False
    table.print_status(table.philosophers[0], "is thinking")
    assert out.getvalue() == before


def test_even_philosopher_takes_left_fork_first():
    table, _, out = make_table(count=3)
    philosopher = table.philosophers[1]
    philosopher.take_forks()
    assert out.getvalue().splitlines() == [
        "0 2 has taken left fork",
        "0 2 has taken right fork",
    ]
    assert philosopher.left_fork.locked() and philosopher.right_fork.locked()
    philosopher.release_forks()
    assert not philosopher.left_fork.locked()
    assert not philosopher.right_fork.locked()


def test_odd_philosopher_takes_right_fork_first():
    table, _, out = make_table(count=3)
    philosopher = table.philosophers[0]
    philosopher.take_forks()
    assert out.getvalue().splitlines() == [
        "0 1 has taken right fork",
        "0 1 has taken left fork",
    ]
    philosopher.release_forks()
    assert not table.forks[0].locked() and not table.forks[1].locked()


def test_run_alone_takes_and_returns_the_fork():
    table, clock, out = make_table(count=1)
    clock.now += 7
    table.philosophers[0].run_alone()
    assert out.getvalue() == "7 1 has taken left fork\n"
    assert table.philosophers[0].last_meal_time == 7
    assert not table.forks[0].locked()


def test_sleep_ms_returns_at_once_after_end():
    table, clock, _ = make_table()
    clock.now += 500
    table.watchdog()
    table.sleep_ms(1000)
    assert table.ended is True


def test_lonely_philosopher_dies():
    out = io.StringIO()
    table = Table(Settings(1, 50, 10, 10), output=out)
    table.run()
    lines = out.getvalue().splitlines()
    assert lines[0].endswith(" 1 has taken left fork")
    assert lines[-1].endswith(" 1 died")
    assert int(lines[-1].split()[0]) > 50


def test_starving_table_stops_with_death_last():
    out = io.StringIO()
    table = Table(Settings(4, 60, 100, 50), output=out)
    table.run()
    lines = out.getvalue().splitlines()
    assert lines[-1].endswith(" died")
    assert sum(line.endswith(" died") for line in lines) == 1
    assert table.ended is True
    assert all(p.thread is not None and not p.thread.is_alive() for p in table.philosophers)