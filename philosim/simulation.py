"""Threads that simulate dining philosophers and a watchdog that detects starvation."""

from __future__ import annotations

import sys
import threading
import time
from collections.abc import Callable
from typing import TextIO

from .parsing import Settings


def _wall_clock_ms() -> int:
    return time.time_ns() // 1_000_000


class Philosopher:
    """One philosopher seated between two forks."""

    def __init__(
        self,
        philo_id: int,
        table: Table,
        left_fork: threading.Lock,
        right_fork: threading.Lock,
    ) -> None:
        self.philo_id = philo_id
        self.table = table
        self.left_fork = left_fork
        self.right_fork = right_fork
        self.meal_counter = 0
        self.last_meal_time = 0
        self.thread: threading.Thread | None = None
        self._meal_lock = threading.Lock()

    def _record_meal(self) -> None:
        with self._meal_lock:
            self.last_meal_time = self.table.elapsed_ms()

    def time_since_meal(self, now: int) -> int:
        """Milliseconds between the last meal and the given table time."""
        with self._meal_lock:
            return now - self.last_meal_time

    def run(self) -> None:
        """Eat, sleep and think until the simulation ends."""
        table = self.table
        while not table.ended:
            self.take_forks()
            table.print_status(self, "is eating")
            self._record_meal()
            self.meal_counter += 1
            table.sleep_ms(table.settings.time_to_eat)
            self.release_forks()
            table.print_status(self, "is sleeping")
            table.sleep_ms(table.settings.time_to_sleep)
            table.print_status(self, "is thinking")

    def run_alone(self) -> None:
        """Pick up the only fork there is, then give up."""
        with self.left_fork:
            self._record_meal()
            self.table.print_status(self, "has taken left fork")

    def take_forks(self) -> None:
        """Pick up both forks; even seats start on the left, odd on the right."""
        if self.philo_id % 2 == 0:
            self.left_fork.acquire()
            self.table.print_status(self, "has taken left fork")
            self.right_fork.acquire()
            self.table.print_status(self, "has taken right fork")
        else:
            self.right_fork.acquire()
            self.table.print_status(self, "has taken right fork")
            self.left_fork.acquire()
            self.table.print_status(self, "has taken left fork")

    def release_forks(self) -> None:
        """Put both forks back down."""
        if self.philo_id % 2 == 0:
            self.right_fork.release()
            self.left_fork.release()
        else:
            self.left_fork.release()
            self.right_fork.release()


class Table:
    """Shared state of a simulation: forks, philosophers, clock and output."""

    def __init__(
        self,
        settings: Settings,
        output: TextIO | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        self.settings = settings
        self._output = output
        self._clock = clock or _wall_clock_ms
        self._state_lock = threading.Lock()
        self._print_lock = threading.Lock()
        self._ended = False
        self.start_time = self._clock()
        count = max(settings.number_of_philos, 0)
        self.forks = [threading.Lock() for _ in range(count)]
        self.philosophers = [
            Philosopher(i + 1, self, self.forks[i], self.forks[(i + 1) % count])
            for i in range(count)
        ]

    @property
    def ended(self) -> bool:
        """Whether the simulation has stopped."""
        with self._state_lock:
            return self._ended

    def _write(self, line: str) -> None:
        stream = self._output if self._output is not None else sys.stdout
        stream.write(line + "\n")
        stream.flush()

    def elapsed_ms(self) -> int:
        """Milliseconds since the table was set up."""
        return self._clock() - self.start_time

    def print_status(self, philosopher: Philosopher, status: str) -> None:
        """Log a philosopher's action unless the simulation has ended."""
        current = self.elapsed_ms()
        with self._print_lock:
            if self.ended:
                return
            self._write(f"{current} {philosopher.philo_id} {status}")

    def sleep_ms(self, ms: int) -> None:
        """Wait for the given milliseconds, returning early once the simulation ends."""
        start = self.elapsed_ms()
        while self.elapsed_ms() - start < ms:
            time.sleep(0.0001)
            if self.ended:
                break

    def watchdog(self) -> bool:
        """Check every philosopher once; report and stop on the first starved one."""
        for philosopher in self.philosophers:
            with self._print_lock:
                now = self.elapsed_ms()
                with self._state_lock:
                    starved = (
                        philosopher.time_since_meal(now) > self.settings.time_to_die
                        and not self._ended
                    )
                    if starved:
                        self._ended = True
                if starved:
                    self._write(f"{self.elapsed_ms()} {philosopher.philo_id} died")
                    return True
        return False

    def start(self) -> None:
        """Start one thread per philosopher, or a single lonely one."""
        for philosopher in self.philosophers:
            philosopher._record_meal()
            philosopher.meal_counter = 0
            if len(self.philosophers) == 1:
                target = philosopher.run_alone
            else:
                target = philosopher.run
            philosopher.thread = threading.Thread(target=target, daemon=True)
            philosopher.thread.start()

    def join(self) -> None:
        """Wait for every philosopher thread to finish."""
        for philosopher in self.philosophers:
            if philosopher.thread is not None:
                philosopher.thread.join()

    def run(self) -> None:
        """Run the simulation until a philosopher dies."""
        self.start()
        while not self.watchdog():
            time.sleep(0.0005)
        self.join()