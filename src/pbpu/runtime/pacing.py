import time
from typing import Callable


class InvalidDelay(Exception):
    pass


def parse_delay(value: str | int) -> int:
    ''' Delay in microseconds, must be a non-negative integer '''
    try:
        delay = int(value)
    except (TypeError, ValueError) as e:
        raise InvalidDelay(f'Invalid delay value: {value}') from e

    if delay < 0:
        raise InvalidDelay("Delay can't be negative")

    return delay


class Pacer:
    def wait(self):
        pass


class DelayPacer(Pacer):
    def __init__(self, delay_us: int, sleep: Callable[[float], None] = time.sleep):
        self.delay_us = delay_us
        self.sleep = sleep

    def wait(self):
        self.sleep(self.delay_us / 1_000_000)


class StepPacer(Pacer):
    ''' Advances once per key press '''

    def __init__(self, wait_key: Callable[[], object]):
        self.wait_key = wait_key

    def wait(self):
        self.wait_key()
