# tests/conftest.py

import pytest

from Starforged.command_loader import load_all_commands
from Starforged.commanding import reset_seeded_rulesets
from Starforged.config import Settings
from Starforged.metrics import reset_counters


class ScriptedRandom:
    """Stand-in for random.Random that hands out preset values in order.

    Records each (low, high) request so tests can check the die ranges used.
    """

    def __init__(self, values):
        self._values = list(values)
        self.calls: list[tuple[int, int]] = []

    def randint(self, a: int, b: int) -> int:
        self.calls.append((a, b))
        if not self._values:
            raise AssertionError(f"ScriptedRandom ran out of values (asked for {a}..{b})")
        v = self._values.pop(0)
        assert a <= v <= b, f"scripted value {v} outside {a}..{b}"
        return v


class SpyResponder:
    def __init__(self):
        self.messages: list[tuple[str, bool]] = []
        self.deleted = 0

    async def send(self, content: str, *, ephemeral: bool = False):  # noqa: ANN001
        self.messages.append((content, ephemeral))

    async def delete_trigger(self):
        self.deleted += 1

    @property
    def texts(self) -> list[str]:
        return [m for m, _ in self.messages]


@pytest.fixture(autouse=True)
def _clean_counters():
    reset_counters()
    reset_seeded_rulesets()
    yield
    reset_counters()
    reset_seeded_rulesets()


@pytest.fixture(scope="session", autouse=True)
def _commands_loaded():
    load_all_commands()
    yield


@pytest.fixture
def spy():
    return SpyResponder()


@pytest.fixture
def settings():
    # Explicit values so a local .env or config.toml can't change test behavior
    return Settings(
        command_prefix="/",
        delete_trigger_messages=True,
        emphasize_replies=False,
        max_message_length=200,
        rng_seed=None,
        logging_console="NONE",
        logging_file="NONE",
    )


@pytest.fixture
def scripted():
    """Factory: scripted([4, 3, 8]) -> a random source returning those values."""
    return ScriptedRandom
