import pytest


class ScriptedRandom:
    """Returns queued values from randrange and records the ranges asked for."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def randrange(self, start, stop):
        self.calls.append((start, stop))
        return self.values.pop(0)


@pytest.fixture
def scripted_rng():
    return ScriptedRandom


@pytest.fixture
def settings_file(tmp_path):
    """settings.yaml pointing every output into tmp_path."""
    path = tmp_path / "settings.yaml"
    path.write_text(
        "generation:\n"
        "  progress: true\n"
        "paths:\n"
        f"  output_dir: {tmp_path / 'out'}\n"
        f"  logs_dir: {tmp_path / 'logs'}\n",
        encoding="utf-8",
    )
    return path
