from pathlib import Path

import pytest

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


@pytest.fixture
def example_source():
    def load(name):
        with open(EXAMPLES / name, 'r', encoding='utf-8') as f:
            return f.read()
    return load
