import re
from pathlib import Path

import pytest

from tremor_check.__main__ import REQUIRED_PACKAGES

tomllib = pytest.importorskip('tomllib')

PYPROJECT = Path(__file__).resolve().parent.parent / 'pyproject.toml'


def declared_dependencies() -> list[str]:
    with PYPROJECT.open('rb') as f:
        project = tomllib.load(f)['project']
    return [re.split(r'[<>=!~\[; ]', dep, maxsplit=1)[0] for dep in project['dependencies']]


class TestDependencies:
    def test_declared_match_checked_imports(self):
        names = [name.replace('-', '_') for name in declared_dependencies()]
        assert sorted(names) == sorted(REQUIRED_PACKAGES)

    def test_no_bare_pydantic(self):
        assert 'pydantic' not in declared_dependencies()
