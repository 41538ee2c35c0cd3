"""Test that shared constants live in one module and settings default to them."""

import ast
from pathlib import Path

from backend.app.config import Settings
from backend.app.models.defaults import (
    DEFAULT_CATEGORIES,
    DEFAULT_CATEGORY,
    STORAGE_KEY,
    SYNC_STATUS_TIMEOUT_S,
)

APP_DIR = Path(__file__).parent.parent.parent / "backend" / "app"
DEFAULTS_FILE = APP_DIR / "models" / "defaults.py"


class TestConstantsSingleSource:
    """Settings defaults come from the defaults module."""

    def test_storage_key_default(self):
        assert Settings(_env_file=None).storage_key == STORAGE_KEY

    def test_status_timeout_default(self):
        assert Settings(_env_file=None).sync_status_timeout_s == SYNC_STATUS_TIMEOUT_S

    def test_default_category_is_first_label(self):
        assert DEFAULT_CATEGORY == DEFAULT_CATEGORIES[0]
        assert len(set(DEFAULT_CATEGORIES)) == len(DEFAULT_CATEGORIES)


class TestNoDuplicatedLiterals:
    """The storage key string is spelled out only in the defaults module."""

    def _string_literals(self, file_path: Path) -> list[str]:
        tree = ast.parse(file_path.read_text(encoding="utf-8"))
        return [
            node.value
            for node in ast.walk(tree)
            if isinstance(node, ast.Constant) and isinstance(node.value, str)
        ]

    def test_storage_key_not_duplicated(self):
        offenders = [
            str(path.relative_to(APP_DIR))
            for path in APP_DIR.rglob("*.py")
            if path != DEFAULTS_FILE and STORAGE_KEY in self._string_literals(path)
        ]

        assert offenders == []

    def test_defaults_module_defines_storage_key(self):
        assert STORAGE_KEY in self._string_literals(DEFAULTS_FILE)
