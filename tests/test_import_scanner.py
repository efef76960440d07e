"""
Tests for the Python import scanner.

Each test builds a small source tree under pytest's tmp_path and checks
the file dependency relation ImportScanner extracts from it.
"""

from pathlib import Path

import pytest

from pr_graph import DependencyAnalysisError, ImportScanner


def _write_tree(root: Path, files):
    for rel_path, content in files.items():
        path = root / rel_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")


@pytest.fixture
def source_tree(tmp_path):
    """A small package with absolute, relative and unresolvable imports."""
    _write_tree(
        tmp_path,
        {
            "app/__init__.py": "from .models import Model\n",
            "app/models.py": "import os\nfrom app import utils\n",
            "app/views.py": "from . import models\nfrom .sub import helpers\n",
            "app/utils.py": "import json\n",
            "app/sub/__init__.py": "",
            "app/sub/helpers.py": "from ..utils import *\nfrom ... import nowhere\n",
            "main.py": "import app.views\nimport app.missing\nimport requests\n",
        },
    )
    return tmp_path


class TestImportScanner:
    """Tests for ImportScanner.analyze."""

    def test_every_file_is_a_key(self, source_tree):
        """Test that each scanned file appears, even without dependencies."""
        relation = ImportScanner().analyze(source_tree)

        assert set(relation) == {
            "app/__init__.py",
            "app/models.py",
            "app/views.py",
            "app/utils.py",
            "app/sub/__init__.py",
            "app/sub/helpers.py",
            "main.py",
        }
        assert relation["app/utils.py"] == set()
        assert relation["app/sub/__init__.py"] == set()

    def test_relative_imports(self, source_tree):
        """Test PEP 328 resolution for packages and modules."""
        relation = ImportScanner().analyze(source_tree)

        assert relation["app/__init__.py"] == {"app/models.py"}
        assert relation["app/views.py"] == {"app/models.py", "app/sub/helpers.py"}
        assert relation["app/sub/helpers.py"] == {"app/utils.py"}

    def test_from_import_of_submodule(self, source_tree):
        """Test that 'from app import utils' resolves to the submodule file."""
        relation = ImportScanner().analyze(source_tree)

        assert relation["app/models.py"] == {"app/utils.py"}

    def test_parent_fallback(self, source_tree):
        """Test that an unknown submodule falls back to its package."""
        relation = ImportScanner().analyze(source_tree)

        assert relation["main.py"] == {"app/views.py", "app/__init__.py"}

    def test_strict_resolution(self, source_tree):
        """Test that strict mode drops unresolved targets instead."""
        relation = ImportScanner(strict_resolution=True).analyze(source_tree)

        assert relation["main.py"] == {"app/views.py"}

    def test_self_import_dropped(self, tmp_path):
        """Test that a module importing itself has no self-dependency."""
        _write_tree(tmp_path, {"solo.py": "import solo\n"})

        assert ImportScanner().analyze(tmp_path) == {"solo.py": set()}

    def test_ignored_directories(self, source_tree):
        """Test that virtualenvs and caches are not scanned."""
        _write_tree(
            source_tree,
            {
                ".venv/lib/site.py": "import app\n",
                "app/__pycache__/stale.py": "",
            },
        )

        relation = ImportScanner().analyze(source_tree)

        assert not any(path.startswith(".venv/") for path in relation)
        assert "app/__pycache__/stale.py" not in relation

    def test_exclude_globs(self, source_tree):
        """Test that excluded files are neither keys nor targets."""
        relation = ImportScanner(exclude=["app/sub/*"]).analyze(source_tree)

        assert "app/sub/helpers.py" not in relation
        assert relation["app/views.py"] == {"app/models.py"}

    def test_unparsable_file_warns(self, source_tree):
        """Test that a syntax error skips the file with a warning."""
        _write_tree(source_tree, {"broken.py": "def oops(:\n"})

        with pytest.warns(UserWarning, match="broken.py"):
            relation = ImportScanner().analyze(source_tree)

        assert "broken.py" not in relation
        assert "main.py" in relation

    def test_missing_root(self, tmp_path):
        """Test that a missing source root raises DependencyAnalysisError."""
        with pytest.raises(DependencyAnalysisError, match="not a directory"):
            ImportScanner().analyze(tmp_path / "nope")

    def test_empty_tree(self, tmp_path):
        """Test that a tree without Python files gives an empty relation."""
        _write_tree(tmp_path, {"README.md": "# hi\n"})

        assert ImportScanner().analyze(tmp_path) == {}

    def test_accepts_string_root(self, source_tree):
        """Test that the root may be passed as a string."""
        assert ImportScanner().analyze(str(source_tree)) == ImportScanner().analyze(
            source_tree
        )
