from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from asmlex.languages import asm  # noqa: E402
from asmlex.lexer import SimpleLexer  # noqa: E402
from asmlex.registry import LanguageRegistry, create_default_registry  # noqa: E402


@pytest.fixture
def asm_lexer() -> SimpleLexer:
    """The assembly lexer, freshly built."""
    return asm.create_lexer()


@pytest.fixture
def registry() -> LanguageRegistry:
    """Registry with the built-in languages."""
    return create_default_registry()


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run with an empty home directory and working directory."""
    home = tmp_path / "home"
    home.mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("ASMLEX_CONFIG_PATH", raising=False)
    monkeypatch.chdir(work)
    return work
