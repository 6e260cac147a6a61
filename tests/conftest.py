"""Shared fixtures for adrscope tests."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner

from adrscope.config.settings import ScopeSettings
from adrscope.services.telemetry import disable_telemetry

DECISIONS = Path("docs") / "decisions"

# Three related records: A -> B, B -> A, C -> Z (Z does not exist).
ADR_A = """\
---
title: Use PostgreSQL
status: accepted
description: Primary datastore for transactional data
category: database
tags: [storage, sql]
technologies: [postgres]
author: alice
project: core
created: 2024-01-15
updated: 2024-03-01
related: [B.md]
---

# Context

We need a relational database with strong consistency.
"""

ADR_B = """\
---
title: Adopt Redis caching
status: Accepted
description: Cache hot reads in Redis
category: performance
tags: [cache]
technologies: [redis, postgres]
author: bob
project: core
created: 2024-02-20
related: [A.md]
---

Redis sits in front of the `orders` table.
"""

ADR_C = """\
---
title: Event sourcing for billing
status: weird-value
description: Keep an append-only ledger
category: architecture
tags: [events, storage]
author: alice
project: billing
created: 2023-11-05
related: [B, Z]
---

```python
ignored_in_search = True
```

Billing events are immutable.
"""


def _write_adr(directory: Path, name: str, content: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / name
    path.write_text(content, encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def _no_config_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Keep ambient ADRSCOPE_* variables and telemetry out of every test."""
    monkeypatch.delenv("ADRSCOPE_CONFIG", raising=False)
    yield
    disable_telemetry()


@pytest.fixture
def cli_runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    """Project with records A, B and C under ``docs/decisions``."""
    decisions = tmp_path / DECISIONS
    _write_adr(decisions, "A.md", ADR_A)
    _write_adr(decisions, "B.md", ADR_B)
    _write_adr(decisions, "C.md", ADR_C)
    return decisions


@pytest.fixture
def settings(tmp_path: Path, docs_dir: Path) -> ScopeSettings:
    return ScopeSettings.from_cli(project_root=tmp_path)


@pytest.fixture
def _isolated_project(docs_dir: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from the project root so CLI defaults find ``docs/decisions``."""
    monkeypatch.chdir(docs_dir.parent.parent)


@pytest.fixture
def write_adr() -> Callable[[Path, str, str], Path]:
    """Factory fixture: ``write_adr(directory, name, content)``."""
    return _write_adr
