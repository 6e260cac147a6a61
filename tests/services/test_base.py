"""Tests for BaseService document loading."""

from pathlib import Path

from adrscope.config.settings import ScopeSettings
from adrscope.services.base import BaseService, LoadedCollection
from adrscope.services.result import ServiceResult


def _load(settings: ScopeSettings, **kwargs: object) -> LoadedCollection:
    loaded = BaseService(settings)._load_documents("test", **kwargs)  # type: ignore[arg-type]
    assert isinstance(loaded, LoadedCollection), loaded
    return loaded


class TestLoadDocuments:
    def test_loads_sorted_by_id(self, settings: ScopeSettings) -> None:
        loaded = _load(settings)
        assert [d.id for d in loaded.documents] == ["A", "B", "C"]
        assert loaded.file_count == 3
        assert loaded.parse_errors == []

    def test_unknown_status_warning_reported_once(
        self, settings: ScopeSettings, docs_dir: Path, write_adr
    ) -> None:
        write_adr(docs_dir, "D.md", "---\ntitle: D\nstatus: WEIRD-VALUE\n---\n")
        loaded = _load(settings)
        assert loaded.warnings == ["Unknown status 'weird-value', defaulting to 'proposed'"]

    def test_missing_directory(self, tmp_path: Path) -> None:
        settings = ScopeSettings.from_cli(project_root=tmp_path)
        result = BaseService(settings)._load_documents("test")
        assert isinstance(result, ServiceResult)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"

    def test_no_matching_files(self, tmp_path: Path) -> None:
        (tmp_path / "docs" / "decisions").mkdir(parents=True)
        settings = ScopeSettings.from_cli(project_root=tmp_path)
        result = BaseService(settings)._load_documents("test")
        assert isinstance(result, ServiceResult)
        assert result.error is not None
        assert result.error.code == "NO_DOCUMENTS"
        assert result.error.detail["pattern"] == "**/*.md"

    def test_custom_pattern_without_matches(self, settings: ScopeSettings) -> None:
        result = BaseService(settings)._load_documents("test", pattern="adr-*.md")
        assert isinstance(result, ServiceResult)
        assert result.error is not None
        assert result.error.code == "NO_DOCUMENTS"

    def test_explicit_input_dir(self, tmp_path: Path, write_adr) -> None:
        write_adr(tmp_path / "adr", "X.md", "---\ntitle: X\nstatus: accepted\n---\n")
        settings = ScopeSettings.from_cli(project_root=tmp_path)
        loaded = _load(settings, input_dir="adr")
        assert [d.id for d in loaded.documents] == ["X"]
        assert loaded.input_dir == tmp_path / "adr"

    def test_malformed_file_isolated(
        self, settings: ScopeSettings, docs_dir: Path, write_adr
    ) -> None:
        write_adr(docs_dir, "broken.md", "# No frontmatter\n")
        loaded = _load(settings)
        assert [d.id for d in loaded.documents] == ["A", "B", "C"]
        assert loaded.parse_error_dicts() == [
            {"path": "broken.md", "reason": "missing frontmatter block"}
        ]
        assert "Failed to parse broken.md: missing frontmatter block" in loaded.all_warnings()

    def test_all_files_unparseable_still_loads(self, tmp_path: Path, write_adr) -> None:
        write_adr(tmp_path / "docs" / "decisions", "x.md", "no header")
        settings = ScopeSettings.from_cli(project_root=tmp_path)
        loaded = _load(settings)
        assert loaded.documents == []
        assert loaded.file_count == 1

    def test_duplicate_id_keeps_first(
        self, settings: ScopeSettings, docs_dir: Path, write_adr
    ) -> None:
        write_adr(docs_dir / "sub", "A.md", "---\ntitle: Shadow\nstatus: accepted\n---\n")
        loaded = _load(settings)
        assert [d.id for d in loaded.documents] == ["A", "B", "C"]
        assert loaded.documents[0].title == "Use PostgreSQL"
        assert any(
            w.startswith("Duplicate document id 'A' in sub") and w.endswith("keeping A.md")
            for w in loaded.warnings
        )

    def test_impossible_date_isolated(self, tmp_path: Path, write_adr) -> None:
        decisions = tmp_path / "docs" / "decisions"
        write_adr(decisions, "good.md", "---\ntitle: Good\nstatus: accepted\n---\n")
        write_adr(decisions, "bad.md", "---\ntitle: Bad\ncreated: 2024-13-45\n---\n")
        settings = ScopeSettings.from_cli(project_root=tmp_path)
        loaded = _load(settings)
        assert [d.id for d in loaded.documents] == ["good"]
        assert len(loaded.parse_errors) == 1
        assert loaded.parse_errors[0].path == "bad.md"
        assert "invalid YAML" in loaded.parse_errors[0].reason
