"""Tests for project actions."""

from pathlib import Path

from dev_toolbox.config import Config
from dev_toolbox.project import (
    clean_modules,
    create_component,
    guide_template,
    scaffold,
    write_guide,
)


class TestGuide:
    """Tests for the llm.txt guide writer."""

    def test_template_content(self) -> None:
        template = guide_template()
        assert template.startswith("# LLM Guidelines\n")
        assert "## Styling Guide" in template
        assert 'import styled from "styled-components";' in template
        assert "export const FeatureBanner = styled.div`" in template

    def test_writes_file(self, tmp_path: Path) -> None:
        written = write_guide(tmp_path)
        assert written == tmp_path / "llm.txt"
        assert written.read_text(encoding="utf-8") == guide_template()

    def test_existing_file_untouched(self, tmp_path: Path) -> None:
        target = tmp_path / "llm.txt"
        target.write_text("mine\n")
        assert write_guide(tmp_path) is None
        assert target.read_text() == "mine\n"

    def test_custom_filename(self, tmp_path: Path) -> None:
        assert write_guide(tmp_path, "AGENTS.md") == tmp_path / "AGENTS.md"


class TestCommands:
    """Tests for create_component and scaffold."""

    async def test_create_component_runs_in_cwd(self, tmp_path: Path) -> None:
        cfg = Config(component_command=["touch", "created"])
        result = await create_component(cfg, tmp_path)
        assert result.success is True
        assert (tmp_path / "created").exists()

    async def test_create_component_failure(self, tmp_path: Path) -> None:
        result = await create_component(Config(component_command=["false"]), tmp_path)
        assert result.success is False

    async def test_scaffold_runs_all(self, tmp_path: Path) -> None:
        cfg = Config(scaffold_commands=[["touch", "a"], ["touch", "b"], ["touch", "c"]])
        result = await scaffold(cfg, tmp_path)
        assert result.success is True
        assert sorted(p.name for p in tmp_path.iterdir()) == ["a", "b", "c"]

    async def test_scaffold_stops_at_failure(self, tmp_path: Path) -> None:
        cfg = Config(scaffold_commands=[["touch", "a"], ["false"], ["touch", "c"]])
        result = await scaffold(cfg, tmp_path)
        assert result.success is False
        assert (tmp_path / "a").exists()
        assert not (tmp_path / "c").exists()


class TestCleanModules:
    """Tests for clean_modules function."""

    def test_removes_both(self, tmp_path: Path) -> None:
        modules = tmp_path / "node_modules" / "left-pad"
        modules.mkdir(parents=True)
        (modules / "index.js").write_text("")
        (tmp_path / "package-lock.json").write_text("{}")
        (tmp_path / "package.json").write_text("{}")

        removed = clean_modules(Config(), tmp_path)

        assert removed == [tmp_path / "node_modules", tmp_path / "package-lock.json"]
        assert [p.name for p in tmp_path.iterdir()] == ["package.json"]

    def test_nothing_to_remove(self, tmp_path: Path) -> None:
        assert clean_modules(Config(), tmp_path) == []

    def test_symlinked_modules_removes_link_only(self, tmp_path: Path) -> None:
        shared = tmp_path / "shared"
        shared.mkdir()
        (shared / "keep.js").write_text("")
        project = tmp_path / "project"
        project.mkdir()
        (project / "node_modules").symlink_to(shared)

        clean_modules(Config(), project)

        assert not (project / "node_modules").exists()
        assert (shared / "keep.js").exists()
