"""Tests for CLI argument parsing and settings overrides."""

from pathlib import Path

import pytest

from main import load_settings, parse_args, read_description


class TestParseArgs:
    def test_defaults_to_hunt(self) -> None:
        args = parse_args(["Senior React developer"])
        assert args.command == "hunt"
        assert args.description == "Senior React developer"
        assert args.no_save is False

    def test_explicit_hunt_with_options(self) -> None:
        args = parse_args([
            "hunt", "MOCK dev", "--limit", "10", "--top", "5",
            "--strategy", "llm", "--provider", "anthropic", "--no-save", "--export", "json",
        ])
        assert args.limit == 10
        assert args.top == 5
        assert args.strategy == "llm"
        assert args.provider == "anthropic"
        assert args.no_save is True
        assert args.export == "json"

    def test_options_only(self) -> None:
        args = parse_args(["--file", "job.txt", "-v"])
        assert args.command == "hunt"
        assert args.file == "job.txt"
        assert args.verbose is True

    def test_unknown_provider_rejected(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["dev", "--provider", "nope"])


class TestLoadSettings:
    def test_overrides(self) -> None:
        args = parse_args(["dev", "--strategy", "llm", "--analyzer", "heuristic", "--provider", "gemini"])
        settings = load_settings(args)
        assert settings.scoring.strategy == "llm"
        assert settings.analyzer.mode == "heuristic"
        assert settings.scoring.llm_provider == "gemini"
        assert settings.analyzer.provider == "gemini"

    def test_yaml_file(self, tmp_path: Path) -> None:
        config = tmp_path / "settings.yaml"
        config.write_text("search:\n  limit: 9\n")
        settings = load_settings(parse_args(["dev", "--config", str(config)]))
        assert settings.search.limit == 9
        assert settings.scoring.strategy == "heuristic"


class TestReadDescription:
    def test_from_argument(self) -> None:
        assert read_description(parse_args(["Senior dev"])) == "Senior dev"

    def test_from_file(self, tmp_path: Path) -> None:
        job = tmp_path / "job.txt"
        job.write_text("Senior Python developer")
        assert read_description(parse_args(["--file", str(job)])) == "Senior Python developer"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="not found"):
            read_description(parse_args(["--file", str(tmp_path / "none.txt")]))

    def test_blank_description(self) -> None:
        with pytest.raises(ValueError, match="job description is required"):
            read_description(parse_args([]))
