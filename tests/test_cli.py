"""CLI handler tests — parser construction, command wiring, output formatting.

Maps to BDD scenarios: TestParserConstruction, TestCaseCommand,
TestLookupCommand, TestParseCommand, TestGlobalOptions
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import pytest

from tagcase.cli import build_parser, main
from tagcase.logging import logger

if TYPE_CHECKING:
    from pathlib import Path

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _write_settings(tmp_path: Path, content: str) -> str:
    """Write a settings file and return its path as a CLI argument."""
    path = tmp_path / "tagcase.toml"
    path.write_text(content, encoding="utf-8")
    return str(path)


def _run_failing(argv: list[str]) -> int | str | None:
    """Run main() expecting it to exit, and return the exit code."""
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


# ---------------------------------------------------------------------------
# TestParserConstruction
# ---------------------------------------------------------------------------


class TestParserConstruction:
    """REQUIREMENT: The CLI parser defines all subcommands with correct arguments.

    WHO: The operator invoking the tool from the command line
    WHAT: The case, lookup and parse subcommands are registered; each
          accepts its documented flags; unknown mappings and a missing
          subcommand produce a usage error
    WHY: Silently ignoring a flag or failing on a valid subcommand breaks
         scripts before any real work begins
    """

    def test_parser_accepts_case_subcommand(self) -> None:
        """'case' takes one or more texts and an optional mapping."""
        args = build_parser().parse_args(["case", "-m", "kebab", "a b", "c d"])
        assert args.command == "case"
        assert args.mapping == "kebab"
        assert args.text == ["a b", "c d"]

    def test_case_mapping_defaults_to_none(self) -> None:
        """Without -m the mapping comes from settings later."""
        args = build_parser().parse_args(["case", "x"])
        assert args.mapping is None

    def test_case_rejects_unknown_mapping(self) -> None:
        """An unknown --mapping value is rejected by the parser."""
        with pytest.raises(SystemExit):
            build_parser().parse_args(["case", "-m", "shouting", "x"])

    def test_parser_accepts_lookup_subcommand(self) -> None:
        """'lookup' takes a literal and a key."""
        args = build_parser().parse_args(["lookup", 'json:"a"', "json"])
        assert args.command == "lookup"
        assert args.literal == 'json:"a"'
        assert args.key == "json"

    def test_parse_flags_default_to_none_and_false(self) -> None:
        """Optional parse flags default to None/False."""
        args = build_parser().parse_args(["parse", 'tag:"a"'])
        assert args.tag_key is None
        assert args.separator is None
        assert args.known is None
        assert args.skip_unknown is False

    def test_missing_subcommand_is_a_usage_error(self) -> None:
        """Running without a subcommand exits with a usage error."""
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


# ---------------------------------------------------------------------------
# TestCaseCommand
# ---------------------------------------------------------------------------


class TestCaseCommand:
    """REQUIREMENT: 'case' prints each input converted with one mapping.

    WHO: The operator renaming identifiers from a shell
    WHAT: -m selects the mapping; without it the settings default (snake)
          applies; each input is printed on its own line
    WHY: Scripts pipe this output line by line, so order and one result
         per input must be preserved
    """

    def test_explicit_mapping(self, capsys: pytest.CaptureFixture[str]) -> None:
        """-m snake converts to snake_case."""
        main(["case", "-m", "snake", "sample text"])
        assert capsys.readouterr().out == "sample_text\n"

    def test_each_input_on_its_own_line(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Multiple inputs are converted in order."""
        main(["case", "-m", "camel", "sample text", "user_name"])
        assert capsys.readouterr().out == "sampleText\nuserName\n"

    def test_default_mapping_is_snake(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Without -m and without settings, snake case is used."""
        main(["case", "Sample Text"])
        assert capsys.readouterr().out == "sample_text\n"

    def test_default_mapping_from_settings(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """[case].default_mapping from --config replaces the built-in default."""
        config = _write_settings(tmp_path, '[case]\ndefault_mapping = "kebab"\n')
        main(["--config", config, "case", "Sample Text"])
        assert capsys.readouterr().out == "sample-text\n"

    def test_none_mapping_returns_input(self, capsys: pytest.CaptureFixture[str]) -> None:
        """-m none prints the text unchanged."""
        main(["case", "-m", "none", "Left As Is"])
        assert capsys.readouterr().out == "Left As Is\n"


# ---------------------------------------------------------------------------
# TestLookupCommand
# ---------------------------------------------------------------------------


class TestLookupCommand:
    """REQUIREMENT: 'lookup' prints one entry of a tag literal.

    WHO: The operator inspecting tags copied from source code
    WHAT: A found entry prints its unquoted value; a missing entry prints
          a message to stderr and exits 1
    WHY: Shell scripts rely on the exit code to tell "absent" from "empty"
    """

    def test_found_entry_is_printed(self, capsys: pytest.CaptureFixture[str]) -> None:
        """The db entry's value is printed."""
        main(["lookup", 'json:"a" db:"name=foo"', "db"])
        assert capsys.readouterr().out == "name=foo\n"

    def test_empty_entry_is_found(self, capsys: pytest.CaptureFixture[str]) -> None:
        """An empty value prints an empty line and exits normally."""
        main(["lookup", 'json:""', "json"])
        assert capsys.readouterr().out == "\n"

    def test_invalid_utf8_byte_escape_is_written_as_raw_bytes(
        self, capsysbinary: pytest.CaptureFixture[bytes]
    ) -> None:
        """A \\xff escape is written back out as the single byte 0xff."""
        main(["lookup", r'a:"\xff"', "a"])
        assert capsysbinary.readouterr().out == b"\xff\n"

    def test_missing_entry_exits_1(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A missing entry exits with code 1 and names the key on stderr."""
        code = _run_failing(["lookup", 'json:"a"', "db"])

        assert code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Tag 'db' not found" in captured.err


# ---------------------------------------------------------------------------
# TestParseCommand
# ---------------------------------------------------------------------------


class TestParseCommand:
    """REQUIREMENT: 'parse' prints a tag's pairs as JSON and reports failures as JSON.

    WHO: The operator or a script validating tag contents
    WHAT: Output holds raw and values; --separator, --known and
          --skip-unknown override settings; parse errors go to stderr as
          the structured error dict with exit code 1
    WHY: Machine-readable errors let callers route on error_type instead
         of scraping messages
    """

    def test_values_are_printed_as_json(
        self, struct_tag: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """The reference literal produces raw and grouped values."""
        main(["parse", struct_tag, "--tag-key", "tag"])

        output = json.loads(capsys.readouterr().out)
        assert output["raw"] == "value1,key2=value2,key3"
        assert output["values"] == {
            "key1": [],
            "key2": ["value1", "value2"],
            "key3": [],
        }

    def test_custom_separator(self, capsys: pytest.CaptureFixture[str]) -> None:
        """--separator splits on another string."""
        main(["parse", 'db:"pk;name=id"', "--tag-key", "db", "--separator", ";"])

        output = json.loads(capsys.readouterr().out)
        assert output["values"] == {"pk": [], "name": ["id"]}

    def test_unknown_key_is_reported_as_json(
        self, struct_tag: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A key outside --known exits 1 with an UNKNOWN_KEY error on stderr."""
        code = _run_failing(["parse", struct_tag, "--tag-key", "tag", "--known", "key1"])

        assert code == 1
        error = json.loads(capsys.readouterr().err)
        assert error["error_type"] == "unknown_key"
        assert error["success"] is False
        assert "key2" in error["error"]

    def test_skip_unknown_keeps_only_known_keys(
        self, struct_tag: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """--skip-unknown drops keys outside --known instead of failing."""
        main(["parse", struct_tag, "--tag-key", "tag", "--skip-unknown", "--known", "key1"])

        output = json.loads(capsys.readouterr().out)
        assert output["values"] == {"key1": []}

    def test_missing_tag_is_reported_as_json(self, capsys: pytest.CaptureFixture[str]) -> None:
        """A literal without the tag exits 1 with TAG_NOT_FOUND."""
        code = _run_failing(["parse", 'json:"a"', "--tag-key", "tag"])

        assert code == 1
        assert json.loads(capsys.readouterr().err)["error_type"] == "tag_not_found"

    def test_missing_tag_key_is_a_config_error(self, capsys: pytest.CaptureFixture[str]) -> None:
        """Without --tag-key or [tag].tag_key the parser is misconfigured."""
        code = _run_failing(["parse", 'tag:"a"'])

        assert code == 1
        assert json.loads(capsys.readouterr().err)["error_type"] == "config"

    def test_tag_settings_from_config(
        self, tmp_path: Path, struct_tag: str, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """[tag] settings supply the key, allowlist and skip policy."""
        config = _write_settings(
            tmp_path,
            '[tag]\ntag_key = "tag"\nknown_pair_keys = ["key3"]\nerror_on_unknown_key = false\n',
        )
        main(["--config", config, "parse", struct_tag])

        output = json.loads(capsys.readouterr().out)
        assert output["values"] == {"key3": []}


# ---------------------------------------------------------------------------
# TestGlobalOptions
# ---------------------------------------------------------------------------


class TestGlobalOptions:
    """REQUIREMENT: Global options configure settings and logging for every command.

    WHO: The operator diagnosing a run
    WHAT: A missing or unreadable --config file and a --log-dir that is
          not a directory exit 1 with a CONFIG error; other failures are
          UNEXPECTED; --verbose switches logging to DEBUG; --log-dir
          writes a log file
    WHY: Diagnosis should not require editing a settings file
    """

    def test_missing_config_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A --config path that does not exist is reported as CONFIG."""
        code = _run_failing(["--config", str(tmp_path / "absent.toml"), "case", "x"])

        assert code == 1
        assert json.loads(capsys.readouterr().err)["error_type"] == "config"

    def test_invalid_config_value(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        """A bad settings value is reported as VALIDATION."""
        config = _write_settings(tmp_path, '[case]\ndefault_mapping = "shouting"\n')
        code = _run_failing(["--config", config, "case", "x"])

        assert code == 1
        assert json.loads(capsys.readouterr().err)["error_type"] == "validation"

    def test_verbose_enables_debug(self, capsys: pytest.CaptureFixture[str]) -> None:
        """--verbose lowers the logger to DEBUG."""
        main(["--verbose", "case", "x"])

        assert logger.level == logging.DEBUG
        assert capsys.readouterr().out == "x\n"

    def test_log_dir_writes_log_file(self, tmp_path: Path) -> None:
        """--log-dir creates a timestamped log file in the directory."""
        log_dir = tmp_path / "logs"

        main(["--log-dir", str(log_dir), "case", "x"])

        assert len(list(log_dir.glob("tagcase_*.log"))) == 1

    def test_config_directory_is_reported_as_json(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """A directory passed as --config exits 1 with a CONFIG error, not a traceback."""
        code = _run_failing(["--config", str(tmp_path), "case", "x"])

        assert code == 1
        assert json.loads(capsys.readouterr().err)["error_type"] == "config"

    def test_log_dir_that_is_a_file_is_reported_as_json(
        self, tmp_path: Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """--log-dir naming an existing file exits 1 with a CONFIG error."""
        not_a_dir = tmp_path / "taken"
        not_a_dir.write_text("", encoding="utf-8")

        code = _run_failing(["--log-dir", str(not_a_dir), "case", "a b"])

        assert code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert json.loads(captured.err)["error_type"] == "config"

    def test_unexpected_failure_is_reported_as_json(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        """Any other exception is wrapped as UNEXPECTED and keeps its message."""

        def _boom(*_args: object) -> None:
            raise RuntimeError("boom")

        monkeypatch.setattr("tagcase.cli.handle_case", _boom)

        code = _run_failing(["case", "x"])

        assert code == 1
        error = json.loads(capsys.readouterr().err)
        assert error["error_type"] == "unexpected"
        assert "boom" in error["error"]
