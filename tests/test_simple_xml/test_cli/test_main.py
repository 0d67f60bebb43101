"""Tests for the command-line interface."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from simple_xml.cli.main import (
    CLIConfig,
    XMLProcessor,
    create_argument_parser,
    format_results,
    main,
    summarize_file,
)
from simple_xml.shared.config import ParserConfig, SimpleXMLConfig


@pytest.fixture
def xml_dir(tmp_path: Path) -> Path:
    """Directory with one good file, one broken file and one non-XML file."""
    (tmp_path / "good.xml").write_text('<a k="v"><b>x</b><c/></a>', encoding="utf-8")
    (tmp_path / "broken.xml").write_text("<a>\n<b k=v/></a>", encoding="utf-8")
    (tmp_path / "notes.txt").write_text("not xml", encoding="utf-8")
    nested = tmp_path / "nested"
    nested.mkdir()
    (nested / "inner.svg").write_text("<svg/>", encoding="utf-8")
    return tmp_path


class TestArgumentParser:
    """Test argument parsing."""

    def test_parse_command(self) -> None:
        args = create_argument_parser().parse_args(["parse", "a.xml", "-r", "-f", "csv"])

        assert args.command == "parse"
        assert args.paths == [Path("a.xml")]
        assert args.recursive
        assert args.format == "csv"

    def test_format_command(self) -> None:
        args = create_argument_parser().parse_args(
            ["format", "a.xml", "--pretty", "--indent", "2"]
        )

        assert args.pretty
        assert args.indent == 2
        assert not args.escape

    def test_profile_defaults(self) -> None:
        args = create_argument_parser().parse_args(["profile", "a.xml"])

        assert args.iterations == 10
        assert args.format == "text"


class TestSummarizeFile:
    """Test the per-file summary."""

    def test_success(self, xml_dir: Path) -> None:
        result = summarize_file(xml_dir / "good.xml", ParserConfig())

        assert result["success"]
        assert result["root_tag"] == "a"
        assert result["element_count"] == 3
        assert result["attribute_count"] == 1
        assert result["max_depth"] == 2

    def test_failure(self, xml_dir: Path) -> None:
        result = summarize_file(xml_dir / "broken.xml", ParserConfig())

        assert not result["success"]
        assert result["error"]["kind"] == "MISSING_QUOTES"
        assert result["error"]["line"] == 2

    def test_empty_document(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.xml"
        path.write_text("<?xml version='1.0'?>", encoding="utf-8")

        result = summarize_file(path, ParserConfig())

        assert result["success"]
        assert result["root_tag"] is None
        assert result["element_count"] == 0


class TestXMLProcessor:
    """Test file discovery and batch processing."""

    def test_find_xml_files(self, xml_dir: Path) -> None:
        processor = XMLProcessor(CLIConfig())

        flat = [p.name for p in processor.find_xml_files(xml_dir)]
        deep = [p.name for p in processor.find_xml_files(xml_dir, recursive=True)]

        assert flat == ["broken.xml", "good.xml"]
        assert sorted(deep) == ["broken.xml", "good.xml", "inner.svg"]

    def test_explicit_file_is_always_included(self, xml_dir: Path) -> None:
        processor = XMLProcessor(CLIConfig())

        assert list(processor.find_xml_files(xml_dir / "notes.txt")) == [xml_dir / "notes.txt"]

    def test_missing_path(self, tmp_path: Path) -> None:
        processor = XMLProcessor(CLIConfig())

        assert list(processor.find_xml_files(tmp_path / "nothing")) == []

    def test_batch_process(self, xml_dir: Path) -> None:
        results = XMLProcessor(CLIConfig()).batch_process([xml_dir])

        assert [r["success"] for r in results] == [False, True]

    def test_cli_config_from_file(self, tmp_path: Path) -> None:
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"parser": {"max_depth": 5}}), encoding="utf-8")

        config = CLIConfig.from_file(path)

        assert config.settings.parser.max_depth == 5
        assert config.max_workers == 1


class TestFormatResults:
    """Test output formatting."""

    RESULTS = [
        {"file": "a.xml", "success": True, "root_tag": "a",
         "element_count": 2, "attribute_count": 0, "max_depth": 2},
        {"file": "b.xml", "success": False,
         "error": {"kind": "MISSING_QUOTES", "message": "bad", "line": 1, "column": 4}},
    ]

    def test_json(self) -> None:
        assert json.loads(format_results(self.RESULTS, "json")) == self.RESULTS

    def test_csv(self) -> None:
        lines = format_results(self.RESULTS, "csv").splitlines()

        assert lines[0].startswith("file,success,root_tag")
        assert lines[1] == "a.xml,True,a,2,0,2,,,"
        assert lines[2] == "b.xml,False,,,,,MISSING_QUOTES,1,4"

    def test_text(self) -> None:
        output = format_results(self.RESULTS, "text")

        assert "Processed 2 files, 1 successful" in output
        assert "OK   a.xml" in output
        assert "FAIL b.xml" in output
        assert "MISSING_QUOTES: bad" in output

    def test_empty(self) -> None:
        assert format_results([], "csv") == ""
        assert format_results([], "text") == "No results to display."


class TestMain:
    """Test the main entry point end to end."""

    def test_no_command_prints_help(self, capsys) -> None:
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_unknown_command(self) -> None:
        # argparse exits for unknown subcommands
        with pytest.raises(SystemExit):
            main(["unknown"])

    @patch("simple_xml.cli.main.cmd_parse")
    def test_routes_parse_command(self, mock_cmd_parse) -> None:
        mock_cmd_parse.return_value = 0

        assert main(["parse", "test.xml"]) == 0
        mock_cmd_parse.assert_called_once()

    @patch("simple_xml.cli.main.cmd_format")
    def test_routes_format_command(self, mock_cmd_format) -> None:
        mock_cmd_format.return_value = 0

        assert main(["format", "test.xml"]) == 0
        mock_cmd_format.assert_called_once()

    def test_keyboard_interrupt(self) -> None:
        with patch("simple_xml.cli.main.cmd_parse", side_effect=KeyboardInterrupt):
            assert main(["parse", "test.xml"]) == 130

    def test_parse_good_file(self, xml_dir: Path, capsys) -> None:
        exit_code = main(["parse", str(xml_dir / "good.xml")])

        assert exit_code == 0
        results = json.loads(capsys.readouterr().out)
        assert results[0]["root_tag"] == "a"

    def test_parse_reports_failure(self, xml_dir: Path, capsys) -> None:
        assert main(["parse", str(xml_dir), "-f", "text"]) == 1
        assert "FAIL" in capsys.readouterr().out

    def test_parse_writes_output_file(self, xml_dir: Path, tmp_path: Path) -> None:
        output = tmp_path / "out.csv"

        main(["parse", str(xml_dir / "good.xml"), "-f", "csv", "-o", str(output)])

        assert output.read_text().startswith("file,success")

    def test_parse_nothing_found(self, tmp_path: Path) -> None:
        assert main(["parse", str(tmp_path)]) == 1

    def test_format_pretty(self, xml_dir: Path, capsys) -> None:
        assert main(["format", str(xml_dir / "good.xml"), "--pretty", "--indent", "2"]) == 0

        assert capsys.readouterr().out == '<a k="v">\n  <b>x</b>\n  <c/>\n</a>\n'

    def test_format_compact_to_file(self, xml_dir: Path, tmp_path: Path) -> None:
        output = tmp_path / "out.xml"

        assert main(["format", str(xml_dir / "good.xml"), "--declaration", "-o", str(output)]) == 0

        assert output.read_text(encoding="utf-8") == (
            '<?xml version="1.0" encoding="utf-8"?><a k="v"><b>x</b><c/></a>'
        )

    def test_format_escape(self, tmp_path: Path, capsys) -> None:
        path = tmp_path / "amp.xml"
        path.write_text("<a>x & y</a>", encoding="utf-8")

        assert main(["format", str(path), "--escape"]) == 0
        assert capsys.readouterr().out == "<a>x &amp; y</a>\n"

    def test_format_parse_error(self, xml_dir: Path, capsys) -> None:
        assert main(["format", str(xml_dir / "broken.xml")]) == 1
        assert "Error:" in capsys.readouterr().err

    def test_format_missing_file(self, tmp_path: Path, capsys) -> None:
        assert main(["format", str(tmp_path / "missing.xml")]) == 1
        assert "Could not read" in capsys.readouterr().err

    def test_invalid_indent_is_config_error(self, xml_dir: Path, capsys) -> None:
        assert main(["format", str(xml_dir / "good.xml"), "--indent", "-1"]) == 2
        assert "Configuration error" in capsys.readouterr().err

    def test_config_file(self, xml_dir: Path, tmp_path: Path) -> None:
        config_path = tmp_path / "strict.json"
        config_path.write_text(
            SimpleXMLConfig.default().override(parser__max_depth=1).to_json(),
            encoding="utf-8",
        )

        assert main(["parse", str(xml_dir / "good.xml"), "-c", str(config_path)]) == 1

    def test_bad_config_file(self, xml_dir: Path, tmp_path: Path, capsys) -> None:
        config_path = tmp_path / "bad.json"
        config_path.write_text("{", encoding="utf-8")

        assert main(["parse", str(xml_dir / "good.xml"), "-c", str(config_path)]) == 2
        assert "Configuration error" in capsys.readouterr().err

    def test_wrongly_typed_config_value(self, xml_dir: Path, tmp_path: Path, capsys) -> None:
        config_path = tmp_path / "typed.json"
        config_path.write_text('{"parser": {"max_depth": "3"}}', encoding="utf-8")

        assert main(["parse", str(xml_dir / "good.xml"), "-c", str(config_path)]) == 2
        assert "Configuration error" in capsys.readouterr().err

    def test_profile_text(self, xml_dir: Path, capsys) -> None:
        assert main(["profile", str(xml_dir / "good.xml"), "-n", "2"]) == 0

        out = capsys.readouterr().out
        assert "Profiled 1 files, 1 parsed" in out
        assert "ms/parse" in out

    def test_profile_json(self, xml_dir: Path, capsys) -> None:
        assert main(["profile", str(xml_dir / "broken.xml"), "-f", "json", "-n", "1"]) == 1

        report = json.loads(capsys.readouterr().out)
        assert report["summary"]["session_count"] == 1
        assert report["sessions"][0]["error_kind"] == "MISSING_QUOTES"

    def test_profile_undecodable_file(self, tmp_path: Path, capsys) -> None:
        path = tmp_path / "latin.xml"
        path.write_bytes("<a>caf\xe9</a>".encode("latin-1"))

        assert main(["profile", str(path), "-f", "json"]) == 1

        captured = capsys.readouterr()
        assert "Could not read" in captured.err
        assert json.loads(captured.out)["summary"]["session_count"] == 0
