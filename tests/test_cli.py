"""Tests for the notevars command-line interface."""

import pytest
import yaml

from notevars.cli.commands.common import parse_var_pairs
from notevars.cli.main import create_parser, main


class TestCLIParser:
    """Test argument parsing."""

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_expand_arguments(self):
        parser = create_parser()
        args = parser.parse_args([
            'expand', 'doc.md',
            '--variables', 'a.yaml', '--variables', 'b.yaml',
            '--var', 'x=1', '--var', 'y=2',
            '--out', 'out.md', '--strict', '--no-persist-overrides'
        ])

        assert args.command == 'expand'
        assert args.file == 'doc.md'
        assert args.variables == ['a.yaml', 'b.yaml']
        assert args.var == ['x=1', 'y=2']
        assert args.out == 'out.md'
        assert args.strict is True
        assert args.no_persist_overrides is True

    def test_parse_var_pairs(self):
        assert parse_var_pairs(['a=1', 'b=x=y', 'a=3']) == {'a': '3', 'b': 'x=y'}
        assert parse_var_pairs(None) == {}

        with pytest.raises(ValueError):
            parse_var_pairs(['novalue'])
        with pytest.raises(ValueError):
            parse_var_pairs(['=value'])


class TestExpandCommand:
    """Test `notevars expand`."""

    @pytest.fixture
    def workspace(self, tmp_path):
        (tmp_path / "doc.md").write_text(
            "<!-- @var title: Notes -->\n# {{title}}\nBy {{author}} for {{client}}\n",
            encoding="utf-8"
        )
        (tmp_path / "vars.yaml").write_text(
            "variables:\n  - name: author\n    value: Jane\n  - name: title\n    value: Ignored\n",
            encoding="utf-8"
        )
        return tmp_path

    def test_expand_to_stdout(self, workspace, capsys):
        exit_code = main([
            'expand', str(workspace / "doc.md"),
            '--variables', str(workspace / "vars.yaml"),
            '--var', 'client=Acme'
        ])

        assert exit_code == 0
        assert capsys.readouterr().out == "# Notes\nBy Jane for Acme\n"

    def test_expand_to_file(self, workspace):
        out_path = workspace / "build" / "doc.md"

        exit_code = main([
            'expand', str(workspace / "doc.md"),
            '--variables', str(workspace / "vars.yaml"),
            '--out', str(out_path)
        ])

        assert exit_code == 0
        assert out_path.read_text(encoding="utf-8") == "# Notes\nBy Jane for {{client}}"

    def test_expand_missing_document(self, workspace):
        assert main(['expand', str(workspace / "missing.md")]) == 1

    def test_expand_missing_variables_file(self, workspace):
        exit_code = main([
            'expand', str(workspace / "doc.md"),
            '--variables', str(workspace / "missing.yaml")
        ])

        assert exit_code == 1

    def test_expand_invalid_variables_file(self, workspace):
        bad = workspace / "bad.yaml"
        bad.write_text("variables: [{name: a}]", encoding="utf-8")

        exit_code = main(['expand', str(workspace / "doc.md"), '--variables', str(bad)])

        assert exit_code == 2

    def test_expand_invalid_var_pair(self, workspace):
        assert main(['expand', str(workspace / "doc.md"), '--var', 'novalue']) == 2

    def test_expand_strict_rejects_malformed(self, workspace):
        doc = workspace / "broken.md"
        doc.write_text("<!-- @var broken -->\ntext", encoding="utf-8")

        assert main(['expand', str(doc), '--strict']) == 2
        assert main(['expand', str(doc)]) == 0


class TestExportCommand:
    """Test `notevars export`."""

    def test_export_merges_sources(self, tmp_path, capsys):
        first = tmp_path / "first.yaml"
        second = tmp_path / "second.yaml"
        first.write_text("variables: [{name: a, value: '1'}, {name: b, value: '2'}]", encoding="utf-8")
        second.write_text("variables: [{name: b, value: '3'}]", encoding="utf-8")

        exit_code = main([
            'export',
            '--variables', str(first),
            '--variables', str(second),
            '--var', 'c=4'
        ])

        assert exit_code == 0
        data = yaml.safe_load(capsys.readouterr().out)
        pairs = {(v['name'], v['value']) for v in data['variables']}
        assert pairs == {('a', '1'), ('b', '3'), ('c', '4')}

    def test_export_to_file(self, tmp_path):
        out_path = tmp_path / "exported.yaml"

        assert main(['export', '--var', 'k=v', '--out', str(out_path)]) == 0
        assert yaml.safe_load(out_path.read_text(encoding="utf-8")) == {
            'variables': [{'name': 'k', 'value': 'v'}]
        }


class TestParseCommand:
    """Test `notevars parse`."""

    def test_lists_declarations(self, tmp_path, capsys):
        doc = tmp_path / "doc.md"
        doc.write_text("<!-- @var a: 1 -->\ntext\n<!-- @var b: two words -->", encoding="utf-8")

        assert main(['parse', str(doc)]) == 0
        assert capsys.readouterr().out == "a: 1\nb: two words\n"

    def test_missing_file(self, tmp_path):
        assert main(['parse', str(tmp_path / "missing.md")]) == 1


class TestUnreadableInput:
    """Test documents that cannot be read as UTF-8 text."""

    @pytest.fixture
    def latin1_doc(self, tmp_path):
        doc = tmp_path / "latin1.md"
        doc.write_bytes("caf\xe9 {{x}}".encode("latin-1"))
        return doc

    def test_expand_latin1_document_is_file_error(self, latin1_doc, caplog):
        assert main(['expand', str(latin1_doc)]) == 1
        assert "File error" in caplog.text
        assert "Invalid argument" not in caplog.text

    def test_parse_latin1_document_is_file_error(self, latin1_doc):
        assert main(['parse', str(latin1_doc)]) == 1

    def test_latin1_variables_file_is_file_error(self, tmp_path):
        bad = tmp_path / "vars.yaml"
        bad.write_bytes("variables: [{name: a, value: caf\xe9}]".encode("latin-1"))

        assert main(['export', '--variables', str(bad)]) == 1

    def test_directory_instead_of_document(self, tmp_path):
        assert main(['parse', str(tmp_path)]) == 1
        assert main(['expand', str(tmp_path)]) == 1


class TestStoreOption:
    """Test --store persistence of global variables between runs."""

    def test_export_saves_and_expand_reloads(self, tmp_path, capsys):
        store_path = tmp_path / "state" / "globals.json"
        doc = tmp_path / "doc.md"
        doc.write_text("Hello {{name}} from {{city}}", encoding="utf-8")

        assert main(['export', '--var', 'name=Ada', '--store', str(store_path)]) == 0
        assert store_path.exists()
        capsys.readouterr()

        assert main(['expand', str(doc), '--var', 'city=Paris', '--store', str(store_path)]) == 0
        assert capsys.readouterr().out == "Hello Ada from Paris\n"

        # --var values persist into the saved store by default
        assert main(['export', '--store', str(store_path)]) == 0
        data = yaml.safe_load(capsys.readouterr().out)
        pairs = {(v['name'], v['value']) for v in data['variables']}
        assert pairs == {('name', 'Ada'), ('city', 'Paris')}

    def test_overlay_expand_does_not_save_overrides(self, tmp_path, capsys):
        store_path = tmp_path / "globals.json"
        doc = tmp_path / "doc.md"
        doc.write_text("{{name}}", encoding="utf-8")

        assert main([
            'expand', str(doc), '--var', 'name=Temp',
            '--store', str(store_path), '--no-persist-overrides'
        ]) == 0
        assert capsys.readouterr().out == "Temp\n"

        assert main(['export', '--store', str(store_path)]) == 0
        assert yaml.safe_load(capsys.readouterr().out) == {'variables': []}

    def test_corrupted_store_file(self, tmp_path):
        store_path = tmp_path / "globals.json"
        store_path.write_text("{broken", encoding="utf-8")

        assert main(['export', '--store', str(store_path)]) == 2
