from pathlib import Path
import json
import textwrap

from click.testing import CliRunner

from pagepath.cli import cli


def write_pages_yaml(tmp_path: Path) -> Path:
    y = textwrap.dedent(
        """
        page: Shop
        nodes:
          - type: collection
            alias: Items
            selector: .item
          - type: element
            alias: Title
            selector: //h1
            selector_type: xpath
        ---
        page: Blog
        nodes:
          - type: collection
            alias: Posts
            selector: article
        """
    )
    p = tmp_path / "pages.yaml"
    p.write_text(y, encoding="utf-8")
    return p


def test_cli_parse():
    runner = CliRunner()
    result = runner.invoke(cli, ["parse", "Header > #2 of Items > #Save in Buttons"])
    assert result.exit_code == 0
    assert json.loads(result.output) == [
        {"alias": "Header"},
        {"alias": "Items", "index": 2},
        {"alias": "Buttons", "text": "Save"},
    ]


def test_cli_parse_malformed():
    runner = CliRunner()
    result = runner.invoke(cli, ["parse", "#x of Items"])
    assert result.exit_code == 1
    assert "ERR" in result.output


def test_cli_validate_with_dir(tmp_path: Path):
    write_pages_yaml(tmp_path)
    runner = CliRunner()
    result = runner.invoke(cli, ["validate", "--dir", str(tmp_path), "--no-recursive"])
    assert result.exit_code == 0
    # Two OK lines for two docs
    assert result.output.count("OK  ") == 2


def test_cli_validate_reports_bad_selectors(tmp_path: Path):
    p = tmp_path / "bad.yaml"
    p.write_text("page: Bad\nnodes:\n  - type: element\n    alias: Save\n    selector: b\n    selector_type: nope\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["validate", str(p)])
    assert result.exit_code == 1
    assert "[Bad] Save" in result.output


def test_cli_resolve_dry_run(tmp_path: Path):
    p = write_pages_yaml(tmp_path)
    runner = CliRunner()
    result = runner.invoke(cli, ["resolve", str(p), "#2 of Items"])
    assert result.exit_code == 0
    assert "html >> .item >> nth=1" in result.output


def test_cli_resolve_other_page(tmp_path: Path):
    p = write_pages_yaml(tmp_path)
    runner = CliRunner()
    result = runner.invoke(cli, ["resolve", str(p), "Posts", "--page", "Blog"])
    assert result.exit_code == 0
    assert "html >> article" in result.output


def test_cli_resolve_error(tmp_path: Path):
    p = write_pages_yaml(tmp_path)
    runner = CliRunner()
    result = runner.invoke(cli, ["resolve", str(p), "#1 of Title"])
    assert result.exit_code == 1
    assert "NotACollection" in result.output


def test_cli_config():
    runner = CliRunner()
    result = runner.invoke(cli, ["config"])
    assert result.exit_code == 0
    assert json.loads(result.output)["ROOT_SELECTOR"]


def test_cli_resolve_unmatched_text_keeps_the_filter(tmp_path: Path):
    p = tmp_path / "links.yaml"
    p.write_text("page: Nav\nnodes:\n  - type: collection\n    alias: Links\n    selector: //a\n    selector_type: xpath\n", encoding="utf-8")
    runner = CliRunner()
    result = runner.invoke(cli, ["resolve", str(p), "#Home in Links"])
    assert result.exit_code == 0
    assert "html >> xpath=//a >> internal:has-text=/Home/ >> nth=0" in result.output
