from click.testing import CliRunner

from mxmh.cli import main


def test_summary_prints_distribution_and_flow(survey_csv):
    runner = CliRunner()
    result = runner.invoke(main, ["summary", "--csv", str(survey_csv), "--top-n", "3"])
    assert result.exit_code == 0, result.output
    assert "No genres selected" in result.output
    assert "Genre distribution:" in result.output
    assert "Other" in result.output
    assert "High (8-10)" in result.output


def test_summary_with_selection(survey_csv):
    runner = CliRunner()
    result = runner.invoke(
        main,
        ["summary", "--csv", str(survey_csv), "--genre", "Metal", "--genre", "Rock", "--genre", "Rock"],
    )
    assert result.exit_code == 0, result.output
    assert "Selected: Metal" in result.output
    assert "Rock" not in result.output


def test_summary_missing_csv(tmp_path):
    runner = CliRunner()
    result = runner.invoke(main, ["summary", "--csv", str(tmp_path / "missing.csv")])
    assert result.exit_code != 0
    assert "not found" in result.output
