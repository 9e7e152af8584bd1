from conftest import make_ctx

from dotstrap.run_state import RunReport
from dotstrap.steps.step_90_summary import summary_lines


def test_tool_lines_follow_what_actually_happened(dotfiles, home):
    report = RunReport(tools=("brew", "stow"), installed_tools=("stow",))

    lines = summary_lines(make_ctx(dotfiles, home), report)

    assert "Homebrew already installed" in lines[0]
    assert "GNU Stow installed" in lines[1]


def test_dry_run_never_claims_tools_were_installed(dotfiles, home):
    report = RunReport(dry_run=True, tools=("brew", "stow"), missing_tools=("brew", "stow"))

    lines = summary_lines(make_ctx(dotfiles, home, dry_run=True), report)

    assert not any(line.endswith(" installed") for line in lines)
    assert "Homebrew not installed (would be installed)" in lines[0]
    assert any("Conflicts not checked" in line for line in lines)
