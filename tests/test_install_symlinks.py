import os

from conftest import make_ctx

from dotstrap.lib.packages import discover_packages
from dotstrap.run_state import RunReport
from dotstrap.steps import InstallSymlinksStep


def _report(root):
    return RunReport(packages=tuple(discover_packages(root)))


def test_failure_in_one_package_does_not_stop_later_ones(dotfiles, home, fake_stow):
    for name in ["a_pkg", "b_pkg", "c_pkg"]:
        (dotfiles / name).mkdir()
        (dotfiles / name / f"dot-{name}rc").write_text(f"{name}\n")
    fake_stow.failing.add("b_pkg")
    ctx = make_ctx(dotfiles, home)

    report = InstallSymlinksStep().run(ctx, _report(dotfiles))

    assert fake_stow.real_runs() == ["a_pkg", "b_pkg", "c_pkg", "homebrew", "shell"]
    assert report.failed_packages == ("b_pkg",)
    assert "c_pkg" in report.stowed_packages
    assert (home / ".c_pkgrc").is_symlink()
    assert report.degraded


def test_stow_maps_dotfiles_names_into_home(dotfiles, home, fake_stow):
    ctx = make_ctx(dotfiles, home)

    report = InstallSymlinksStep().run(ctx, _report(dotfiles))

    assert report.stowed_packages == ("homebrew", "shell")
    assert os.readlink(home / ".zshrc") == str(dotfiles / "shell" / "dot-zshrc")
    argv = fake_stow.calls[0]
    assert argv[:2] == ["stow", "--dotfiles"]
    assert argv[argv.index("-t") + 1] == str(home)


def test_dry_run_only_simulates(dotfiles, home, fake_stow, capsys):
    ctx = make_ctx(dotfiles, home, dry_run=True)

    report = InstallSymlinksStep().run(ctx, _report(dotfiles))

    assert fake_stow.real_runs() == []
    assert all("-n" in c for c in fake_stow.calls)
    assert report.stowed_packages == ()
    assert list(home.iterdir()) == []
    assert "Would stow package: shell" in capsys.readouterr().out
