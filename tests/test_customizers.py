import dataclasses

from conftest import make_ctx

from dotstrap.console import out
from dotstrap.run_state import RunReport
from dotstrap.steps import CustomizeDockStep, CustomizeOSStep


def _script(root, rel="shell/macos-setup.sh"):
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("#!/bin/bash\necho tweaking\n")
    return path


def test_missing_script_is_skipped_with_warning(dotfiles, home, fake_cmds, capsys):
    report = CustomizeOSStep().run(make_ctx(dotfiles, home), RunReport())

    assert report.customizers[0].status == "missing"
    assert fake_cmds.calls == []
    assert "script not found" in capsys.readouterr().out


def test_declined_prompt_skips_script(dotfiles, home, fake_cmds, monkeypatch):
    _script(dotfiles)
    monkeypatch.setattr(out, "confirm", lambda question: False)
    ctx = dataclasses.replace(make_ctx(dotfiles, home), assume_yes=False)

    report = CustomizeOSStep().run(ctx, RunReport())

    assert report.customizers[0].status == "declined"
    assert fake_cmds.calls == []


def test_confirmed_script_runs_with_bash(dotfiles, home, fake_cmds):
    script = _script(dotfiles, "shell/dock-setup.sh")

    report = CustomizeDockStep().run(make_ctx(dotfiles, home), RunReport())

    assert fake_cmds.calls == [["bash", str(script)]]
    assert report.customizers[0].kind == "dock"
    assert report.customizers[0].status == "ran"


def test_script_failure_is_a_warning_not_fatal(dotfiles, home, fake_cmds):
    _script(dotfiles)
    fake_cmds.returncodes[("bash",)] = 3

    report = CustomizeOSStep().run(make_ctx(dotfiles, home), RunReport())

    assert report.customizers[0].status == "failed"
    assert report.degraded


def test_dry_run_never_prompts_or_runs(dotfiles, home, fake_cmds, monkeypatch):
    _script(dotfiles)

    def _no_prompt(question):
        raise AssertionError("dry run must not prompt")

    monkeypatch.setattr(out, "confirm", _no_prompt)
    ctx = dataclasses.replace(make_ctx(dotfiles, home, dry_run=True), assume_yes=False)

    report = CustomizeOSStep().run(ctx, RunReport())

    assert report.customizers[0].status == "would_run"
    assert fake_cmds.calls == []


def test_confirm_defaults_to_no_on_empty_input(monkeypatch):
    monkeypatch.setattr("builtins.input", lambda *a, **k: "")

    assert out.confirm("Run it?") is False


def test_confirm_treats_end_of_input_as_no(monkeypatch):
    def _eof(*args, **kwargs):
        raise EOFError

    monkeypatch.setattr("rich.prompt.Confirm.ask", _eof)

    assert out.confirm("Run it?") is False
