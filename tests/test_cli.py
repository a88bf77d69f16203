import io
import sys

from streambf.cli import main


def test_program_file_with_input(tmp_path, capsys):
    prog = tmp_path / "echo.bf"
    prog.write_text("read and echo: ,[.,]")
    assert main([str(prog), "--input", "hey"]) == 0
    assert capsys.readouterr().out == "hey"


def test_program_from_stdin(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("++>+++++[<+>-]<++++++++++++++++++++++++++++++++++++++++++++++++."))
    assert main([]) == 0
    assert capsys.readouterr().out == "7"


def test_stats_go_to_stderr(tmp_path, capsys):
    prog = tmp_path / "p.bf"
    prog.write_text("+++.")
    assert main([str(prog), "--input", "", "--stats"]) == 0
    captured = capsys.readouterr()
    assert captured.out == chr(3)
    assert "steps=4" in captured.err
    assert "writes=1" in captured.err


def test_unmatched_loop_exits_nonzero(tmp_path, capsys):
    prog = tmp_path / "bad.bf"
    prog.write_text("+]")
    assert main([str(prog), "--input", ""]) == 1
    assert "Unmatched ']'" in capsys.readouterr().err


def test_step_limit_flag(tmp_path, capsys):
    prog = tmp_path / "loop.bf"
    prog.write_text("+[]")
    assert main([str(prog), "--input", "", "--step-limit", "10"]) == 1
    assert "10 steps" in capsys.readouterr().err


def test_missing_file(capsys):
    assert main(["/nonexistent/prog.bf"]) == 1
    assert "cannot read" in capsys.readouterr().err


def test_bad_env_config(monkeypatch, capsys):
    monkeypatch.setenv("BF_EOF", "explode")
    assert main(["--input", ""]) == 1
    assert "eof must be one of" in capsys.readouterr().err


def test_trace_flag(tmp_path, capsys):
    prog = tmp_path / "p.bf"
    prog.write_text("+.")
    assert main([str(prog), "--input", "", "--trace", "--tape", "dense", "--tape-size", "8"]) == 0
    captured = capsys.readouterr()
    assert captured.out == chr(1)
    assert "Increment cell[0] -> 1" in captured.err
    assert "Output:   1 written" in captured.err


def test_trace_flag_on_sparse_tape(tmp_path, capsys):
    prog = tmp_path / "p.bf"
    prog.write_text("++[>+<-]>.")
    assert main([str(prog), "--input", "", "--trace"]) == 0
    captured = capsys.readouterr()
    assert captured.out == chr(2)
    assert "Step 1: Execute '+'" in captured.err
    assert "Output:   1 written" in captured.err
