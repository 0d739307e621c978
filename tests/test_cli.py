import pytest

from huffzip import Compressor
from huffzip.cli import main
from huffzip.config_loader import CONFIG_ENV_VAR


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.setenv(CONFIG_ENV_VAR, "")
    monkeypatch.delenv(CONFIG_ENV_VAR)
    monkeypatch.chdir(tmp_path)


def _answers(monkeypatch, *answers):
    replies = iter(answers)
    monkeypatch.setattr("builtins.input", lambda prompt="": next(replies))


def test_compress_and_decompress_with_arguments(tmp_path, capsys):
    src = tmp_path / "notes.txt"
    src.write_bytes(b"some notes " * 40)

    assert main(["compress", str(src), str(tmp_path / "notes.huf")]) == 0
    assert "Compressed successfully." in capsys.readouterr().out

    assert main(["decompress", str(tmp_path / "notes.huf"), str(tmp_path / "back.txt")]) == 0
    assert "Decompressed successfully." in capsys.readouterr().out
    assert (tmp_path / "back.txt").read_bytes() == src.read_bytes()


def test_interactive_menu(tmp_path, monkeypatch, capsys):
    src = tmp_path / "in.bin"
    src.write_bytes(b"\x01\x02\x02\x03\x03\x03")
    _answers(monkeypatch, "1", str(src), str(tmp_path / "in.huf"))

    assert main([]) == 0
    out = capsys.readouterr().out
    assert "HuffZip" in out
    assert "1) Compress" in out
    assert "Compressed successfully." in out
    assert Compressor().decompress((tmp_path / "in.huf").read_bytes()) == src.read_bytes()


def test_interactive_invalid_choice(monkeypatch, capsys):
    _answers(monkeypatch, "9")
    assert main([]) == 2
    assert "Invalid choice." in capsys.readouterr().out


def test_missing_output_path(tmp_path, capsys):
    assert main(["compress", str(tmp_path / "x")]) == 2
    assert "[ERROR]" in capsys.readouterr().err


def test_corrupt_container_reports_failure(tmp_path, capsys):
    bad = tmp_path / "bad.huf"
    bad.write_bytes(b"NOPE" + b"\x00" * 10)
    dst = tmp_path / "out.bin"

    assert main(["decompress", str(bad), str(dst)]) == 1
    assert "[ERROR] Decompress failed" in capsys.readouterr().err
    assert not dst.exists()


def test_missing_input_file(tmp_path, capsys):
    assert main(["compress", str(tmp_path / "missing"), str(tmp_path / "out")]) == 1
    assert "[ERROR]" in capsys.readouterr().err


def test_verbose_flag(tmp_path, capsys):
    src = tmp_path / "v.txt"
    src.write_bytes(b"verbose")
    assert main(["-v", "compress", str(src), str(tmp_path / "v.huf")]) == 0
    assert "[DEBUG]" in capsys.readouterr().out


def test_config_title(tmp_path, monkeypatch, capsys):
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("cli:\n  title: Packer\n")
    _answers(monkeypatch, "0")
    assert main(["--config", str(cfg)]) == 2
    assert "Packer" in capsys.readouterr().out


def test_config_with_empty_cli_section(tmp_path, monkeypatch, capsys):
    cfg = tmp_path / "cfg.yaml"
    cfg.write_text("cli:\n")
    _answers(monkeypatch, "0")
    assert main(["--config", str(cfg)]) == 2
    out = capsys.readouterr().out
    assert "HuffZip" in out
    assert "Invalid choice." in out
