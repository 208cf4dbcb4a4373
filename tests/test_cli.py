import io

import pytest

import pw_policy_cli
from pw_policy_cli import EXIT_ACCEPTED, EXIT_ERROR, EXIT_REJECTED, format_class_table, main
from pw_store import verify_password

STRONG = "Xq7#pLm2$Rt"


@pytest.fixture
def stdin(monkeypatch):
    def feed(text):
        monkeypatch.setattr("sys.stdin", io.StringIO(text))
    return feed


def test_accepts_from_stdin(stdin, wordlist, capsys):
    stdin(STRONG + "\n")
    assert main(["--stdin", "--dict", wordlist]) == EXIT_ACCEPTED
    assert "Password accepted" in capsys.readouterr().out


def test_rejects_with_reason(stdin, wordlist, capsys):
    stdin("Zx9!Dragon#Q\n")
    assert main(["--stdin", "--dict", wordlist]) == EXIT_REJECTED
    assert "Password contains a dictionary word" in capsys.readouterr().out


def test_identity_aware_rejection(stdin, wordlist, capsys):
    stdin("Zx9!jsmith#Q\n")
    assert main(["--stdin", "--dict", wordlist, "-u", "jsmith", "--gecos", "John Smith"]) == EXIT_REJECTED
    assert "Password is based on your username" in capsys.readouterr().out


def test_missing_dictionary_exit_code(stdin, tmp_path, capsys):
    stdin(STRONG + "\n")
    assert main(["--stdin", "--dict", str(tmp_path / "nope.txt")]) == EXIT_ERROR
    assert "could not be evaluated" in capsys.readouterr().out


def test_prompts_for_username_and_password(monkeypatch, wordlist, capsys):
    monkeypatch.setattr("builtins.input", lambda prompt: "jsmith")
    monkeypatch.setattr(pw_policy_cli.getpass, "getpass", lambda prompt: "abcba")
    assert main(["--dict", wordlist]) == EXIT_REJECTED
    assert "Password is a palindrome" in capsys.readouterr().out


def test_hash_file_written_on_accept(stdin, wordlist, tmp_path):
    hash_file = tmp_path / "store" / "hashes.txt"
    stdin(STRONG + "\n")
    assert main(["--stdin", "--dict", wordlist, "-u", "jsmith", "--hash-file", str(hash_file)]) == EXIT_ACCEPTED
    username, hashed = hash_file.read_text(encoding="utf-8").strip().split(":", 1)
    assert username == "jsmith"
    assert verify_password(hashed, STRONG)
    assert hash_file.stat().st_mode & 0o777 == 0o600


def test_hash_file_untouched_on_reject(stdin, wordlist, tmp_path):
    hash_file = tmp_path / "hashes.txt"
    stdin("short\n")
    assert main(["--stdin", "--dict", wordlist, "--hash-file", str(hash_file)]) == EXIT_REJECTED
    assert not hash_file.exists()


def test_show_classes(stdin, wordlist, capsys):
    stdin("Ab1!cdEf\n")
    main(["--stdin", "--dict", wordlist, "--show-classes"])
    out = capsys.readouterr().out
    assert "CHARACTER CLASS DISTRIBUTION" in out
    assert "|   50% |" in out


def test_format_class_table_rows():
    table = format_class_table("Ab1!cdEf")
    assert "Digits (0-9)" in table
    assert "|   12% |" in table
