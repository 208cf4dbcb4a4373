import pytest


WORDS = ["dragon", "monkey", "sunshine", "football", "princess", "shadow"]


@pytest.fixture
def wordlist(tmp_path):
    path = tmp_path / "words.txt"
    path.write_text("\n".join(WORDS + ["", "Master"]) + "\n", encoding="latin-1")
    return str(path)
