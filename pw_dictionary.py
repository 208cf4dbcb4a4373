# pw_dictionary.py
import os, re, logging
from functools import lru_cache
from typing import FrozenSet, Optional

from pw_core import DictionaryUnavailable, Password

log = logging.getLogger("pw_dictionary")

COMMON_PASSWORDS = frozenset({"123456", "password", "qwerty", "admin", "letmein", "12345678", "111111"})
DEFAULT_DICT_PATH = "/usr/share/dict/words"
DEFAULT_MAX_WORDLIST_LINES = 200_000
DEFAULT_MIN_DICT_LEN = 4
MIN_GECOS_WORD_LEN = 3

REASON_COMMON = "Password is too common"
REASON_DICT_WORD = "Password is based on a dictionary word"
REASON_CONTAINS_WORD = "Password contains a dictionary word"
REASON_USERNAME = "Password is based on your username"
REASON_PERSONAL = "Password is based on your personal information"


def default_dictionary_path() -> str:
    return os.environ.get("PW_POLICY_DICT") or DEFAULT_DICT_PATH


def _as_text(password: Password) -> str:
    if isinstance(password, bytes):
        return password.decode("latin-1")
    return password


def load_wordlist(path: str, max_lines: int = DEFAULT_MAX_WORDLIST_LINES) -> FrozenSet[str]:
    if not path or path.endswith(".gz") or not os.path.isfile(path):
        raise DictionaryUnavailable("dictionary not found: %s" % (path,))
    try:
        mtime = os.stat(path).st_mtime_ns
    except OSError as e:
        raise DictionaryUnavailable("cannot read dictionary %s: %s" % (path, e)) from e
    # cache key includes mtime; a dictionary rewritten in place is reloaded
    return _load_wordlist(path, max_lines, mtime)


@lru_cache(maxsize=8)
def _load_wordlist(path: str, max_lines: int, mtime: int) -> FrozenSet[str]:
    words = set()
    try:
        with open(path, "r", encoding="latin-1", errors="ignore") as fh:
            for i, line in enumerate(fh):
                if max_lines and i >= max_lines: break
                w = line.strip().lower()
                if w: words.add(w)
    except OSError as e:
        raise DictionaryUnavailable("cannot read dictionary %s: %s" % (path, e)) from e
    log.debug("Loaded %d words from %s", len(words), path)
    return frozenset(words)


def contains_dictionary_word(password: str, wordset: FrozenSet[str], min_len: int, exact_only: bool) -> Optional[str]:
    if not wordset: return None
    p = password.lower()
    if p in wordset or p[::-1] in wordset:  # exact or reversed
        return REASON_DICT_WORD
    if exact_only:    # substring off
        return None
    for w in wordset:
        if len(w) >= min_len and w in p:
            return REASON_CONTAINS_WORD
    return None


class WordlistChecker:
    """Dictionary checker backed by a plain-text wordlist.

    Both entry points return None when the password is acceptable, or a
    short reason otherwise. An unreadable wordlist raises
    DictionaryUnavailable; nothing is accepted without a dictionary.
    """

    def __init__(self, max_lines: int = DEFAULT_MAX_WORDLIST_LINES,
                 min_len: int = DEFAULT_MIN_DICT_LEN, exact_only: bool = False):
        self.max_lines = max_lines
        self.min_len = min_len
        self.exact_only = exact_only

    def check(self, password: Password, dictionary_path: str) -> Optional[str]:
        wordset = load_wordlist(dictionary_path, self.max_lines)
        p = _as_text(password)
        if p.lower() in COMMON_PASSWORDS:
            return REASON_COMMON
        return contains_dictionary_word(p, wordset, self.min_len, self.exact_only)

    def check_with_identity(self, password: Password, dictionary_path: str,
                            username: Optional[str], display_name: Optional[str]) -> Optional[str]:
        p = _as_text(password).lower()
        if username and username.strip():
            u = username.strip().lower()
            if u in p or u[::-1] in p:
                return REASON_USERNAME
        for word in re.split(r"[\s,]+", display_name or ""):
            if len(word) >= MIN_GECOS_WORD_LEN and word.lower() in p:
                return REASON_PERSONAL
        return self.check(password, dictionary_path)
