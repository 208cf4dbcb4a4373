# pw_core.py
import operator
import string
from typing import NamedTuple, Optional, Union

Password = Union[str, bytes]

# Character classes
DIGIT, LOWER, UPPER, PUNCT, SPACE, OTHER = "digit", "lower", "upper", "punct", "space", "other"
CLASSES = (DIGIT, LOWER, UPPER, PUNCT, SPACE, OTHER)

MIN_LENGTH = 8
OTHER_WAIVER_PERCENT = 20
SINGLE_CHAR_MAX_PERCENT = 60
FREQUENCY_SCAN_LIMIT = 256

REASON_TOO_SHORT = "Password is too short"
REASON_PALINDROME = "Password is a palindrome"
REASON_SINGLE_CHAR = "Password contains too many of a single character"

# (class, comparison, limit, reason), evaluated in order; first hit wins
BALANCE_RULES = (
    (DIGIT, operator.gt, 40, "Password contains too many digits"),
    (DIGIT, operator.lt, 5, "Password contains too few digits"),
    (LOWER, operator.gt, 60, "Password contains too many lowercase letters"),
    (LOWER, operator.lt, 10, "Password contains too few lowercase letters"),
    (UPPER, operator.gt, 60, "Password contains too many uppercase letters"),
    (UPPER, operator.lt, 10, "Password contains too few uppercase letters"),
    (PUNCT, operator.gt, 70, "Password contains too much punctuation"),
    (PUNCT, operator.lt, 5, "Password contains too little punctuation"),
    (SPACE, operator.gt, 10, "Password contains too much whitespace"),
)


class PolicyError(Exception):
    pass


class EvaluationError(PolicyError):
    """The evaluation could not complete; the password must not be installed."""


class DictionaryUnavailable(EvaluationError):
    pass


class _VerdictFields(NamedTuple):
    accepted: bool
    reason: Optional[str] = None


class Verdict(_VerdictFields):
    """Accepted with no reason, or rejected with a non-empty reason."""
    __slots__ = ()

    def __new__(cls, accepted: bool, reason: Optional[str] = None):
        if accepted and reason is not None:
            raise ValueError("an accepted verdict carries no reason")
        if not accepted and not reason:
            raise ValueError("a rejection needs a reason")
        return super().__new__(cls, bool(accepted), reason)

    @classmethod
    def accept(cls) -> "Verdict":
        return cls(True)

    @classmethod
    def reject(cls, reason: str) -> "Verdict":
        return cls(False, reason)

    def __bool__(self) -> bool:
        return self.accepted


ACCEPTED = Verdict(True)


def _build_class_table() -> tuple:
    digits = string.digits.encode()
    lower = string.ascii_lowercase.encode()
    upper = string.ascii_uppercase.encode()
    punct = string.punctuation.encode()
    space = string.whitespace.encode()
    table = []
    for b in range(256):
        if b in digits: table.append(DIGIT)
        elif b in lower: table.append(LOWER)
        elif b in upper: table.append(UPPER)
        elif b in punct: table.append(PUNCT)
        elif b in space: table.append(SPACE)
        else: table.append(OTHER)
    return tuple(table)

# Pinned ASCII table, independent of the process locale
_CLASS_TABLE = _build_class_table()


def as_bytes(password: Password) -> bytes:
    if isinstance(password, str):
        return password.encode("utf-8")
    return bytes(password)


def classify_char(ch: Union[int, str]) -> str:
    if isinstance(ch, str):
        if len(ch) != 1:
            raise ValueError("expected a single character, got %r" % (ch,))
        ch = ord(ch)
    if 0 <= ch < 256:
        return _CLASS_TABLE[ch]
    return OTHER


def is_palindrome(password: Password) -> bool:
    seq = password.lower()
    i, j = 0, len(seq) - 1
    if j < 1:
        return False
    while i < j:
        if seq[i] != seq[j]:
            return False
        i += 1
        j -= 1
    return True


def class_counts(password: Password) -> dict:
    counts = dict.fromkeys(CLASSES, 0)
    for b in as_bytes(password):
        counts[classify_char(b)] += 1
    return counts


def class_percentages(password: Password) -> dict:
    total = len(as_bytes(password))
    counts = class_counts(password)
    if not total:
        return counts
    # floor division, not rounding
    return {cls: n * 100 // total for cls, n in counts.items()}


def char_frequency(password: Password) -> list:
    freq = [0] * 256
    for b in as_bytes(password):
        freq[b] += 1
    return freq


def _balance_failure(percent: dict) -> Optional[str]:
    if percent[OTHER] >= OTHER_WAIVER_PERCENT:
        # mostly non-ASCII; class balance is waived
        return None
    for cls, cmp, limit, reason in BALANCE_RULES:
        if cmp(percent[cls], limit):
            return reason
    return None


def _dominant_char(freq: list, total: int) -> bool:
    seen = 0
    for b in range(FREQUENCY_SCAN_LIMIT):
        if seen >= total:
            break
        seen += freq[b]
        if freq[b] * 100 // total > SINGLE_CHAR_MAX_PERCENT:
            return True
    return False


def check_complexity(password: Password) -> Verdict:
    data = as_bytes(password)
    total = len(data)
    if total < MIN_LENGTH:
        return Verdict.reject(REASON_TOO_SHORT)

    reason = _balance_failure(class_percentages(data))
    if reason:
        return Verdict.reject(reason)

    if _dominant_char(char_frequency(data), total):
        return Verdict.reject(REASON_SINGLE_CHAR)
    return ACCEPTED
