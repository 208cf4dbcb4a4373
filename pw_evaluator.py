# pw_evaluator.py
"""
Password acceptability evaluation.

Runs the checks in a fixed order and stops at the first rejection:
palindrome, complexity, then the dictionary checker. Every rejection is
written to the audit log together with the account's username.
"""
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from pw_core import (ACCEPTED, REASON_PALINDROME, EvaluationError, Password, Verdict,
                     check_complexity, is_palindrome)
from pw_dictionary import WordlistChecker, default_dictionary_path

log = logging.getLogger("pw_evaluator")
audit_log = logging.getLogger("pw_policy.audit")

UID_ATTR = "uid"
GECOS_ATTR = "gecos"

_default_checker = WordlistChecker()


@dataclass
class Attribute:
    name: str
    values: List[str] = field(default_factory=list)


@dataclass
class Entry:
    attrs: List[Attribute] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict) -> "Entry":
        attrs = []
        for name, value in data.items():
            values = [value] if isinstance(value, str) else list(value)
            attrs.append(Attribute(name, values))
        return cls(attrs)


@dataclass(frozen=True)
class IdentityHint:
    username: Optional[str] = None
    display_name: Optional[str] = None


def resolve_identity(entry: Entry, uid_attr: str = UID_ATTR,
                     gecos_attr: str = GECOS_ATTR) -> Tuple[bool, IdentityHint]:
    uid = gecos = None
    for a in entry.attrs:
        if uid is not None and gecos is not None:
            break
        if not a.values:
            continue
        if a.name == gecos_attr and gecos is None:
            gecos = a.values[0]
        elif a.name == uid_attr and uid is None:
            uid = a.values[0]
    return uid is not None, IdentityHint(uid, gecos)


@contextmanager
def audit_session(identity: IdentityHint):
    """Audit logger bound to one evaluation; handlers are flushed on exit."""
    adapter = logging.LoggerAdapter(audit_log, {"uid": identity.username or "unknown"})
    try:
        yield adapter
    finally:
        for handler in audit_log.handlers:
            handler.flush()


def _rejected(audit, detail: str, reason: str) -> Verdict:
    audit.info("User %s attempted to change password to a bad password (%s)",
               audit.extra["uid"], detail)
    return Verdict.reject(reason)


def evaluate(password: Password, entry: Optional[Entry] = None,
             dictionary_path: Optional[str] = None, checker=None,
             uid_attr: str = UID_ATTR, gecos_attr: str = GECOS_ATTR) -> Verdict:
    checker = checker or _default_checker
    dictionary_path = dictionary_path or default_dictionary_path()

    identity = IdentityHint()
    if entry is not None:
        found, identity = resolve_identity(entry, uid_attr, gecos_attr)
        if not found:
            log.info("No username found on account entry; using the plain dictionary check")

    with audit_session(identity) as audit:
        if is_palindrome(password):
            return _rejected(audit, "palindrome", REASON_PALINDROME)

        verdict = check_complexity(password)
        if not verdict.accepted:
            return _rejected(audit, "insufficiently complex: %s" % verdict.reason, verdict.reason)

        try:
            if identity.username:
                error = checker.check_with_identity(password, dictionary_path,
                                                    identity.username, identity.display_name)
            else:
                error = checker.check(password, dictionary_path)
        except EvaluationError:
            log.exception("Dictionary check failed for user %s", audit.extra["uid"])
            raise
        except Exception as e:
            log.exception("Dictionary check failed for user %s", audit.extra["uid"])
            raise EvaluationError("dictionary check failed: %s" % e) from e

        if error:
            return _rejected(audit, "dictionary: %s" % error, error)
    return ACCEPTED
