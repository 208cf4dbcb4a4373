#!/usr/bin/env python3
"""
Password Policy CLI
Features:
  - Checks a candidate password: palindrome, complexity, dictionary
  - Optional identity-aware dictionary check (--username / --gecos)
  - Prints the character class distribution (--show-classes)
  - Installs accepted passwords as hashes (--hash-file)
Exit status: 0 accepted, 1 rejected, 2 the password could not be evaluated.
"""

import sys, argparse, getpass, logging
import logging.handlers
from colorama import Fore, Style, init

from pw_core import CLASSES, EvaluationError, class_percentages
from pw_dictionary import (DEFAULT_MAX_WORDLIST_LINES, DEFAULT_MIN_DICT_LEN,
                           WordlistChecker, default_dictionary_path)
from pw_evaluator import Entry, audit_log, evaluate
from pw_store import append_hash

log = logging.getLogger("pw_cli")

VERSION = "v1.0.0"

EXIT_ACCEPTED, EXIT_REJECTED, EXIT_ERROR = 0, 1, 2

CLASS_LABELS = {
    "digit": "Digits (0-9)",
    "lower": "Lowercase letters",
    "upper": "Uppercase letters",
    "punct": "Punctuation",
    "space": "Whitespace",
    "other": "Other / non-ASCII",
}


def format_class_table(password) -> str:
    percent = class_percentages(password)
    rows = [f"{Fore.CYAN}=== CHARACTER CLASS DISTRIBUTION ==={Style.RESET_ALL}",
            "| Class                | Share |",
            "|----------------------|:-----:|"]
    for cls in CLASSES:
        rows.append(f"| {CLASS_LABELS[cls]:<20} | {percent[cls]:>4}% |")
    return "\n".join(rows)


def configure_logging(verbose: bool = False, syslog: bool = False) -> None:
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)
    audit_log.setLevel(logging.INFO)
    if syslog:
        handler = logging.handlers.SysLogHandler(
            address="/dev/log", facility=logging.handlers.SysLogHandler.LOG_AUTHPRIV)
        handler.setFormatter(logging.Formatter("pw-policy: %(message)s"))
        audit_log.addHandler(handler)


def parse_args(argv=None):
    ap = argparse.ArgumentParser(description="Password Policy CLI")
    ap.add_argument("--dict", "-d", dest="dictionary", default=None,
                    help="Path to dictionary wordlist (default: $PW_POLICY_DICT or /usr/share/dict/words)")
    ap.add_argument("--max-lines", "-m", type=int, default=DEFAULT_MAX_WORDLIST_LINES, help="Max lines to load from wordlist")
    ap.add_argument("--min-dict-len", type=int, default=DEFAULT_MIN_DICT_LEN, help="Min dictionary word length")
    ap.add_argument("--exact-only", action="store_true", help="Disable substring dictionary matches")
    ap.add_argument("--username", "-u", help="Account username (prompted when omitted)")
    ap.add_argument("--gecos", help="Account full name / GECOS field")
    ap.add_argument("--stdin", action="store_true", help="Read the password from stdin instead of prompting")
    ap.add_argument("--show-classes", action="store_true", help="Print the character class distribution")
    ap.add_argument("--hash-file", help="Store the hash of an accepted password in this file")
    ap.add_argument("--syslog", action="store_true", help="Send audit records to syslog (authpriv)")
    ap.add_argument("--verbose", "-v", action="store_true")
    ap.add_argument("--version", action="version", version=VERSION)
    return ap.parse_args(argv)


def build_entry(username, gecos):
    attrs = {}
    if username:
        attrs["uid"] = username
    if gecos:
        attrs["gecos"] = gecos
    return Entry.from_dict(attrs) if attrs else None


def main(argv=None) -> int:
    args = parse_args(argv)
    init(autoreset=True)
    configure_logging(args.verbose, args.syslog)

    if args.stdin:
        username = (args.username or "").strip()
        password = sys.stdin.readline().rstrip("\r\n")
    else:
        print(Fore.CYAN + f"PW Policy CLI {VERSION}" + Style.RESET_ALL)
        username = args.username if args.username is not None else input("Enter username: ")
        username = username.strip()
        password = getpass.getpass("Enter password: ")

    if args.show_classes:
        print(format_class_table(password))

    dictionary = args.dictionary or default_dictionary_path()
    checker = WordlistChecker(args.max_lines, args.min_dict_len, args.exact_only)
    try:
        ok, reason = evaluate(password, build_entry(username, args.gecos), dictionary, checker)
    except EvaluationError as e:
        log.debug("Evaluation failed: %s", e)
        print(Fore.RED + "[!] Password could not be evaluated: " + str(e) + Style.RESET_ALL)
        return EXIT_ERROR

    if not ok:
        print(Fore.RED + "[✗] " + reason + Style.RESET_ALL)
        return EXIT_REJECTED

    print(Fore.GREEN + "[✓] Password accepted" + Style.RESET_ALL)
    if args.hash_file:
        append_hash(args.hash_file, username, password)
        print(Fore.YELLOW + f"Hash saved to {args.hash_file}" + Style.RESET_ALL)
    return EXIT_ACCEPTED


if __name__ == "__main__":
    sys.exit(main())
