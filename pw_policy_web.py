#!/usr/bin/env python3
"""
Password policy web UI
- Form: username, full name, candidate password
- /api/check: JSON verdict for scripts and other front ends
"""
import argparse
import logging
from flask import Flask, jsonify, request, render_template_string

from pw_core import EvaluationError
from pw_dictionary import (DEFAULT_MAX_WORDLIST_LINES, DEFAULT_MIN_DICT_LEN,
                           WordlistChecker, default_dictionary_path)
from pw_evaluator import Entry, evaluate

logging.basicConfig(level=logging.INFO)
log = logging.getLogger("pw_web")

VERSION = "v1.0.0"
UNAVAILABLE_MESSAGE = "Password could not be evaluated, please try again later."

TEMPLATE = r"""<!doctype html>
<html lang="en">
<head>
<meta charset="utf-8"><meta name="viewport" content="width=device-width,initial-scale=1">
<title>Password Policy</title>
<style>
body{margin:0;background:#0f172a;color:#e5e7eb;font:16px/1.5 system-ui, sans-serif}
.container{max-width:640px;margin:0 auto;padding:24px}
.card{background:#0b1220;border:1px solid #1f2937;border-radius:12px;padding:16px}
label{display:block;font-size:13px;color:#94a3b8;margin:10px 0 6px}
input{width:100%;background:#08101a;color:#e5e7eb;border:1px solid #1f2937;border-radius:8px;padding:8px 10px}
.btn{margin-top:12px;background:#4f46e5;color:white;padding:8px 12px;border:none;border-radius:8px;cursor:pointer}
.banner{border-radius:8px;padding:10px;margin-top:12px;border:1px solid #1f2937}
.banner.ok{background:#052e1a}.banner.err{background:#2a0f12}
.small{font-size:12px;color:#94a3b8}
</style>
</head>
<body>
  <div class="container">
    <div class="card">
      <h1>Change password</h1>
      <div class="small">Policy {{version}} &middot; dictionary: {{dictionary}}</div>
      <form method="post" action="/check">
        <label>Username</label>
        <input type="text" name="username" value="{{username}}">
        <label>Full name</label>
        <input type="text" name="gecos" value="{{gecos}}">
        <label>New password</label>
        <input type="password" name="password" autocomplete="new-password">
        <button class="btn" type="submit">Check</button>
      </form>
      {% if result %}
        <div class="banner {% if accepted %}ok{% else %}err{% endif %}">
          <strong>{{ 'Accepted' if accepted else 'Rejected' }}</strong>{% if message %}: {{message}}{% endif %}
        </div>
      {% endif %}
    </div>
  </div>
</body>
</html>
"""


def _entry_from(form):
    attrs = {}
    username = (form.get("username") or "").strip()
    gecos = (form.get("gecos") or "").strip()
    if username:
        attrs["uid"] = username
    if gecos:
        attrs["gecos"] = gecos
    return Entry.from_dict(attrs) if attrs else None


def create_app(dictionary_path=None, max_lines=DEFAULT_MAX_WORDLIST_LINES,
               min_dict_len=DEFAULT_MIN_DICT_LEN, exact_only=False):
    app = Flask(__name__)
    app.config["DICTIONARY"] = dictionary_path or default_dictionary_path()
    app.config["CHECKER"] = WordlistChecker(max_lines, min_dict_len, exact_only)

    def _evaluate(form):
        return evaluate(form.get("password", ""), _entry_from(form),
                        app.config["DICTIONARY"], app.config["CHECKER"])

    def _render(**ctx):
        ctx.setdefault("result", False)
        ctx.setdefault("username", "")
        ctx.setdefault("gecos", "")
        return render_template_string(TEMPLATE, version=VERSION,
                                      dictionary=app.config["DICTIONARY"], **ctx)

    @app.route("/", methods=["GET"])
    def index():
        return _render()

    @app.route("/check", methods=["POST"])
    def check():
        form = request.form
        try:
            ok, reason = _evaluate(form)
        except EvaluationError as e:
            log.error("Evaluation failed: %s", e)
            return _render(result=True, accepted=False, message=UNAVAILABLE_MESSAGE,
                           username=form.get("username", ""), gecos=form.get("gecos", "")), 503
        return _render(result=True, accepted=ok, message=reason,
                       username=form.get("username", ""), gecos=form.get("gecos", ""))

    @app.route("/api/check", methods=["POST"])
    def api_check():
        data = request.get_json(silent=True)
        if not isinstance(data, dict) or not isinstance(data.get("password"), str):
            return jsonify(error="password is required"), 400
        for name in ("username", "gecos"):
            if data.get(name) is not None and not isinstance(data[name], str):
                return jsonify(error="%s must be a string" % name), 400
        try:
            ok, reason = _evaluate(data)
        except EvaluationError as e:
            log.error("Evaluation failed: %s", e)
            return jsonify(error=UNAVAILABLE_MESSAGE), 503
        return jsonify(accepted=ok, reason=reason)

    return app


def main():
    ap = argparse.ArgumentParser(description="Password Policy - Web UI")
    ap.add_argument("--host", default="127.0.0.1")
    ap.add_argument("--port", type=int, default=5000)
    ap.add_argument("--dict", "-d", dest="dictionary", help="Dictionary wordlist path.")
    ap.add_argument("--max-lines", "-m", type=int, default=DEFAULT_MAX_WORDLIST_LINES)
    ap.add_argument("--min-dict-len", type=int, default=DEFAULT_MIN_DICT_LEN)
    ap.add_argument("--exact-only", action="store_true")
    args = ap.parse_args()

    app = create_app(args.dictionary, args.max_lines, args.min_dict_len, args.exact_only)
    app.run(host=args.host, port=args.port, debug=False, threaded=True)


if __name__ == "__main__":
    main()
