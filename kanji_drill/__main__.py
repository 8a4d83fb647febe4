"""CLI entry point for kanji-drill.

Usage:
  python -m kanji_drill serve [--port PORT] [--host HOST] [--kana] [--answer] [--vocab PATH]
  python -m kanji_drill stop
  python -m kanji_drill restart [serve flags]
  python -m kanji_drill status
  python -m kanji_drill check [--vocab PATH]
  python -m kanji_drill init
"""
from __future__ import annotations

import json
import os
import signal
import sys
import time
from pathlib import Path

from kanji_drill.config import ENV_SHOW_PHONETIC, ENV_SHOW_TRANSLATION, ENV_VOCAB_FILE

# Record of the running server: pid, url, vocabulary file and serve flags.
SERVER_FILE = Path(__file__).resolve().parent.parent / ".server.json"


def main():
    args = sys.argv[1:]
    command = args[0] if args else "serve"

    if command == "serve":
        _serve(args[1:])
    elif command == "stop":
        _stop()
    elif command == "restart":
        _restart(args[1:])
    elif command == "status":
        _status()
    elif command == "check":
        sys.exit(_check(args[1:]))
    elif command == "init":
        _init()
    else:
        print(f"Unknown command: {command}")
        print("Commands: serve, stop, restart, status, check, init")
        sys.exit(1)


def _parse_flag(args: list[str], name: str, default: str) -> str:
    """Value of `--name VALUE` or `--name=VALUE`; the last occurrence wins."""
    value = default
    for i, a in enumerate(args):
        if a == name and i + 1 < len(args):
            value = args[i + 1]
        elif a.startswith(name + "="):
            value = a[len(name) + 1:]
    return value


def _running_server() -> dict | None:
    """Return the server record if its process is alive; drop stale records."""
    try:
        record = json.loads(SERVER_FILE.read_text(encoding="utf-8"))
        os.kill(int(record["pid"]), 0)
        return record
    except FileNotFoundError:
        return None
    except (ValueError, KeyError, TypeError, ProcessLookupError, PermissionError):
        SERVER_FILE.unlink(missing_ok=True)
        return None


def _stop() -> dict | None:
    """Stop the running server. Returns its record, or None if none was running."""
    record = _running_server()
    if record is None:
        print("Server is not running.")
        return None
    SERVER_FILE.unlink(missing_ok=True)
    try:
        os.kill(record["pid"], signal.SIGTERM)
    except ProcessLookupError:
        print("Server had already exited.")
        return None
    print(f"Stopped server at {record['url']} (PID {record['pid']}).")
    return record


def _status():
    record = _running_server()
    if record is None:
        print("Server is not running.")
        return
    print(f"Server is running at {record['url']} (PID {record['pid']}).")
    print(f"Vocabulary: {record['vocab']}")


def _restart(args: list[str]):
    """Restart, reusing the stopped server's flags unless new ones are given."""
    record = _stop()
    if not args and record is not None:
        args = record.get("args", [])
    time.sleep(1)
    _serve(args)


def _serve_env(args: list[str]) -> dict[str, str]:
    """Translate serve flags into the environment read by the app on startup."""
    env = {}
    if "--kana" in args:
        env[ENV_SHOW_PHONETIC] = "1"
    if "--answer" in args:
        env[ENV_SHOW_TRANSLATION] = "1"
    vocab = _parse_flag(args, "--vocab", "")
    if vocab:
        env[ENV_VOCAB_FILE] = str(Path(vocab).resolve())
    return env


def _serve(args: list[str]):
    import uvicorn

    from kanji_drill.config import apply_env_overrides, load_settings

    existing = _running_server()
    if existing is not None:
        print(f"Server already running at {existing['url']}. Use 'restart' or 'stop' first.")
        sys.exit(1)

    env = _serve_env(args)
    os.environ.update(env)
    settings = apply_env_overrides(load_settings())

    port = int(_parse_flag(args, "--port", "8766"))
    host = _parse_flag(args, "--host", "127.0.0.1")
    url = f"http://{host}:{port}"
    SERVER_FILE.write_text(json.dumps({
        "pid": os.getpid(),
        "url": url,
        "vocab": str(settings.vocab_full_path),
        "args": args,
    }), encoding="utf-8")

    print(f"Starting Kanji Drill on {url} with {settings.vocab_full_path}")
    print("Press Ctrl+C to stop\n")
    try:
        uvicorn.run(
            "kanji_drill.app:app",
            host=host,
            port=port,
            reload=False,
            timeout_graceful_shutdown=5,
        )
    finally:
        SERVER_FILE.unlink(missing_ok=True)
        for key in env:
            os.environ.pop(key, None)


def _check(args: list[str]) -> int:
    """Validate a vocabulary file. Returns the process exit code."""
    from kanji_drill.config import load_settings
    from kanji_drill.deck import load_deck
    from kanji_drill.errors import LoadError

    vocab = _parse_flag(args, "--vocab", "")
    path = Path(vocab) if vocab else load_settings().vocab_full_path

    result = load_deck(path)
    if isinstance(result, LoadError):
        print(f"{type(result).__name__}: {result}")
        return 1

    print(f"Vocabulary: {path}")
    print("=" * 40)
    print(f"Entries:            {len(result)}")
    for pos, count in result.parts_of_speech().items():
        print(f"  {pos:<18s}{count}")
    return 0


def _init():
    from kanji_drill.config import CONFIG_PATH, Settings, save_settings

    if CONFIG_PATH.exists():
        print(f"Config already exists: {CONFIG_PATH}")
        return
    save_settings(Settings())
    print(f"Wrote default config: {CONFIG_PATH}")


if __name__ == "__main__":
    main()
