"""
otp_cli.py — CLI wrapper around otp_core.py

Sub-commands:
- code  : print the current TOTP code and how long it stays valid
- watch : show the TOTP code in real time (Ctrl+C to quit)
- info  : tell whether a TOTP secret is configured

The secret comes from --secret, otherwise from the settings provider
(TOTP_URL / totp_settings.json, see config.py).
"""

import argparse
import logging
import sys
import time

from . import otp_core
from .config import Settings, load_settings
from .errors import SettingsError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_CODE_FAILED = 1
EXIT_CONFIG = 2


def non_negative_int(value: str) -> int:
    """argparse type for Unix timestamps."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {number}")
    return number


def setup_logging(debug: bool) -> None:
    """Root logger at DEBUG for --verbose or "debug": true, WARNING otherwise."""
    logging.basicConfig(format="[%(levelname)s] %(name)s: %(message)s")
    logging.getLogger().setLevel(logging.DEBUG if debug else logging.WARNING)


def _resolve_secret_arg(args, settings: Settings) -> str:
    if args.secret:
        return args.secret
    if not settings.configured:
        raise SettingsError("No TOTP secret configured. Pass --secret or set TOTP_URL.")
    return settings.totp_url


# --- CLI command handlers ---
def cmd_code(args, settings: Settings) -> int:
    secret = _resolve_secret_arg(args, settings)
    result = otp_core.generate(secret, args.timestamp)
    if not result.ok:
        print(f"[!] Could not generate code: {result.error}", file=sys.stderr)
        return EXIT_CODE_FAILED
    print(f"TOTP: {result.code}  (valid ~{result.remaining:2d}s)")
    return EXIT_OK


def cmd_watch(args, settings: Settings) -> int:
    secret = _resolve_secret_arg(args, settings)
    print("Press Ctrl+C to quit. Generating TOTP in real time...\n")
    last_code = None
    try:
        while True:
            result = otp_core.generate(secret)
            if not result.ok:
                print(f"[!] Could not generate code: {result.error}", file=sys.stderr)
                return EXIT_CODE_FAILED
            if result.code != last_code:
                print(f"TOTP: {result.code}  (valid ~{result.remaining:2d}s)")
                last_code = result.code
            else:
                print(f".. {result.remaining:2d}s left", end='\r', flush=True)
            time.sleep(1)
    except KeyboardInterrupt:
        print("\nBye.")
    return EXIT_OK


def cmd_info(args, settings: Settings) -> int:
    state = "configured" if settings.configured else "not configured"
    print(f"TOTP: {state}")
    return EXIT_OK


def cmd_help(args, settings: Settings) -> int:
    print("'totp-autofill -h' for help.")
    return EXIT_OK


# --- Argparse builder ---
def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="TOTP (HMAC-SHA1, 6 digits, 30s) code generator")
    p.add_argument("--verbose", action="store_true", help="Verbose (debug) logging")
    sub = p.add_subparsers(dest="cmd")
    p.set_defaults(func=cmd_help)

    # code
    pc = sub.add_parser("code", help="Print the current TOTP code")
    pc.add_argument("--secret", help="Base32 secret or otpauth:// URI (overrides settings)")
    pc.add_argument("--settings", help="Path to the JSON settings file")
    pc.add_argument("--timestamp", type=non_negative_int, help="Unix time to compute the code for")
    pc.set_defaults(func=cmd_code)

    # watch
    pw = sub.add_parser("watch", help="Show TOTP code in real time")
    pw.add_argument("--secret", help="Base32 secret or otpauth:// URI (overrides settings)")
    pw.add_argument("--settings", help="Path to the JSON settings file")
    pw.set_defaults(func=cmd_watch)

    # info
    pi = sub.add_parser("info", help="Show whether a TOTP secret is configured")
    pi.add_argument("--settings", help="Path to the JSON settings file")
    pi.set_defaults(func=cmd_info)

    return p


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        settings = load_settings(getattr(args, "settings", None))
    except SettingsError as e:
        setup_logging(args.verbose)
        print(f"[!] {e}", file=sys.stderr)
        return EXIT_CONFIG

    setup_logging(args.verbose or settings.debug)
    try:
        return args.func(args, settings)
    except SettingsError as e:
        logger.debug("Configuration problem", exc_info=True)
        print(f"[!] {e}", file=sys.stderr)
        return EXIT_CONFIG


if __name__ == "__main__":
    sys.exit(main())
