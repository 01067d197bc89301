from __future__ import annotations

import os
import sys
import argparse
import logging
import json as _json
import getpass as _getpass

from typing import Dict, List, Optional, Tuple

from queryargs.encryptor import ArgumentEncryptor
from queryargs.errors import QueryArgsError
from queryargs.log import configure_stream_logging, get_logger


PASSWORD_ENV = "QUERYARGS_PASSWORD"

log = get_logger("cli")


def _resolve_password(password: Optional[str]) -> str:
    """Pick the password from the argument, the environment, or an interactive prompt.

    Args:
        password: Value passed on the command line, if any.

    Returns:
        The password to use. Validation is left to ArgumentEncryptor.
    """
    if password:
        return password
    env_pw = os.environ.get(PASSWORD_ENV)
    if env_pw:
        log.debug("using password from %s", PASSWORD_ENV)
        return env_pw
    return _getpass.getpass("Password: ")


def _parse_pair(item: str) -> Tuple[str, str]:
    """Split ``KEY=VALUE`` on the first ``=``; a missing ``=`` yields an empty value."""
    key, sep, value = item.partition("=")
    if not sep:
        return item, ""
    return key, value


def cmd_seal(pairs: List[str], *, password: Optional[str] = None, url_encode: bool = True) -> str:
    enc = ArgumentEncryptor(_resolve_password(password))
    for item in pairs:
        key, value = _parse_pair(item)
        enc.add(key, value)
    token = enc.encrypt(url_encode)
    print(token)
    return token


def cmd_unseal(token: str, *, password: Optional[str] = None, url_decode: bool = True, as_json: bool = False) -> Dict[str, str]:
    enc = ArgumentEncryptor(_resolve_password(password))
    enc.decrypt(token, url_decode)
    result = dict(enc.items())
    if as_json:
        print(_json.dumps(result, ensure_ascii=False))
    else:
        for key, value in result.items():
            print(f"{key}={value}")
    return result


def main(argv: List[str] | None = None):
    ap = argparse.ArgumentParser(prog="queryargs", description="Encrypt key/value pairs into a URL query token")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log debug details to stderr")
    sub = ap.add_subparsers(dest="cmd", required=True)

    ap_seal = sub.add_parser("seal", help="Encrypt KEY=VALUE pairs into a token")
    ap_seal.add_argument("pairs", nargs="*", help="Pairs as KEY=VALUE (in order)")
    ap_seal.add_argument("--password", help=f"Encryption password (default: ${PASSWORD_ENV} or prompt)")
    ap_seal.add_argument("--no-url-encode", dest="url_encode", action="store_false", help="Emit raw base64 instead of a percent-encoded token")

    ap_unseal = sub.add_parser("unseal", help="Decrypt a token back into KEY=VALUE pairs")
    ap_unseal.add_argument("token", help="Token produced by seal")
    ap_unseal.add_argument("--password", help=f"Decryption password (default: ${PASSWORD_ENV} or prompt)")
    ap_unseal.add_argument("--no-url-decode", dest="url_decode", action="store_false", help="Token is raw base64, not percent-encoded")
    ap_unseal.add_argument("--json", action="store_true", help="Emit a JSON object")

    args = ap.parse_args(argv)
    configure_stream_logging(logging.DEBUG if args.verbose else logging.WARNING)
    try:
        if args.cmd == "seal":
            cmd_seal(args.pairs, password=args.password, url_encode=args.url_encode)
        elif args.cmd == "unseal":
            cmd_unseal(args.token, password=args.password, url_decode=args.url_decode, as_json=args.json)
        else:
            raise RuntimeError("Unknown command")
    except QueryArgsError as e:
        print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(2)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)


if __name__ == "__main__":
    main()
