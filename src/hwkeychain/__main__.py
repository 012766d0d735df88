"""Command line entry point.

Usage:
    python -m hwkeychain addresses --indices 0 1 2
    python -m hwkeychain addresses --count 5 --hrp avax
    python -m hwkeychain sign-hash --index 0 --hash <hex digest>
"""

import argparse
import logging
import sys
from typing import Optional

from pydantic import ValidationError

from hwkeychain.config import get_settings
from hwkeychain.keychain import KeychainError, new_ledger_keychain, new_ledger_keychain_from_count
from hwkeychain.ledger.base import LedgerError, LedgerType
from hwkeychain.ledger.factory import create_ledger, get_ledger_type

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hwkeychain", description="Ledger keychain tools")
    parser.add_argument(
        "--backend",
        choices=[t.value for t in LedgerType],
        help="Ledger backend (defaults to LEDGER_BACKEND)",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logs")
    sub = parser.add_subparsers(dest="command", required=True)

    addrs = sub.add_parser("addresses", help="Derive addresses for indices")
    group = addrs.add_mutually_exclusive_group()
    group.add_argument("--indices", type=int, nargs="+", help="Derivation indices")
    group.add_argument("--count", type=int, help="Derive indices 0..count-1")
    addrs.add_argument(
        "--hrp",
        default=None,
        help="Prefix addresses with this HRP (defaults to LEDGER_DISPLAY_HRP, \"\" for none)",
    )

    sign = sub.add_parser("sign-hash", help="Sign a digest with the key at an index")
    sign.add_argument("--index", type=int, required=True, help="Derivation index")
    sign.add_argument("--hash", required=True, dest="digest", help="Digest as hex")

    return parser


def _cmd_addresses(ledger, args, settings) -> int:
    if args.count is not None:
        keychain = new_ledger_keychain_from_count(ledger, args.count)
    else:
        indices = args.indices if args.indices is not None else settings.indices
        keychain = new_ledger_keychain(ledger, indices)

    hrp = settings.ledger_display_hrp if args.hrp is None else args.hrp
    rows = [(keychain.get(addr).index, addr) for addr in keychain.addresses()]
    for idx, addr in sorted(rows, key=lambda row: row[0]):
        print(f"{idx}\t{addr.prefixed(hrp)}")
    return 0


def _cmd_sign_hash(ledger, args) -> int:
    keychain = new_ledger_keychain(ledger, [args.index])
    (address,) = keychain.addresses()
    signature = keychain.get(address).sign_hash(bytes.fromhex(args.digest.lower().removeprefix("0x")))
    print(signature.hex())
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        settings = get_settings()
        ledger_type = LedgerType(args.backend) if args.backend else get_ledger_type()
    except ValidationError as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
        return 1

    log_level = logging.DEBUG if (args.debug or settings.debug) else settings.log_level.upper()
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    ledger = create_ledger(ledger_type)
    logger.debug(f"Using {ledger!r}")

    try:
        if args.command == "addresses":
            return _cmd_addresses(ledger, args, settings)
        return _cmd_sign_hash(ledger, args)
    except (KeychainError, LedgerError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        ledger.disconnect()


if __name__ == "__main__":
    sys.exit(main())
