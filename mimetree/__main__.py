"""Entry point for the mimetree package.

Usage::

    python -m mimetree parse <file|->              # print the part tree as JSON
    python -m mimetree validate <address> [--dns]  # check one address
"""

from __future__ import annotations

import sys
from pathlib import Path

USAGE = "Usage: python -m mimetree <parse <file|-> | validate <address> [--dns]>"


def main(argv: list[str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 2 or args[0] not in ("parse", "validate"):
        print(USAGE, file=sys.stderr)
        return 2

    from .config import MimetreeConfig
    from .logging import setup_logging

    config = MimetreeConfig()
    setup_logging(json=config.log_json, level=config.log_level)

    mode, target = args[0], args[1]

    if mode == "parse":
        from .builder import MessageTreeBuilder

        raw = sys.stdin.buffer.read() if target == "-" else Path(target).read_bytes()
        tree = MessageTreeBuilder(config.parser).build(raw)
        print(tree.model_dump_json(indent=2))
        return 0

    from .address import InvalidAddressError, validate_with_config

    address_config = config.address
    if "--dns" in args[2:]:
        address_config = address_config.model_copy(update={"use_dns": True})

    try:
        validate_with_config(target, address_config)
    except InvalidAddressError as exc:
        print(f"{exc.reason.value}: {exc}", file=sys.stderr)
        return 1

    print("ok")
    return 0


if __name__ == "__main__":
    sys.exit(main())
