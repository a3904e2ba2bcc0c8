# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""CLI entry point for glin (glin command).

Usage:
    glin --help
    glin routes myapp.api:UserBiz
    glin call myapp.api:UserBiz list name=qibin
"""

from .cli import cli


def main() -> None:
    """CLI entry point."""
    cli()


if __name__ == "__main__":
    main()
