# backend/society_billing/cli/__main__.py
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from society_billing.cli.compute_bill import compute_from_file
from society_billing.domain.billing import InvalidInputError


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(prog="society_billing.cli", description="Compute monthly society bills.")
    p.add_argument("--input", required=True, help="JSON file with one billing input or a list of them")
    p.add_argument("--no-ai", action="store_true", help="skip the language-model itemization")
    args = p.parse_args(argv)

    try:
        out = compute_from_file(Path(args.input), use_ai=not args.no_ai)
    except InvalidInputError as e:
        print(json.dumps({"ok": False, "field": e.field, "error": e.reason}, ensure_ascii=False))
        return 2

    print(json.dumps({"ok": out.ok, "bills": out.bills, "errors": out.errors}, ensure_ascii=False, indent=2))
    return 0 if out.ok else 2


if __name__ == "__main__":
    sys.exit(main())
