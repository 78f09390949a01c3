"""
Calculate ShipStation store and special order metrics from CSV.
"""

from __future__ import annotations

from ratecalc.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
